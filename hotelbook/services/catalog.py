import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import Hotel

logger = logging.getLogger(__name__)


def _contains(column, term: str):
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def create_hotel(db: Session, name: str, price: float, city: str, img_data: bytes, img_content_type: str) -> Hotel:
    hotel = Hotel(name=name, price=price, city=city, img_data=img_data, img_content_type=img_content_type)
    db.add(hotel)
    db.commit()
    db.refresh(hotel)
    logger.info("Hotel created: id=%s name=%s", hotel.id, hotel.name)
    return hotel


def list_hotels(db: Session) -> list[Hotel]:
    return db.query(Hotel).order_by(Hotel.id.asc()).all()


def get_hotel(db: Session, hotel_id: int) -> Optional[Hotel]:
    return db.get(Hotel, hotel_id)


def search_hotels(db: Session, name: Optional[str] = None, city: Optional[str] = None) -> list[Hotel]:
    """Case-insensitive substring search; blank terms match everything."""
    q = db.query(Hotel)
    if name and name.strip():
        q = q.filter(_contains(Hotel.name, name.strip()))
    if city and city.strip():
        q = q.filter(_contains(Hotel.city, city.strip()))
    return q.order_by(Hotel.id.asc()).all()


def update_hotel(
    db: Session,
    hotel_id: int,
    name: Optional[str] = None,
    price: Optional[float] = None,
    city: Optional[str] = None,
    img_data: Optional[bytes] = None,
    img_content_type: Optional[str] = None,
) -> Optional[Hotel]:
    hotel = db.get(Hotel, hotel_id)
    if not hotel:
        return None
    if name:
        hotel.name = name
    if price is not None:
        hotel.price = price
    if city:
        hotel.city = city
    if img_data is not None:
        hotel.img_data = img_data
        hotel.img_content_type = img_content_type
    db.commit()
    db.refresh(hotel)
    logger.info("Hotel updated: id=%s", hotel.id)
    return hotel


def delete_hotel(db: Session, hotel_id: int) -> bool:
    hotel = db.get(Hotel, hotel_id)
    if not hotel:
        return False
    db.delete(hotel)
    db.commit()
    logger.info("Hotel deleted: id=%s", hotel_id)
    return True
