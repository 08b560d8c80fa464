import logging
import math
from datetime import date, datetime, timezone
from typing import Union

from sqlalchemy.orm import Session

from ..errors import NotFoundError, ValidationError
from ..models import Booking, Hotel, User
from ..schemas import AdminBookingOut, BookingDetail, UNKNOWN_HOTEL, UNKNOWN_USER

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def _as_naive_utc(value: DateLike) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def count_nights(check_in: DateLike, check_out: DateLike) -> int:
    """Whole nights between two instants, rounding partial days up.

    Zero or negative when check-out is not after check-in.
    """
    delta = _as_naive_utc(check_out) - _as_naive_utc(check_in)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def compute_price(check_in: DateLike, check_out: DateLike, nightly_rate):
    return count_nights(check_in, check_out) * nightly_rate


def create_booking(
    db: Session,
    user_id: int,
    hotel_id: int,
    check_in: DateLike,
    check_out: DateLike,
    room_type: str,
    person_count: int,
) -> Booking:
    hotel = db.get(Hotel, hotel_id)
    if not hotel:
        raise NotFoundError("Hotel not found")
    if count_nights(check_in, check_out) <= 0:
        raise ValidationError("checkOutDate must be after checkInDate")

    b = Booking(
        user_id=user_id,
        hotel_id=hotel.id,
        check_in_date=_as_naive_utc(check_in),
        check_out_date=_as_naive_utc(check_out),
        room_type=room_type.strip(),
        person_count=person_count,
        total_price=compute_price(check_in, check_out, hotel.price),
    )
    db.add(b)
    db.commit()
    db.refresh(b)
    logger.info("Booking created: id=%s user=%s hotel=%s total=%s", b.id, user_id, hotel.id, b.total_price)
    return b


def _index_by_id(db: Session, model, ids: set[int]) -> dict:
    if not ids:
        return {}
    return {row.id: row for row in db.query(model).filter(model.id.in_(ids)).all()}


def list_bookings_for_user(db: Session, user_id: int) -> list[BookingDetail]:
    bookings = db.query(Booking).filter(Booking.user_id == user_id).order_by(Booking.id.asc()).all()
    hotels = _index_by_id(db, Hotel, {b.hotel_id for b in bookings})
    users = _index_by_id(db, User, {b.user_id for b in bookings})
    details = []
    for b in bookings:
        hotel = hotels.get(b.hotel_id)
        user = users.get(b.user_id)
        details.append(
            BookingDetail(
                hotel_name=hotel.name if hotel else UNKNOWN_HOTEL,
                user_name=user.username if user else UNKNOWN_USER,
                total_price=float(b.total_price or 0),
                check_in_date=b.check_in_date,
                check_out_date=b.check_out_date,
                person_count=b.person_count,
                room_type=b.room_type,
            )
        )
    return details


def list_all_bookings(db: Session) -> list[AdminBookingOut]:
    bookings = db.query(Booking).order_by(Booking.id.asc()).all()
    hotels = _index_by_id(db, Hotel, {b.hotel_id for b in bookings})
    users = _index_by_id(db, User, {b.user_id for b in bookings})
    return [AdminBookingOut.from_models(b, users.get(b.user_id), hotels.get(b.hotel_id)) for b in bookings]
