import math
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..db import get_db
from ..errors import NotFoundError, ValidationError
from ..schemas import HotelOut, HotelUpdateOut, MessageOut
from ..services import catalog
from ..services.media import read_image

router = APIRouter(prefix="/api", tags=["hotels"])


def _check_price(price: Optional[float]) -> None:
    if price is not None and (not math.isfinite(price) or price <= 0):
        raise ValidationError("price must be a positive number")


@router.post("/uploadphoto", response_model=MessageOut)
def upload_photo(
    image: Optional[UploadFile] = File(None, alias="myImage"),
    name: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    city: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not image or not image.filename:
        raise ValidationError("Please upload a file")
    name = (name or "").strip()
    city = (city or "").strip()
    if not name or price is None or not city:
        raise ValidationError("name, price and city are required")
    _check_price(price)
    data, content_type = read_image(image, settings.UPLOAD_DIR, settings.UPLOAD_IMAGE_MAX_BYTES)
    catalog.create_hotel(db, name=name, price=price, city=city, img_data=data, img_content_type=content_type)
    return {"message": "Uploading successful"}


# Historical path: lists every hotel, not reservations
@router.get("/bookings", response_model=List[HotelOut])
def list_hotels(db: Session = Depends(get_db)):
    return [HotelOut.from_model(h) for h in catalog.list_hotels(db)]


@router.get("/search", response_model=List[HotelOut])
def search_hotels(name: Optional[str] = None, city: Optional[str] = None, db: Session = Depends(get_db)):
    return [HotelOut.from_model(h) for h in catalog.search_hotels(db, name=name, city=city)]


@router.get("/hotels/{hotel_id}", response_model=HotelOut)
def get_hotel(hotel_id: int, db: Session = Depends(get_db)):
    hotel = catalog.get_hotel(db, hotel_id)
    if not hotel:
        raise NotFoundError("Hotel not found")
    return HotelOut.from_model(hotel)


@router.put("/hotels/{hotel_id}", response_model=HotelUpdateOut)
def update_hotel(
    hotel_id: int,
    image: Optional[UploadFile] = File(None, alias="myImage"),
    name: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    city: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not catalog.get_hotel(db, hotel_id):
        raise NotFoundError("Hotel not found")
    _check_price(price)
    data = content_type = None
    if image and image.filename:
        data, content_type = read_image(image, settings.UPLOAD_DIR, settings.UPLOAD_IMAGE_MAX_BYTES)
    hotel = catalog.update_hotel(
        db,
        hotel_id,
        name=(name or "").strip() or None,
        price=price,
        city=(city or "").strip() or None,
        img_data=data,
        img_content_type=content_type,
    )
    if not hotel:
        raise NotFoundError("Hotel not found")
    return {"message": "Hotel updated successfully", "hotel": HotelOut.from_model(hotel)}


@router.delete("/hotels/{hotel_id}", response_model=MessageOut)
def delete_hotel(hotel_id: int, db: Session = Depends(get_db)):
    if not catalog.delete_hotel(db, hotel_id):
        raise NotFoundError("Hotel not found")
    return {"message": "Hotel deleted successfully"}
