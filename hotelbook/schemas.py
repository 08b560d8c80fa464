from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import Hotel, Booking, User
from .services.media import encode_image

UNKNOWN_HOTEL = "Unknown Hotel"
UNKNOWN_USER = "Unknown User"


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

# ==== Accounts ====

class RegisterIn(BaseModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

class LoginIn(BaseModel):
    email: str
    password: str

class AccountOut(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True

class LoginOut(BaseModel):
    token: str
    user: AccountOut

class MessageOut(BaseModel):
    message: str

# ==== Hotels ====

class ImageOut(CamelModel):
    content_type: str
    data: str

class HotelOut(CamelModel):
    id: int = Field(alias="_id")
    name: str
    price: float
    city: str
    img: Optional[ImageOut] = None

    @classmethod
    def from_model(cls, hotel: Hotel) -> "HotelOut":
        img = None
        if hotel.img_data is not None:
            img = ImageOut(content_type=hotel.img_content_type or "application/octet-stream", data=encode_image(hotel.img_data))
        return cls(id=hotel.id, name=hotel.name, price=float(hotel.price), city=hotel.city, img=img)

class HotelUpdateOut(BaseModel):
    message: str
    hotel: HotelOut

class HotelSummaryOut(CamelModel):
    id: int = Field(alias="_id")
    name: str
    city: str
    price: float

# ==== Bookings ====

class BookingIn(CamelModel):
    hotel_id: int
    check_in_date: datetime
    check_out_date: datetime
    room_type: str = Field(min_length=1)
    person_count: int = Field(ge=1)

class BookingOut(CamelModel):
    id: int = Field(alias="_id")
    user: int
    hotel: int
    check_in_date: datetime
    check_out_date: datetime
    room_type: str
    person_count: int
    total_price: float

    @classmethod
    def from_model(cls, b: Booking) -> "BookingOut":
        return cls(
            id=b.id,
            user=b.user_id,
            hotel=b.hotel_id,
            check_in_date=b.check_in_date,
            check_out_date=b.check_out_date,
            room_type=b.room_type,
            person_count=b.person_count,
            total_price=float(b.total_price),
        )

class BookingCreatedOut(BaseModel):
    message: str
    booking: BookingOut

class BookingDetail(CamelModel):
    """A user's booking as shown back to them, with names resolved."""

    hotel_name: str
    user_name: str
    total_price: float
    check_in_date: datetime
    check_out_date: datetime
    person_count: int
    room_type: str

class AdminBookingOut(CamelModel):
    id: int = Field(alias="_id")
    user: Optional[AccountOut] = None
    hotel: Optional[HotelSummaryOut] = None
    check_in_date: datetime
    check_out_date: datetime
    room_type: str
    person_count: int
    total_price: float

    @classmethod
    def from_models(cls, b: Booking, user: Optional[User], hotel: Optional[Hotel]) -> "AdminBookingOut":
        return cls(
            id=b.id,
            user=AccountOut.model_validate(user) if user else None,
            hotel=HotelSummaryOut(id=hotel.id, name=hotel.name, city=hotel.city, price=float(hotel.price)) if hotel else None,
            check_in_date=b.check_in_date,
            check_out_date=b.check_out_date,
            room_type=b.room_type,
            person_count=b.person_count,
            total_price=float(b.total_price),
        )
