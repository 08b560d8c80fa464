from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import BookingCreatedOut, BookingDetail, BookingIn, BookingOut
from ..security import Identity, require_user
from ..services.booking import create_booking, list_bookings_for_user

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/book", response_model=BookingCreatedOut, status_code=201)
def book_hotel(payload: BookingIn, db: Session = Depends(get_db), user: Identity = Depends(require_user)):
    b = create_booking(
        db,
        user_id=user.id,
        hotel_id=payload.hotel_id,
        check_in=payload.check_in_date,
        check_out=payload.check_out_date,
        room_type=payload.room_type,
        person_count=payload.person_count,
    )
    return {"message": "Booking successful", "booking": BookingOut.from_model(b)}


@router.get("/my-bookings", response_model=List[BookingDetail])
def my_bookings(db: Session = Depends(get_db), user: Identity = Depends(require_user)):
    return list_bookings_for_user(db, user.id)
