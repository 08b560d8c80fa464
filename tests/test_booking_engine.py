from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hotelbook.errors import NotFoundError, ValidationError
from hotelbook.models import Booking, Hotel, User
from hotelbook.services.booking import (
    compute_price,
    count_nights,
    create_booking,
    list_all_bookings,
    list_bookings_for_user,
)


def test_three_nights_at_100_costs_300():
    assert compute_price(datetime(2024, 1, 1), datetime(2024, 1, 4), 100) == 300


def test_partial_day_rounds_up():
    assert count_nights(datetime(2024, 1, 1, 14), datetime(2024, 1, 3, 11)) == 2
    assert compute_price(datetime(2024, 1, 1, 14), datetime(2024, 1, 3, 15), 50) == 150


def test_plain_dates_are_accepted():
    assert compute_price(date(2024, 2, 27), date(2024, 3, 1), Decimal("80.00")) == Decimal("240.00")


def test_aware_datetimes_are_compared_in_utc():
    check_in = datetime(2024, 1, 1, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    check_out = datetime(2024, 1, 3, 4, 0, tzinfo=timezone.utc)
    assert count_nights(check_in, check_out) == 1


def test_reversed_range_is_not_rejected_by_the_price_function():
    assert compute_price(datetime(2024, 1, 4), datetime(2024, 1, 1), 100) == -300
    assert compute_price(datetime(2024, 1, 1), datetime(2024, 1, 1), 100) == 0


def _hotel(db, name="Seaside", price=Decimal("120.00")):
    hotel = Hotel(name=name, price=price, city="Nice", img_data=b"x", img_content_type="image/png")
    db.add(hotel)
    db.commit()
    return hotel


def _user(db, username="bob"):
    user = User(username=username, email=f"{username}@example.com", hashed_password="x")
    db.add(user)
    db.commit()
    return user


def test_create_booking_persists_computed_total(db):
    hotel = _hotel(db)
    user = _user(db)
    b = create_booking(db, user.id, hotel.id, datetime(2024, 5, 1), datetime(2024, 5, 3), "Deluxe", 2)
    assert b.id is not None
    assert b.total_price == Decimal("240.00")
    assert db.query(Booking).count() == 1


def test_create_booking_for_missing_hotel(db):
    with pytest.raises(NotFoundError, match="Hotel not found"):
        create_booking(db, 1, 999, datetime(2024, 5, 1), datetime(2024, 5, 3), "Deluxe", 2)


def test_create_booking_rejects_non_positive_stay(db):
    hotel = _hotel(db)
    with pytest.raises(ValidationError):
        create_booking(db, 1, hotel.id, datetime(2024, 5, 3), datetime(2024, 5, 3), "Deluxe", 2)
    assert db.query(Booking).count() == 0


def test_user_bookings_substitute_placeholders_for_dangling_references(db):
    hotel = _hotel(db)
    user = _user(db)
    create_booking(db, user.id, hotel.id, datetime(2024, 5, 1), datetime(2024, 5, 2), "Single", 1)
    create_booking(db, 4242, hotel.id, datetime(2024, 5, 1), datetime(2024, 5, 2), "Single", 1)
    db.delete(hotel)
    db.commit()

    [detail] = list_bookings_for_user(db, user.id)
    assert detail.hotel_name == "Unknown Hotel"
    assert detail.user_name == "bob"
    assert detail.total_price == 120.0

    [orphan] = list_bookings_for_user(db, 4242)
    assert orphan.user_name == "Unknown User"


def test_admin_listing_populates_user_and_hotel(db):
    hotel = _hotel(db, name="Harbour")
    user = _user(db, "carol")
    create_booking(db, user.id, hotel.id, datetime(2024, 6, 1), datetime(2024, 6, 4), "Suite", 3)

    [view] = list_all_bookings(db)
    assert view.user.username == "carol"
    assert view.hotel.name == "Harbour"
    assert view.total_price == 360.0
