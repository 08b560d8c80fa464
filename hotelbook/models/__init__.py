from .account import User, Admin
from .hotel import Hotel
from .booking import Booking
