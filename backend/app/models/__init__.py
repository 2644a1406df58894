from app.models.user import User
from app.models.trip import Trip
from app.models.organizer import Organizer
from app.models.booking import Booking, booking_users, BOOKING_TYPES

__all__ = ["User", "Trip", "Organizer", "Booking", "booking_users", "BOOKING_TYPES"]
