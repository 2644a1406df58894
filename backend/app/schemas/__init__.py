from app.schemas.common import ErrorResponse, DeleteResponse
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.schemas.trip import TripCreate, TripUpdate, TripResponse
from app.schemas.organizer import OrganizerCreate, OrganizerUpdate, OrganizerResponse
from app.schemas.booking import BookingCreate, BookingUpdate, BookingResponse, BookingUser
from app.schemas.stats import DashboardStats

__all__ = [
    "ErrorResponse", "DeleteResponse",
    "UserCreate", "UserUpdate", "UserResponse",
    "TripCreate", "TripUpdate", "TripResponse",
    "OrganizerCreate", "OrganizerUpdate", "OrganizerResponse",
    "BookingCreate", "BookingUpdate", "BookingResponse", "BookingUser",
    "DashboardStats",
]
