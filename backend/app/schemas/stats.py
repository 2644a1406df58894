from app.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_users: int
    active_trips: int
    trip_organizers: int
    total_bookings: int
