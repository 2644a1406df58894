"""
Booking model and the booking_users join table.

Key design decisions:
- A booking belongs to exactly one trip and one organizer
- Travellers are attached through booking_users (many-to-many with users);
  the service layer replaces that set wholesale on every update
- `type` is restricted to a fixed set at the DB level as well as in the schema
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey, Table, CheckConstraint, Index

from app.db.base import Base, TimestampMixin

BOOKING_TYPES = ("Hotel", "Flight", "Train", "Other")

booking_users = Table(
    "booking_users",
    Base.metadata,
    Column("booking_id", Integer, ForeignKey("bookings.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True, index=True),
)


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    organizer_id = Column(Integer, ForeignKey("organizers.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    provider_name = Column(String(255), nullable=True)
    booking_ref = Column(String(100), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "type IN ('Hotel', 'Flight', 'Train', 'Other')",
            name="check_booking_type",
        ),
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="check_booking_dates_ordered",
        ),
        # Listing is ordered by start date
        Index("ix_bookings_start_date", "start_date"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, trip={self.trip_id}, type={self.type})>"
