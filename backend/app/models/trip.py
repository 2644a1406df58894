"""
Trip model. Dates are optional but must be ordered when both are set.
"""

from sqlalchemy import Column, Integer, String, Date, CheckConstraint

from app.db.base import Base, TimestampMixin


class Trip(Base, TimestampMixin):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    destination = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "start_date IS NULL OR end_date IS NULL OR start_date <= end_date",
            name="check_trip_dates_ordered",
        ),
    )

    def __repr__(self) -> str:
        return f"<Trip(id={self.id}, name={self.name}, destination={self.destination})>"
