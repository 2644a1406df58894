from sqlalchemy import Column, Integer, String

from app.db.base import Base, TimestampMixin


class Organizer(Base, TimestampMixin):
    __tablename__ = "organizers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<Organizer(id={self.id}, email={self.email})>"
