from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship
from tripbook.database import Base
from datetime import datetime


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String)
    hashed_password = Column(String, nullable=False)
    # street, city, state, country, zip_code
    address = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    created_trips = relationship(
        "Trip", back_populates="creator", cascade="all, delete-orphan"
    )
    trip_bookings = relationship(
        "TripBooking", back_populates="user", cascade="all, delete-orphan"
    )
