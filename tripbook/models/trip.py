from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy import event
from sqlalchemy.orm import relationship
from datetime import datetime

from tripbook.database import Base


class Trip(Base):
    __tablename__ = "trips"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_trips_price_non_negative"),
        CheckConstraint("max_capacity >= 1", name="ck_trips_max_capacity_positive"),
        CheckConstraint(
            "current_bookings >= 0", name="ck_trips_current_bookings_non_negative"
        ),
        CheckConstraint(
            "current_bookings <= max_capacity", name="ck_trips_within_capacity"
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    destination = Column(String, nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    price = Column(Float, nullable=False)
    max_capacity = Column(Integer, nullable=False)
    current_bookings = Column(Integer, nullable=False, default=0)
    image = Column(String)
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    creator = relationship("User", back_populates="created_trips")
    bookings = relationship(
        "TripBooking",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripBooking.id",
    )
    # Travelers in booking order. Writes go through TripBooking rows only.
    booked_by = relationship(
        "User",
        secondary="trip_bookings",
        order_by="TripBooking.id",
        viewonly=True,
    )

    @property
    def booked_by_ids(self):
        return [user.id for user in self.booked_by]

    @property
    def available_spots(self) -> int:
        return self.max_capacity - self.current_bookings

    @property
    def is_full(self) -> bool:
        return self.current_bookings >= self.max_capacity


class TripBooking(Base):
    """One seat on a trip held by one user."""

    __tablename__ = "trip_bookings"
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_bookings_trip_user"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(
        Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, default=datetime.utcnow)

    trip = relationship("Trip", back_populates="bookings")
    user = relationship("User", back_populates="trip_bookings")


@event.listens_for(TripBooking, "before_delete")
def release_seat(mapper, connection, target):
    """A booking row removed through the ORM (user or trip cascade) gives its seat back."""
    trips = Trip.__table__
    connection.execute(
        trips.update()
        .where(trips.c.id == target.trip_id, trips.c.current_bookings > 0)
        .values(current_bookings=trips.c.current_bookings - 1)
    )
