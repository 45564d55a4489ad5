"""
Seat booking for trips.

A trip's seat counter (``Trip.current_bookings``) and its booked travelers
(``trip_bookings`` rows) change together inside one transaction, and the
capacity predicate is evaluated by the database when the counter is
updated, not when the trip was first read. The UPDATE takes a row lock on
the trip, so concurrent bookings of the same trip are serialized by the
database even when they come from different server processes:

- at most one booking can take the last free seat;
- the unique (trip_id, user_id) constraint rejects a duplicate traveler and
  the rollback undoes the counter increment with it;
- ``current_bookings`` always equals the number of booking rows.

Nothing is retried. A booking whose condition fails is rolled back and
reported to the caller.
"""

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import datetime
import logging

from tripbook.crud import trip as trip_crud
from tripbook.exceptions import CapacityError, NotFoundError, StateError
from tripbook.models.trip import Trip, TripBooking

logger = logging.getLogger(__name__)

TRIP_NOT_FOUND = "Trip not found"
TRIP_FULL = "Trip is already full"
ALREADY_BOOKED = "You have already booked this trip"
NOT_BOOKED = "You have not booked this trip"


def _require_trip(db: Session, trip_id: int) -> Trip:
    trip = trip_crud.get_trip(db, trip_id)
    if not trip:
        raise NotFoundError(TRIP_NOT_FOUND)
    return trip


def book_trip(db: Session, trip_id: int, user_id: int) -> Trip:
    """
    Reserve one seat on a trip for a user.

    Raises:
        NotFoundError: the trip does not exist
        CapacityError: no seat was free when the counter was updated
        StateError: the user already holds a seat on this trip
    """
    _require_trip(db, trip_id)

    result = db.execute(
        update(Trip)
        .where(Trip.id == trip_id, Trip.current_bookings < Trip.max_capacity)
        .values(
            current_bookings=Trip.current_bookings + 1,
            updated_at=datetime.utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        # The trip may have been deleted since it was read
        _require_trip(db, trip_id)
        logger.info("Booking rejected, trip %s is full (user %s)", trip_id, user_id)
        raise CapacityError(TRIP_FULL)

    db.add(TripBooking(trip_id=trip_id, user_id=user_id))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.info("Booking rejected, user %s already on trip %s", user_id, trip_id)
        raise StateError(ALREADY_BOOKED)

    db.commit()
    logger.info("User %s booked trip %s", user_id, trip_id)
    return _require_trip(db, trip_id)


def cancel_booking(db: Session, trip_id: int, user_id: int) -> Trip:
    """
    Release the seat a user holds on a trip.

    Raises:
        NotFoundError: the trip does not exist
        StateError: the user holds no seat on this trip
    """
    _require_trip(db, trip_id)

    deleted = (
        db.query(TripBooking)
        .filter(TripBooking.trip_id == trip_id, TripBooking.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if deleted == 0:
        db.rollback()
        logger.info("Cancel rejected, user %s has no seat on trip %s", user_id, trip_id)
        raise StateError(NOT_BOOKED)

    db.execute(
        update(Trip)
        .where(Trip.id == trip_id, Trip.current_bookings > 0)
        .values(
            current_bookings=Trip.current_bookings - 1,
            updated_at=datetime.utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    db.commit()
    logger.info("User %s cancelled booking on trip %s", user_id, trip_id)
    return _require_trip(db, trip_id)
