from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload, selectinload
from datetime import datetime
from typing import List, Optional
import logging

from tripbook.exceptions import ValidationError
from tripbook.models.trip import Trip
from tripbook.schemas.trip import TripCreate, TripUpdate
from tripbook.utils.trip_filters import build_trip_filters

logger = logging.getLogger(__name__)

# Columns that may be cleared by an update
NULLABLE_FIELDS = {"image"}


def get_trip(db: Session, trip_id: int) -> Optional[Trip]:
    return db.query(Trip).filter(Trip.id == trip_id).first()


def get_trip_detail(db: Session, trip_id: int) -> Optional[Trip]:
    return (
        db.query(Trip)
        .options(joinedload(Trip.creator), selectinload(Trip.booked_by))
        .filter(Trip.id == trip_id)
        .first()
    )


def get_trips(
    db: Session,
    search: Optional[str] = None,
    destination: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    creator: Optional[str] = None,
    booked_by: Optional[str] = None,
) -> List[Trip]:
    criteria = build_trip_filters(
        search=search,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        creator=creator,
        booked_by=booked_by,
    )
    return (
        db.query(Trip)
        .options(joinedload(Trip.creator), selectinload(Trip.booked_by))
        .filter(*criteria)
        .order_by(Trip.created_at.desc(), Trip.id.desc())
        .all()
    )


def create_trip(db: Session, trip: TripCreate, creator_id: int) -> Trip:
    db_trip = Trip(**trip.model_dump(), creator_id=creator_id, current_bookings=0)
    db.add(db_trip)
    db.commit()
    db.refresh(db_trip)
    logger.info("Trip %s created by user %s", db_trip.id, creator_id)
    return db_trip


def update_trip(db: Session, db_trip: Trip, trip: TripUpdate) -> Trip:
    update_data = {
        field: value
        for field, value in trip.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }

    start_date = update_data.get("start_date", db_trip.start_date)
    end_date = update_data.get("end_date", db_trip.end_date)
    if start_date > end_date:
        raise ValidationError("start_date must be on or before end_date")

    new_capacity = update_data.pop("max_capacity", None)
    if new_capacity is not None:
        # Checked by the store so a concurrent booking cannot slip past it
        result = db.execute(
            update(Trip)
            .where(Trip.id == db_trip.id, Trip.current_bookings <= new_capacity)
            .values(max_capacity=new_capacity, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            raise ValidationError(
                "max_capacity cannot be lower than the number of current bookings"
            )

    for field, value in update_data.items():
        setattr(db_trip, field, value)

    db.commit()
    db.refresh(db_trip)
    return db_trip


def delete_trip(db: Session, db_trip: Trip) -> None:
    trip_id = db_trip.id
    db.delete(db_trip)
    db.commit()
    logger.info("Trip %s deleted", trip_id)
