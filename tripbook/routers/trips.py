from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from tripbook.database import get_db
from tripbook.crud import trip as crud
from tripbook.exceptions import AuthorizationError, NotFoundError, TripBookError
from tripbook.models.trip import Trip
from tripbook.models.user import User
from tripbook.schemas.trip import (
    MessageResponse,
    TripCreate,
    TripDetailResponse,
    TripResponse,
    TripUpdate,
)
from tripbook.services import booking as booking_service
from tripbook.services.auth import get_current_user

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_owned_trip(db: Session, trip_id: int, user: User, action: str) -> Trip:
    db_trip = crud.get_trip(db, trip_id)
    if db_trip is None:
        raise NotFoundError("Trip not found")
    if db_trip.creator_id != user.id:
        logger.warning(
            "User %s tried to %s trip %s owned by %s",
            user.id,
            action,
            trip_id,
            db_trip.creator_id,
        )
        raise AuthorizationError(f"Not authorized to {action} this trip")
    return db_trip


@router.get("", response_model=List[TripResponse])
def read_trips(
    search: Optional[str] = None,
    destination: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    creator: Optional[str] = None,
    booked_by: Optional[str] = Query(None, alias="bookedBy"),
    db: Session = Depends(get_db),
):
    return crud.get_trips(
        db,
        search=search,
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        creator=creator,
        booked_by=booked_by,
    )


@router.get("/{trip_id}", response_model=TripDetailResponse)
def read_trip(trip_id: int, db: Session = Depends(get_db)):
    db_trip = crud.get_trip_detail(db, trip_id)
    if db_trip is None:
        raise HTTPException(status_code=404, detail="Trip not found")
    return db_trip


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
def create_trip(
    trip: TripCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return crud.create_trip(db, trip, creator_id=current_user.id)


@router.post("/{trip_id}/book", response_model=TripResponse)
def book_trip(
    trip_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_service.book_trip(db, trip_id, current_user.id)
    except TripBookError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.post("/{trip_id}/cancel", response_model=TripResponse)
def cancel_booking(
    trip_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return booking_service.cancel_booking(db, trip_id, current_user.id)
    except TripBookError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.put("/{trip_id}", response_model=TripResponse)
def update_trip(
    trip_id: int,
    trip: TripUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_trip = _get_owned_trip(db, trip_id, current_user, "update")
        return crud.update_trip(db, db_trip, trip)
    except TripBookError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip(
    trip_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_trip = _get_owned_trip(db, trip_id, current_user, "delete")
    except TripBookError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    crud.delete_trip(db, db_trip)
    return {"message": "Trip deleted successfully"}
