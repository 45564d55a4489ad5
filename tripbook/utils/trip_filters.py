"""
Construction of the trip listing filters.

Text filters are case-insensitive substring matches. The date filters select
trips whose [start_date, end_date] interval overlaps the requested window.
Malformed dates or ids drop the corresponding filter instead of rejecting
the request.
"""

from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import or_

from tripbook.models.trip import Trip, TripBooking
from tripbook.schemas.trip import to_naive_utc

logger = logging.getLogger(__name__)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Returns None for empty or malformed values. Timezone-aware values are
    converted to naive UTC, matching how trip dates are stored.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return to_naive_utc(parsed)


def parse_id(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def build_trip_filters(
    search: Optional[str] = None,
    destination: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    creator: Optional[str] = None,
    booked_by: Optional[str] = None,
) -> List:
    """Return the SQLAlchemy criteria for GET /trips."""
    criteria = []

    if search:
        criteria.append(
            or_(
                Trip.title.icontains(search, autoescape=True),
                Trip.description.icontains(search, autoescape=True),
            )
        )

    if destination:
        criteria.append(Trip.destination.icontains(destination, autoescape=True))

    if start_date:
        parsed_start = parse_date(start_date)
        if parsed_start is not None:
            criteria.append(Trip.end_date >= parsed_start)
        else:
            logger.warning("Invalid start date provided: %s", start_date)

    if end_date:
        parsed_end = parse_date(end_date)
        if parsed_end is not None:
            criteria.append(Trip.start_date <= parsed_end)
        else:
            logger.warning("Invalid end date provided: %s", end_date)

    if creator:
        creator_id = parse_id(creator)
        if creator_id is not None:
            criteria.append(Trip.creator_id == creator_id)
        else:
            logger.warning("Invalid creator id provided: %s", creator)

    if booked_by:
        booked_by_id = parse_id(booked_by)
        if booked_by_id is not None:
            criteria.append(
                Trip.bookings.any(TripBooking.user_id == booked_by_id)
            )
        else:
            logger.warning("Invalid bookedBy id provided: %s", booked_by)

    return criteria
