"""
Tests for the demo data seeding
"""
from tripbook.init_db import (
    DEMO_USER_EMAIL,
    DEMO_USER_PASSWORD,
    SAMPLE_TRIPS,
    seed_database,
)
from tripbook.models.trip import Trip
from tripbook.models.user import User
from tripbook.services.auth import authenticate_user
from tripbook.services.booking import book_trip

from conftest import booking_rows


def test_seed_creates_demo_user_and_sample_trips(db):
    seed_database(db)

    user = authenticate_user(db, DEMO_USER_EMAIL, DEMO_USER_PASSWORD)
    assert user

    trips = db.query(Trip).all()
    assert len(trips) == len(SAMPLE_TRIPS)
    assert all(trip.creator_id == user.id for trip in trips)
    assert all(trip.current_bookings == 0 for trip in trips)


def test_reseeding_replaces_trips_and_keeps_users(db, traveler):
    seed_database(db)
    trip_id = db.query(Trip).first().id
    traveler_id = traveler.id
    book_trip(db, trip_id, traveler_id)

    seed_database(db)

    assert db.query(User).filter(User.email == DEMO_USER_EMAIL).count() == 1
    assert db.query(User).filter(User.id == traveler_id).count() == 1
    assert db.query(Trip).count() == len(SAMPLE_TRIPS)
    assert booking_rows(db, trip_id) == []
