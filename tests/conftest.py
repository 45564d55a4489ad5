"""
Shared pytest configuration
"""
import os

# Must be set before the application modules read them
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("API_PREFIX", "/api")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tripbook.database import Base, get_db

# Import every model so SQLAlchemy can resolve the relationships
from tripbook.models.user import User
from tripbook.models.trip import Trip, TripBooking
from tripbook.services.auth import create_user_token


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_user(db, email, name="Test User"):
    user = User(
        name=name,
        email=email,
        hashed_password="hashed",
        phone="555-000-0000",
        address={"city": "Jaipur", "country": "India"},
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_trip(db, creator, **overrides):
    data = {
        "title": "Jaipur Heritage Tour",
        "description": "Explore the Pink City and Amber Fort",
        "destination": "Jaipur",
        "start_date": datetime(2025, 1, 15),
        "end_date": datetime(2025, 1, 17),
        "price": 1500.0,
        "max_capacity": 2,
        "current_bookings": 0,
        "image": "https://example.com/jaipur.jpg",
    }
    data.update(overrides)
    trip = Trip(creator_id=creator.id, **data)
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


def booking_rows(db, trip_id):
    return (
        db.query(TripBooking)
        .filter(TripBooking.trip_id == trip_id)
        .order_by(TripBooking.id)
        .all()
    )


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """get_db override for tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


@pytest.fixture
def client(override_get_db):
    from tripbook.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def creator(db):
    """Trip creator"""
    return make_user(db, "creator@college.edu", name="Trip Creator")


@pytest.fixture
def traveler(db):
    return make_user(db, "traveler@college.edu", name="First Traveler")


@pytest.fixture
def other_traveler(db):
    return make_user(db, "other@college.edu", name="Second Traveler")


@pytest.fixture
def sample_trip(db, creator):
    """Trip with two seats and no bookings"""
    return make_trip(db, creator)
