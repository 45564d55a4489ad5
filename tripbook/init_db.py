from sqlalchemy.orm import Session
from datetime import datetime
from tripbook.database import Base, SessionLocal, engine
from tripbook.models.trip import Trip, TripBooking
from tripbook.models.user import User
from tripbook.services.auth import get_password_hash
import logging

logger = logging.getLogger(__name__)

DEMO_USER_EMAIL = "admin@college.edu"
DEMO_USER_PASSWORD = "password123"

SAMPLE_TRIPS = [
    {
        "title": "Jaipur Heritage Tour",
        "description": (
            "Explore the Pink City with your college friends! Visit Hawa Mahal, "
            "City Palace, Jantar Mantar, and Amber Fort. Perfect weekend getaway "
            "to learn about Rajasthan's rich history and architecture."
        ),
        "destination": "Jaipur",
        "start_date": datetime(2025, 1, 15),
        "end_date": datetime(2025, 1, 17),
        "price": 1500,
        "max_capacity": 30,
        "image": "https://images.unsplash.com/photo-1599661046289-e31897846e41?q=80&w=2070",
    },
    {
        "title": "Udaipur Lake City Retreat",
        "description": (
            "Experience the city of lakes with this 3-day trip to Udaipur. Visit "
            "Lake Pichola, City Palace, and enjoy a cultural evening. Great for "
            "photography enthusiasts and architecture students."
        ),
        "destination": "Udaipur",
        "start_date": datetime(2023, 12, 22),
        "end_date": datetime(2023, 12, 24),
        "price": 2000,
        "max_capacity": 25,
        "image": "https://images.unsplash.com/photo-1595658658481-d53d3f999875?q=80&w=2074",
    },
    {
        "title": "Jaisalmer Desert Camp",
        "description": (
            "Experience the Thar Desert with overnight camping in Jaisalmer. Enjoy "
            "camel rides, folk performances, and stargazing. Perfect for adventure "
            "lovers and geology students."
        ),
        "destination": "Jaisalmer",
        "start_date": datetime(2024, 1, 12),
        "end_date": datetime(2024, 1, 14),
        "price": 2200,
        "max_capacity": 20,
        "image": "https://images.unsplash.com/photo-1590050752117-42bb0ffd6dd3?q=80&w=2033",
    },
    {
        "title": "Pushkar Camel Fair Special",
        "description": (
            "Join us for the famous Pushkar Camel Fair! Experience the vibrant "
            "traditions, camel races, and cultural performances. Special "
            "photography workshop included for art students."
        ),
        "destination": "Pushkar",
        "start_date": datetime(2023, 11, 25),
        "end_date": datetime(2023, 11, 27),
        "price": 1600,
        "max_capacity": 20,
        "image": "https://www.travel-rajasthan.com/blog/wp-content/uploads/2019/07/PushkarCamelFair-1024x682.jpg",
    },
    {
        "title": "Kumbhalgarh & Ranakpur Weekend",
        "description": (
            "Visit the second-longest wall in the world at Kumbhalgarh Fort and the "
            "magnificent Jain temples of Ranakpur. Great educational tour for "
            "history and religious studies."
        ),
        "destination": "Kumbhalgarh",
        "start_date": datetime(2025, 10, 5),
        "end_date": datetime(2025, 10, 7),
        "price": 1800,
        "max_capacity": 20,
        "image": "https://images.unsplash.com/photo-1590050752117-42bb0ffd6dd3?q=80&w=2033",
    },
]


def create_demo_user(db: Session) -> User:
    """
    Create the demo user, or reset its password if it already exists.
    """
    hashed_password = get_password_hash(DEMO_USER_PASSWORD)
    user = db.query(User).filter(User.email == DEMO_USER_EMAIL).first()
    if user:
        logger.info("Demo user already exists, updating password...")
        user.hashed_password = hashed_password
    else:
        user = User(
            name="Admin User",
            email=DEMO_USER_EMAIL,
            hashed_password=hashed_password,
            phone="555-123-4567",
            address={
                "street": "123 Campus Drive",
                "city": "College Town",
                "state": "CA",
                "country": "USA",
                "zip_code": "90210",
            },
        )
        db.add(user)
        logger.info(f"Demo user created: {DEMO_USER_EMAIL}")

    db.commit()
    db.refresh(user)
    return user


def seed_trips(db: Session, creator: User) -> list:
    """
    Replace every trip with the sample trips, owned by the given user.
    Users are kept.
    """
    db.query(TripBooking).delete(synchronize_session="fetch")
    db.query(Trip).delete(synchronize_session="fetch")
    trips = [
        Trip(**data, creator_id=creator.id, current_bookings=0)
        for data in SAMPLE_TRIPS
    ]
    db.add_all(trips)
    db.commit()
    logger.info("Database seeded with %s sample trips", len(trips))
    return trips


def seed_database(db: Session) -> None:
    Base.metadata.create_all(bind=db.get_bind())
    creator = create_demo_user(db)
    seed_trips(db, creator)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
    engine.dispose()
