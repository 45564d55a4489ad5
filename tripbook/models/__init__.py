from tripbook.models.user import User
from tripbook.models.trip import Trip, TripBooking

# This makes the models directory a Python package and ensures all models are loaded
