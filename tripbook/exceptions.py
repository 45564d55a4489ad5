"""
Domain errors raised by the services and translated to HTTP responses
by the routers.
"""


class TripBookError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TripBookError):
    status_code = 400


class AuthError(TripBookError):
    status_code = 401


class AuthorizationError(TripBookError):
    status_code = 403


class NotFoundError(TripBookError):
    status_code = 404


class CapacityError(TripBookError):
    status_code = 400


class StateError(TripBookError):
    """Booking requested in the wrong per-user state (already booked / not booked)."""

    status_code = 400
