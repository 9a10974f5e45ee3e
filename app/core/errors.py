"""Typed outcomes raised by the service layer and mapped to HTTP responses in app.main."""


class ScreenBookingError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScreenBookingError):
    """Missing or malformed input."""

    status_code = 422


class NotFoundError(ScreenBookingError):
    status_code = 404


class ConflictError(ScreenBookingError):
    """Slot already booked, duplicate screen name, or screen still referenced."""

    status_code = 409


class DependencyUnavailable(ScreenBookingError):
    """Storage or suggestion service unreachable or too slow."""

    status_code = 503
