"""
Booking error taxonomy.

Every error here is a local, user-correctable condition. The message is
safe to show to the guest; storage details stay in the logs.
"""

from chalet.core.messages import messages


class BookingError(Exception):
    code = "booking_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(BookingError):
    code = "validation_failed"


class InvalidInterval(ValidationFailed):
    code = "invalid_interval"

    def __init__(self, message: str = messages.SELECT_AT_LEAST_ONE_NIGHT):
        super().__init__(message)


class WeekendMinimumViolation(ValidationFailed):
    code = "weekend_minimum"

    def __init__(self, message: str = messages.WEEKEND_MINIMUM):
        super().__init__(message)


class InvalidGuestCount(ValidationFailed):
    code = "invalid_guest_count"


class InvalidPetCount(ValidationFailed):
    code = "invalid_pet_count"


class InvalidDateInput(ValidationFailed):
    code = "invalid_date"

    def __init__(self, message: str = messages.INVALID_DATES):
        super().__init__(message)


class DatesUnavailable(BookingError):
    code = "dates_unavailable"

    def __init__(self, message: str = messages.DATES_UNAVAILABLE):
        super().__init__(message)


class ReservationNotFound(BookingError):
    code = "not_found"

    def __init__(self, reservation_id=None):
        super().__init__(messages.RESERVATION_NOT_FOUND)
        self.reservation_id = reservation_id


class HistoricalReservationLocked(BookingError):
    code = "historical_reservation"

    def __init__(self, message: str = messages.HISTORICAL_DELETE):
        super().__init__(message)


class StorageError(BookingError):
    """Opaque persistence failure, mapped to a generic message."""

    code = "storage_unavailable"

    def __init__(self, message: str = messages.STORAGE_UNAVAILABLE):
        super().__init__(message)
