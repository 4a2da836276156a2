class Messages:
    """
    Centralized store for user-facing messages.
    Validation errors are shown inline next to the booking form.
    """

    SELECT_AT_LEAST_ONE_NIGHT = "Select at least one night."
    WEEKEND_MINIMUM = "Weekend stays require a minimum of 2 nights."
    DATES_UNAVAILABLE = "Sorry, these dates are already booked."
    INVALID_DATES = "Invalid dates provided for the availability check."
    RESERVATION_NOT_FOUND = "Reservation not found."
    HISTORICAL_DELETE = (
        "Completed past reservations cannot be permanently deleted. "
        "Change the status to cancelled instead."
    )
    STORAGE_UNAVAILABLE = (
        "We could not process your reservation right now. Please try again later."
    )

    def invalid_guests(self, max_guests: int) -> str:
        return f"Invalid number of guests. Minimum 1, maximum {max_guests}."

    def invalid_pets(self, max_pets: int) -> str:
        return f"Invalid number of pets. Minimum 0, maximum {max_pets}."


messages = Messages()
