"""
Form field validation helpers
"""

from datetime import date
from typing import Optional, Tuple


def validate_name(name: str) -> bool:
    """At least 2 non-blank characters, at most 100."""
    return len(name.strip()) >= 2 and len(name) <= 100


def validate_dates(
    check_in: date, check_out: date, today: Optional[date] = None
) -> Tuple[bool, Optional[str]]:
    """
    Validate a new stay.
    Returns (is_valid, error_message)
    """
    today = today or date.today()

    if check_in < today:
        return False, "Check-in date cannot be in the past"

    if check_out <= check_in:
        return False, "Check-out date must be after check-in date"

    return True, None
