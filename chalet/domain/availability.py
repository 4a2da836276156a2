"""
Reservation overlap rules.

Stays are half-open: [check_in, check_out). Two stays collide iff
a.check_in < b.check_out and b.check_in < a.check_out, so a checkout day
can be booked again as a check-in day. Cancelled reservations never block.
"""

import datetime
from typing import Iterable, Optional

from sqlalchemy import and_

from chalet.core.errors import InvalidDateInput
from chalet.models import ReservationStatus


def coerce_date(value) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            if "T" in value:
                return datetime.datetime.fromisoformat(value).date()
            return datetime.date.fromisoformat(value)
        except ValueError:
            raise InvalidDateInput()
    raise InvalidDateInput()


def overlaps(
    a_start: datetime.date,
    a_end: datetime.date,
    b_start: datetime.date,
    b_end: datetime.date,
) -> bool:
    return a_start < b_end and b_start < a_end


def overlap_clause(start_col, end_col, check_in: datetime.date, check_out: datetime.date):
    """The same overlap test as an SQL expression over two date columns."""
    return and_(start_col < check_out, end_col > check_in)


def find_conflict(
    check_in,
    check_out,
    reservations: Iterable,
    exclude_id=None,
) -> Optional[object]:
    """First non-cancelled reservation overlapping the candidate stay, if any."""
    check_in = coerce_date(check_in)
    check_out = coerce_date(check_out)

    for reservation in reservations:
        if exclude_id is not None and reservation.id == exclude_id:
            continue
        if reservation.status == ReservationStatus.CANCELLED:
            continue
        if overlaps(
            coerce_date(reservation.check_in),
            coerce_date(reservation.check_out),
            check_in,
            check_out,
        ):
            return reservation
    return None


def is_available(check_in, check_out, reservations: Iterable, exclude_id=None) -> bool:
    return find_conflict(check_in, check_out, reservations, exclude_id) is None
