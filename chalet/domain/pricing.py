"""
Stay pricing rules.

A quote is derived from the selected interval and the guest count:
every night costs `base_price`, and each guest above `base_guests` adds
`extra_person_fee` per night. Stays that touch a weekend need at least
two nights.
"""

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from chalet.core.errors import (
    BookingError,
    InvalidGuestCount,
    InvalidInterval,
    InvalidPetCount,
    WeekendMinimumViolation,
)
from chalet.core.messages import messages

SATURDAY = 5
SUNDAY = 6
WEEKEND_MIN_NIGHTS = 2


@dataclass(frozen=True)
class PricingConfig:
    base_price: Decimal
    base_guests: int
    extra_person_fee: Decimal
    max_guests: int = 8
    max_pets: int = 5


@dataclass(frozen=True)
class PricingQuote:
    nights: int
    base_total: Decimal
    extra_total: Decimal
    total: Decimal


def count_nights(start: datetime.date, end: datetime.date) -> int:
    # Calendar dates carry no time, so the ceil over whole days is exact
    return abs((end - start).days)


def has_weekend(start: datetime.date, end: datetime.date) -> bool:
    """
    True if any stayed night falls on Saturday or Sunday.

    The checkout day itself is not scanned: Friday -> Saturday visits
    only Friday.
    """
    current = start
    while current < end:
        if current.weekday() in (SATURDAY, SUNDAY):
            return True
        current += datetime.timedelta(days=1)
    return False


def calculate_quote(interval, guests: int, config: PricingConfig) -> Optional[PricingQuote]:
    """
    Price a stay. Returns None while the interval is incomplete.

    Raises InvalidInterval for zero-night stays and
    WeekendMinimumViolation for one-night weekend stays.
    """
    if interval.start is None or interval.end is None:
        return None

    nights = count_nights(interval.start, interval.end)
    if nights < 1:
        raise InvalidInterval()

    if has_weekend(interval.start, interval.end) and nights < WEEKEND_MIN_NIGHTS:
        raise WeekendMinimumViolation()

    extra_guests = max(0, guests - config.base_guests)
    base_total = nights * config.base_price
    extra_total = extra_guests * config.extra_person_fee * nights

    return PricingQuote(
        nights=nights,
        base_total=base_total,
        extra_total=extra_total,
        total=base_total + extra_total,
    )


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_guests(guests, config: PricingConfig) -> int:
    if not _is_int(guests) or not 1 <= guests <= config.max_guests:
        raise InvalidGuestCount(messages.invalid_guests(config.max_guests))
    return guests


def validate_pets(pets, config: PricingConfig) -> int:
    if not _is_int(pets) or not 0 <= pets <= config.max_pets:
        raise InvalidPetCount(messages.invalid_pets(config.max_pets))
    return pets


def step_guests(guests: int, delta: int, config: PricingConfig) -> int:
    return min(config.max_guests, max(1, guests + delta))


def step_pets(pets: int, delta: int, config: PricingConfig) -> int:
    return min(config.max_pets, max(0, pets + delta))


class BookingCalculator:
    """
    Stay summary for the booking form.

    Every `calculate` call reports through `on_price_calculate` exactly
    once: the total, or None when no valid quote exists. The submit action
    is gated on a non-None price.
    """

    def __init__(
        self,
        config: PricingConfig,
        on_price_calculate: Optional[Callable[[Optional[Decimal]], None]] = None,
    ):
        self.config = config
        self.on_price_calculate = on_price_calculate
        self.quote: Optional[PricingQuote] = None
        self.validation_error: Optional[str] = None

    def calculate(self, interval, guests: int) -> Optional[PricingQuote]:
        self.quote = None
        self.validation_error = None

        try:
            self.quote = calculate_quote(interval, guests, self.config)
        except BookingError as e:
            self.validation_error = e.message

        if self.on_price_calculate is not None:
            self.on_price_calculate(self.quote.total if self.quote else None)
        return self.quote

    @property
    def price(self) -> Optional[Decimal]:
        return self.quote.total if self.quote else None
