"""
Unit tests for stay pricing rules
"""
import pytest
from datetime import date
from decimal import Decimal

from chalet.core.errors import (
    InvalidGuestCount,
    InvalidInterval,
    InvalidPetCount,
    WeekendMinimumViolation,
)
from chalet.domain.calendar import DateInterval
from chalet.domain.pricing import (
    BookingCalculator,
    calculate_quote,
    count_nights,
    has_weekend,
    step_guests,
    step_pets,
    validate_guests,
    validate_pets,
)

# March 2026: Mon 2, Tue 3, Wed 4, Thu 5, Fri 6, Sat 7, Sun 8, Mon 9
MON, TUE, WED, THU = date(2026, 3, 2), date(2026, 3, 3), date(2026, 3, 4), date(2026, 3, 5)
FRI, SAT, SUN, NEXT_MON = date(2026, 3, 6), date(2026, 3, 7), date(2026, 3, 8), date(2026, 3, 9)


class TestNightsAndWeekend:

    def test_nights_are_whole_days(self):
        assert count_nights(MON, TUE) == 1
        assert count_nights(MON, NEXT_MON) == 7
        assert count_nights(MON, MON) == 0

    def test_nights_ignore_direction(self):
        assert count_nights(THU, MON) == 3

    def test_weekend_scan_excludes_checkout_day(self):
        # Friday -> Saturday only stays Friday night
        assert has_weekend(FRI, SAT) is False
        assert has_weekend(SAT, SUN) is True
        assert has_weekend(SUN, NEXT_MON) is True
        assert has_weekend(MON, FRI) is False


class TestQuoteScenarios:

    def test_weekday_single_night(self, pricing_config):
        quote = calculate_quote(DateInterval(MON, TUE), 2, pricing_config)
        assert quote.nights == 1
        assert quote.total == Decimal("400")

    def test_weekend_two_nights_meets_minimum(self, pricing_config):
        quote = calculate_quote(DateInterval(FRI, SUN), 2, pricing_config)
        assert quote.nights == 2
        assert quote.total == Decimal("800")

    def test_friday_to_saturday_is_not_a_weekend_stay(self, pricing_config):
        # Documented boundary: checkout on Saturday does not count as a weekend night
        quote = calculate_quote(DateInterval(FRI, SAT), 2, pricing_config)
        assert quote.nights == 1

    def test_saturday_single_night_violates_minimum(self, pricing_config):
        with pytest.raises(WeekendMinimumViolation):
            calculate_quote(DateInterval(SAT, SUN), 2, pricing_config)

    def test_sunday_single_night_violates_minimum(self, pricing_config):
        with pytest.raises(WeekendMinimumViolation):
            calculate_quote(DateInterval(SUN, NEXT_MON), 2, pricing_config)

    def test_base_guests_pay_no_extra(self, pricing_config):
        quote = calculate_quote(DateInterval(MON, THU), 2, pricing_config)
        assert quote.nights == 3
        assert quote.extra_total == 0
        assert quote.total == Decimal("1200")

    def test_extra_guests_pay_per_night(self, pricing_config):
        quote = calculate_quote(DateInterval(MON, WED), 5, pricing_config)
        assert quote.base_total == Decimal("800")
        assert quote.extra_total == Decimal("300")
        assert quote.total == Decimal("1100")

    def test_single_guest_has_no_discount(self, pricing_config):
        quote = calculate_quote(DateInterval(MON, WED), 1, pricing_config)
        assert quote.extra_total == 0
        assert quote.total == Decimal("800")


class TestQuoteProperties:

    def test_incomplete_interval_has_no_quote(self, pricing_config):
        assert calculate_quote(DateInterval(), 2, pricing_config) is None
        assert calculate_quote(DateInterval(MON, None), 2, pricing_config) is None

    def test_zero_nights_rejected(self, pricing_config):
        with pytest.raises(InvalidInterval) as exc_info:
            calculate_quote(DateInterval(MON, MON), 2, pricing_config)
        assert "at least one night" in exc_info.value.message

    def test_totals_are_consistent(self, pricing_config):
        for nights_end in (TUE, WED, THU, FRI):
            for guests in range(1, 9):
                quote = calculate_quote(DateInterval(MON, nights_end), guests, pricing_config)
                extra = max(0, guests - 2)
                assert quote.base_total == quote.nights * Decimal("400")
                assert quote.extra_total == extra * Decimal("50") * quote.nights
                assert quote.total == quote.base_total + quote.extra_total

    def test_quote_is_deterministic(self, pricing_config):
        interval = DateInterval(FRI, NEXT_MON)
        assert calculate_quote(interval, 4, pricing_config) == calculate_quote(
            interval, 4, pricing_config
        )


class TestGuestAndPetBounds:

    @pytest.mark.parametrize("guests", [1, 2, 8])
    def test_valid_guest_counts(self, pricing_config, guests):
        assert validate_guests(guests, pricing_config) == guests

    @pytest.mark.parametrize("guests", [0, 9, -1, 2.5, True, "3", None])
    def test_invalid_guest_counts(self, pricing_config, guests):
        with pytest.raises(InvalidGuestCount):
            validate_guests(guests, pricing_config)

    @pytest.mark.parametrize("pets", [0, 5])
    def test_valid_pet_counts(self, pricing_config, pets):
        assert validate_pets(pets, pricing_config) == pets

    @pytest.mark.parametrize("pets", [-1, 6, 1.0])
    def test_invalid_pet_counts(self, pricing_config, pets):
        with pytest.raises(InvalidPetCount):
            validate_pets(pets, pricing_config)

    def test_steppers_clamp(self, pricing_config):
        assert step_guests(1, -1, pricing_config) == 1
        assert step_guests(8, 1, pricing_config) == 8
        assert step_guests(2, 1, pricing_config) == 3
        assert step_pets(0, -1, pricing_config) == 0
        assert step_pets(5, 1, pricing_config) == 5


class TestBookingCalculator:

    def test_reports_total(self, pricing_config):
        prices = []
        calculator = BookingCalculator(pricing_config, on_price_calculate=prices.append)

        calculator.calculate(DateInterval(MON, WED), 5)

        assert prices == [Decimal("1100")]
        assert calculator.price == Decimal("1100")
        assert calculator.validation_error is None

    def test_reports_none_with_inline_error(self, pricing_config):
        prices = []
        calculator = BookingCalculator(pricing_config, on_price_calculate=prices.append)

        calculator.calculate(DateInterval(SAT, SUN), 2)

        assert prices == [None]
        assert calculator.quote is None
        assert "2 nights" in calculator.validation_error

    def test_incomplete_interval_clears_previous_quote(self, pricing_config):
        prices = []
        calculator = BookingCalculator(pricing_config, on_price_calculate=prices.append)

        calculator.calculate(DateInterval(MON, WED), 2)
        calculator.calculate(DateInterval(MON, None), 2)

        assert prices == [Decimal("800"), None]
        assert calculator.price is None
        assert calculator.validation_error is None
