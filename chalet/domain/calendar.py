import calendar
import datetime
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional


class Direction(str, Enum):
    PREV = "prev"
    NEXT = "next"


class SelectionPhase(str, Enum):
    EMPTY = "empty"
    START_ONLY = "start_only"
    COMPLETE = "complete"


class DayState(str, Enum):
    PAST = "past"  # disabled, not clickable
    ENDPOINT = "endpoint"  # check-in or check-out
    IN_RANGE = "in_range"  # strictly between the endpoints
    AVAILABLE = "available"


@dataclass(frozen=True)
class DateInterval:
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month + 1)
    ]


def shift_month(month_start: datetime.date, step: int) -> datetime.date:
    index = month_start.year * 12 + (month_start.month - 1) + step
    return datetime.date(index // 12, index % 12 + 1, 1)


def build_month_grid(year: int, month: int) -> list[list[Optional[datetime.date]]]:
    """Sunday-first weeks; blank cells are None."""
    dates = get_month_dates(year, month)
    # date.weekday() is Monday=0, the grid starts on Sunday
    blanks = (dates[0].weekday() + 1) % 7

    cells: list[Optional[datetime.date]] = [None] * blanks + dates
    while len(cells) % 7:
        cells.append(None)
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


class DateRangeSelector:
    """
    Two-click check-in/check-out picker.

    Phases: EMPTY -> START_ONLY -> COMPLETE. A click on a complete range,
    or on a day before the current start, begins a new selection. Past
    days are ignored. Nothing is committed until `confirm`.
    """

    def __init__(
        self,
        selected_range: Optional[DateInterval] = None,
        on_change: Optional[Callable[[DateInterval], None]] = None,
        on_confirm: Optional[Callable[[DateInterval], None]] = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.selected_range = selected_range or DateInterval()
        self.on_change = on_change
        self.on_confirm = on_confirm
        self._today = today

        self.is_open = False
        self.temp_range = self.selected_range
        self.view_month = self._month_of(self.selected_range.start or today())

    @staticmethod
    def _month_of(day: datetime.date) -> datetime.date:
        return day.replace(day=1)

    def open(self, selected_range: Optional[DateInterval] = None) -> None:
        if selected_range is not None:
            self.selected_range = selected_range
        self.temp_range = self.selected_range
        self.view_month = self._month_of(self.selected_range.start or self._today())
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def navigate(self, direction) -> datetime.date:
        step = {Direction.PREV: -1, Direction.NEXT: 1}[Direction(direction)]
        self.view_month = shift_month(self.view_month, step)
        return self.view_month

    @property
    def phase(self) -> SelectionPhase:
        if self.temp_range.start is None:
            return SelectionPhase.EMPTY
        if self.temp_range.end is None:
            return SelectionPhase.START_ONLY
        return SelectionPhase.COMPLETE

    @property
    def can_confirm(self) -> bool:
        return self.temp_range.is_complete

    def select_day(self, day: int) -> DateInterval:
        try:
            clicked = self.view_month.replace(day=day)
        except (TypeError, ValueError):
            return self.temp_range

        if clicked < self._today():
            return self.temp_range

        if self.phase is SelectionPhase.START_ONLY and clicked >= self.temp_range.start:
            new_range = replace(self.temp_range, end=clicked)
        else:
            new_range = DateInterval(start=clicked, end=None)

        self.temp_range = new_range
        if self.on_change is not None:
            self.on_change(new_range)
        return new_range

    def confirm(self) -> Optional[DateInterval]:
        if not self.can_confirm:
            return None

        self.selected_range = self.temp_range
        if self.on_confirm is not None:
            self.on_confirm(self.selected_range)
        self.close()
        return self.selected_range

    def day_state(self, day: datetime.date) -> DayState:
        if day < self._today():
            return DayState.PAST

        start, end = self.temp_range.start, self.temp_range.end
        if day == start or day == end:
            return DayState.ENDPOINT
        if start is not None and end is not None and start < day < end:
            return DayState.IN_RANGE
        return DayState.AVAILABLE

    def month_grid(self) -> list[list[Optional[datetime.date]]]:
        return build_month_grid(self.view_month.year, self.view_month.month)
