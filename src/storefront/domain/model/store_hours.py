"""Weekly opening hours and the open/closed check derived from them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta

from storefront.domain.exceptions import ValidationError

# datetime.weekday() order
DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _normalize_hhmm(value: str) -> str:
    try:
        return datetime.strptime(value, "%H:%M").strftime("%H:%M")
    except ValueError as exc:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM") from exc


@dataclass(frozen=True)
class DayHours:
    open: str = "09:00"
    close: str = "17:00"
    is_open: bool = True

    def __post_init__(self) -> None:
        # "9:00" becomes "09:00" so times compare correctly as text
        object.__setattr__(self, "open", _normalize_hhmm(self.open))
        object.__setattr__(self, "close", _normalize_hhmm(self.close))


@dataclass(frozen=True)
class NextOpening:
    day: str
    time: str
    date: date


@dataclass(frozen=True)
class StoreHours:
    """Opening hours per weekday, keyed by lowercase English day name."""

    days: dict[str, DayHours]

    @staticmethod
    def default() -> StoreHours:
        return StoreHours({day: DayHours() for day in DAYS})

    def for_day(self, day: str) -> DayHours:
        if day not in DAYS:
            raise ValidationError(f"Unknown day {day!r}")
        return self.days.get(day, DayHours())

    def with_day(self, day: str, hours: DayHours) -> StoreHours:
        self.for_day(day)
        return replace(self, days={**self.days, day: hours})

    def is_open_at(self, moment: datetime) -> bool:
        hours = self.for_day(DAYS[moment.weekday()])
        if not hours.is_open:
            return False
        # "HH:MM" strings compare correctly as text; both ends inclusive.
        now = moment.strftime("%H:%M")
        return hours.open <= now <= hours.close

    def next_opening(self, moment: datetime) -> NextOpening | None:
        """When the store opens next after *moment*, or None if never."""
        now = moment.strftime("%H:%M")
        for offset in range(7):
            day = DAYS[(moment.weekday() + offset) % 7]
            hours = self.for_day(day)
            if not hours.is_open:
                continue
            if offset == 0:
                if now < hours.open:
                    return NextOpening(day=day, time=hours.open, date=moment.date())
                continue
            return NextOpening(
                day=day,
                time=hours.open,
                date=moment.date() + timedelta(days=offset),
            )
        return None
