"""Application services: opening hours (admin edit + shopper status)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import structlog

from storefront.domain.exceptions import RemoteUnavailableError
from storefront.domain.model.store_hours import DayHours, NextOpening, StoreHours
from storefront.domain.repository.settings_repository import SettingsRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StoreStatusDTO:
    is_open: bool
    next_opening: NextOpening | None


def load_store_hours(settings_repo: SettingsRepository) -> StoreHours:
    """Saved hours, falling back to the defaults if missing or unreadable."""
    try:
        hours = settings_repo.get_store_hours()
    except RemoteUnavailableError as exc:
        logger.warning("store_hours_unavailable", error=str(exc))
        return StoreHours.default()
    return hours or StoreHours.default()


class StoreStatusHandler:

    def __init__(
        self,
        settings_repo: SettingsRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings_repo = settings_repo
        self._clock = clock

    def handle(self) -> StoreStatusDTO:
        hours = load_store_hours(self._settings_repo)
        now = self._clock()
        if hours.is_open_at(now):
            return StoreStatusDTO(is_open=True, next_opening=None)
        return StoreStatusDTO(is_open=False, next_opening=hours.next_opening(now))


class SetStoreHoursHandler:

    def __init__(self, settings_repo: SettingsRepository) -> None:
        self._settings_repo = settings_repo

    def handle(self, day: str, open_at: str, close_at: str, is_open: bool = True) -> StoreHours:
        hours = load_store_hours(self._settings_repo).with_day(
            day.lower(), DayHours(open=open_at, close=close_at, is_open=is_open)
        )
        self._settings_repo.save_store_hours(hours)
        return hours
