import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from coffee_tracker.core.core import Service
from coffee_tracker.core.modules.caffeine.models import CoffeeSize, CoffeeType
from coffee_tracker.core.modules.caffeine.utils import calculate_caffeine
from coffee_tracker.core.modules.entry.models import CoffeeEntry, CoffeeEntryView
from coffee_tracker.core.modules.quota.models import MAX_DAILY_CAFFEINE_MG, MAX_DAILY_ENTRIES, DailySummary
from coffee_tracker.core.modules.retention.models import DATA_RETENTION
from coffee_tracker.errors import DailyCaffeineLimitExceededError, DailyEntryLimitExceededError, InvalidTimestampError
from coffee_tracker.utils import ensure_utc, now

logger = structlog.get_logger(__name__)


class QuotaService(Service):
    """Creates and reads coffee entries while enforcing daily limits.

    Limits apply to the UTC calendar day of the entry's own timestamp. Each operation
    first sweeps the session's expired entries so they never count toward a quota.
    Creation is serialized per session so concurrent requests cannot both pass the checks.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._session_locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _session_lock(self, session_token: str) -> AsyncGenerator[None]:
        """Hold the lock for one session; the lock is dropped once nobody holds or awaits it."""
        lock = self._session_locks.setdefault(session_token, asyncio.Lock())
        self._lock_users[session_token] = self._lock_users.get(session_token, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[session_token] -= 1
            if self._lock_users[session_token] == 0:
                del self._lock_users[session_token]
                del self._session_locks[session_token]

    async def create_entry(
        self,
        session_token: str,
        coffee_type: CoffeeType | str,
        size: CoffeeSize | str,
        source: str | None = None,
        timestamp: datetime | None = None,
    ) -> CoffeeEntry:
        """Log a drink for the session, rejecting future timestamps and over-limit days."""
        await self.core.services.retention.sweep_session(session_token)

        current_time = now()
        effective_timestamp = ensure_utc(timestamp) if timestamp is not None else current_time
        if effective_timestamp > current_time:
            raise InvalidTimestampError(effective_timestamp)

        day = effective_timestamp.date()
        new_caffeine = calculate_caffeine(coffee_type, size)
        entries = self.core.services.entry

        async with self._session_lock(session_token):
            cutoff = now() - DATA_RETENTION
            current_count = await entries.count_by_day(session_token, day, not_before=cutoff)
            if current_count >= MAX_DAILY_ENTRIES:
                logger.info("daily_entry_limit_reached", session_token=session_token, day=day.isoformat())
                raise DailyEntryLimitExceededError(current_count, MAX_DAILY_ENTRIES)

            current_caffeine = await entries.sum_caffeine_by_day(session_token, day, not_before=cutoff)
            if current_caffeine + new_caffeine > MAX_DAILY_CAFFEINE_MG:
                logger.info(
                    "daily_caffeine_limit_reached",
                    session_token=session_token,
                    day=day.isoformat(),
                    current=current_caffeine,
                    adding=new_caffeine,
                )
                raise DailyCaffeineLimitExceededError(current_caffeine, new_caffeine, MAX_DAILY_CAFFEINE_MG)

            entry = CoffeeEntry(
                session_token=session_token,
                coffee_type=str(coffee_type),
                size=str(size),
                source=source,
                timestamp=effective_timestamp,
            )
            await entries.insert_entry(entry)

        logger.info(
            "coffee_entry_created",
            entry_id=entry.id,
            session_token=session_token,
            coffee_type=entry.coffee_type,
            size=entry.size,
            caffeine_mg=entry.caffeine_milligrams,
        )
        return entry

    async def list_entries(self, session_token: str, day: date | None = None) -> list[CoffeeEntry]:
        """Get the session's entries for a UTC day (today by default), oldest first."""
        await self.core.services.retention.sweep_session(session_token)
        day = day or now().date()
        return await self.core.services.entry.list_by_day(session_token, day, not_before=now() - DATA_RETENTION)

    async def get_daily_summary(self, session_token: str, day: date | None = None) -> DailySummary:
        """Summarize the session's consumption for a UTC day (today by default)."""
        day = day or now().date()
        entries = await self.list_entries(session_token, day)

        total_entries = len(entries)
        total_caffeine = sum(entry.caffeine_milligrams for entry in entries)
        average = total_caffeine / total_entries if total_entries else 0.0

        return DailySummary(
            date=day,
            total_entries=total_entries,
            total_caffeine=total_caffeine,
            entries=[CoffeeEntryView.from_domain(entry) for entry in entries],
            average_caffeine_per_entry=average,
            has_reached_daily_limit=total_entries >= MAX_DAILY_ENTRIES,
            has_reached_caffeine_limit=total_caffeine >= MAX_DAILY_CAFFEINE_MG,
        )
