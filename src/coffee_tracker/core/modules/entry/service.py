from datetime import date, datetime
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from coffee_tracker.core.core import Service
from coffee_tracker.core.modules.entry.models import CoffeeEntry
from coffee_tracker.utils import day_bounds

logger = structlog.get_logger(__name__)


class EntryService(Service):
    """Persistence for coffee entries.

    Every read is scoped to one session and one UTC calendar day. Reads take a
    `not_before` cutoff so rows past retention stay invisible even before they are deleted.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("coffee_entries")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # Compound index for per-session daily windows
        await self._collection.create_index([("session_token", 1), ("timestamp", 1)])
        # Single index for global retention sweeps
        await self._collection.create_index([("timestamp", 1)])

    def _day_query(self, session_token: str, day: date, not_before: datetime | None) -> dict[str, Any]:
        start, end = day_bounds(day)
        if not_before is not None and not_before > start:
            start = not_before
        return {"session_token": session_token, "timestamp": {"$gte": start, "$lt": end}}

    async def insert_entry(self, entry: CoffeeEntry) -> CoffeeEntry:
        await self._collection.insert_one(entry.to_mongo())
        return entry

    async def count_by_day(self, session_token: str, day: date, not_before: datetime | None = None) -> int:
        """Count a session's entries on a UTC calendar day."""
        return await self._collection.count_documents(self._day_query(session_token, day, not_before))

    async def list_by_day(self, session_token: str, day: date, not_before: datetime | None = None) -> list[CoffeeEntry]:
        """Get a session's entries on a UTC calendar day, oldest first."""
        cursor = self._collection.find(self._day_query(session_token, day, not_before)).sort("timestamp", 1)
        return await CoffeeEntry.list_cursor(cursor)

    async def sum_caffeine_by_day(self, session_token: str, day: date, not_before: datetime | None = None) -> int:
        """Total caffeine for a session's day; computed from rows since caffeine is not stored."""
        entries = await self.list_by_day(session_token, day, not_before)
        return sum(entry.caffeine_milligrams for entry in entries)

    async def delete_older_than(self, session_token: str, cutoff: datetime) -> int:
        """Delete a session's entries dated before cutoff and return the deleted count."""
        result = await self._collection.delete_many({"session_token": session_token, "timestamp": {"$lt": cutoff}})
        return result.deleted_count

    async def delete_all_older_than(self, cutoff: datetime) -> int:
        """Delete every entry dated before cutoff, across all sessions."""
        result = await self._collection.delete_many({"timestamp": {"$lt": cutoff}})
        return result.deleted_count
