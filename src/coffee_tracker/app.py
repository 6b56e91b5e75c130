from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, datetime

from coffee_tracker.config import Config
from coffee_tracker.core.core import Core
from coffee_tracker.core.modules.caffeine.models import (
    BASE_CAFFEINE_MG,
    SIZE_MULTIPLIERS,
    CoffeeSize,
    CoffeeSizeInfo,
    CoffeeType,
    CoffeeTypeInfo,
)
from coffee_tracker.core.modules.entry.models import CoffeeEntryView
from coffee_tracker.core.modules.quota.models import DailyLimits, DailySummary
from coffee_tracker.core.modules.session.models import SessionResolution, SessionToken


class App:
    """Facade for all application operations; every call acts as one anonymous session."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def resolve_session(self, cookie_value: str | None, is_https: bool) -> SessionResolution:
        """Resolve the session cookie, minting a new token when it is missing or malformed."""
        return self._core.services.session.resolve(cookie_value, is_https)

    async def create_entry(
        self,
        session_token: SessionToken,
        coffee_type: CoffeeType,
        size: CoffeeSize,
        source: str | None = None,
        timestamp: datetime | None = None,
    ) -> CoffeeEntryView:
        """Log a drink, enforcing the daily limits."""
        entry = await self._core.services.quota.create_entry(session_token, coffee_type, size, source, timestamp)
        return CoffeeEntryView.from_domain(entry)

    async def get_entries(self, session_token: SessionToken, day: date | None = None) -> list[CoffeeEntryView]:
        """Get the session's drinks for a UTC day (today by default)."""
        entries = await self._core.services.quota.list_entries(session_token, day)
        return [CoffeeEntryView.from_domain(entry) for entry in entries]

    async def get_daily_summary(self, session_token: SessionToken, day: date | None = None) -> DailySummary:
        """Get the session's totals for a UTC day (today by default)."""
        return await self._core.services.quota.get_daily_summary(session_token, day)

    def get_coffee_types(self) -> list[CoffeeTypeInfo]:
        return [
            CoffeeTypeInfo(name=coffee_type, display_name=coffee_type.display_name, base_caffeine_mg=BASE_CAFFEINE_MG[coffee_type])
            for coffee_type in CoffeeType
        ]

    def get_coffee_sizes(self) -> list[CoffeeSizeInfo]:
        return [
            CoffeeSizeInfo(name=size, display_name=size.display_name, multiplier=float(SIZE_MULTIPLIERS[size]))
            for size in CoffeeSize
        ]

    def get_daily_limits(self) -> DailyLimits:
        return DailyLimits()
