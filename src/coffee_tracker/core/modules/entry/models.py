from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coffee_tracker.core.db import MongoModel
from coffee_tracker.core.modules.caffeine.utils import calculate_caffeine
from coffee_tracker.utils import format_clock_time, now

SOURCE_MAX_LENGTH = 100


class CoffeeEntry(MongoModel):
    """One logged drink, owned by a single anonymous session.

    Caffeine content is derived from type and size and never stored.
    Indexed on (session_token, timestamp) and timestamp.
    """

    session_token: str
    coffee_type: str
    size: str
    source: str | None = None
    timestamp: datetime = Field(default_factory=now)

    @property
    def caffeine_milligrams(self) -> int:
        return calculate_caffeine(self.coffee_type, self.size)


class CoffeeEntryView(BaseModel):
    """Logged drink (API representation)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Entry ID")
    coffee_type: str = Field(..., description="Coffee type, e.g. Latte")
    size: str = Field(..., description="Cup size, e.g. Medium")
    source: str | None = Field(None, description="Where the coffee came from")
    timestamp: datetime = Field(..., description="When the coffee was consumed (UTC)")
    caffeine_milligrams: int = Field(..., description="Caffeine content in milligrams")
    formatted_timestamp: str = Field(..., description="Time of day on a 12-hour clock, e.g. 2:05 PM")

    @classmethod
    def from_domain(cls, entry: CoffeeEntry) -> "CoffeeEntryView":
        """Create view model from domain model."""
        return cls(
            id=entry.id,
            coffee_type=entry.coffee_type,
            size=entry.size,
            source=entry.source,
            timestamp=entry.timestamp,
            caffeine_milligrams=entry.caffeine_milligrams,
            formatted_timestamp=format_clock_time(entry.timestamp),
        )
