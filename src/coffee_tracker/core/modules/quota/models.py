import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coffee_tracker.core.modules.entry.models import CoffeeEntryView

MAX_DAILY_ENTRIES = 10
MAX_DAILY_CAFFEINE_MG = 1000


class DailyLimits(BaseModel):
    """Per-session, per-day safety limits."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    max_daily_entries: int = Field(MAX_DAILY_ENTRIES, description="Maximum drinks logged per UTC day")
    max_daily_caffeine_mg: int = Field(MAX_DAILY_CAFFEINE_MG, description="Maximum caffeine per UTC day, in milligrams")


class DailySummary(BaseModel):
    """One session's consumption for a UTC calendar day."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: datetime.date = Field(..., description="UTC calendar day")
    total_entries: int = Field(..., description="Number of drinks logged", ge=0)
    total_caffeine: int = Field(..., description="Total caffeine in milligrams", ge=0)
    entries: list[CoffeeEntryView] = Field(..., description="Drinks logged that day, oldest first")
    average_caffeine_per_entry: float = Field(..., description="Mean caffeine per drink; 0 when nothing was logged")
    has_reached_daily_limit: bool = Field(..., description="Whether the entry limit is reached")
    has_reached_caffeine_limit: bool = Field(..., description="Whether the caffeine limit is reached")
