"""Coffee entry endpoints; every call acts as the caller's anonymous session."""

from datetime import date, datetime, timedelta
from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from coffee_tracker.core.modules.caffeine.models import CoffeeSize, CoffeeType
from coffee_tracker.core.modules.caffeine.utils import parse_coffee_size, parse_coffee_type
from coffee_tracker.core.modules.entry.models import SOURCE_MAX_LENGTH, CoffeeEntryView
from coffee_tracker.core.modules.quota.models import DailySummary
from coffee_tracker.errors import ValidationError
from coffee_tracker.utils import ensure_utc, now
from coffee_tracker.web.deps import AppDep, SessionTokenDep
from coffee_tracker.web.openapi import BusinessRuleErrorResponse

router: APIRouter = APIRouter(tags=["coffee-entries"])

# Backdating further than this is treated as a malformed request
MAX_BACKDATE = timedelta(days=30)


class CreateCoffeeEntryRequest(BaseModel):
    """Request to log a coffee."""

    coffee_type: CoffeeType = Field(..., description="Coffee type (case-insensitive), e.g. Latte")
    size: CoffeeSize = Field(..., description="Cup size (case-insensitive), e.g. Medium")
    source: str | None = Field(None, max_length=SOURCE_MAX_LENGTH, description="Where the coffee came from")
    timestamp: datetime | None = Field(
        None, description="When the coffee was consumed (RFC 3339). Defaults to now; must not be in the future."
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"coffeeType": "Latte", "size": "Medium", "source": "Corner cafe"},
                {"coffeeType": "Americano", "size": "Large", "timestamp": "2025-07-10T08:30:00Z"},
            ]
        },
    )

    @field_validator("coffee_type", mode="before")
    @classmethod
    def _parse_coffee_type(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return parse_coffee_type(value)
            except ValidationError as e:
                raise ValueError(str(e)) from e
        return value

    @field_validator("size", mode="before")
    @classmethod
    def _parse_size(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return parse_coffee_size(value)
            except ValidationError as e:
                raise ValueError(str(e)) from e
        return value

    @field_validator("timestamp")
    @classmethod
    def _check_not_too_old(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        value = ensure_utc(value)
        if value < now() - MAX_BACKDATE:
            raise ValueError(f"Timestamp is too far in the past: {value.isoformat()}")
        return value


@router.post(
    "/coffee-entries",
    summary="Log a coffee",
    description=(
        "Record a coffee for the current anonymous session. Rejected with 422 when the timestamp is in the future "
        "or when the entry would exceed the daily entry or caffeine limit for the entry's UTC day."
    ),
    operation_id="createCoffeeEntry",
    status_code=201,
    responses={
        201: {"description": "Coffee logged"},
        422: {"model": BusinessRuleErrorResponse, "description": "Invalid request or daily limit exceeded"},
    },
)
async def create_coffee_entry(request: CreateCoffeeEntryRequest, app: AppDep, session_token: SessionTokenDep) -> CoffeeEntryView:
    return await app.create_entry(session_token, request.coffee_type, request.size, request.source, request.timestamp)


@router.get(
    "/coffee-entries",
    summary="List coffees for a day",
    description="Get the current session's coffees for a UTC calendar day, oldest first. Defaults to today.",
    operation_id="listCoffeeEntries",
    responses={200: {"description": "Coffees logged that day"}},
)
async def list_coffee_entries(
    app: AppDep,
    session_token: SessionTokenDep,
    day: Annotated[date | None, Query(alias="date", description="UTC calendar day (YYYY-MM-DD)")] = None,
) -> list[CoffeeEntryView]:
    return await app.get_entries(session_token, day)


@router.get(
    "/coffee-entries/summary",
    summary="Daily summary",
    description="Get totals and limit status for the current session on a UTC calendar day. Defaults to today.",
    operation_id="getDailySummary",
    responses={200: {"description": "Totals for the day"}},
)
async def get_daily_summary(
    app: AppDep,
    session_token: SessionTokenDep,
    day: Annotated[date | None, Query(alias="date", description="UTC calendar day (YYYY-MM-DD)")] = None,
) -> DailySummary:
    return await app.get_daily_summary(session_token, day)
