"""Metadata endpoints for exposing reference data."""

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coffee_tracker.core.modules.caffeine.models import CoffeeSizeInfo, CoffeeTypeInfo
from coffee_tracker.core.modules.quota.models import DailyLimits
from coffee_tracker.web.deps import AppDep

router = APIRouter(tags=["metadata"])


class CoffeeMetadata(BaseModel):
    """Reference data the frontend needs to build the logging form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    coffee_types: list[CoffeeTypeInfo] = Field(..., description="Accepted coffee types")
    sizes: list[CoffeeSizeInfo] = Field(..., description="Accepted cup sizes")
    limits: DailyLimits = Field(..., description="Daily limits enforced per session")


@router.get(
    "/metadata/coffee",
    summary="Get coffee reference data",
    description="Returns the accepted coffee types and sizes with their caffeine values, and the daily limits.",
    operation_id="getCoffeeMetadata",
    responses={200: {"description": "Coffee types, sizes and limits"}},
)
async def get_coffee_metadata(app: AppDep) -> CoffeeMetadata:
    return CoffeeMetadata(coffee_types=app.get_coffee_types(), sizes=app.get_coffee_sizes(), limits=app.get_daily_limits())
