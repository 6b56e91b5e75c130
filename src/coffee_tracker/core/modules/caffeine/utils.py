from decimal import ROUND_HALF_UP, Decimal

from coffee_tracker.core.modules.caffeine.models import (
    BASE_CAFFEINE_MG,
    DEFAULT_BASE_CAFFEINE_MG,
    DEFAULT_SIZE_MULTIPLIER,
    SIZE_MULTIPLIERS,
    CoffeeSize,
    CoffeeType,
)
from coffee_tracker.errors import ValidationError


def get_base_caffeine(coffee_type: CoffeeType | str) -> int:
    """Caffeine in a medium cup; unknown types fall back to the default."""
    return BASE_CAFFEINE_MG.get(str(coffee_type), DEFAULT_BASE_CAFFEINE_MG)


def get_size_multiplier(size: CoffeeSize | str) -> Decimal:
    """Size factor; unknown sizes fall back to 1.0."""
    return Decimal(SIZE_MULTIPLIERS.get(str(size), DEFAULT_SIZE_MULTIPLIER))


def calculate_caffeine(coffee_type: CoffeeType | str, size: CoffeeSize | str) -> int:
    """Milligrams of caffeine in one drink, rounded half away from zero."""
    amount = get_base_caffeine(coffee_type) * get_size_multiplier(size)
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_coffee_type(value: str) -> CoffeeType:
    """Resolve a coffee type name case-insensitively."""
    for coffee_type in CoffeeType:
        if coffee_type.value.lower() == value.strip().lower():
            return coffee_type
    raise ValidationError(f"Invalid coffee type: {value}")


def parse_coffee_size(value: str) -> CoffeeSize:
    """Resolve a cup size name case-insensitively."""
    for size in CoffeeSize:
        if size.value.lower() == value.strip().lower():
            return size
    raise ValidationError(f"Invalid coffee size: {value}")
