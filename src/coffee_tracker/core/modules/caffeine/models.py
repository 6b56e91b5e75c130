"""Coffee types, cup sizes and their caffeine reference values."""

from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CoffeeType(StrEnum):
    """Drinks that can be logged."""

    ESPRESSO = "Espresso"
    AMERICANO = "Americano"
    LATTE = "Latte"
    CAPPUCCINO = "Cappuccino"
    MOCHA = "Mocha"
    MACCHIATO = "Macchiato"
    FLAT_WHITE = "FlatWhite"
    BLACK_COFFEE = "BlackCoffee"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self.value, self.value)


class CoffeeSize(StrEnum):
    """Cup sizes; each scales the base caffeine content."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    EXTRA_LARGE = "ExtraLarge"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self.value, self.value)


_DISPLAY_NAMES = {
    "FlatWhite": "Flat White",
    "BlackCoffee": "Black Coffee",
    "ExtraLarge": "Extra Large",
}

# Milligrams of caffeine in a medium cup
BASE_CAFFEINE_MG: MappingProxyType[str, int] = MappingProxyType(
    {
        CoffeeType.ESPRESSO: 90,
        CoffeeType.AMERICANO: 120,
        CoffeeType.LATTE: 80,
        CoffeeType.CAPPUCCINO: 80,
        CoffeeType.MOCHA: 90,
        CoffeeType.MACCHIATO: 120,
        CoffeeType.FLAT_WHITE: 130,
        CoffeeType.BLACK_COFFEE: 95,
    }
)

# Kept as strings so the arithmetic stays exact in Decimal
SIZE_MULTIPLIERS: MappingProxyType[str, str] = MappingProxyType(
    {
        CoffeeSize.SMALL: "0.8",
        CoffeeSize.MEDIUM: "1.0",
        CoffeeSize.LARGE: "1.3",
        CoffeeSize.EXTRA_LARGE: "1.6",
    }
)

DEFAULT_BASE_CAFFEINE_MG = 80
DEFAULT_SIZE_MULTIPLIER = "1.0"


class CoffeeTypeInfo(BaseModel):
    """Reference data for a coffee type (API representation)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: CoffeeType = Field(..., description="Value accepted by the API")
    display_name: str = Field(..., description="Human-readable name")
    base_caffeine_mg: int = Field(..., description="Caffeine in a medium cup, in milligrams")


class CoffeeSizeInfo(BaseModel):
    """Reference data for a cup size (API representation)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: CoffeeSize = Field(..., description="Value accepted by the API")
    display_name: str = Field(..., description="Human-readable name")
    multiplier: float = Field(..., description="Factor applied to the base caffeine content")
