"""
Pydantic models for the matching engine and the menu catalog.

Engine models:
- CatalogEntry: a known restaurant, category or menu item name
- MatchResult: a scored candidate from the candidate matcher
- RequestedLine: one spoken order line from the dialogue layer
- VerifiedLine: the verified / classified result for a requested line

Catalog file models describe the per-restaurant menu JSON files read by
menu_matcher.catalog.
"""

from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


def _to_decimal(value: Any) -> Any:
    """Convert floats through their repr so 5.99 stays Decimal('5.99')."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _clamp_score(value: float) -> float:
    return max(0.0, min(1.0, value))


# =============================================================================
# Engine models
# =============================================================================

class CatalogEntry(BaseModel):
    """An immutable reference item the engine matches against."""
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    price: Decimal | None = None
    category: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_to_decimal(cls, value: Any) -> Any:
        return _to_decimal(value)


class MatchResult(BaseModel):
    """A candidate string with its similarity to the query."""
    matched_text: str
    similarity: float
    index: int | None = None  # Position in the candidate list

    @field_validator("similarity")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_score(value)


class MenuItemMatch(BaseModel):
    """A catalog entry resolved from spoken text."""
    entry: CatalogEntry
    similarity: float
    exact: bool = False  # Found by the exact pass rather than fuzzy scoring

    @field_validator("similarity")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_score(value)


class RequestedLine(BaseModel):
    """A single line from a spoken order, as captured by the dialogue layer."""
    name: str
    quantity: int = 1
    price_hint: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("price_hint", "priceHint", "price"),
    )
    id: str | None = None

    @field_validator("price_hint", mode="before")
    @classmethod
    def price_to_decimal(cls, value: Any) -> Any:
        return _to_decimal(value)


class VerifiedLine(BaseModel):
    """Result of verifying one requested line against the catalog."""
    name: str
    quantity: int = 1
    price: Decimal = Decimal("0")
    id: str | None = None
    verified: bool = False
    is_special_instruction: bool = False
    confidence: float = 0.0
    suggestion: str | None = None
    modifiers: list[str] = Field(default_factory=list)
    special_instructions: str | None = None

    @field_validator("confidence")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_score(value)

    @model_validator(mode="after")
    def check_special_instruction(self) -> "VerifiedLine":
        if self.is_special_instruction and (self.verified or self.price != 0):
            raise ValueError("special instructions must be unverified and free")
        return self


# =============================================================================
# Catalog file models
# =============================================================================

class MenuItem(BaseModel):
    """A priced item in a restaurant menu file."""
    id: str | None = None
    name: str
    description: str = ""
    price: Decimal
    calories: int | None = None

    @field_validator("price", mode="before")
    @classmethod
    def price_to_decimal(cls, value: Any) -> Any:
        return _to_decimal(value)


class MenuCategory(BaseModel):
    category: str
    items: list[MenuItem] = Field(default_factory=list)


class RestaurantLocation(BaseModel):
    address: str = ""
    phone: str = ""
    hours: str = ""


class Restaurant(BaseModel):
    """
    A restaurant menu file.

    Accepts both the current field names and the older ``coffee_shop_*``
    names used by existing menu files.
    """
    restaurant_id: str = Field(
        validation_alias=AliasChoices("restaurant_id", "coffee_shop_id", "id"),
    )
    restaurant_name: str = Field(
        validation_alias=AliasChoices("restaurant_name", "coffee_shop_name", "name"),
    )
    description: str = ""
    location: RestaurantLocation | None = None
    menu_categories: list[MenuCategory] = Field(default_factory=list)
    notes: str | None = None
    email: str | None = None
    # Extra spoken names that resolve to this restaurant
    aliases: list[str] = Field(default_factory=list)
    # Generic category names ("drinks") mapped to concrete menu categories
    category_groups: dict[str, list[str]] = Field(default_factory=dict)

    def summary(self) -> "RestaurantSummary":
        return RestaurantSummary(
            id=self.restaurant_id,
            name=self.restaurant_name,
            description=self.description,
        )


class RestaurantSummary(BaseModel):
    id: str
    name: str
    description: str = ""
