"""
Compiled Card Catalog Models.

The catalog is the only artifact shared between the compiler and the report
renderer. Field aliases are the JSON wire names (camelCase except
product_name, which the report pages have always read).

INVARIANTS:
- Flags are only serialized when true (dump with exclude_defaults=True)
- original_set_data is only serialized for reprint or legacy cards
- variation is always serialized, even with a single entry
"""

from pydantic import BaseModel, ConfigDict, Field


class OriginalSetData(BaseModel):
    """Identity of a card's original printing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rarity: str
    set_number: int = Field(..., alias="set")
    number: int
    local_id: str = Field(..., alias="localID")


class VariationSummary(BaseModel):
    """Price statistics for one variation of a card, rounded to cents."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    market_price_low: float = Field(..., alias="marketPriceLow")
    market_price_high: float = Field(..., alias="marketPriceHigh")
    market_price_avg: float = Field(..., alias="marketPriceAvg")


class CatalogCard(BaseModel):
    """One canonical card with its ordered pricing variations."""

    model_config = ConfigDict(populate_by_name=True)

    product_name: str
    rarity: str
    set_number: int = Field(..., alias="set")
    number: int
    local_id: str = Field(..., alias="localID")
    is_reprint: bool = Field(default=False, alias="isReprint")
    is_legacy: bool = Field(default=False, alias="isLegacy")
    is_promo: bool = Field(default=False, alias="isPromo")
    original_set_data: OriginalSetData | None = Field(default=None, alias="originalSetData")
    variation: list[VariationSummary]


class Catalog(BaseModel):
    """Compiled catalog for one set, sorted by (set, number)."""

    cards: list[CatalogCard] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Wire representation written to output.json."""
        return self.model_dump(by_alias=True, exclude_defaults=True)
