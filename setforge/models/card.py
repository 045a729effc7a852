"""
Raw price-listing rows and parsed card-number descriptors.

INVARIANTS:
- RawRow is UNTRUSTED text straight from the CSV export
- NumberDescriptor only exists for a number that yielded a set and card number
- local_id is always the number string exactly as it appeared in the row
"""

from dataclasses import dataclass

from setforge.models.catalog import OriginalSetData


@dataclass(frozen=True, slots=True)
class RawRow:
    """
    One line of the price-listing CSV, split into its six leading fields.

    Attributes:
        product_name: Listing name, possibly with a Full Art suffix
        printing: "Normal" or "Foil"
        condition: Card condition (carried, not used by the compiler)
        rarity: Rarity name (e.g., "Common", "Legend", "Promo")
        number: Card number field (e.g., "26-045C", "26-093C/15-095C")
        market_price: Price text (e.g., "$1.99")
    """

    product_name: str
    printing: str
    condition: str
    rarity: str
    number: str
    market_price: str


@dataclass(frozen=True, slots=True)
class NumberDescriptor:
    """
    A card number parsed into set and collector position.

    Attributes:
        set: Set number the card is printed in
        number: Position within that set
        rarity_code: Letters trailing the number (e.g., "C", "L")
        local_id: Original number string, used for display and grouping
        is_promo: True for a PR- prefix or a "Promo" rarity
        original_set_data: Original printing for reprint-shaped numbers
    """

    set: int
    number: int
    rarity_code: str
    local_id: str
    is_promo: bool = False
    original_set_data: OriginalSetData | None = None

    @property
    def is_reprint(self) -> bool:
        return self.original_set_data is not None
