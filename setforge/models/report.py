from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReportEntry:
    """
    One (card, variation) line on a report page.

    Attributes:
        id: Sequential position in catalog order, shown as "#id"
        card_number: Normalized number (e.g., "26-045C")
        card_name: Base product name
        variant_type: Variation type name
        average_price: Variation average market price
        full_card_number: Catalog localID, unmodified
        rarity: Rarity name
        set_number: Set the card is numbered in
        number: Position within the set
    """

    id: int
    card_number: str
    card_name: str
    variant_type: str
    average_price: float
    full_card_number: str
    rarity: str
    set_number: int
    number: int
    is_legacy: bool = False
    is_promo: bool = False
    is_reprint: bool = False
