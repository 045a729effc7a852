"""
Card Accumulator: folds price rows into canonical cards.

Rows are grouped by (base product name, localID). The first row seen for a
key creates the card and fixes its classification; every later row with the
same key only adds a price sample to its variation.

INVARIANTS:
- Classification (rarity, reprint, legacy, promo, original set data) is
  computed once, at first insertion, and never re-evaluated
- Differently spelled base names never merge, even with the same localID
- Unusable rows (unparsable number or price) contribute nothing
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal

from setforge.models.card import NumberDescriptor, RawRow
from setforge.models.catalog import OriginalSetData
from setforge.models.variation import VariationType
from setforge.parsers.card_number import parse_card_number
from setforge.parsers.price_csv import parse_price

logger = logging.getLogger(__name__)

# Stripped from the end of product names, in this order
FULL_ART_SUFFIX_PATTERNS = (
    re.compile(r"\s*\(Full Art Signature\)\s*$"),
    re.compile(r"\s*\(Full Art Reprint\)\s*$"),
    re.compile(r"\s*\(Full Art\)\s*$"),
)

FULL_ART_REPRINT_MARKER = "(Full Art Reprint)"
FULL_ART_MARKER = "(Full Art)"


@dataclass
class AccumulatedCard:
    """A canonical card under construction, with raw price samples."""

    product_name: str
    rarity: str
    set_number: int
    number: int
    local_id: str
    is_reprint: bool = False
    is_legacy: bool = False
    is_promo: bool = False
    original_set_data: OriginalSetData | None = None
    # variation type name -> price samples, in first-seen order
    variations: dict[str, list[Decimal]] = field(default_factory=dict)

    def add_price(self, variation_type: str, price: Decimal) -> None:
        self.variations.setdefault(variation_type, []).append(price)


def base_product_name(product_name: str) -> str:
    """Product name with any trailing Full Art suffix removed."""
    name = product_name
    for pattern in FULL_ART_SUFFIX_PATTERNS:
        name = pattern.sub("", name)
    return name.strip()


def variation_type(product_name: str, printing: str) -> str:
    """
    Variation type of a row.

    Full Art markers in the product name take precedence over the printing
    column, which otherwise supplies "Normal" or "Foil".
    """
    if VariationType.FULL_ART_SIGNATURE.value in product_name:
        return VariationType.FULL_ART_SIGNATURE.value
    if VariationType.FULL_ART.value in product_name:
        return VariationType.FULL_ART.value
    return printing


def is_legacy_card(
    descriptor: NumberDescriptor, product_name: str, current_set_number: int | None
) -> bool:
    """
    Check whether a row describes a Legacy card.

    A "(Full Art Reprint)" name is always Legacy. Otherwise the card must be
    a "(Full Art)" listing numbered in a set other than the one being
    compiled; without a current set number that comparison never holds.
    """
    if FULL_ART_REPRINT_MARKER in product_name:
        return True

    if current_set_number is None:
        return False

    return descriptor.set != current_set_number and FULL_ART_MARKER in product_name


class CardAccumulator:
    """
    Groups price rows into canonical cards.

    Usage:
        accumulator = CardAccumulator(current_set_number=26)
        for row in iter_price_rows(text):
            accumulator.add_row(row)
        cards = accumulator.cards
    """

    def __init__(self, current_set_number: int | None = None) -> None:
        self.current_set_number = current_set_number
        self._cards: dict[tuple[str, str], AccumulatedCard] = {}
        self.skipped_rows = 0

    @property
    def cards(self) -> list[AccumulatedCard]:
        """Accumulated cards in first-seen order."""
        return list(self._cards.values())

    def add_row(self, row: RawRow) -> bool:
        """
        Parse and accumulate one row.

        Returns:
            True if the row contributed a price sample, False if it was skipped.
        """
        descriptor = parse_card_number(row.number, row.rarity)
        if descriptor is None:
            logger.debug("Skipping row with unparsable number: %r", row.number)
            self.skipped_rows += 1
            return False

        price = parse_price(row.market_price)
        if price is None:
            logger.debug("Skipping row with unparsable price: %r", row.market_price)
            self.skipped_rows += 1
            return False

        self.add(row, descriptor, price)
        return True

    def add(self, row: RawRow, descriptor: NumberDescriptor, price: Decimal) -> AccumulatedCard:
        """Insert the card for this row if absent, then append its price sample."""
        base_name = base_product_name(row.product_name)
        key = (base_name, descriptor.local_id)

        card = self._cards.get(key)
        if card is None:
            card = AccumulatedCard(
                product_name=base_name,
                rarity=row.rarity,
                set_number=descriptor.set,
                number=descriptor.number,
                local_id=descriptor.local_id,
                is_reprint=descriptor.is_reprint,
                is_legacy=is_legacy_card(descriptor, row.product_name, self.current_set_number),
                is_promo=descriptor.is_promo,
                original_set_data=descriptor.original_set_data,
            )
            self._cards[key] = card

        card.add_price(variation_type(row.product_name, row.printing), price)
        return card
