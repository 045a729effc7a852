"""
Catalog Assembler: shapes accumulated cards into the compiled catalog.

Each variation's price samples are reduced to low/high/average, rounded to
cents half away from zero. Variations are ordered Normal, Foil, Full Art,
Full Art Signature (unknown types last, first-seen order kept). Cards are
ordered by (set, number), ties kept in first-seen order.
"""

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext

from setforge.models.catalog import Catalog, CatalogCard, OriginalSetData, VariationSummary
from setforge.models.variation import variation_rank
from setforge.services.card_accumulator import AccumulatedCard

CENT = Decimal("0.01")


def round_price(value: Decimal | float) -> float:
    """Round a price to cents, halves away from zero."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))

    with localcontext() as ctx:
        # Room for every integer digit plus the two cent digits
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def summarize_variation(type_name: str, prices: Sequence[Decimal]) -> VariationSummary:
    """
    Reduce price samples to rounded low, high and average.

    Raises:
        ValueError: If prices is empty
    """
    if not prices:
        raise ValueError(f"Variation {type_name!r} has no price samples")

    average = sum(prices, Decimal(0)) / len(prices)
    return VariationSummary(
        type=type_name,
        market_price_low=round_price(min(prices)),
        market_price_high=round_price(max(prices)),
        market_price_avg=round_price(average),
    )


def assemble_card(card: AccumulatedCard) -> CatalogCard:
    """Build the catalog entry for one accumulated card."""
    variations = [
        summarize_variation(type_name, prices) for type_name, prices in card.variations.items()
    ]
    variations.sort(key=lambda variation: variation_rank(variation.type))

    original_set_data = card.original_set_data if card.is_reprint else None

    # Legacy cards point at their own printing unless a reprint already set one
    if card.is_legacy and original_set_data is None:
        original_set_data = OriginalSetData(
            rarity=card.rarity,
            set_number=card.set_number,
            number=card.number,
            local_id=card.local_id,
        )

    return CatalogCard(
        product_name=card.product_name,
        rarity=card.rarity,
        set_number=card.set_number,
        number=card.number,
        local_id=card.local_id,
        is_reprint=card.is_reprint,
        is_legacy=card.is_legacy,
        is_promo=card.is_promo,
        original_set_data=original_set_data,
        variation=variations,
    )


def assemble_catalog(cards: Iterable[AccumulatedCard]) -> Catalog:
    """Assemble the sorted catalog from accumulated cards."""
    catalog_cards = [assemble_card(card) for card in cards]
    catalog_cards.sort(key=lambda card: (card.set_number, card.number))
    return Catalog(cards=catalog_cards)
