from enum import Enum


class VariationType(str, Enum):
    """Finish tiers a card can be listed in, declared in display order."""

    NORMAL = "Normal"
    FOIL = "Foil"
    FULL_ART = "Full Art"
    FULL_ART_SIGNATURE = "Full Art Signature"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def symbol(self) -> str:
        """Symbol shown next to an entry on report pages (empty for Normal)."""
        return _SYMBOLS[self]


_RANKS = {variation: index for index, variation in enumerate(VariationType)}

_SYMBOLS = {
    VariationType.NORMAL: "",
    VariationType.FOIL: "✨",
    VariationType.FULL_ART: "⭐",
    VariationType.FULL_ART_SIGNATURE: "\U0001f48e",
}

# Unrecognized variation names sort after every known type
UNKNOWN_VARIATION_RANK = len(_RANKS)

LEGACY_SYMBOL = "\U0001f451"
REPRINT_SYMBOL = "♻️"
PROMO_SYMBOL = "\U0001f381"


def variation_rank(type_name: str) -> int:
    """Sort rank for a variation type name."""
    try:
        return VariationType(type_name).rank
    except ValueError:
        return UNKNOWN_VARIATION_RANK


def variation_symbol(type_name: str) -> str:
    """Report symbol for a variation type name; unknown names have none."""
    try:
        return VariationType(type_name).symbol
    except ValueError:
        return ""
