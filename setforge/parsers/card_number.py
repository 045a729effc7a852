"""
Parser for card number fields.

Three shapes are recognized, in priority order:
    PR-001/26-045C     promo; set and number come from the part after "/"
    26-093C/15-095C    reprint; current printing / original printing
    26-045C            standard

A number that does not yield a set and card number is unparsable and the
row carrying it is dropped by the caller.
"""

import re
from dataclasses import replace

from setforge.models.card import NumberDescriptor
from setforge.models.catalog import OriginalSetData

# Pattern: "26-045C"
# Groups: (set, number, rarity_code)
STANDARD_NUMBER_PATTERN = re.compile(r"^(\d+)-(\d+)([A-Z]+)$")

# Unanchored form used to pull a rarity code out of any localID
RARITY_CODE_PATTERN = re.compile(r"\d+-\d+([A-Z]+)")

PROMO_PREFIX = "PR-"
PROMO_RARITY = "Promo"

RARITY_NAMES = {
    "C": "Common",
    "H": "Hero",
    "L": "Legend",
    "R": "Rare",
}


def expand_rarity(rarity_code: str) -> str:
    """Expand a rarity letter to its full name; unknown codes pass through."""
    return RARITY_NAMES.get(rarity_code, rarity_code)


def parse_standard_number(text: str) -> NumberDescriptor | None:
    """Parse a "<set>-<number><rarity>" string, or return None."""
    match = STANDARD_NUMBER_PATTERN.match(text)
    if not match:
        return None

    set_number, number, rarity_code = match.groups()
    return NumberDescriptor(
        set=int(set_number),
        number=int(number),
        rarity_code=rarity_code,
        local_id=text,
    )


def _parse_promo(text: str) -> NumberDescriptor | None:
    slash_index = text.find("/")
    if slash_index == -1:
        return None

    base = parse_standard_number(text[slash_index + 1 :])
    if base is None:
        return None

    return NumberDescriptor(
        set=base.set,
        number=base.number,
        rarity_code=base.rarity_code,
        local_id=text,
        is_promo=True,
    )


def _parse_reprint(text: str) -> NumberDescriptor | None:
    parts = text.split("/")
    if len(parts) != 2:
        return None

    current = parse_standard_number(parts[0])
    original = parse_standard_number(parts[1])
    if current is None or original is None:
        return None

    return NumberDescriptor(
        set=current.set,
        number=current.number,
        rarity_code=current.rarity_code,
        local_id=text,
        original_set_data=OriginalSetData(
            rarity=expand_rarity(original.rarity_code),
            set_number=original.set,
            number=original.number,
            local_id=original.local_id,
        ),
    )


def parse_card_number(number: str, rarity: str = "") -> NumberDescriptor | None:
    """
    Parse a card number field into a NumberDescriptor.

    Args:
        number: Raw number field (e.g., "26-045C", "26-093C/15-095C", "PR-001/26-045C")
        rarity: Raw rarity field; "Promo" marks the descriptor as promo

    Returns:
        NumberDescriptor, or None if no set and card number could be recovered.
    """
    if number.startswith(PROMO_PREFIX):
        descriptor = _parse_promo(number)
    elif "/" in number:
        descriptor = _parse_reprint(number)
    else:
        descriptor = parse_standard_number(number)

    if descriptor is None:
        return None

    if rarity == PROMO_RARITY:
        descriptor = replace(descriptor, is_promo=True)

    return descriptor


def rarity_code_from_local_id(local_id: str) -> str:
    """Rarity letters of the first "<set>-<number><rarity>" found, or ""."""
    match = RARITY_CODE_PATTERN.search(local_id)
    return match.group(1) if match else ""
