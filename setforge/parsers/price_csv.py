"""
Parser for price-listing CSV exports.

Expected columns (positional, header row ignored):
    Product Name, Printing, Condition, Rarity, Number, Market Price

Example:
    "Aria, Warden of the Vale (Full Art)",Foil,Near Mint,Legend,26-001L,$12.50

Fields are split by a two-state scanner: a double quote toggles the quoted
state and is dropped, a comma only splits outside quotes. A doubled quote
("") is NOT an escaped quote; it simply toggles twice.
"""

from collections.abc import Iterator
from decimal import Decimal, InvalidOperation

from setforge.models.card import RawRow

REQUIRED_FIELD_COUNT = 6
MAX_PRICE_EXPONENT = 300


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line into trimmed fields, protecting quoted commas."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_row(line: str) -> RawRow | None:
    """
    Parse one data line into a RawRow.

    Returns:
        RawRow built from the first six fields, or None if the line has
        fewer than six. Extra fields are ignored.
    """
    fields = split_csv_line(line)
    if len(fields) < REQUIRED_FIELD_COUNT:
        return None

    product_name, printing, condition, rarity, number, market_price = fields[
        :REQUIRED_FIELD_COUNT
    ]
    return RawRow(
        product_name=product_name,
        printing=printing,
        condition=condition,
        rarity=rarity,
        number=number,
        market_price=market_price,
    )


def parse_price(text: str) -> Decimal | None:
    """
    Parse a market price such as "$1.99".

    Returns:
        The price as a Decimal, or None if the text is not a finite number
        or is too large to represent as a float.
    """
    cleaned = text.replace("$", "").strip()
    if not cleaned:
        return None

    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not price.is_finite():
        return None

    # Beyond this a price no longer fits a float
    if price and price.adjusted() > MAX_PRICE_EXPONENT:
        return None
    return price


def iter_price_rows(text: str) -> Iterator[RawRow]:
    """
    Yield a RawRow for every well-formed data line of a CSV export.

    The first line is treated as the header and skipped. Blank lines and
    lines with fewer than six fields are skipped silently.
    """
    lines = text.strip().split("\n")

    for line in lines[1:]:
        if not line.strip():
            continue

        row = parse_row(line)
        if row is not None:
            yield row
