from setforge.parsers.card_number import (
    expand_rarity,
    parse_card_number,
    parse_standard_number,
    rarity_code_from_local_id,
)
from setforge.parsers.price_csv import (
    iter_price_rows,
    parse_price,
    parse_row,
    split_csv_line,
)

__all__ = [
    "expand_rarity",
    "iter_price_rows",
    "parse_card_number",
    "parse_price",
    "parse_row",
    "parse_standard_number",
    "rarity_code_from_local_id",
    "split_csv_line",
]
