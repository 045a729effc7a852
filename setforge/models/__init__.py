from setforge.models.card import NumberDescriptor, RawRow
from setforge.models.catalog import Catalog, CatalogCard, OriginalSetData, VariationSummary
from setforge.models.report import ReportEntry
from setforge.models.variation import (
    UNKNOWN_VARIATION_RANK,
    VariationType,
    variation_rank,
    variation_symbol,
)

__all__ = [
    "Catalog",
    "CatalogCard",
    "NumberDescriptor",
    "OriginalSetData",
    "RawRow",
    "ReportEntry",
    "UNKNOWN_VARIATION_RANK",
    "VariationSummary",
    "VariationType",
    "variation_rank",
    "variation_symbol",
]
