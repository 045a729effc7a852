"""
setforge services.

Catalog compilation (CSV → output.json) and report rendering (output.json → HTML).
"""

from setforge.services.card_accumulator import (
    AccumulatedCard,
    CardAccumulator,
    base_product_name,
    is_legacy_card,
    variation_type,
)
from setforge.services.catalog_assembler import (
    assemble_card,
    assemble_catalog,
    round_price,
    summarize_variation,
)
from setforge.services.catalog_compiler import (
    CompileError,
    CompileResult,
    PriceListNotFoundError,
    SetNotFoundError,
    SetPaths,
    accumulate_rows,
    catalog_to_json,
    compile_catalog,
    compile_set,
)
from setforge.services.report_renderer import (
    CatalogNotFoundError,
    RenderError,
    RenderResult,
    ReportRenderer,
    flatten_entries,
    load_catalog,
    render_set,
)
from setforge.services.set_metadata import (
    current_set_number,
    dump_set_metadata,
    load_set_metadata,
    set_title,
    write_set_metadata,
)

__all__ = [
    "AccumulatedCard",
    "CardAccumulator",
    "CatalogNotFoundError",
    "CompileError",
    "CompileResult",
    "PriceListNotFoundError",
    "RenderError",
    "RenderResult",
    "ReportRenderer",
    "SetNotFoundError",
    "SetPaths",
    "accumulate_rows",
    "assemble_card",
    "assemble_catalog",
    "base_product_name",
    "catalog_to_json",
    "compile_catalog",
    "compile_set",
    "current_set_number",
    "dump_set_metadata",
    "flatten_entries",
    "is_legacy_card",
    "load_catalog",
    "load_set_metadata",
    "render_set",
    "round_price",
    "set_title",
    "summarize_variation",
    "variation_type",
    "write_set_metadata",
]
