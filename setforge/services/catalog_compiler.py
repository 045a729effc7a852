"""
Catalog Compiler.

Turns one set's price-listing CSV into output.json and rewrites set.json
with its preserved metadata. Each run is a pure function of the CSV content
and the prior metadata; the same inputs always produce byte-identical files.

Set directory layout:
    <sets_dir>/<set_name>/cards.csv      price listing (required)
    <sets_dir>/<set_name>/set.json       metadata (optional, rewritten)
    <sets_dir>/<set_name>/output.json    compiled catalog (written)
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from setforge.config import (
    ASSETS_DIR_NAME,
    CARDS_CSV_NAME,
    COVER_IMAGE_NAMES,
    JSON_INDENT,
    OUTPUT_JSON_NAME,
    SET_JSON_NAME,
    WWW_DIR_NAME,
)
from setforge.models.catalog import Catalog
from setforge.parsers.price_csv import iter_price_rows
from setforge.services.card_accumulator import CardAccumulator
from setforge.services.catalog_assembler import assemble_catalog
from setforge.services.set_metadata import (
    current_set_number,
    load_set_metadata,
    write_set_metadata,
)

logger = logging.getLogger(__name__)


class CompileError(Exception):
    """Raised when a set cannot be compiled."""


class SetNotFoundError(CompileError):
    """Raised when the set directory does not exist."""


class PriceListNotFoundError(CompileError):
    """Raised when the set directory has no cards.csv."""


@dataclass(frozen=True, slots=True)
class SetPaths:
    """Filesystem locations for one set."""

    set_name: str
    set_dir: Path

    @classmethod
    def for_set(cls, sets_dir: Path, set_name: str) -> "SetPaths":
        return cls(set_name=set_name, set_dir=sets_dir / set_name)

    @property
    def cards_csv(self) -> Path:
        return self.set_dir / CARDS_CSV_NAME

    @property
    def set_json(self) -> Path:
        return self.set_dir / SET_JSON_NAME

    @property
    def output_json(self) -> Path:
        return self.set_dir / OUTPUT_JSON_NAME

    @property
    def www_dir(self) -> Path:
        return self.set_dir / WWW_DIR_NAME

    @property
    def assets_dir(self) -> Path:
        return self.set_dir / ASSETS_DIR_NAME

    def cover_image(self) -> Path | None:
        """First existing cover image, in png/jpg/webp order."""
        for name in COVER_IMAGE_NAMES:
            path = self.assets_dir / name
            if path.exists():
                return path
        return None


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Outcome of compiling one set."""

    paths: SetPaths
    catalog: Catalog
    metadata: dict[str, Any]
    skipped_rows: int = 0

    @property
    def card_count(self) -> int:
        return len(self.catalog.cards)


def accumulate_rows(csv_text: str, current_set: int | None = None) -> CardAccumulator:
    """Fold every usable CSV row into a CardAccumulator."""
    accumulator = CardAccumulator(current_set_number=current_set)
    for row in iter_price_rows(csv_text):
        accumulator.add_row(row)
    return accumulator


def compile_catalog(csv_text: str, current_set: int | None = None) -> Catalog:
    """
    Compile CSV text into a catalog.

    Args:
        csv_text: Full price-listing CSV, header line included
        current_set: Set number being compiled, for Legacy classification

    Returns:
        The catalog, sorted by (set, number).
    """
    return assemble_catalog(accumulate_rows(csv_text, current_set).cards)


def catalog_to_json(catalog: Catalog) -> str:
    """Serialize a catalog for output.json."""
    return json.dumps(catalog.to_json_dict(), indent=JSON_INDENT, ensure_ascii=False)


def compile_set(set_name: str, sets_dir: Path) -> CompileResult:
    """
    Compile one set directory.

    Args:
        set_name: Subdirectory name under sets_dir (e.g., "xxvi")
        sets_dir: Root directory holding all sets

    Returns:
        CompileResult with the written catalog and metadata.

    Raises:
        SetNotFoundError: If the set directory does not exist
        PriceListNotFoundError: If the set has no cards.csv
    """
    paths = SetPaths.for_set(sets_dir, set_name)

    if not paths.set_dir.is_dir():
        raise SetNotFoundError(f'Set directory "{paths.set_dir}" does not exist')

    if not paths.cards_csv.is_file():
        raise PriceListNotFoundError(f'Cards CSV file "{paths.cards_csv}" does not exist')

    metadata = load_set_metadata(paths.set_json)
    csv_text = paths.cards_csv.read_text(encoding="utf-8", errors="replace")

    accumulator = accumulate_rows(csv_text, current_set_number(metadata))
    catalog = assemble_catalog(accumulator.cards)
    if accumulator.skipped_rows:
        logger.debug("Skipped %d unusable rows in %s", accumulator.skipped_rows, paths.cards_csv)

    paths.output_json.write_text(catalog_to_json(catalog), encoding="utf-8")
    write_set_metadata(paths.set_json, metadata)

    logger.info("Successfully compiled %d cards to %s", len(catalog.cards), paths.output_json)
    return CompileResult(
        paths=paths,
        catalog=catalog,
        metadata=metadata,
        skipped_rows=accumulator.skipped_rows,
    )
