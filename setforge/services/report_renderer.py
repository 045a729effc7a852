"""
Report Renderer.

THIS MODULE HANDLES OUTPUT RENDERING ONLY.

It reads a compiled output.json (and set.json for titles) and writes the
static HTML report pages into the set's www/ directory. It depends on the
catalog schema only and never re-parses the CSV.

Pages:
    cards.html              full listing in binder pages
    cover.html              cover sheet (only when assets/cover.* exists)
    compiled.html           cover + every section + index in one document
    top{N}.html             most valuable entries overall
    top{N}-per-rarity.html  most valuable Normal entries, per rarity
    top{N}-normal.html      most valuable Normal entries
    top-foil.html           most valuable Foil entries
    full-art.html           every Full Art, Full Art Signature or Legacy entry
    index.html              compact inline index
    checklist.html          compact checklist with checkboxes
"""

import json
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from setforge.models.catalog import Catalog
from setforge.models.report import ReportEntry
from setforge.models.variation import (
    LEGACY_SYMBOL,
    PROMO_SYMBOL,
    REPRINT_SYMBOL,
    VariationType,
    variation_rank,
    variation_symbol,
)
from setforge.parsers.card_number import rarity_code_from_local_id
from setforge.services.catalog_compiler import SetPaths
from setforge.services.set_metadata import load_set_metadata, set_title

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

DEFAULT_TOP_N = 54
DEFAULT_PAGE_SIZE = 9
DEFAULT_STYLESHEET_HREF = "../../../assets/style.css"

VARIANT_KEY_ITEMS = (
    ("Foil", VariationType.FOIL.symbol),
    ("Full Art", VariationType.FULL_ART.symbol),
    ("Full Art Signature", VariationType.FULL_ART_SIGNATURE.symbol),
    ("Legacy", LEGACY_SYMBOL),
    ("Reprint", REPRINT_SYMBOL),
    ("Promo", PROMO_SYMBOL),
)

RARITY_CLASSES = (
    ("common", "card-id-rarity-common"),
    ("rare", "card-id-rarity-rare"),
    ("hero", "card-id-rarity-hero"),
    ("legend", "card-id-rarity-legend"),
)
DEFAULT_RARITY_CLASS = "card-id-rarity-common"

FULL_ART_TYPES = frozenset(
    {VariationType.FULL_ART.value, VariationType.FULL_ART_SIGNATURE.value}
)


class RenderError(Exception):
    """Raised when a set's reports cannot be rendered."""


class CatalogNotFoundError(RenderError):
    """Raised when output.json has not been compiled yet."""


@dataclass(frozen=True, slots=True)
class ReportSection:
    """A titled group of entries on the compiled page."""

    anchor: str
    heading: str
    entries: Sequence[ReportEntry]


@dataclass(frozen=True, slots=True)
class CoverSheet:
    """Figures shown on the cover page."""

    image_href: str
    title: str
    subtitle: str | None
    card_count: int
    variation_count: int
    total_value: float
    generated_on: str


@dataclass
class RenderResult:
    """Outcome of rendering one set."""

    set_name: str
    entry_count: int
    written: list[Path] = field(default_factory=list)


# =============================================================================
# CATALOG → ENTRIES
# =============================================================================


def load_catalog(path: Path) -> Catalog:
    """
    Load a compiled catalog.

    Raises:
        CatalogNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise CatalogNotFoundError(
            f'Output JSON file "{path}" does not exist. Run the compile step first.'
        )

    with open(path, encoding="utf-8") as f:
        return Catalog.model_validate(json.load(f))


def _entry_sort_key(entry: ReportEntry) -> tuple[int, int, int]:
    return (entry.set_number, entry.number, variation_rank(entry.variant_type))


def flatten_entries(catalog: Catalog) -> list[ReportEntry]:
    """
    One entry per (card, variation), numbered in catalog order.

    Entries are sorted by set, number and variation rank; ties keep their
    catalog order.
    """
    entries: list[ReportEntry] = []

    for card in catalog.cards:
        rarity_code = rarity_code_from_local_id(card.local_id)
        card_number = f"{card.set_number}-{card.number:03d}{rarity_code}"

        for variation in card.variation:
            entries.append(
                ReportEntry(
                    id=len(entries),
                    card_number=card_number,
                    card_name=card.product_name,
                    variant_type=variation.type,
                    average_price=variation.market_price_avg,
                    full_card_number=card.local_id,
                    rarity=card.rarity,
                    set_number=card.set_number,
                    number=card.number,
                    is_legacy=card.is_legacy,
                    is_promo=card.is_promo,
                    is_reprint=card.is_reprint,
                )
            )

    entries.sort(key=_entry_sort_key)
    return entries


def top_by_value(entries: Iterable[ReportEntry], limit: int | None = None) -> list[ReportEntry]:
    """Entries by average price, highest first; ties keep their order."""
    ranked = sorted(entries, key=lambda entry: entry.average_price, reverse=True)
    return ranked if limit is None else ranked[:limit]


def checklist_order(entries: Iterable[ReportEntry]) -> list[ReportEntry]:
    """Entries by card-number text, then variation rank."""
    return sorted(
        entries, key=lambda entry: (entry.card_number, variation_rank(entry.variant_type))
    )


def is_full_art_entry(entry: ReportEntry) -> bool:
    return entry.variant_type in FULL_ART_TYPES or entry.is_legacy


def rarities_of(entries: Iterable[ReportEntry]) -> list[str]:
    return sorted({entry.rarity for entry in entries})


def rarity_anchor(rarity: str, top_n: int) -> str:
    return f"top-{top_n}-" + "-".join(rarity.lower().split())


# =============================================================================
# ENTRY PRESENTATION
# =============================================================================


def rarity_class(rarity: str | None) -> str:
    """CSS class for the entry id badge; unknown rarities render as common."""
    if not rarity:
        return DEFAULT_RARITY_CLASS

    lowered = rarity.lower()
    for needle, css_class in RARITY_CLASSES:
        if needle in lowered:
            return css_class
    return DEFAULT_RARITY_CLASS


def entry_variant_symbol(entry: ReportEntry) -> str:
    """Legacy replaces the variation symbol; Normal has none."""
    if entry.is_legacy:
        return LEGACY_SYMBOL
    return variation_symbol(entry.variant_type)


def entry_tags(entry: ReportEntry) -> list[str]:
    """Trailing tags; the Legacy symbol already covers reprints."""
    tags: list[str] = []
    if entry.is_reprint and not entry.is_legacy:
        tags.append(REPRINT_SYMBOL)
    if entry.is_promo:
        tags.append(PROMO_SYMBOL)
    return tags


def format_price(value: float) -> str:
    return f"{value:.2f}"


def format_generated_date(day: date) -> str:
    """e.g. "October 19, 2026"."""
    return f"{day:%B} {day.day}, {day.year}"


def build_environment(page_size: int = DEFAULT_PAGE_SIZE) -> Environment:
    """Jinja2 environment with the report helpers registered."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["price"] = format_price
    env.globals.update(
        page_size=page_size,
        variant_key_items=VARIANT_KEY_ITEMS,
        variant_symbol=entry_variant_symbol,
        entry_tags=entry_tags,
        rarity_class=rarity_class,
    )
    return env


# =============================================================================
# SET RENDERING
# =============================================================================


class ReportRenderer:
    """
    Renders every report page for one set.

    Usage:
        renderer = ReportRenderer(SetPaths.for_set(sets_dir, "xxvi"))
        result = renderer.render()
    """

    def __init__(
        self,
        paths: SetPaths,
        *,
        top_n: int = DEFAULT_TOP_N,
        page_size: int = DEFAULT_PAGE_SIZE,
        stylesheet_href: str = DEFAULT_STYLESHEET_HREF,
        generated_on: date | None = None,
    ) -> None:
        self.paths = paths
        self.top_n = top_n
        self.stylesheet_href = stylesheet_href
        self.generated_on = generated_on or date.today()
        self.env = build_environment(page_size)

    def render(self) -> RenderResult:
        """
        Render and write all pages.

        Raises:
            CatalogNotFoundError: If output.json is missing
        """
        catalog = load_catalog(self.paths.output_json)
        metadata = load_set_metadata(self.paths.set_json)
        entries = flatten_entries(catalog)

        self.paths.www_dir.mkdir(parents=True, exist_ok=True)
        result = RenderResult(set_name=self.paths.set_name, entry_count=len(entries))

        for filename, html in self.render_pages(catalog, metadata, entries).items():
            path = self.paths.www_dir / filename
            path.write_text(html, encoding="utf-8")
            result.written.append(path)
            logger.info("Successfully generated %s", path)

        logger.info("Total entries: %d", len(entries))
        return result

    def render_pages(
        self, catalog: Catalog, metadata: dict[str, Any], entries: list[ReportEntry]
    ) -> dict[str, str]:
        """Render every page to a {filename: html} mapping."""
        n = self.top_n
        title = set_title(metadata, self.paths.set_name)
        base = {"title": title, "stylesheet_href": self.stylesheet_href}
        cover = self._cover_sheet(catalog, metadata, entries)

        normal = [e for e in entries if e.variant_type == VariationType.NORMAL.value]
        foil = [e for e in entries if e.variant_type == VariationType.FOIL.value]
        full_art = top_by_value(e for e in entries if is_full_art_entry(e))
        top_overall = top_by_value(entries, n)

        pages: dict[str, str] = {}
        pages["cards.html"] = self._render(
            "cards.html", base, page_title="Card Collection", entries=entries
        )
        if cover is not None:
            pages["cover.html"] = self._render("cover.html", base, page_title="Cover", cover=cover)

        sections = [
            ReportSection("card-collection-checklist", "Card Collection Checklist", entries),
            ReportSection(f"top-{n}-most-valuable", f"Top {n} Most Valuable Cards", top_overall),
        ]
        for rarity in rarities_of(entries):
            sections.append(
                ReportSection(
                    rarity_anchor(rarity, n),
                    f"Top {n} Most Valuable {rarity} Cards",
                    top_by_value((e for e in entries if e.rarity == rarity), n),
                )
            )
        sections += [
            ReportSection(
                f"top-{n}-normal", f"Top {n} Most Valuable Normal Cards", top_by_value(normal, n)
            ),
            ReportSection(
                f"top-{n}-foil",
                f"Top {n} Most Valuable Foil Cards (Non-Full Art)",
                top_by_value(foil, n),
            ),
            ReportSection("full-art-cards", "All Full Art Cards (Sorted by Value)", full_art),
        ]
        pages["compiled.html"] = self._render(
            "compiled.html",
            base,
            page_title="Compiled",
            cover=cover,
            sections=[s for s in sections if s.entries],
            entries=entries,
        )

        pages[f"top{n}.html"] = self._render(
            "card_list.html",
            base,
            page_title=f"Top {n} Most Valuable",
            heading=f"Top {n} Most Valuable Cards",
            entries=top_overall,
        )
        pages[f"top{n}-per-rarity.html"] = self._render(
            "rarity_sections.html",
            base,
            page_title=f"Top {n} Per Rarity",
            heading=f"Top {n} Most Valuable Cards Per Rarity",
            sections=[
                ReportSection(rarity_anchor(rarity, n), rarity, top)
                for rarity in rarities_of(entries)
                if (top := top_by_value((e for e in normal if e.rarity == rarity), n))
            ],
        )
        pages[f"top{n}-normal.html"] = self._render(
            "card_list.html",
            base,
            page_title=f"Top {n} Normal Cards",
            heading=f"Top {n} Most Valuable Normal Cards",
            entries=top_by_value(normal, n),
        )
        pages["top-foil.html"] = self._render(
            "card_list.html",
            base,
            page_title="Top Foil Cards",
            heading="Most Valuable Foil Cards (Non-Full Art)",
            entries=top_by_value(foil, n),
        )
        pages["full-art.html"] = self._render(
            "card_list.html",
            base,
            page_title="Full Art Cards",
            heading="All Full Art Cards (Sorted by Value)",
            entries=full_art,
        )
        pages["index.html"] = self._render(
            "index.html", base, page_title="Card Index", entries=entries
        )
        pages["checklist.html"] = self._render(
            "checklist.html", base, page_title="Checklist", entries=checklist_order(entries)
        )
        return pages

    def _render(self, template_name: str, base: dict[str, Any], **context: Any) -> str:
        return self.env.get_template(template_name).render(**base, **context)

    def _cover_sheet(
        self, catalog: Catalog, metadata: dict[str, Any], entries: list[ReportEntry]
    ) -> CoverSheet | None:
        image = self.paths.cover_image()
        if image is None:
            return None

        return CoverSheet(
            image_href=Path(os.path.relpath(image, self.paths.www_dir)).as_posix(),
            title=metadata.get("title") or self.paths.set_name.upper(),
            subtitle=metadata.get("alternateTitle"),
            card_count=len(catalog.cards),
            variation_count=len(entries),
            total_value=sum(entry.average_price for entry in entries),
            generated_on=format_generated_date(self.generated_on),
        )


def render_set(
    set_name: str,
    sets_dir: Path,
    *,
    top_n: int = DEFAULT_TOP_N,
    page_size: int = DEFAULT_PAGE_SIZE,
    stylesheet_href: str = DEFAULT_STYLESHEET_HREF,
    generated_on: date | None = None,
) -> RenderResult:
    """
    Render all report pages for one compiled set.

    Raises:
        CatalogNotFoundError: If the set has not been compiled
    """
    renderer = ReportRenderer(
        SetPaths.for_set(sets_dir, set_name),
        top_n=top_n,
        page_size=page_size,
        stylesheet_href=stylesheet_href,
        generated_on=generated_on,
    )
    return renderer.render()
