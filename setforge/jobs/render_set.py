"""
Render the HTML report pages for one compiled set.

Usage:
    setforge-render xxvi
    python -m setforge.jobs.render_set xxvi --sets-dir set
"""

import argparse
import logging
import sys
from pathlib import Path

from setforge.config import LOG_FORMAT, settings
from setforge.services.report_renderer import RenderError, RenderResult, render_set

logger = logging.getLogger(__name__)


def run_render(set_name: str, sets_dir: Path | None = None) -> RenderResult:
    """
    Render a set's pages with the configured report settings.

    Raises:
        RenderError: If the set has no compiled output.json
    """
    sets_dir = sets_dir if sets_dir is not None else settings.sets_dir
    logger.info("Rendering %s...", set_name)

    try:
        return render_set(
            set_name,
            sets_dir,
            top_n=settings.top_n,
            page_size=settings.binder_page_size,
            stylesheet_href=settings.stylesheet_href,
        )
    except RenderError as e:
        logger.error("Error: %s", e)
        raise


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="setforge-render",
        description="Render HTML report pages from a set's output.json",
    )
    parser.add_argument("set_name", nargs="?", help="Set directory name (e.g., xxvi)")
    parser.add_argument(
        "--sets-dir",
        type=Path,
        default=None,
        help=f"Directory holding all sets (default: {settings.sets_dir})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    if not args.set_name:
        parser.print_usage(sys.stderr)
        print("Example: setforge-render xxvi", file=sys.stderr)
        return 1

    try:
        run_render(args.set_name, args.sets_dir)
    except RenderError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
