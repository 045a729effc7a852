"""
Compile one set's price listing into output.json.

Usage:
    setforge-compile xxvi
    python -m setforge.jobs.compile_set xxvi --sets-dir set
"""

import argparse
import logging
import sys
from pathlib import Path

from setforge.config import LOG_FORMAT, settings
from setforge.services.catalog_compiler import CompileError, CompileResult, compile_set

logger = logging.getLogger(__name__)


def run_compile(set_name: str, sets_dir: Path | None = None) -> CompileResult:
    """
    Compile a set, logging the outcome.

    Raises:
        CompileError: If the set directory or its cards.csv is missing
    """
    sets_dir = sets_dir if sets_dir is not None else settings.sets_dir
    logger.info("Compiling %s...", set_name)

    try:
        return compile_set(set_name, sets_dir)
    except CompileError as e:
        logger.error("Error: %s", e)
        raise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setforge-compile",
        description="Compile a set's cards.csv into output.json",
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
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    if not args.set_name:
        parser.print_usage(sys.stderr)
        print("Example: setforge-compile xxvi", file=sys.stderr)
        return 1

    try:
        run_compile(args.set_name, args.sets_dir)
    except CompileError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
