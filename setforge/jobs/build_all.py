"""
Compile and render every set.

Each subdirectory of the sets directory that contains a cards.csv is
compiled, then rendered. A failing set does not stop the others; the
command exits non-zero if any set failed either step.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from setforge.config import CARDS_CSV_NAME, LOG_FORMAT, settings
from setforge.jobs.compile_set import run_compile
from setforge.jobs.render_set import run_render
from setforge.services.catalog_compiler import CompileError
from setforge.services.report_renderer import RenderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildFailure:
    """A set that failed one build step."""

    set_name: str
    step: str  # compile, render
    error: str


@dataclass
class BuildSummary:
    """Outcome of a full build."""

    succeeded: list[str] = field(default_factory=list)
    failures: list[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def discover_sets(sets_dir: Path) -> list[str]:
    """Names of subdirectories holding a cards.csv, sorted."""
    if not sets_dir.is_dir():
        return []

    return sorted(
        path.name
        for path in sets_dir.iterdir()
        if path.is_dir() and (path / CARDS_CSV_NAME).is_file()
    )


def run_build(sets_dir: Path | None = None) -> BuildSummary:
    """
    Compile then render every discovered set.

    Render is skipped for a set whose compile failed. Any exception raised
    by a step is recorded as that set's failure; the remaining sets still run.
    """
    sets_dir = sets_dir if sets_dir is not None else settings.sets_dir
    summary = BuildSummary()

    for set_name in discover_sets(sets_dir):
        logger.info("building %s...", set_name)

        try:
            run_compile(set_name, sets_dir)
        except CompileError as e:
            summary.failures.append(BuildFailure(set_name, "compile", str(e)))
            continue
        except Exception as e:
            logger.error("Error compiling %s: %s", set_name, e)
            summary.failures.append(BuildFailure(set_name, "compile", str(e)))
            continue

        try:
            run_render(set_name, sets_dir)
        except RenderError as e:
            summary.failures.append(BuildFailure(set_name, "render", str(e)))
            continue
        except Exception as e:
            logger.error("Error rendering %s: %s", set_name, e)
            summary.failures.append(BuildFailure(set_name, "render", str(e)))
            continue

        summary.succeeded.append(set_name)

    return summary


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        prog="setforge-build",
        description="Compile and render every set with a cards.csv",
    )
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

    sets_dir = args.sets_dir if args.sets_dir is not None else settings.sets_dir
    if not discover_sets(sets_dir):
        logger.error("No sets found with %s files in %s", CARDS_CSV_NAME, sets_dir)
        return 1

    summary = run_build(sets_dir)

    for failure in summary.failures:
        logger.error("✗ %s (%s)", failure.set_name, failure.step)

    if not summary.ok:
        return 1

    logger.info("Built %d sets", len(summary.succeeded))
    return 0


if __name__ == "__main__":
    sys.exit(main())
