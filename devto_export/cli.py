"""Command-line entry point for the article exporter."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_INPUT_NAME, ExportConfig
from .errors import InputParseError
from .models import ArticleStatus
from .pipeline import export_file, summarize

logger = logging.getLogger("devto_export.cli")

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Convert a dev.to articles export into per-article directories "
            "with local images and Markdown."
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT_NAME,
        type=Path,
        help="Path to the articles JSON export (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        default=".",
        type=Path,
        help="Directory under which article directories are created",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Per-request timeout in seconds for image downloads",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with a failure status if any image could not be downloaded",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    config = ExportConfig(
        input_path=Path(args.input).resolve(),
        output_root=Path(args.output).resolve(),
        timeout=args.timeout,
    )

    overall_start = time.perf_counter()
    try:
        outcomes = export_file(config)
    except InputParseError as exc:
        logger.error("%s", exc)
        return EXIT_BAD_INPUT
    summary = summarize(outcomes, time.perf_counter() - overall_start)

    logger.info(
        "Finished in %.2fs (%d/%d exported, %d skipped, %d failed; "
        "images: %d downloaded, %d already present, %d failed)",
        summary.seconds,
        summary.exported,
        summary.total,
        summary.skipped,
        summary.failed,
        summary.downloaded,
        summary.already_present,
        summary.assets_failed,
    )

    if args.verbose:
        for outcome in outcomes:
            if outcome.status is ArticleStatus.SKIPPED:
                continue
            logger.debug(
                "Article %s -> %s | images: %d (%d failed) | total: %.2fs",
                outcome.path,
                outcome.status.value,
                len(outcome.assets),
                len(outcome.failed_assets),
                outcome.seconds,
            )

    if not summary.ok:
        return EXIT_FAILURES
    if args.strict and summary.assets_failed:
        return EXIT_FAILURES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
