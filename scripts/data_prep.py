"""Prepare the cleaned dataset consumed by the dashboard.

Run with `python scripts/data_prep.py` from the app directory. Paths and steps
default to the MONODASH_* settings (env, .env or Streamlit secrets).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from monodash.config import Settings, get_secret, parse_list
from monodash.data.prepare import run_from_settings
from monodash.errors import MonodashError
from monodash.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--source", type=Path, help="Raw CSV file to clean")
    parser.add_argument("--output", type=Path, help="Destination Parquet file")
    parser.add_argument(
        "--steps",
        help="Comma-separated step names, e.g. normalize_sentinels,drop_missing",
    )
    parser.add_argument(
        "--in-place",
        action="store_true",
        help="Write directly to the destination instead of write-then-rename",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    configure_logging(get_secret("LOG_LEVEL"))
    try:
        settings = Settings.load()
        overrides = {}
        if args.source:
            overrides["source_path"] = args.source
        if args.output:
            overrides["output_path"] = args.output
        if args.steps:
            overrides["prep_steps"] = tuple(parse_list(args.steps) or ())
        if args.in_place:
            overrides["atomic_write"] = False
        settings = replace(settings, **overrides)
        report = run_from_settings(settings)
    except MonodashError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for event in report.skipped:
        print(f"skipped {event.step}: missing {', '.join(event.missing_columns)}")
    print(report.message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
