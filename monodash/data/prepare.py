"""
Offline preparation: turn the raw CSV export into the cleaned Parquet file
the dashboard reads.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from monodash.config import Settings
from monodash.data.steps import TransformStep, build_steps
from monodash.errors import PreparationError

logger = logging.getLogger(__name__)

PARQUET_COMPRESSION = "snappy"


@dataclass(frozen=True)
class SkipEvent:
    step: str
    missing_columns: Tuple[str, ...]


@dataclass
class PreparationReport:
    source_path: Path
    output_path: Path
    input_rows: int
    output_rows: int
    columns: List[str]
    applied_steps: List[str] = field(default_factory=list)
    skipped: List[SkipEvent] = field(default_factory=list)

    @property
    def dropped_rows(self) -> int:
        return self.input_rows - self.output_rows

    @property
    def message(self) -> str:
        return f"Cleaned data saved to {self.output_path}"


def read_raw(path: Path | str) -> pd.DataFrame:
    """Read the full raw CSV into memory.

    Parser errors from pandas propagate unchanged.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raw data file not found at {path}")
    return pd.read_csv(path)


def apply_steps(
    df: pd.DataFrame, steps: Sequence[TransformStep]
) -> Tuple[pd.DataFrame, List[str], List[SkipEvent]]:
    working = df.copy()
    applied: List[str] = []
    skipped: List[SkipEvent] = []
    for step in steps:
        missing = step.missing_columns(working.columns)
        if missing:
            logger.warning(
                "Skipping step '%s': column(s) %s not found in dataset.",
                step.name,
                ", ".join(missing),
            )
            skipped.append(SkipEvent(step=step.name, missing_columns=tuple(missing)))
            continue
        result = step.apply(working)
        if not isinstance(result, pd.DataFrame):
            raise PreparationError(
                f"Step '{step.name}' returned {type(result).__name__}, expected a DataFrame"
            )
        logger.debug("Step '%s' left %d row(s).", step.name, len(result))
        working = result
        applied.append(step.name)
    return working, applied, skipped


def _write_table(table: pa.Table, path: Path) -> None:
    pq.write_table(table, path, compression=PARQUET_COMPRESSION)


def write_cleaned(df: pd.DataFrame, path: Path | str, atomic: bool = True) -> Path:
    """Write ``df`` as Parquet without its row index, replacing any prior file.

    With ``atomic`` the table goes to a temporary sibling first and is renamed
    into place, so readers never observe a half-written file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pandas(df, preserve_index=False)

    if not atomic:
        _write_table(table, path)
        return path

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    try:
        _write_table(table, Path(tmp_name))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path


def prepare_dataset(
    source: Path | str,
    output: Path | str,
    steps: Sequence[TransformStep],
    atomic: bool = True,
) -> PreparationReport:
    """Read the raw dataset, apply ``steps`` in order and write the cleaned file."""
    source = Path(source)
    output = Path(output)

    raw = read_raw(source)
    logger.info("Loaded %d row(s) and %d column(s) from %s", len(raw), len(raw.columns), source)

    cleaned, applied, skipped = apply_steps(raw, steps)
    write_cleaned(cleaned, output, atomic=atomic)

    report = PreparationReport(
        source_path=source,
        output_path=output,
        input_rows=len(raw),
        output_rows=len(cleaned),
        columns=[str(c) for c in cleaned.columns],
        applied_steps=applied,
        skipped=skipped,
    )
    logger.info("%s (%d row(s), %d dropped)", report.message, report.output_rows, report.dropped_rows)
    return report


def run_from_settings(settings: Settings) -> PreparationReport:
    steps = build_steps(settings.prep_steps, settings)
    return prepare_dataset(
        settings.source_path,
        settings.output_path,
        steps,
        atomic=settings.atomic_write,
    )
