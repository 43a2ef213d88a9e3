from __future__ import annotations

import pandas as pd

from monodash.data.steps import is_text_column
from monodash.ui.components.formatting import format_number, format_percent
from monodash.ui.surface import DisplaySurface


def missing_values_summary(df: pd.DataFrame) -> pd.DataFrame:
    # base missing (NaN/NaT)
    mv_series = df.isna().sum()
    # treat blank strings as missing
    for col in df.columns:
        if is_text_column(df[col]):
            blanks = df[col].apply(lambda v: isinstance(v, str) and v.strip() == "")
            if blanks.any():
                mv_series[col] += int(blanks.sum())
    mv = mv_series.reset_index()
    mv.columns = ["column", "missing_count"]
    mv["missing_pct"] = mv["missing_count"] / len(df) * 100 if len(df) > 0 else 0.0
    return mv.sort_values("missing_pct", ascending=False, kind="stable").reset_index(drop=True)


def duplicate_count(df: pd.DataFrame) -> int:
    return int(df.duplicated().sum())


def render(surface: DisplaySurface, df: pd.DataFrame) -> None:
    surface.heading("Data Quality")
    if df.empty:
        surface.info("No diagnostics available yet.")
        return

    dupes = duplicate_count(df)
    surface.info(
        f"Duplicate rows: {format_number(dupes)} "
        f"({format_percent(dupes / len(df) * 100)})"
    )

    summary = missing_values_summary(df)
    incomplete = summary[summary["missing_count"] > 0]
    if incomplete.empty:
        surface.info("No missing values found.")
        return
    surface.heading("Missing values by column")
    surface.table(incomplete)
