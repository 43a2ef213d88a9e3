from __future__ import annotations

import pandas as pd

from monodash.data.loader import LoadResult
from monodash.ui.components.formatting import format_number
from monodash.ui.surface import DisplaySurface

HEAD_ROWS = 5


def describe_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Count, mean, std, min, quartiles and max for every numeric column."""
    numeric = df.select_dtypes(include="number")
    if numeric.columns.empty:
        return pd.DataFrame()
    return numeric.describe()


def render(surface: DisplaySurface, result: LoadResult) -> bool:
    """Render the dataset overview. Returns False when nothing could be shown."""
    if not result.ok or result.data is None:
        surface.error(result.message)
        surface.halt()
        return False

    df = result.data
    surface.success(result.message)
    if df.empty:
        surface.warning("No data available to display.")
        return False

    surface.info(f"Total rows: {format_number(len(df))}")
    surface.info(f"Total columns: {format_number(len(df.columns))}")

    surface.heading(f"First {HEAD_ROWS} rows")
    surface.table(df.head(HEAD_ROWS))

    surface.heading("Descriptive statistics")
    stats = describe_numeric(df)
    if stats.empty:
        surface.info("No numeric columns to summarise.")
    else:
        surface.table(stats)
    return True
