from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Tuple

import numpy as np
import pandas as pd
import pytest

from monodash.config import Settings


class RecordingSurface:
    """Display surface that records every call for assertions."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def heading(self, text: str) -> None:
        self.calls.append(("heading", text))

    def info(self, text: str) -> None:
        self.calls.append(("info", text))

    def success(self, text: str) -> None:
        self.calls.append(("success", text))

    def warning(self, text: str) -> None:
        self.calls.append(("warning", text))

    def table(self, df: pd.DataFrame) -> None:
        self.calls.append(("table", df))

    def error(self, text: str) -> None:
        self.calls.append(("error", text))

    def halt(self) -> None:
        self.calls.append(("halt", None))

    def of(self, kind: str) -> List[Any]:
        return [payload for call_kind, payload in self.calls if call_kind == kind]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def raw_frame() -> pd.DataFrame:
    """Ten records, three of them missing RelevantColumn."""
    return pd.DataFrame(
        {
            "id": list(range(1, 11)),
            "RelevantColumn": [1.5, np.nan, 3.0, 4.0, np.nan, 6.0, 7.0, np.nan, 9.0, 10.0],
            "category": ["a", "b", "a", "c", "b", "a", "c", "a", "b", "c"],
        }
    )


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[pd.DataFrame, str], Path]:
    def _write(df: pd.DataFrame, name: str = "raw_data.csv") -> Path:
        path = tmp_path / name
        df.to_csv(path, index=False)
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        source_path=tmp_path / "raw_data.csv",
        output_path=tmp_path / "out" / "cleaned_data.parquet",
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    import os

    for key in list(os.environ):
        if key.startswith("MONODASH_") or key == "LOG_LEVEL":
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
