"""
Loading of the cleaned dataset for the dashboard.

The dashboard owns one `DatasetCache` per process. Loads report their outcome
through `LoadResult` instead of stopping the page themselves, leaving the
decision to keep rendering to the caller.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import pandas as pd
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)

Reader = Callable[[Path], pd.DataFrame]
Clock = Callable[[], float]


def read_cleaned(path: Path) -> pd.DataFrame:
    return pq.read_table(path).to_pandas()


class LoadStatus(enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class LoadResult:
    status: LoadStatus
    path: Path
    data: Optional[pd.DataFrame] = None
    message: str = ""
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    @classmethod
    def success(cls, path: Path, data: pd.DataFrame) -> "LoadResult":
        return cls(LoadStatus.OK, path, data=data, message="Data loaded successfully!")

    @classmethod
    def not_found(cls, path: Path) -> "LoadResult":
        return cls(LoadStatus.NOT_FOUND, path, message=f"Data file not found at {path}")

    @classmethod
    def read_error(cls, path: Path, error: BaseException) -> "LoadResult":
        return cls(
            LoadStatus.READ_ERROR,
            path,
            message=f"An unexpected error occurred while loading data: {error}",
            error=error,
        )


class DatasetCache:
    """Memoize loaded datasets by resolved path.

    Only successful loads are stored. Entries older than ``ttl`` seconds are
    re-read on the next access; ``ttl=None`` keeps them until `clear`.
    Safe to share between Streamlit sessions: one lock serialises lookups and
    reads, so concurrent misses on a path still read the file once.
    """

    def __init__(
        self,
        reader: Reader = read_cleaned,
        ttl: Optional[float] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._reader = reader
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[Path, Tuple[pd.DataFrame, float]] = {}
        self.reads = 0
        self._lock = threading.RLock()

    @staticmethod
    def _key(path: Path | str) -> Path:
        return Path(path).resolve()

    def _fresh(self, loaded_at: float) -> bool:
        return self._ttl is None or self._clock() - loaded_at < self._ttl

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            entry = self._entries.get(self._key(path))
            return entry is not None and self._fresh(entry[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def load(self, path: Path | str) -> LoadResult:
        path = Path(path)
        key = self._key(path)

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                data, loaded_at = entry
                if self._fresh(loaded_at):
                    return LoadResult.success(path, data)
                logger.info("Cached dataset for %s expired; reloading.", key)
                self._entries.pop(key, None)

            if not key.exists():
                logger.error("Data file not found at %s", key)
                return LoadResult.not_found(path)

            self.reads += 1
            try:
                data = self._reader(key)
            except Exception as exc:
                logger.exception("Failed to read dataset from %s", key)
                return LoadResult.read_error(path, exc)

            self._entries[key] = (data, self._clock())
            logger.info("Loaded %d row(s) from %s", len(data), key)
            return LoadResult.success(path, data)

    def clear(self, path: Path | str | None = None) -> None:
        with self._lock:
            if path is None:
                self._entries.clear()
                return
            self._entries.pop(self._key(path), None)
