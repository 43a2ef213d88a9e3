"""
Application-wide configuration: tab layout, secret lookup and runtime settings.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import streamlit as st

from monodash.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("summary", "Summary"),
    TabConfig("data_quality", "Data Quality"),
]

DEFAULT_SOURCE_PATH = "data/raw_data.csv"
DEFAULT_OUTPUT_PATH = "data/cleaned_data.parquet"
DEFAULT_TARGET_COLUMN = "RelevantColumn"
DEFAULT_FEATURE_COLUMN = "new_feature"
DEFAULT_PREP_STEPS: Tuple[str, ...] = ("normalize_sentinels", "drop_missing", "derive_feature")
DEFAULT_CACHE_TTL = 600.0

_FALSE_TOKENS = {"0", "false", "no", "off"}


def _streamlit_secret(name: str) -> Any:
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            return sec.get(name)  # type: ignore[index]
    except Exception as exc:
        # st.secrets raises when no secrets file exists
        logger.debug("Secret %s not readable from st.secrets: %s", name, exc)
    return None


def get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    v = _streamlit_secret(name)
    return str(v) if v is not None else default


def parse_list(raw: Any) -> List[str] | None:
    if raw is None:
        return None
    # Already list (from TOML secrets)
    if isinstance(raw, (list, tuple)):
        return [str(x).strip() for x in raw if str(x).strip()]
    s = str(raw).strip()
    if not s:
        return None
    # JSON array
    if s.startswith("[") and s.endswith("]"):
        try:
            arr = json.loads(s)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Malformed JSON list: {s!r}") from exc
        return [str(x).strip() for x in arr if str(x).strip()]
    # comma-separated
    if "," in s:
        return [item.strip() for item in s.split(",") if item.strip()]
    # single value
    return [s]


def get_list_secret(name: str, default: List[str] | None = None) -> List[str] | None:
    """Get list-like secret from env or st.secrets.
    Accepts TOML array, JSON array string, or comma-separated string.
    """
    lst = parse_list(os.getenv(name))
    if lst:
        return lst
    lst = parse_list(_streamlit_secret(name))
    if lst:
        return lst
    return default


def _float_setting(name: str, default: float) -> float:
    raw = get_secret(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


def _bool_setting(name: str, default: bool) -> bool:
    raw = get_secret(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_TOKENS


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from env, st.secrets and .env."""

    source_path: Path = Path(DEFAULT_SOURCE_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    target_column: str = DEFAULT_TARGET_COLUMN
    feature_column: str = DEFAULT_FEATURE_COLUMN
    feature_factor: float = 2.0
    prep_steps: Tuple[str, ...] = DEFAULT_PREP_STEPS
    atomic_write: bool = True
    cache_ttl: Optional[float] = DEFAULT_CACHE_TTL
    deploy_vars: Dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        ttl = _float_setting("MONODASH_CACHE_TTL", DEFAULT_CACHE_TTL)
        deploy_names = get_list_secret("MONODASH_DEPLOY_VARS", default=[]) or []
        deploy_vars: Dict[str, str] = {}
        for name in deploy_names:
            value = get_secret(name)
            if value is None:
                logger.warning("Deployment variable %s is declared but not set.", name)
                continue
            deploy_vars[name] = value

        return cls(
            source_path=Path(get_secret("MONODASH_SOURCE_PATH", DEFAULT_SOURCE_PATH) or DEFAULT_SOURCE_PATH),
            output_path=Path(get_secret("MONODASH_OUTPUT_PATH", DEFAULT_OUTPUT_PATH) or DEFAULT_OUTPUT_PATH),
            target_column=get_secret("MONODASH_TARGET_COLUMN", DEFAULT_TARGET_COLUMN) or DEFAULT_TARGET_COLUMN,
            feature_column=get_secret("MONODASH_FEATURE_COLUMN", DEFAULT_FEATURE_COLUMN) or DEFAULT_FEATURE_COLUMN,
            feature_factor=_float_setting("MONODASH_FEATURE_FACTOR", 2.0),
            prep_steps=tuple(get_list_secret("MONODASH_PREP_STEPS", default=list(DEFAULT_PREP_STEPS)) or DEFAULT_PREP_STEPS),
            atomic_write=_bool_setting("MONODASH_ATOMIC_WRITE", True),
            cache_ttl=ttl if ttl > 0 else None,
            deploy_vars=deploy_vars,
            log_level=get_secret("LOG_LEVEL", "INFO") or "INFO",
        )
