"""
Bootstrap environment for hosted and local runs:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD)
- Then load .env (without overriding existing env vars)
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def sanitize_key(key: str) -> str:
    # Uppercase and replace non-alphanumeric with underscores
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield sanitize_key(prefix), str(val)


def _secrets_as_dict() -> Dict[str, Any]:
    # st.secrets raises when no secrets.toml exists outside the hosted runtime
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return {}
        return items.to_dict()  # type: ignore[attr-defined]
    except Exception as exc:
        logger.debug("Streamlit secrets unavailable: %s", exc)
        return {}


def bridge_secrets_to_env(secrets: Dict[str, Any]) -> None:
    for key, value in secrets.items():
        for flat_k, flat_v in flatten_secrets(key, value):
            os.environ.setdefault(flat_k, flat_v)


def ensure_env() -> None:
    """Idempotent: make sure env vars are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    bridge_secrets_to_env(_secrets_as_dict())
    # load_dotenv will not override existing env vars by default
    load_dotenv()


# Execute on import for Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()
