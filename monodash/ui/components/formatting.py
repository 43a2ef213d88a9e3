"""
Utility helpers for formatting counts and percentages.
"""

from __future__ import annotations

import math
from typing import Optional


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if _is_missing(value):
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if _is_missing(value):
        return "–"
    try:
        return f"{value:.{decimals}f}%"
    except (TypeError, ValueError):
        return "–"
