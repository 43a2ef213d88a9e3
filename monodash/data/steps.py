"""
Named transform steps applied by the preparation pipeline.

Each step declares the columns it needs. The pipeline checks them before
applying the step and records a skip when any are absent, so a dataset with
an unexpected schema still produces an output file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Set, Tuple

import pandas as pd

from monodash.errors import PreparationError

if TYPE_CHECKING:
    from monodash.config import Settings

Transform = Callable[[pd.DataFrame], pd.DataFrame]

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}


def is_text_column(series: pd.Series) -> bool:
    return pd.api.types.is_object_dtype(series) or pd.api.types.is_string_dtype(series)


@dataclass(frozen=True)
class TransformStep:
    name: str
    requires: Tuple[str, ...]
    apply: Transform
    description: str = ""

    def missing_columns(self, columns: Iterable[str]) -> List[str]:
        present = set(columns)
        return [col for col in self.requires if col not in present]


def normalize_sentinels(sentinels: Set[str] = SENTINELS) -> TransformStep:
    """Replace sentinel string tokens with missing values.

    Text columns left holding only numbers after the replacement are
    converted to a numeric dtype so later statistics include them.
    """

    def _apply(df: pd.DataFrame) -> pd.DataFrame:
        replacements: Dict[str, int] = {}
        for col in df.columns:
            if not is_text_column(df[col]):
                continue
            mask = df[col].apply(lambda v: isinstance(v, str) and v.strip() in sentinels)
            count = int(mask.sum())
            if not count:
                continue
            replacements[col] = count
            df.loc[mask, col] = None
            try:
                df[col] = pd.to_numeric(df[col])
            except (TypeError, ValueError):
                pass  # genuinely textual column
        if replacements:
            existing = df.attrs.get("sentinel_replacements", {})
            existing.update(replacements)
            df.attrs["sentinel_replacements"] = existing
        return df

    return TransformStep(
        name="normalize_sentinels",
        requires=(),
        apply=_apply,
        description="Replace placeholder strings such as 'N/A' with missing values",
    )


def drop_missing(column: str) -> TransformStep:
    def _apply(df: pd.DataFrame) -> pd.DataFrame:
        return df.dropna(subset=[column])

    return TransformStep(
        name="drop_missing",
        requires=(column,),
        apply=_apply,
        description=f"Drop rows with a missing '{column}'",
    )


def derive_column(
    source: str,
    target: str,
    func: Callable[[pd.Series], pd.Series],
    name: str = "derive_column",
) -> TransformStep:
    def _apply(df: pd.DataFrame) -> pd.DataFrame:
        df[target] = func(df[source])
        return df

    return TransformStep(
        name=name,
        requires=(source,),
        apply=_apply,
        description=f"Derive '{target}' from '{source}'",
    )


def scale_column(source: str, target: str, factor: float, name: str = "derive_feature") -> TransformStep:
    return derive_column(
        source,
        target,
        lambda series: pd.to_numeric(series, errors="coerce") * factor,
        name=name,
    )


STEP_FACTORIES: Dict[str, Callable[["Settings"], TransformStep]] = {
    "normalize_sentinels": lambda settings: normalize_sentinels(),
    "drop_missing": lambda settings: drop_missing(settings.target_column),
    "derive_feature": lambda settings: scale_column(
        settings.target_column, settings.feature_column, settings.feature_factor
    ),
}


def build_steps(names: Iterable[str], settings: "Settings") -> List[TransformStep]:
    """Resolve configured step names into transform steps, in order."""
    steps: List[TransformStep] = []
    for name in names:
        factory = STEP_FACTORIES.get(name)
        if factory is None:
            known = ", ".join(sorted(STEP_FACTORIES))
            raise PreparationError(f"Unknown preparation step '{name}'. Known steps: {known}")
        steps.append(factory(settings))
    return steps
