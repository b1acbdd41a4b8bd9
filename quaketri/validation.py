"""
Shared validation for the loaded input tables.

Every loader checks its columns up front so a typo in a source file header
fails with a readable message instead of a KeyError deep inside a filter.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Set

import pandas as pd


def validate_columns(
    df: pd.DataFrame,
    required_columns: Set[str],
    source_path: Optional[str] = None
) -> None:
    """
    Check that a loaded table carries every column the filters read.

    Raises:
        ValueError: naming the dataset (file name when known) and the missing columns
    """
    missing = sorted(required_columns - set(df.columns))
    if not missing:
        return
    dataset = Path(source_path).name if source_path else "input table"
    present = ", ".join(map(str, df.columns)) or "none"
    raise ValueError(f"{dataset} is missing required columns {missing} (has: {present})")


def coerce_numeric(
    df: pd.DataFrame,
    columns: Iterable[str],
    source_path: Optional[str] = None
) -> pd.DataFrame:
    """
    Convert columns to floats, keeping missing values as NaN.

    Raises:
        ValueError: if a column holds a value that is not a number
    """
    out = df.copy()
    for col in columns:
        try:
            out[col] = pd.to_numeric(out[col]).astype(float)
        except (TypeError, ValueError) as exc:
            source = f" in {source_path}" if source_path else ""
            raise ValueError(f"Non-numeric value in column '{col}'{source}: {exc}") from exc
    return out
