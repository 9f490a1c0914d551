"""
surveysize.backends.polars.frames
=================================

Normalize whatever table the caller holds into a polars `DataFrame`.

Accepted inputs:
- `pl.DataFrame` (used as is) and `pl.LazyFrame` (collected)
- pandas `DataFrame` (converted with `pl.from_pandas`; NaN stays NaN so bad
  counts are caught the same way as in polars input)
- ibis `Table` expressions (executed on their backend via `to_polars()`)
- a mapping of column name -> sequence of values

This module contains no sample-size semantics; just conversion and checks.

Examples
--------
>>> import polars as pl
>>> from surveysize.backends.polars.frames import to_polars_frame, require_columns
>>> df = to_polars_frame({"group": ["a", "b"], "population": [10, 20]})
>>> df.shape
(2, 2)
>>> require_columns(df, group="group", population="population")
>>> require_columns(df, population="pop")
Traceback (most recent call last):
...
surveysize.core.errors.ConfigurationError: population column 'pop' does not exist in the dataset (columns: group, population)
"""

from __future__ import annotations
from typing import Any, Mapping, Optional

import ibis.expr.types as ir
import pandas as pd
import polars as pl

from surveysize.core.errors import ConfigurationError


def to_polars_frame(data: Any) -> pl.DataFrame:
    """Return `data` as an eager polars DataFrame."""
    if isinstance(data, pl.DataFrame):
        return data
    if isinstance(data, pl.LazyFrame):
        return data.collect()
    if isinstance(data, pd.DataFrame):
        return pl.from_pandas(data, nan_to_null=False)
    if isinstance(data, ir.Table):
        return data.to_polars()
    if isinstance(data, Mapping):
        return pl.DataFrame(dict(data))
    raise ConfigurationError(
        f"Unsupported dataset type {type(data).__name__}; expected a polars, "
        "pandas or ibis table, or a mapping of columns"
    )


def require_columns(df: pl.DataFrame, **columns: Optional[str]) -> None:
    """
    Fail fast if a named column is missing.

    Keyword names describe the role of each column and are only used in the
    error message; `None` values (optional columns not requested) are skipped.
    """
    for role, name in columns.items():
        if name is None:
            continue
        if name not in df.columns:
            raise ConfigurationError(
                f"{role} column '{name}' does not exist in the dataset "
                f"(columns: {', '.join(df.columns)})"
            )


def require_numeric(df: pl.DataFrame, **columns: Optional[str]) -> None:
    """Fail fast if a named column holds non-numeric values."""
    for role, name in columns.items():
        if name is None:
            continue
        dtype = df.schema[name]
        if not (dtype.is_numeric() or dtype == pl.Null):
            raise ConfigurationError(
                f"{role} column '{name}' must be numeric, got {dtype}"
            )
