"""
surveysize.datasets
===================

Example data for trying the planning components.

- `ucb_admissions()`: the 1973 UC Berkeley graduate admissions counts by
  admission decision, gender and department (24 cells, 4526 applicants).
- `simulate_surveys()`: pretend a fraction of every cell has already been
  surveyed, optionally pre-summing to the grouping of interest.

Examples
--------
>>> from surveysize.datasets import ucb_admissions, simulate_surveys
>>> df = ucb_admissions()
>>> df.shape, df["Freq"].sum()
((24, 4), 4526)
>>> simulate_surveys(df, by=["Admit", "Gender"]).sort("Admit", "Gender").rows()[0]
('Admitted', 'Female', 557, 306)
"""

from __future__ import annotations
from typing import List, Optional

import numpy as np
import polars as pl

from surveysize.backends.polars.frames import require_columns, require_numeric
from surveysize.core.errors import ConfigurationError

_DEPARTMENTS = ["A", "B", "C", "D", "E", "F"]

# (Admitted Male, Rejected Male, Admitted Female, Rejected Female) per department
_UCB_COUNTS = [
    (512, 313, 89, 19),
    (353, 207, 17, 8),
    (120, 205, 202, 391),
    (138, 279, 131, 244),
    (53, 138, 94, 299),
    (22, 351, 24, 317),
]


def ucb_admissions() -> pl.DataFrame:
    """Return the UC Berkeley admissions table with columns Admit, Gender, Dept, Freq."""
    rows = []
    for dept, counts in zip(_DEPARTMENTS, _UCB_COUNTS):
        cells = [
            ("Admitted", "Male"),
            ("Rejected", "Male"),
            ("Admitted", "Female"),
            ("Rejected", "Female"),
        ]
        for (admit, gender), freq in zip(cells, counts):
            rows.append((admit, gender, dept, freq))
    return pl.DataFrame(
        rows,
        schema={"Admit": pl.Utf8, "Gender": pl.Utf8, "Dept": pl.Utf8, "Freq": pl.Int64},
        orient="row",
    )


def simulate_surveys(
    df: pl.DataFrame,
    fraction: float = 0.55,
    frequency_column: str = "Freq",
    survey_column: str = "surveys",
    by: Optional[List[str]] = None,
) -> pl.DataFrame:
    """
    Add a column of collected surveys equal to ``round(frequency * fraction)``.

    Rounding is half-to-even. When `by` is given, frequencies and surveys are
    summed per combination of those columns.
    """
    if not (0 <= fraction <= 1):
        raise ConfigurationError(f"fraction must be in [0, 1], got {fraction}")
    require_columns(df, frequency=frequency_column)
    require_numeric(df, frequency=frequency_column)

    surveyed = np.round(df.get_column(frequency_column).to_numpy() * fraction)
    out = df.with_columns(pl.Series(survey_column, surveyed).cast(pl.Int64))
    if by:
        require_columns(out, **{f"by[{i}]": c for i, c in enumerate(by)})
        out = (
            out.group_by(by, maintain_order=True)
            .agg(pl.col(frequency_column).sum(), pl.col(survey_column).sum())
        )
    return out
