"""
surveysize.reporting.tables
===========================

A reporter over the per-group tables returned by `SampleSizeEstimator`:
one long table, the responses still missing per row, and the per-group
recommendations as a table.

Examples
--------
>>> from surveysize.planning.estimator import compute_sample_size_tables
>>> from surveysize.reporting.tables import SampleSizeReporter
>>> tables = compute_sample_size_tables(
...     [70, 80], {"group": ["g", "h"], "population": [100, 100], "n": [60, 70]},
...     current_sample_size_column="n")
>>> rep = SampleSizeReporter(tables, current_sample_size_column="n")
>>> rep.shortfall()["additional_needed"].to_list()
[0, 3, 0, 0]
>>> rep.recommendations().rows()
[('g', 70), ('h', 80)]
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional

import polars as pl

from surveysize.core.errors import ConfigurationError
from surveysize.core.names import (
    ADDITIONAL_NEEDED,
    RECOMMENDED_CONFIDENCE_LEVEL,
    REQUIRED_SAMPLE_SIZE,
    GroupKey,
)
from surveysize.planning.recommender import ConfidenceRecommender


@dataclass
class SampleSizeReporter:
    """
    Summary views over the per-group sample-size tables.

    Attributes:
        tables: Group value -> result table
        current_sample_size_column: Column of collected responses, if any
        group_column: Grouping column; defaults to the first column of the
            first table, which is where the estimator puts it
    """

    tables: Mapping[GroupKey, pl.DataFrame]
    current_sample_size_column: Optional[str] = None
    group_column: Optional[str] = None

    def _group_column(self) -> str:
        if self.group_column is not None:
            return self.group_column
        for table in self.tables.values():
            return table.columns[0]
        return "group"

    def combined(self) -> pl.DataFrame:
        """All group tables stacked in key order."""
        if not self.tables:
            return pl.DataFrame()
        return pl.concat(list(self.tables.values()), how="vertical_relaxed")

    def shortfall(self) -> pl.DataFrame:
        """
        Combined table plus the responses still needed per row.

        ``additional_needed`` is ``required - collected`` floored at zero.
        """
        current = self.current_sample_size_column
        if current is None:
            raise ConfigurationError(
                "shortfall needs the current sample size column of the tables"
            )
        df = self.combined()
        if df.height == 0:
            return df
        if current not in df.columns:
            raise ConfigurationError(
                f"current sample size column '{current}' is not in the result tables"
            )
        missing = (
            (pl.col(REQUIRED_SAMPLE_SIZE) - pl.col(current))
            .cast(pl.Float64)
            .clip(lower_bound=0)
            .ceil()
        )
        return df.with_columns(missing.cast(pl.Int64).alias(ADDITIONAL_NEEDED))

    def recommendations(
        self, recommender: Optional[ConfidenceRecommender] = None
    ) -> pl.DataFrame:
        """Per-group recommendation as a two-column table."""
        recommender = recommender or ConfidenceRecommender()
        levels = recommender.recommend(self.tables)
        return pl.DataFrame(
            {
                self._group_column(): list(levels.keys()),
                RECOMMENDED_CONFIDENCE_LEVEL: list(levels.values()),
            }
        )
