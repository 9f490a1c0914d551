"""
surveysize.planning.recommender
===============================

Highest confidence level reached by every variable of a grouping.

For each group table the distinct confidence levels are scanned from highest
to lowest; the first level at which all rows are ``sufficient == "Yes"`` is
the recommendation. If one variable falls short at a level, the whole
grouping falls short there. "Unknown" never counts as sufficient, so tables
built without collected responses yield no recommendation.

Examples
--------
>>> import polars as pl
>>> from surveysize.planning.recommender import recommend_per_group
>>> table = pl.DataFrame({
...     "group": ["g", "g", "g", "g"],
...     "variable": ["a", "b", "a", "b"],
...     "confidence_level": [80, 80, 90, 90],
...     "sufficient": ["Yes", "Yes", "Yes", "No"],
... })
>>> recommend_per_group({"g": table, "empty": table.clear()})
{'g': 80, 'empty': None}
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import polars as pl

from surveysize.backends.polars.frames import require_columns, to_polars_frame
from surveysize.core.names import CONFIDENCE_LEVEL, SUFFICIENT, GroupKey, Sufficiency

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class ConfidenceRecommender:
    """
    Recommend one confidence level per grouping.

    Attributes:
        confidence_column: Column holding the confidence level of each row
        sufficient_column: Column holding the "Yes"/"No"/"Unknown" flag
    """

    confidence_column: str = CONFIDENCE_LEVEL
    sufficient_column: str = SUFFICIENT

    def recommend(
        self, group_tables: Mapping[GroupKey, Any]
    ) -> Dict[GroupKey, Optional[float]]:
        """
        Return the highest commonly achieved level per group, or None.

        Parameters
        ----------
        group_tables : mapping
            Group value -> result table, as built by `SampleSizeEstimator`

        Returns
        -------
        dict
            Group value -> confidence level, or None if no level was achieved
            by all variables of that group
        """
        recommendations: Dict[GroupKey, Optional[float]] = {}
        for group, table in group_tables.items():
            level = self.recommend_group(to_polars_frame(table))
            if level is None:
                logger.info(
                    "For grouping %s no common confidence level was achieved by all subgroups.",
                    group,
                )
            else:
                logger.info(
                    "For grouping %s all subgroups achieved a confidence level of %s%%.",
                    group,
                    level,
                )
            recommendations[group] = level
        return recommendations

    def recommend_group(self, table: pl.DataFrame) -> Optional[float]:
        """Scan one group's table from the highest level down."""
        if table.height == 0:
            return None
        require_columns(
            table,
            confidence_level=self.confidence_column,
            sufficient=self.sufficient_column,
        )

        levels = table.get_column(self.confidence_column).unique().drop_nulls()
        for level in levels.sort(descending=True).to_list():
            subset = table.filter(pl.col(self.confidence_column) == level)
            achieved = subset.get_column(self.sufficient_column) == Sufficiency.YES.value
            if achieved.fill_null(False).all():
                return level
        return None


def recommend_per_group(
    group_tables: Mapping[GroupKey, Any],
) -> Dict[GroupKey, Optional[float]]:
    """Functional form of `ConfidenceRecommender.recommend` with default columns."""
    return ConfidenceRecommender().recommend(group_tables)
