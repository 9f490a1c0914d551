"""
surveysize.planning.estimator
=============================

Required sample sizes per (group, variable) for a list of confidence levels.

The caller's table is aggregated once per (group[, variable]), summing the
population and, when given, the responses already collected. For every
requested confidence level c each aggregated cell gets

    z        = Phi^-1(0.5 + c / 200)
    ss       = z^2 p (1 - p) / e^2
    required = ceil(ss / (ss / N + 1))
    sufficient = "Yes" if collected >= required else "No"   ("Unknown" if not given)

and the records are split into one table per group value.

Examples
--------
>>> import polars as pl
>>> from surveysize.planning.estimator import compute_sample_size_tables
>>> df = pl.DataFrame({
...     "Admit": ["Admitted", "Admitted", "Rejected", "Rejected"],
...     "Gender": ["Male", "Female", "Male", "Female"],
...     "Freq": [1198, 557, 1493, 1278],
...     "surveys": [659, 306, 821, 703],
... })
>>> tables = compute_sample_size_tables(
...     [80, 90], df, group_column="Admit", variable_column="Gender",
...     population_column="Freq", current_sample_size_column="surveys")
>>> sorted(tables)
['Admitted', 'Rejected']
>>> tables["Admitted"].columns
['Admit', 'Gender', 'Freq', 'surveys', 'confidence_level', 'required_sample_size', 'sufficient']
>>> tables["Admitted"].height
4
"""

from __future__ import annotations
import logging
import numbers
import operator
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Dict, List, Optional, Sequence

import polars as pl

from surveysize.backends.polars.frames import (
    require_columns,
    require_numeric,
    to_polars_frame,
)
from surveysize.core.errors import ComputationError, ConfigurationError
from surveysize.core.names import (
    CONFIDENCE_LEVEL,
    REQUIRED_SAMPLE_SIZE,
    SUFFICIENT,
    GroupKey,
    Sufficiency,
)
from surveysize.core.settings import SampleSizeSettings, validate_confidence_levels
from surveysize.stats.common.finite_population import (
    proportion_sample_size,
    required_sample_size_expr,
)
from surveysize.stats.common.normal import z_value

logger = logging.getLogger(__name__)

_INVALID = "__invalid_counts"


@dataclass(kw_only=True)
class SampleSizeEstimator:
    """
    Build per-group sample-size tables from a survey frame.

    Attributes:
        settings: Assumed proportion, margin of error and the policy for
            degenerate cells (zero population or negative counts)
    """

    settings: SampleSizeSettings = field(default_factory=SampleSizeSettings)

    def compute(
        self,
        target_confidence_levels: Sequence[float],
        data: Any,
        group_column: str = "group",
        variable_column: Optional[str] = None,
        population_column: str = "population",
        current_sample_size_column: Optional[str] = None,
    ) -> Dict[GroupKey, pl.DataFrame]:
        """
        Compute required sample sizes for every (group, variable, level).

        Parameters
        ----------
        target_confidence_levels : sequence of float
            Confidence levels in percent, e.g. [80, 85, 90]
        data : table
            polars/pandas DataFrame, ibis Table or mapping of columns
        group_column : str
            Column defining the groupings; one result table per value
        variable_column : str, optional
            Column defining the variables within each grouping
        population_column : str
            Column holding the population size of each row
        current_sample_size_column : str, optional
            Column holding the responses already collected for each row

        Returns
        -------
        dict
            Group value -> table with the caller's key and count columns plus
            ``confidence_level``, ``required_sample_size`` and ``sufficient``

        Raises
        ------
        ConfigurationError
            Missing or non-numeric columns, invalid confidence levels
        ComputationError
            A cell with zero population or negative counts, when the
            settings' ``on_degenerate`` policy is "raise"
        """
        levels = validate_confidence_levels(target_confidence_levels)
        df = to_polars_frame(data)

        if (
            current_sample_size_column is not None
            and current_sample_size_column not in df.columns
        ):
            raise ConfigurationError(
                f"The specified current sample size column "
                f"'{current_sample_size_column}' does not exist in the dataset."
            )
        require_columns(
            df,
            group=group_column,
            variable=variable_column,
            population=population_column,
        )
        require_numeric(
            df,
            population=population_column,
            current_sample_size=current_sample_size_column,
        )

        keys = [group_column] + ([variable_column] if variable_column else [])
        counted = [population_column, current_sample_size_column]
        if len(set(keys)) != len(keys) or population_column == current_sample_size_column or (
            set(keys) & set(counted)
        ):
            raise ConfigurationError(
                "group, variable, population and current sample size must be "
                "distinct columns"
            )
        cells = self.aggregate(df, keys, population_column, current_sample_size_column)
        cells = self._drop_degenerate(cells, keys, population_column)
        if cells.height == 0:
            logger.warning("No cells left to compute sample sizes for")
            return {}

        level_dtype = (
            pl.Int64
            if all(isinstance(level, numbers.Integral) for level in levels)
            else pl.Float64
        )
        records = pl.concat(
            [
                self._records_at_level(
                    cells, level, level_dtype, population_column, current_sample_size_column
                )
                for level in levels
            ],
            how="vertical_relaxed",
        )
        return _partition(records, group_column)

    def aggregate(
        self,
        df: pl.DataFrame,
        keys: List[str],
        population_column: str,
        current_sample_size_column: Optional[str] = None,
    ) -> pl.DataFrame:
        """
        Sum population (and collected responses) per key combination.

        Rows with a null key are dropped. The result is sorted by the keys and
        carries a helper flag marking cells that contained negative or NaN
        counts.
        """
        null_key = pl.any_horizontal([pl.col(k).is_null() for k in keys])
        n_null = df.filter(null_key).height
        if n_null:
            logger.warning("Dropping %d row(s) with a null %s value", n_null, " or ".join(keys))
            df = df.filter(~null_key)

        value_columns = [population_column]
        if current_sample_size_column is not None:
            value_columns.append(current_sample_size_column)

        invalid = reduce(
            operator.or_,
            [
                (pl.col(c) < 0).any() | pl.col(c).cast(pl.Float64).is_nan().any()
                for c in value_columns
            ],
        )
        cells = (
            df.group_by(keys)
            .agg([pl.col(c).sum() for c in value_columns] + [invalid.alias(_INVALID)])
            .sort(keys)
        )
        logger.debug("Aggregated %d row(s) into %d cell(s) by %s", df.height, cells.height, keys)
        return cells

    def _drop_degenerate(
        self, cells: pl.DataFrame, keys: List[str], population_column: str
    ) -> pl.DataFrame:
        degenerate = pl.col(_INVALID) | ~(pl.col(population_column).fill_null(0) > 0)
        bad = cells.filter(degenerate)
        if bad.height:
            bad_keys = list(bad.select(keys).iter_rows())
            message = (
                f"Cannot compute a sample size for {bad.height} cell(s) with a zero "
                f"or negative population, or negative counts: {bad_keys}"
            )
            if self.settings.on_degenerate == "raise":
                raise ComputationError(message, cells=bad_keys)
            logger.warning("Skipping degenerate cells. %s", message)
            cells = cells.filter(~degenerate)
        return cells.drop(_INVALID)

    def _records_at_level(
        self,
        cells: pl.DataFrame,
        level: float,
        level_dtype: Any,
        population_column: str,
        current_sample_size_column: Optional[str],
    ) -> pl.DataFrame:
        z = z_value(level)
        ss = proportion_sample_size(
            z, self.settings.assumed_proportion, self.settings.margin_of_error
        )
        logger.debug("Confidence level %s%%: z=%.4f, unbounded sample size=%.2f", level, z, ss)

        out = cells.with_columns(
            pl.lit(level, dtype=level_dtype).alias(CONFIDENCE_LEVEL),
            required_sample_size_expr(ss, population_column).alias(REQUIRED_SAMPLE_SIZE),
        )

        if current_sample_size_column is not None:
            sufficient = (
                pl.when(pl.col(current_sample_size_column) >= pl.col(REQUIRED_SAMPLE_SIZE))
                .then(pl.lit(Sufficiency.YES.value))
                .otherwise(pl.lit(Sufficiency.NO.value))
            )
        else:
            sufficient = pl.lit(Sufficiency.UNKNOWN.value)
        return out.with_columns(sufficient.alias(SUFFICIENT))


def _partition(records: pl.DataFrame, group_column: str) -> Dict[GroupKey, pl.DataFrame]:
    """Split records into one table per group value, in first-seen order."""
    tables: Dict[GroupKey, pl.DataFrame] = {}
    for key in records.get_column(group_column).unique(maintain_order=True).to_list():
        tables[key] = records.filter(pl.col(group_column) == key)
    return tables


def compute_sample_size_tables(
    target_confidence_levels: Sequence[float],
    data: Any,
    group_column: str = "group",
    variable_column: Optional[str] = None,
    population_column: str = "population",
    current_sample_size_column: Optional[str] = None,
    assumed_proportion: float = 0.5,
    margin_of_error: float = 0.05,
) -> Dict[GroupKey, pl.DataFrame]:
    """
    Functional form of `SampleSizeEstimator.compute`.

    Examples:
        >>> tables = compute_sample_size_tables(
        ...     [70, 80], {"group": ["g"], "population": [100], "n": [60]},
        ...     current_sample_size_column="n")
        >>> tables["g"].select("confidence_level", "required_sample_size", "sufficient").rows()
        [(70, 52, 'Yes'), (80, 63, 'No')]
    """
    settings = SampleSizeSettings(
        assumed_proportion=assumed_proportion, margin_of_error=margin_of_error
    )
    return SampleSizeEstimator(settings=settings).compute(
        target_confidence_levels,
        data,
        group_column=group_column,
        variable_column=variable_column,
        population_column=population_column,
        current_sample_size_column=current_sample_size_column,
    )
