"""
surveysize.stats.common.finite_population
=========================================

Sample size for estimating a proportion, with finite-population correction.

For critical value z, assumed proportion p and margin of error e, the sample
size for an unbounded population is

    ss = z^2 p (1 - p) / e^2

and for a population of N it shrinks to

    n = ss / (ss / N + 1)

which is always below ss and tends to ss as N grows. The required sample
size is n rounded up.

Examples
--------
>>> import polars as pl
>>> from surveysize.stats.common.normal import z_value
>>> ss = proportion_sample_size(z_value(80))
>>> df = pl.DataFrame({"N": [100]})
>>> df.select(required_sample_size_expr(ss, "N")).item()
63
"""

from __future__ import annotations

import polars as pl


def proportion_sample_size(
    z: float, assumed_proportion: float = 0.5, margin_of_error: float = 0.05
) -> float:
    """
    Unbounded-population sample size for a proportion estimate.

    Examples:
        >>> round(proportion_sample_size(1.959964), 1)
        384.1
    """
    return z**2 * assumed_proportion * (1 - assumed_proportion) / margin_of_error**2


def finite_population_correction_expr(sample_size: float, population_column: str) -> pl.Expr:
    """
    Shrink an unbounded-population sample size to each row's population N.

    Args:
        sample_size: Unbounded-population sample size ss (> 0)
        population_column: Column holding N; rows must have N > 0, callers
            drop the others beforehand

    Returns:
        Float expression ss / (ss / N + 1), not yet rounded
    """
    ss = pl.lit(float(sample_size))
    return ss / (ss / pl.col(population_column).cast(pl.Float64) + 1)


def required_sample_size_expr(sample_size: float, population_column: str) -> pl.Expr:
    """Corrected sample size rounded up, as an Int64 expression."""
    return (
        finite_population_correction_expr(sample_size, population_column)
        .ceil()
        .cast(pl.Int64)
    )
