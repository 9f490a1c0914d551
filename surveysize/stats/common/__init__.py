"""
surveysize.stats.common
=======================

Common statistical methods.

Scalar formulas over confidence levels and proportions, plus the polars
expressions that apply the finite-population correction to a column of
population sizes.
"""

from surveysize.stats.common.finite_population import (
    finite_population_correction_expr,
    proportion_sample_size,
    required_sample_size_expr,
)
from surveysize.stats.common.normal import z_value

__all__ = [
    "finite_population_correction_expr",
    "proportion_sample_size",
    "required_sample_size_expr",
    "z_value",
]
