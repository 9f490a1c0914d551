"""
surveysize.stats.common.normal
==============================

Two-sided critical values of the standard normal distribution.

A confidence level c (in percent) leaves (100 - c) / 2 percent in each tail,
so the critical value is the quantile at 0.5 + c / 200.
"""

from __future__ import annotations

from scipy.stats import norm

from surveysize.core.errors import ConfigurationError


def z_value(confidence_level: float) -> float:
    """
    Two-sided z critical value for a confidence level given in percent.

    Args:
        confidence_level: Confidence level in percent, 0 < c < 100

    Returns:
        z such that P(-z <= Z <= z) = c / 100

    Examples:
        >>> round(z_value(90), 3)
        1.645
        >>> round(z_value(99), 3)
        2.576
    """
    if not (0 < confidence_level < 100):
        raise ConfigurationError(
            f"confidence level must be in (0, 100) percent, got {confidence_level}"
        )
    return float(norm.ppf(0.5 + confidence_level / 200))
