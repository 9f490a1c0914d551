"""
surveysize.core.settings
========================

Validated parameters of the proportion sample-size formula.

`SampleSizeSettings` is immutable; `with_overrides()` returns a new,
re-validated instance.

Examples
--------
>>> from surveysize.core.settings import SampleSizeSettings
>>> s = SampleSizeSettings()
>>> (s.assumed_proportion, s.margin_of_error, s.on_degenerate)
(0.5, 0.05, 'raise')
>>> s.with_overrides(margin_of_error=0.03).margin_of_error
0.03
>>> SampleSizeSettings(assumed_proportion=1.0)
Traceback (most recent call last):
...
surveysize.core.errors.ConfigurationError: assumed_proportion must be in (0, 1), got 1.0
"""

from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, replace
from typing import Any, Iterable, List

from surveysize.core.errors import ConfigurationError
from surveysize.core.names import DegeneratePolicy


@dataclass(frozen=True)
class SampleSizeSettings:
    """
    Parameters shared by every confidence level of one estimation run.

    Attributes:
        assumed_proportion: Expected share p of the surveyed answer; 0.5 is the
            most conservative choice (maximizes p(1-p))
        margin_of_error: Half-width e of the confidence interval, as a fraction
        on_degenerate: "raise" aborts on a degenerate cell, "skip" drops it
            and logs a warning
    """

    assumed_proportion: float = 0.5
    margin_of_error: float = 0.05
    on_degenerate: DegeneratePolicy = "raise"

    def __post_init__(self) -> None:
        p = self.assumed_proportion
        if not isinstance(p, (int, float)) or not (0 < p < 1):
            raise ConfigurationError(f"assumed_proportion must be in (0, 1), got {p}")

        e = self.margin_of_error
        if not isinstance(e, (int, float)) or not math.isfinite(e) or e <= 0:
            raise ConfigurationError(f"margin_of_error must be positive, got {e}")

        if self.on_degenerate not in ("raise", "skip"):
            raise ConfigurationError(
                f"on_degenerate must be 'raise' or 'skip', got {self.on_degenerate!r}"
            )

    def with_overrides(self, **kwargs: Any) -> "SampleSizeSettings":
        """Return a copy with the given fields replaced (and validated)."""
        return replace(self, **kwargs)


def validate_confidence_levels(levels: Iterable[float]) -> List[float]:
    """
    Check requested confidence levels and drop repeats.

    Args:
        levels: Confidence levels as percentages, e.g. [80, 90, 95]

    Returns:
        The levels in request order, each kept once

    Examples:
        >>> validate_confidence_levels([90, 95, 90])
        [90, 95]
        >>> validate_confidence_levels([])
        Traceback (most recent call last):
        ...
        surveysize.core.errors.ConfigurationError: at least one confidence level is required
    """
    if isinstance(levels, (str, bytes)):
        raise ConfigurationError("confidence levels must be a sequence of numbers")

    unique: List[float] = []
    for level in levels:
        if isinstance(level, bool) or not isinstance(level, numbers.Real):
            raise ConfigurationError(f"confidence level must be a number, got {level!r}")
        if not (0 < level < 100):
            raise ConfigurationError(
                f"confidence level must be in (0, 100) percent, got {level}"
            )
        if level not in unique:
            unique.append(level)

    if not unique:
        raise ConfigurationError("at least one confidence level is required")
    return unique
