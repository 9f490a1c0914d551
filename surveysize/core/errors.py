"""
surveysize.core.errors
======================

Exceptions raised by the planning components.

- `ConfigurationError`: the call itself is wrong (missing columns, parameters
  out of range, unsupported table type). Raised before anything is computed.
- `ComputationError`: the data makes the sample-size formula degenerate
  (zero or negative population, negative response counts).

Both derive from `SurveySizeError` and from the matching builtin
(`ValueError` / `ArithmeticError`) so callers can catch either.

Examples
--------
>>> from surveysize.core.errors import ComputationError
>>> err = ComputationError("population is zero", cells=[("Admitted", "Male")])
>>> err.cells
[('Admitted', 'Male')]
>>> isinstance(err, ArithmeticError)
True
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional, Tuple


class SurveySizeError(Exception):
    """Base class for all surveysize errors."""


class ConfigurationError(SurveySizeError, ValueError):
    """Invalid columns or parameters passed to a planning component."""


class ComputationError(SurveySizeError, ArithmeticError):
    """Degenerate arithmetic for one or more aggregated cells.

    Attributes:
        cells: Keys of the offending cells, as (group,) or (group, variable)
    """

    def __init__(
        self, message: str, cells: Optional[Iterable[Tuple[Any, ...]]] = None
    ) -> None:
        super().__init__(message)
        self.cells: List[Tuple[Any, ...]] = list(cells or [])
