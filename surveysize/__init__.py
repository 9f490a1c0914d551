"""
surveysize: required survey sample sizes per grouping, and the confidence
level each grouping can support.

Analysts often hold survey responses that were already collected, segmented
by categorical attributes (for example admission decision x gender). Before
presenting a finding at, say, 90% confidence they need to know whether every
segment of a grouping has enough responses. surveysize answers that in two
steps:

1. `planning.estimator` aggregates the caller's table per (group, variable)
   and computes, for each requested confidence level, the finite-population
   corrected sample size of a proportion estimate and whether the collected
   responses meet it. The result is one table per group value.
2. `planning.recommender` scans each group's table from the highest level
   down and reports the first level at which *every* variable is sufficient.

`api` offers the same in the analyst's vocabulary, `reporting` turns the
per-group tables into summary views, and `backends.polars` accepts polars,
pandas and ibis tables alike.

Example
-------
>>> import surveysize
>>> assert hasattr(surveysize, "planning")
>>> assert hasattr(surveysize, "stats")
"""

import logging

from surveysize.__version__ import __version__
from surveysize import api, backends, core, planning, reporting, stats

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "api",
    "backends",
    "core",
    "planning",
    "reporting",
    "stats",
]
