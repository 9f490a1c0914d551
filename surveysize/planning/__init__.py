"""
surveysize.planning
===================

The two planning steps:

- `SampleSizeEstimator` / `compute_sample_size_tables`: required sample size
  and sufficiency per (group, variable, confidence level), one table per group
- `ConfidenceRecommender` / `recommend_per_group`: the highest confidence
  level at which every variable of a group is sufficient
"""

from surveysize.planning.estimator import (
    SampleSizeEstimator,
    compute_sample_size_tables,
)
from surveysize.planning.recommender import (
    ConfidenceRecommender,
    recommend_per_group,
)

__all__ = [
    "ConfidenceRecommender",
    "SampleSizeEstimator",
    "compute_sample_size_tables",
    "recommend_per_group",
]
