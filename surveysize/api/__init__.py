"""
surveysize.api - User-Friendly Facade
=====================================

Off-the-shelf entry points named after what an analyst wants to know:
"how many responses do I need?" and "what confidence can I claim?".
In terms of the design patterns, this is the facade pattern.

Examples
--------
>>> from surveysize.api.survey import sample_size_table, recommended_confidence_level_per_group
>>> from surveysize.api.survey import survey_readiness

Unified Interface
-----------------
All functionality is consolidated in `surveysize.api.survey`:
- `sample_size_table()`: required sample sizes per group and confidence level
- `recommended_confidence_level_per_group()`: highest level met by all variables
- `survey_readiness()`: both steps at once, returned as a `SurveyReadiness`

Architecture
------------
This facade delegates to the underlying components:
- surveysize.planning: estimator and recommender
- surveysize.reporting: summary tables
- surveysize.backends: table conversion and dataset sources
"""

from surveysize.api.survey import (
    SurveyReadiness,
    recommended_confidence_level_per_group,
    sample_size_table,
    survey_readiness,
)

__all__ = [
    "SurveyReadiness",
    "recommended_confidence_level_per_group",
    "sample_size_table",
    "survey_readiness",
]
