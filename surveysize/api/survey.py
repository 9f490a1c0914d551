"""
surveysize.api.survey
=====================

Survey planning facade in the analyst's vocabulary.

Examples
--------
>>> from surveysize.api.survey import survey_readiness
>>> from surveysize.datasets import ucb_admissions, simulate_surveys
>>> df = simulate_surveys(ucb_admissions(), fraction=0.55, by=["Admit", "Gender"])
>>> readiness = survey_readiness(
...     [80, 85, 90], df, group="Admit", variable="Gender",
...     population="Freq", collected="surveys")
>>> readiness.recommended
{'Admitted': 90, 'Rejected': 90}
>>> readiness.is_ready(90)
True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import polars as pl

from surveysize.core.names import GroupKey
from surveysize.core.settings import SampleSizeSettings
from surveysize.planning.estimator import SampleSizeEstimator
from surveysize.planning.recommender import ConfidenceRecommender
from surveysize.reporting.tables import SampleSizeReporter


def sample_size_table(
    confidence_levels: Sequence[float],
    dataset: Any,
    group: str = "group",
    variable: Optional[str] = None,
    population: str = "population",
    collected: Optional[str] = None,
    expected_proportion: float = 0.5,
    margin_of_error: float = 0.05,
) -> Dict[GroupKey, pl.DataFrame]:
    """
    How many responses each group and variable needs, per confidence level.

    Parameters
    ----------
    confidence_levels : sequence of float
        Confidence levels in percent, e.g. [90, 95, 99]
    dataset : table
        polars/pandas DataFrame, ibis Table or mapping of columns
    group : str, default="group"
        Column defining the main groupings
    variable : str, optional
        Column defining the variables within each grouping
    population : str, default="population"
        Column with the total population of each row
    collected : str, optional
        Column with the responses collected so far
    expected_proportion : float, default=0.5
        Expected share of the answer being estimated; 0.5 is the safe choice
    margin_of_error : float, default=0.05
        Acceptable half-width of the confidence interval

    Returns
    -------
    dict
        Group value -> table of required sample sizes

    Examples
    --------
    >>> tables = sample_size_table([95], {"group": ["all"], "population": [1000]})
    >>> tables["all"]["required_sample_size"].to_list()
    [278]
    >>> tables["all"]["sufficient"].to_list()
    ['Unknown']
    """
    settings = SampleSizeSettings(
        assumed_proportion=expected_proportion, margin_of_error=margin_of_error
    )
    return SampleSizeEstimator(settings=settings).compute(
        confidence_levels,
        dataset,
        group_column=group,
        variable_column=variable,
        population_column=population,
        current_sample_size_column=collected,
    )


def recommended_confidence_level_per_group(
    sample_size_results: Dict[GroupKey, Any],
) -> Dict[GroupKey, Optional[float]]:
    """
    Highest confidence level achieved by all variables within each group.

    A group with at least one variable short of its required sample size at
    a level has not achieved that level. Groups achieving none map to None.
    """
    return ConfidenceRecommender().recommend(sample_size_results)


@dataclass
class SurveyReadiness:
    """
    Sample-size tables and recommendations of one survey.

    Attributes
    ----------
    tables : Dict[GroupKey, pl.DataFrame]
        Per-group sample-size tables
    recommended : Dict[GroupKey, Optional[float]]
        Highest commonly achieved confidence level per group, or None
    collected : str, optional
        Column with the responses collected so far
    """

    tables: Dict[GroupKey, pl.DataFrame]
    recommended: Dict[GroupKey, Optional[float]]
    collected: Optional[str] = None

    def is_ready(self, confidence_level: float) -> bool:
        """True if every group supports at least `confidence_level`."""
        return bool(self.recommended) and all(
            level is not None and level >= confidence_level
            for level in self.recommended.values()
        )

    def reporter(self) -> SampleSizeReporter:
        """Summary views over `tables`, with shortfall against `collected`."""
        return SampleSizeReporter(self.tables, current_sample_size_column=self.collected)


def survey_readiness(
    confidence_levels: Sequence[float],
    dataset: Any,
    group: str = "group",
    variable: Optional[str] = None,
    population: str = "population",
    collected: Optional[str] = None,
    expected_proportion: float = 0.5,
    margin_of_error: float = 0.05,
) -> SurveyReadiness:
    """Run `sample_size_table` and the per-group recommendation in one go."""
    tables = sample_size_table(
        confidence_levels,
        dataset,
        group=group,
        variable=variable,
        population=population,
        collected=collected,
        expected_proportion=expected_proportion,
        margin_of_error=margin_of_error,
    )
    return SurveyReadiness(
        tables=tables,
        recommended=recommended_confidence_level_per_group(tables),
        collected=collected,
    )
