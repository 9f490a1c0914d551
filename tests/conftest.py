import polars as pl
import pytest

from surveysize.datasets import simulate_surveys, ucb_admissions


@pytest.fixture
def admissions() -> pl.DataFrame:
    """UCB admissions pre-summed by Admit x Gender with 55% surveyed."""
    return simulate_surveys(ucb_admissions(), fraction=0.55, by=["Admit", "Gender"])


@pytest.fixture
def single_cell() -> pl.DataFrame:
    return pl.DataFrame({"group": ["g"], "population": [100], "collected": [60]})


@pytest.fixture
def two_variables() -> pl.DataFrame:
    """One group whose 'small' variable is far short of the 'large' one."""
    return pl.DataFrame(
        {
            "group": ["g", "g"],
            "variable": ["large", "small"],
            "population": [10_000, 10_000],
            "collected": [5_000, 100],
        }
    )
