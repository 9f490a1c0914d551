"""
surveysize.core
===============

Shared infrastructure: typed names, the error taxonomy and the settings
object that every planning component is configured with.
"""

from surveysize.core.errors import (
    ComputationError,
    ConfigurationError,
    SurveySizeError,
)
from surveysize.core.names import Sufficiency
from surveysize.core.settings import SampleSizeSettings

__all__ = [
    "ComputationError",
    "ConfigurationError",
    "SampleSizeSettings",
    "Sufficiency",
    "SurveySizeError",
]
