"""
surveysize.core.names
=====================

Typed names shared across the package.

- `Sufficiency`: an Enum for the tri-state "enough responses?" flag.
- `GroupKey`: the value of the grouping column that keys each result table.
- Column names added to the caller's columns in every result table.

Examples
--------
>>> from surveysize.core.names import Sufficiency, CONFIDENCE_LEVEL
>>> Sufficiency.YES.value
'Yes'
>>> CONFIDENCE_LEVEL
'confidence_level'
"""

from __future__ import annotations
from enum import Enum
from typing import Literal, Union

# Group values come straight from the caller's table.
GroupKey = Union[str, int, float, bool]

# Result columns appended after the caller's group/variable/count columns.
CONFIDENCE_LEVEL = "confidence_level"
REQUIRED_SAMPLE_SIZE = "required_sample_size"
SUFFICIENT = "sufficient"
RECOMMENDED_CONFIDENCE_LEVEL = "recommended_confidence_level"
ADDITIONAL_NEEDED = "additional_needed"

DegeneratePolicy = Literal["raise", "skip"]


class Sufficiency(str, Enum):
    """Whether the collected responses meet the required sample size.

    - YES: current sample size >= required sample size
    - NO: current sample size < required sample size
    - UNKNOWN: no current sample size was supplied
    """

    YES = "Yes"
    NO = "No"
    UNKNOWN = "Unknown"
