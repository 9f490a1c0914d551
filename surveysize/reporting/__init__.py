"""
surveysize.reporting
====================

Read-only views over the per-group sample-size tables.
"""

from surveysize.reporting.tables import SampleSizeReporter

__all__ = ["SampleSizeReporter"]
