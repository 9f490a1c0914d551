"""
Statistical building blocks for survey sample-size planning.

`surveysize.stats.common` holds the scheme-agnostic formulas (z-values,
proportion sample sizes, finite-population correction). The planning
components in `surveysize.planning` apply them to aggregated tables.

Example:
--------
>>> from surveysize.stats.common.normal import z_value
>>> round(z_value(95), 2)
1.96
"""
