"""
surveysize.backends
===================

Table backends. Planning runs on polars; `backends.polars` converts the
caller's table (polars, pandas, ibis or a plain column mapping) and reads
datasets from files or databases.
"""
