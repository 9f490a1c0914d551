"""
surveysize.backends.polars.io
=============================

Read-only **sources** that load a survey dataset into polars.

- CSV file
- Parquet file

This module deliberately contains no sample-size semantics; just I/O.

Doctest (smoke):
>>> from surveysize.backends.polars.io import CsvFileSource
>>> df = CsvFileSource("survey_counts.csv").read()  # doctest: +SKIP
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

import polars as pl


class DatasetSource(Protocol):
    """A read-only source: storage -> DataFrame."""
    def read(self) -> pl.DataFrame: ...


class CsvFileSource:
    def __init__(self, path: str, schema_overrides: Optional[Dict[str, Any]] = None) -> None:
        self.path = path
        self.schema_overrides = schema_overrides
    def read(self) -> pl.DataFrame:
        return pl.read_csv(self.path, schema_overrides=self.schema_overrides)


class ParquetFileSource:
    def __init__(self, path: str) -> None:
        self.path = path
    def read(self) -> pl.DataFrame:
        return pl.read_parquet(self.path)
