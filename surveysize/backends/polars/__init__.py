from surveysize.backends.polars.frames import require_columns, to_polars_frame
from surveysize.backends.polars.io import (
    CsvFileSource,
    DatasetSource,
    ParquetFileSource,
)

__all__ = [
    "CsvFileSource",
    "DatasetSource",
    "ParquetFileSource",
    "require_columns",
    "to_polars_frame",
]
