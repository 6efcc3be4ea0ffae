"""Data loading and validation components."""

from .loader import LaureateDataLoader, TitanicDataLoader, clean_column_names, read_csv, to_snake_case
from .validate import REQUIRED_FEATURE_COLUMNS, PassengerTableValidator, require_columns

__all__ = [
    "TitanicDataLoader",
    "LaureateDataLoader",
    "clean_column_names",
    "read_csv",
    "to_snake_case",
    "PassengerTableValidator",
    "REQUIRED_FEATURE_COLUMNS",
    "require_columns",
]
