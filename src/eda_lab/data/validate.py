"""Precondition checks for the passenger table."""

from __future__ import annotations

from typing import Iterable, Optional, Set

import pandas as pd

from eda_lab.core.exceptions import MissingColumnsError
from eda_lab.core.interfaces import IDataValidator
from eda_lab.core.utils import LoggerFactory

# Columns the feature pipeline reads before any derivation
REQUIRED_FEATURE_COLUMNS: Set[str] = {
    "name", "age", "sib_sp", "parch", "fare", "embarked", "pclass", "sex",
}


def require_columns(df: pd.DataFrame, required: Iterable[str], where: str = "input table") -> None:
    """Raise MissingColumnsError unless every column in `required` is present."""
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"Expected a pandas DataFrame, got {type(df).__name__}")
    missing = set(required) - set(df.columns)
    if missing:
        raise MissingColumnsError(missing, where)


class PassengerTableValidator(IDataValidator):
    """Validates the combined passenger table before feature derivation."""

    def __init__(self, required_columns: Optional[Iterable[str]] = None,
                 id_column: str = "passenger_id",
                 target_column: str = "survived",
                 partition_column: str = "is_train"):
        self.logger = LoggerFactory.get_logger(__name__)
        self.required_columns = set(required_columns or REQUIRED_FEATURE_COLUMNS)
        self.id_column = id_column
        self.target_column = target_column
        self.partition_column = partition_column

    def validate(self, df: pd.DataFrame) -> bool:
        """Check required columns; warn about softer quality issues."""
        require_columns(df, self.required_columns, "passenger table")

        if self.id_column in df.columns and df[self.id_column].duplicated().any():
            n_dup = int(df[self.id_column].duplicated().sum())
            self.logger.warning(f"Found {n_dup} duplicated {self.id_column} values")

        if self.target_column in df.columns and self.partition_column in df.columns:
            train_targets = df.loc[df[self.partition_column].astype(bool), self.target_column]
            bad = set(train_targets.dropna().unique()) - {0, 1}
            if bad:
                raise ValueError(f"Target column contains non-binary values: {sorted(bad)}")
            if train_targets.isna().any():
                self.logger.warning(f"{int(train_targets.isna().sum())} training rows have no target")

        missing_counts = df[sorted(self.required_columns)].isna().sum()
        missing_counts = missing_counts[missing_counts > 0]
        if not missing_counts.empty:
            self.logger.info(f"Missing values before derivation: {missing_counts.to_dict()}")

        return True
