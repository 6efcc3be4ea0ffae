"""Data loading components for the passenger and laureate tables."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd

from eda_lab.core.interfaces import IDataLoader
from eda_lab.core.utils import LoggerFactory
from eda_lab.data.validate import require_columns


def to_snake_case(name: str) -> str:
    """Normalize a column label, e.g. 'PassengerId' -> 'passenger_id', 'Birth Date' -> 'birth_date'."""
    s = re.sub(r"[^0-9a-zA-Z]+", "_", str(name).strip())
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", s)
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    return re.sub(r"_+", "_", s).strip("_").lower()


def clean_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of `df` with snake_case column names."""
    renamed = {col: to_snake_case(col) for col in df.columns}
    names = list(renamed.values())
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ValueError(f"Column names collide after normalization: {dupes}")
    return df.rename(columns=renamed)


def read_csv(file_path: Union[str, Path]) -> pd.DataFrame:
    """Read a CSV with normalized column names; raises if the file is missing."""
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {file_path}")
    return clean_column_names(pd.read_csv(file_path))


class TitanicDataLoader(IDataLoader):
    """Loads the Kaggle train/test CSVs and stacks them into one passenger table."""

    schema_columns = ("passenger_id", "pclass", "name", "sex")

    def __init__(self, train_file: Optional[Union[str, Path]] = None,
                 test_file: Optional[Union[str, Path]] = None,
                 target_column: str = "survived",
                 partition_column: str = "is_train"):
        self.train_file = Path(train_file) if train_file else None
        self.test_file = Path(test_file) if test_file else None
        self.target_column = target_column
        self.partition_column = partition_column
        self.logger = LoggerFactory.get_logger(__name__)

    def load(self, path: Optional[Union[str, Path]] = None) -> Union[pd.DataFrame, Tuple[pd.DataFrame, pd.DataFrame]]:
        """Load data from CSV files."""
        if path is not None:
            return read_csv(path)

        if self.train_file is None:
            raise ValueError("No training file specified")

        train_df = read_csv(self.train_file)
        self.logger.info(f"Loaded training data: {train_df.shape}")

        if self.test_file is not None:
            test_df = read_csv(self.test_file)
            self.logger.info(f"Loaded test data: {test_df.shape}")
            return train_df, test_df

        return train_df

    def load_combined(self) -> pd.DataFrame:
        """Load train and test and concatenate them, marking the partition of each row."""
        loaded = self.load()
        if not isinstance(loaded, tuple):
            raise ValueError("A test file is required to build the combined passenger table")
        for part in loaded:
            self.validate_schema(part)
        return self.combine(*loaded)

    def combine(self, train_df: pd.DataFrame, test_df: pd.DataFrame) -> pd.DataFrame:
        """Stack train over test; test rows get an unknown target."""
        if self.target_column not in train_df.columns:
            raise ValueError(f"Training data has no '{self.target_column}' column")

        train_df = train_df.copy()
        test_df = test_df.copy()
        train_df[self.partition_column] = True
        test_df[self.partition_column] = False
        if self.target_column not in test_df.columns:
            test_df[self.target_column] = pd.NA

        combined = pd.concat([train_df, test_df], ignore_index=True, sort=False)
        combined[self.target_column] = pd.to_numeric(combined[self.target_column], errors="coerce")
        self.logger.info(
            f"Combined passenger table: {combined.shape} "
            f"(train={len(train_df)}, test={len(test_df)})"
        )
        return combined

    def validate_schema(self, df: pd.DataFrame) -> bool:
        """Both partitions need the id and the columns every passenger row carries."""
        require_columns(df, self.schema_columns, "passenger file")
        return True


class LaureateDataLoader(IDataLoader):
    """Loads the Nobel laureate CSV."""

    def __init__(self, laureates_file: Optional[Union[str, Path]] = None,
                 required_columns: Optional[List[str]] = None):
        self.laureates_file = Path(laureates_file) if laureates_file else None
        self.required_columns = list(required_columns or ["category", "birth_date"])
        self.logger = LoggerFactory.get_logger(__name__)

    def load(self, path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        target = Path(path) if path is not None else self.laureates_file
        if target is None:
            raise ValueError("No laureates file specified")
        df = read_csv(target)
        self.logger.info(f"Loaded laureates: {df.shape}")
        return df

    def validate_schema(self, df: pd.DataFrame) -> bool:
        require_columns(df, self.required_columns, "laureate table")
        return True
