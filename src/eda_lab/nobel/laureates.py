"""Age of Nobel laureates at the time of their award."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from eda_lab.core.utils import LoggerFactory
from eda_lab.data.loader import LaureateDataLoader
from eda_lab.data.validate import require_columns

logger = LoggerFactory.get_logger(__name__)


def load_laureates(path: Union[str, Path], required_columns: Optional[List[str]] = None) -> pd.DataFrame:
    """Read the laureate CSV with snake_case column names; raises if required columns are absent."""
    loader = LaureateDataLoader(path, required_columns=required_columns)
    laureates = loader.load()
    loader.validate_schema(laureates)
    return laureates


def birth_years(birth_dates: pd.Series) -> pd.Series:
    """
    Year of birth from a date column.

    Full dates are parsed; partial ones such as '1943-00-00' that do not parse
    still give their leading four-digit year.
    """
    parsed = pd.to_datetime(birth_dates, errors="coerce").dt.year
    leading = pd.to_numeric(
        birth_dates.astype("string").str.extract(r"^\s*(\d{4})", expand=False), errors="coerce"
    )
    return parsed.fillna(leading).astype("float64")


def compute_award_age(
    laureates: pd.DataFrame,
    year_col: str = "prize_year",
    birth_date_col: str = "birth_date",
    type_col: Optional[str] = "laureate_type",
    individual_label: str = "Individual",
) -> pd.DataFrame:
    """Add `age` = prize year - birth year; organizations and unknown birth dates are dropped."""
    require_columns(laureates, [year_col, birth_date_col], "laureate table")
    df = laureates.copy()

    if type_col and type_col in df.columns:
        is_person = df[type_col].astype("string").eq(individual_label).fillna(False)
        n_orgs = int((~is_person).sum())
        if n_orgs:
            logger.info(f"Dropping {n_orgs} non-individual laureates")
        df = df.loc[is_person]

    years = pd.to_numeric(df[year_col], errors="coerce")
    df["age"] = years - birth_years(df[birth_date_col])

    unknown = df["age"].isna()
    if unknown.any():
        logger.info(f"Dropping {int(unknown.sum())} laureates without a usable birth date or prize year")
    df = df.loc[~unknown].copy()
    df["age"] = df["age"].astype(int)

    if df.empty:
        logger.warning("No laureates with a computable award age")
    else:
        logger.info(f"Computed award age for {len(df)} laureates (range {df['age'].min()}-{df['age'].max()})")
    return df.reset_index(drop=True)


def summarize_ages(df: pd.DataFrame, category_col: str = "category", age_col: str = "age") -> pd.DataFrame:
    """Count, mean, median, min and max age per category, youngest median first."""
    require_columns(df, [category_col, age_col], "laureate ages")
    summary = (
        df.groupby(category_col)[age_col]
        .agg(count="count", mean="mean", median="median", min="min", max="max")
        .sort_values(["median", "mean"])
    )
    summary["mean"] = summary["mean"].round(1)
    return summary.reset_index()
