from __future__ import annotations

import re
from typing import Dict, List, Optional

import pandas as pd

from eda_lab.features.transforms.base import BaseTransform

# First alphabetic run that ends in a period, e.g. "Braund, Mr. Owen" -> "Mr."
TITLE_PATTERN = r"([a-z]+)\."


class TitleTransform(BaseTransform):
    """
    Extract the honorific from the passenger name.

    'Braund, Mr. Owen Harris' -> 'Mr'. Names without a `<word>.` token get a
    null title; the binning step downstream has an else bucket for them.
    """

    def __init__(self, name_col: str = "name", output_col: str = "title"):
        super().__init__(name="TitleTransform")
        self.name_col = name_col
        self.output_col = output_col

    @staticmethod
    def extract_title(full_name: str) -> Optional[str]:
        """Extract raw title (no dot), e.g. 'Mr.' -> 'Mr'. Returns None if not found."""
        if pd.isna(full_name):
            return None
        m = re.search(TITLE_PATTERN, str(full_name), flags=re.IGNORECASE)
        return m.group(1) if m else None

    def _columns_needed(self):
        return [self.name_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "TitleTransform":
        self._validate_X(X)
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)
        X[self.output_col] = (
            X[self.name_col].astype("string").str.extract(TITLE_PATTERN, flags=re.IGNORECASE, expand=False)
        )

        n_missing = int(X[self.output_col].isna().sum())
        if n_missing:
            self.logger.warning(f"No title found for {n_missing} names")
        self.logger.debug(f"Titles: {X[self.output_col].value_counts().to_dict()}")
        return X


class TitleBinningTransform(BaseTransform):
    """
    Map titles into fixed buckets by membership list.

    Defaults: title_1 = {Capt, Don, Jonkheer, Rev, Mr},
    title_2 = {Col, Dr, Major, Master}, anything else (null included) -> title_3.
    The lists are configuration constants, never learned from data.
    """

    DEFAULT_BINS: Dict[str, List[str]] = {
        "title_1": ["Capt", "Don", "Jonkheer", "Rev", "Mr"],
        "title_2": ["Col", "Dr", "Major", "Master"],
    }

    def __init__(
        self,
        title_col: str = "title",
        output_col: str = "title_bins",
        bins: Optional[Dict[str, List[str]]] = None,
        default_bin: str = "title_3",
    ):
        super().__init__(name="TitleBinningTransform")
        self.title_col = title_col
        self.output_col = output_col
        self.bins = bins
        self.default_bin = default_bin

    def _columns_needed(self):
        return [self.title_col]

    def _lookup(self) -> Dict[str, str]:
        lookup: Dict[str, str] = {}
        for bucket, titles in (self.bins or self.DEFAULT_BINS).items():
            for title in titles:
                if title in lookup and lookup[title] != bucket:
                    raise ValueError(f"Title '{title}' is listed in both '{lookup[title]}' and '{bucket}'")
                lookup[title] = bucket
        return lookup

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "TitleBinningTransform":
        self._validate_X(X)
        self.title_lookup_ = self._lookup()
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)
        titles = X[self.title_col].astype("object")
        X[self.output_col] = titles.map(self.title_lookup_).fillna(self.default_bin).astype(str)

        self.logger.info(f"Title bins: {X[self.output_col].value_counts().to_dict()}")
        return X
