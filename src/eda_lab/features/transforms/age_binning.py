from __future__ import annotations

from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from eda_lab.features.transforms.base import BaseTransform

DEFAULT_AGE_EDGES: List[float] = [0, 12, 18, 25, 80]
DEFAULT_AGE_LABELS: List[str] = ["0-12", "12-18", "18-25", "25-80"]
DEFAULT_AGE_COLLAPSED: List[str] = ["12-18", "25-80"]


def bin_age(
    age: Union[float, pd.Series],
    edges: Sequence[float] = DEFAULT_AGE_EDGES,
    labels: Sequence[str] = DEFAULT_AGE_LABELS,
    collapsed: Sequence[str] = DEFAULT_AGE_COLLAPSED,
    other_label: str = "other",
) -> Union[str, pd.Series]:
    """
    Cut ages into right-closed intervals ([0,12], (12,18], ...) and fold the
    `collapsed` labels, plus anything outside the edges, into `other_label`.

    Works on a scalar or a Series; a pure function of the age value.
    """
    scalar = np.isscalar(age) or age is None
    s = pd.Series([age] if scalar else age, dtype="float64")

    cut = pd.cut(s, bins=list(edges), labels=list(labels), right=True, include_lowest=True)
    binned = cut.astype(object).where(cut.notna(), other_label)
    binned = binned.where(~binned.isin(list(collapsed)), other_label).astype(str)

    if scalar:
        return binned.iloc[0]
    binned.index = age.index
    return binned


class AgeBinningTransform(BaseTransform):
    """
    Bin the (already imputed) age into a categorical column.

    With the defaults only '0-12' and '18-25' stay distinguished;
    '12-18', '25-80' and out-of-range ages become 'other'. Edges and labels
    are fixed constants.
    """

    def __init__(
        self,
        age_col: str = "age",
        output_col: str = "age_bins",
        edges: Optional[List[float]] = None,
        labels: Optional[List[str]] = None,
        collapsed: Optional[List[str]] = None,
        other_label: str = "other",
    ):
        super().__init__(name="AgeBinningTransform")
        self.age_col = age_col
        self.output_col = output_col
        self.edges = edges if edges is not None else list(DEFAULT_AGE_EDGES)
        self.labels = labels if labels is not None else list(DEFAULT_AGE_LABELS)
        self.collapsed = collapsed if collapsed is not None else list(DEFAULT_AGE_COLLAPSED)
        self.other_label = other_label

    def _columns_needed(self):
        return [self.age_col]

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "AgeBinningTransform":
        self._validate_X(X)
        if len(self.labels) != len(self.edges) - 1:
            raise ValueError(f"Need {len(self.edges) - 1} labels for edges {self.edges}, got {len(self.labels)}")
        self._set_new_cols([self.output_col])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        ages = pd.to_numeric(X[self.age_col], errors="coerce")
        X[self.output_col] = bin_age(ages, self.edges, self.labels, self.collapsed, self.other_label)

        self.logger.info(f"Age bins: {X[self.output_col].value_counts().to_dict()}")
        return X
