from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from sklearn.tree import DecisionTreeRegressor

from eda_lab.core.exceptions import ImputationError
from eda_lab.features.transforms.base import BaseTransform


class AgeImputeTransform(BaseTransform):
    """
    Fill missing ages with a single regression tree.

    The tree is fit on the rows whose age is known and predicts age from
    pclass, sex, sib_sp, parch, fare and embarked; only rows with a missing
    age are overwritten, observed ages are kept as they are.

    Parameters
    ----------
    age_col : str, default "age"
        Numeric age column to impute.
    features : Optional[List[str]]
        Predictor columns. Defaults to pclass, sex, sib_sp, parch, fare, embarked.
    categorical_features : Optional[List[str]]
        Subset of `features` that is one-hot encoded. Defaults to sex, embarked.
    min_samples_split : int, default 20
        Smallest node the tree will try to split.
    complexity : float, default 0.01
        A split has to cut the total squared error by at least this fraction
        of the root node's squared error. For a regression tree this is
        `min_impurity_decrease = complexity * var(age)`.
    max_depth : int, default 30
    random_state : int, default 42

    Missing predictor values are filled inside the model pipeline only
    (median for numeric, a 'missing' level for categorical); the table keeps them.
    """

    def __init__(
        self,
        age_col: str = "age",
        features: Optional[List[str]] = None,
        categorical_features: Optional[List[str]] = None,
        min_samples_split: int = 20,
        complexity: float = 0.01,
        max_depth: int = 30,
        random_state: int = 42,
    ):
        super().__init__(name="AgeImputeTransform")
        self.age_col = age_col
        self.features = features if features is not None else ["pclass", "sex", "sib_sp", "parch", "fare", "embarked"]
        self.categorical_features = (
            categorical_features if categorical_features is not None else ["sex", "embarked"]
        )
        self.min_samples_split = min_samples_split
        self.complexity = complexity
        self.max_depth = max_depth
        self.random_state = random_state

        self.model_: Optional[Pipeline] = None
        self.n_train_: int = 0

    def _columns_needed(self):
        return [self.age_col, *self.features]

    # ---- helpers ----
    def _categorical(self) -> List[str]:
        return [c for c in self.features if c in self.categorical_features]

    def _numeric(self) -> List[str]:
        return [c for c in self.features if c not in self.categorical_features]

    def _design_matrix(self, X: pd.DataFrame) -> pd.DataFrame:
        """Predictor frame with numeric columns coerced and categorical ones as plain objects."""
        frame = pd.DataFrame(index=X.index)
        for col in self._numeric():
            frame[col] = pd.to_numeric(X[col], errors="coerce")
        for col in self._categorical():
            s = X[col].astype("string").astype(object)
            frame[col] = s.where(s.notna(), np.nan)
        return frame

    def _build_model(self, y: pd.Series) -> Pipeline:
        categorical = Pipeline([
            ("impute", SimpleImputer(strategy="constant", fill_value="missing")),
            ("onehot", OneHotEncoder(handle_unknown="ignore")),
        ])
        pre = ColumnTransformer([
            ("num", SimpleImputer(strategy="median"), self._numeric()),
            ("cat", categorical, self._categorical()),
        ])
        tree = DecisionTreeRegressor(
            min_samples_split=self.min_samples_split,
            max_depth=self.max_depth,
            min_impurity_decrease=self.complexity * float(np.var(y.to_numpy(dtype=float))),
            random_state=self.random_state,
        )
        return Pipeline([("pre", pre), ("tree", tree)])

    # ---- core API ----
    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "AgeImputeTransform":
        self._validate_X(X)

        ages = pd.to_numeric(X[self.age_col], errors="coerce")
        known = ages.notna()
        if not known.any():
            raise ImputationError(
                f"Cannot fit age model: no rows with a known '{self.age_col}' among {len(X)} rows"
            )

        model = self._build_model(ages[known])
        try:
            model.fit(self._design_matrix(X.loc[known]), ages[known])
        except ValueError as e:
            raise ImputationError(f"Age model fit failed on {int(known.sum())} rows: {e}") from e

        self.model_ = model
        self.n_train_ = int(known.sum())
        tree = model.named_steps["tree"]
        self.logger.info(
            f"Age tree fit: n={self.n_train_}, missing={int((~known).sum())}, "
            f"depth={tree.get_depth()}, leaves={tree.get_n_leaves()}"
        )

        self._set_new_cols([])
        self.is_fitted = True
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        X = super().transform(X)

        ages = pd.to_numeric(X[self.age_col], errors="coerce").astype(float)
        missing = ages.isna()
        if missing.any():
            predicted = self.model_.predict(self._design_matrix(X.loc[missing]))
            ages.loc[missing] = predicted

        X[self.age_col] = ages
        self.logger.info(f"Age transform: imputed {int(missing.sum())} of {len(X)} ages")
        return X
