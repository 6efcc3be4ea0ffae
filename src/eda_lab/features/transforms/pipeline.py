"""Ordered chain of passenger feature transforms."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import pandas as pd

from eda_lab.core.utils import FeatureConfig, Timer
from eda_lab.data.validate import REQUIRED_FEATURE_COLUMNS
from eda_lab.features.transforms.age_binning import AgeBinningTransform
from eda_lab.features.transforms.age_impute import AgeImputeTransform
from eda_lab.features.transforms.base import BaseTransform
from eda_lab.features.transforms.embarked import EmbarkedImputeTransform
from eda_lab.features.transforms.fare import FareImputeTransform
from eda_lab.features.transforms.family_id import FamilyIdTransform
from eda_lab.features.transforms.family_size import FamilySizeTransform
from eda_lab.features.transforms.mother import MotherTransform
from eda_lab.features.transforms.surname import SurnameTransform
from eda_lab.features.transforms.title import TitleBinningTransform, TitleTransform


class FeaturePipeline(BaseTransform):
    """Pipeline for chaining feature transforms; order matters."""

    def __init__(self, steps: List[Tuple[str, BaseTransform]],
                 required_input: Optional[Iterable[str]] = None):
        super().__init__(name="FeaturePipeline")
        self.steps = steps
        self.required_input = required_input

    def _columns_needed(self):
        return list(self.required_input or [])

    @property
    def named_steps(self) -> dict:
        return dict(self.steps)

    def fit(self, X: pd.DataFrame, y: Optional[pd.Series] = None) -> "FeaturePipeline":
        """Fit all transforms sequentially, each on the output of the previous one."""
        self.fit_transform(X, y)
        return self

    def fit_transform(self, X: pd.DataFrame, y: Optional[pd.Series] = None, **fit_params) -> pd.DataFrame:
        self._validate_X(X)
        X_current = X.copy()

        with Timer(self.logger, f"fitting {len(self.steps)} feature steps"):
            for i, (name, transform) in enumerate(self.steps):
                self.logger.debug(f"Fitting step {i + 1}/{len(self.steps)}: {name}")
                X_current = transform.fit(X_current, y).transform(X_current)

        self._set_new_cols([c for c in X_current.columns if c not in X.columns])
        self.is_fitted = True
        return X_current

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Apply all transforms sequentially."""
        self._require_fitted()
        self._validate_X(X)

        X_current = X.copy()
        for _, transform in self.steps:
            X_current = transform.transform(X_current)
        return X_current


def build_feature_steps(config: Optional[FeatureConfig] = None) -> List[Tuple[str, BaseTransform]]:
    """The fixed, ordered list of derivation steps configured from `config`."""
    cfg = config or FeatureConfig()
    tree = cfg.age_tree
    return [
        ("title", TitleTransform()),
        ("title_bins", TitleBinningTransform(bins=cfg.title_bins, default_bin=cfg.default_title_bin)),
        ("surname", SurnameTransform()),
        ("age_impute", AgeImputeTransform(
            features=list(tree.features),
            categorical_features=list(tree.categorical_features),
            min_samples_split=tree.min_samples_split,
            complexity=tree.complexity,
            max_depth=tree.max_depth,
            random_state=tree.random_state,
        )),
        ("age_bins", AgeBinningTransform(
            edges=list(cfg.age_bin_edges),
            labels=list(cfg.age_bin_labels),
            collapsed=list(cfg.age_bins_collapsed),
            other_label=cfg.age_other_label,
        )),
        ("family_size", FamilySizeTransform(
            edges=list(cfg.family_size_bin_edges),
            labels=list(cfg.family_size_bin_labels),
        )),
        ("family_id", FamilyIdTransform(
            small_family_max=cfg.small_family_max,
            sentinel=cfg.small_family_sentinel,
        )),
        ("mother", MotherTransform()),
        ("fare", FareImputeTransform(fill_value=cfg.fare_fill_value)),
        ("embarked", EmbarkedImputeTransform(fill_value=cfg.embarked_fill_value)),
    ]


def build_feature_pipeline(config: Optional[FeatureConfig] = None) -> FeaturePipeline:
    """Feature pipeline that refuses tables missing any required passenger column."""
    return FeaturePipeline(build_feature_steps(config), required_input=sorted(REQUIRED_FEATURE_COLUMNS))


def derive_features(table: pd.DataFrame, config: Optional[FeatureConfig] = None) -> pd.DataFrame:
    """Run the full derivation over a combined passenger table and return the enriched copy."""
    return build_feature_pipeline(config).fit_transform(table)
