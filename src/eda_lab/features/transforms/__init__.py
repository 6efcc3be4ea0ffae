"""Atomic passenger feature transformations."""

from __future__ import annotations

from .base import BaseTransform
from .title import TitleTransform, TitleBinningTransform
from .surname import SurnameTransform
from .age_impute import AgeImputeTransform
from .age_binning import AgeBinningTransform, bin_age
from .family_size import FamilySizeTransform
from .family_id import FamilyIdTransform
from .mother import MotherTransform
from .fare import FareImputeTransform
from .embarked import EmbarkedImputeTransform
from .pipeline import FeaturePipeline, build_feature_pipeline, build_feature_steps, derive_features

__all__ = [
    "BaseTransform",
    "TitleTransform",
    "TitleBinningTransform",
    "SurnameTransform",
    "AgeImputeTransform",
    "AgeBinningTransform",
    "bin_age",
    "FamilySizeTransform",
    "FamilyIdTransform",
    "MotherTransform",
    "FareImputeTransform",
    "EmbarkedImputeTransform",
    "FeaturePipeline",
    "build_feature_pipeline",
    "build_feature_steps",
    "derive_features",
]
