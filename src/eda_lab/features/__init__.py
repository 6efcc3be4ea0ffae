"""Feature engineering for the Titanic passenger table."""
from eda_lab.core.utils import FeatureConfig
from eda_lab.features.transforms import FeaturePipeline, build_feature_pipeline, derive_features

__all__ = [
    "FeaturePipeline",
    "build_feature_pipeline",
    "create_feature_pipeline",
    "derive_features",
]


def create_feature_pipeline(config: FeatureConfig, debug: bool = False) -> FeaturePipeline:
    pipeline = build_feature_pipeline(config)
    if debug:
        pipeline.logger.setLevel("DEBUG")
    return pipeline
