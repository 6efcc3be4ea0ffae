"""Core interfaces and utilities."""

from .exceptions import EDALabError, ImputationError, MissingColumnsError, SubmissionError
from .interfaces import IDataLoader, IDataValidator, IModel, ISubmissionBuilder, ITransformer
from .utils import (
    AgeTreeConfig,
    ConfigManager,
    FeatureConfig,
    LoggerFactory,
    ModelingConfig,
    NobelConfig,
    PathManager,
    SeedManager,
    TitanicConfig,
    Timer,
)

__all__ = [
    "IDataLoader",
    "IDataValidator",
    "ITransformer",
    "IModel",
    "ISubmissionBuilder",
    "EDALabError",
    "MissingColumnsError",
    "ImputationError",
    "SubmissionError",
    "LoggerFactory",
    "SeedManager",
    "PathManager",
    "ConfigManager",
    "Timer",
    "AgeTreeConfig",
    "FeatureConfig",
    "ModelingConfig",
    "TitanicConfig",
    "NobelConfig",
]
