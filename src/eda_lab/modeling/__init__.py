"""Survival models and their trainer."""

from .model_registry import (
    BaseModel,
    ConditionalForestModel,
    DecisionTreeModel,
    LogisticRegressionModel,
    ModelRegistry,
    RandomForestModel,
)
from .trainers import SurvivalTrainer, TrainingResult

__all__ = [
    "BaseModel",
    "LogisticRegressionModel",
    "DecisionTreeModel",
    "RandomForestModel",
    "ConditionalForestModel",
    "ModelRegistry",
    "SurvivalTrainer",
    "TrainingResult",
]
