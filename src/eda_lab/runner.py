"""End-to-end runs of the Titanic and Nobel workflows, shared by the CLI and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from eda_lab.core.utils import LoggerFactory, NobelConfig, PathManager, TitanicConfig, Timer
from eda_lab.data.loader import TitanicDataLoader
from eda_lab.data.validate import PassengerTableValidator
from eda_lab.features import create_feature_pipeline
from eda_lab.modeling.trainers import SurvivalTrainer, TrainingResult
from eda_lab.nobel.laureates import compute_award_age, load_laureates, summarize_ages
from eda_lab.nobel.ridge import plot_age_ridges
from eda_lab.submit.build_submission import TitanicSubmissionBuilder
from eda_lab.submit.exporter import TableExporter

logger = LoggerFactory.get_logger(__name__)


@dataclass
class FeatureRun:
    original: pd.DataFrame
    derived: pd.DataFrame
    paths: Dict[str, Path] = field(default_factory=dict)


@dataclass
class TrainRun:
    results: Dict[str, TrainingResult]
    submissions: Dict[str, Path]


def build_features(config: TitanicConfig, path_manager: Optional[PathManager] = None,
                   debug: bool = False) -> FeatureRun:
    """Load train+test, derive features, write the 'original' and 'feature_engineered' snapshots."""
    pm = path_manager or PathManager()
    loader = TitanicDataLoader(
        pm.resolve(config.train_path), pm.resolve(config.test_path),
        target_column=config.target_column,
    )
    original = loader.load_combined()
    PassengerTableValidator(id_column=config.id_column, target_column=config.target_column).validate(original)

    with Timer(logger, "feature derivation"):
        derived = create_feature_pipeline(config.features, debug=debug).fit_transform(original)

    exporter = TableExporter(pm.resolve(config.output_dir))
    paths = {
        "original": exporter.export(original, "original"),
        "feature_engineered": exporter.export(derived, "feature_engineered"),
    }
    return FeatureRun(original=original, derived=derived, paths=paths)


def train_models(config: TitanicConfig, derived: pd.DataFrame,
                 models: Optional[List[str]] = None,
                 path_manager: Optional[PathManager] = None) -> TrainRun:
    """Fit the configured models and write one submission per model."""
    pm = path_manager or PathManager()
    trainer = SurvivalTrainer(config.modeling, target_column=config.target_column)
    results = trainer.fit_all(derived, models=models)
    predictions = trainer.predict_all(derived)

    _, test = trainer.split(derived)
    builder = TitanicSubmissionBuilder(config.submission_id_column, config.submission_target_column)
    submissions = builder.save_all(test[config.id_column], predictions, TableExporter(pm.resolve(config.output_dir)))
    return TrainRun(results=results, submissions=submissions)


def analyze_laureates(config: NobelConfig, path_manager: Optional[PathManager] = None) -> Dict[str, Path]:
    """Award ages per category: a summary CSV and a ridge plot."""
    pm = path_manager or PathManager()
    laureates = load_laureates(
        pm.resolve(config.laureates_path),
        required_columns=[config.year_column, config.birth_date_column, config.category_column],
    )

    ages = compute_award_age(
        laureates,
        year_col=config.year_column,
        birth_date_col=config.birth_date_column,
        type_col=config.laureate_type_column,
        individual_label=config.individual_label,
    )
    summary = summarize_ages(ages, category_col=config.category_column)

    output_dir = pm.resolve(config.output_dir)
    return {
        "summary": TableExporter(output_dir).export(summary, "nobel_age_summary"),
        "plot": plot_age_ridges(
            ages, output_dir / config.plot_filename,
            category_col=config.category_column,
            order=summary[config.category_column].tolist(),
        ),
    }
