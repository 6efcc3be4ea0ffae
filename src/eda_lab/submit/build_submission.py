"""Kaggle submission builder with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd

from eda_lab.core.exceptions import SubmissionError
from eda_lab.core.interfaces import ISubmissionBuilder
from eda_lab.core.utils import LoggerFactory
from eda_lab.submit.exporter import TableExporter


class TitanicSubmissionBuilder(ISubmissionBuilder):
    """Submission builder for the Titanic competition."""

    def __init__(self, id_column: str = "PassengerId", target_column: str = "Survived"):
        self.logger = LoggerFactory.get_logger(__name__)
        self.id_column = id_column
        self.target_column = target_column
        self.required_columns = [id_column, target_column]

    def build_submission(self, ids: pd.Series, predictions: np.ndarray) -> pd.DataFrame:
        """Build Kaggle submission from passenger ids and predicted labels."""
        predictions = np.asarray(predictions)
        if len(ids) != len(predictions):
            raise SubmissionError(f"Got {len(ids)} ids but {len(predictions)} predictions")

        submission = pd.DataFrame({
            self.id_column: pd.to_numeric(pd.Series(ids).to_numpy(), errors="raise").astype(int),
            self.target_column: predictions.astype(int),
        })
        submission = submission.sort_values(self.id_column).reset_index(drop=True)

        self.logger.info(f"Created submission with {len(submission)} predictions")
        return submission

    def validate_submission(self, submission: pd.DataFrame) -> bool:
        """Validate submission format; logs every problem found."""
        errors = self._collect_errors(submission)
        for error in errors:
            self.logger.error(error)
        if not errors:
            self.logger.info("Submission validation passed")
        return not errors

    def _collect_errors(self, submission: pd.DataFrame) -> List[str]:
        missing_cols = set(self.required_columns) - set(submission.columns)
        if missing_cols:
            return [f"Missing required columns: {sorted(missing_cols)}"]

        errors: List[str] = []
        if submission.isnull().any().any():
            null_cols = submission.columns[submission.isnull().any()].tolist()
            errors.append(f"Missing values in columns: {null_cols}")

        invalid_values = set(submission[self.target_column].dropna().unique()) - {0, 1}
        if invalid_values:
            errors.append(f"Invalid target values: {sorted(invalid_values)}")

        if submission[self.id_column].duplicated().any():
            errors.append(f"Duplicate {self.id_column} values found")

        return errors

    def save_submission(self, submission: pd.DataFrame, exporter: TableExporter, name: str) -> Path:
        """Validate and write a submission; invalid submissions are never written."""
        errors = self._collect_errors(submission)
        if errors:
            raise SubmissionError(f"Submission '{name}' is invalid: {'; '.join(errors)}")
        return exporter.export(submission, name)

    def save_all(self, ids: pd.Series, predictions: Dict[str, np.ndarray],
                 exporter: TableExporter, prefix: str = "submission") -> Dict[str, Path]:
        """One `<prefix>_<model>.csv` per model."""
        paths: Dict[str, Path] = {}
        for model_name, preds in predictions.items():
            submission = self.build_submission(ids, preds)
            paths[model_name] = self.save_submission(submission, exporter, f"{prefix}_{model_name}")
        return paths
