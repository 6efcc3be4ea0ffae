from __future__ import annotations

from typing import Iterable, List


class EDALabError(Exception):
    """Base exception for eda-lab user-facing errors."""


class MissingColumnsError(EDALabError):
    """Raised when a table lacks columns a step requires."""

    def __init__(self, missing: Iterable[str], where: str = "input table"):
        self.missing: List[str] = sorted(missing)
        self.where = where
        super().__init__(f"Missing required columns in {where}: {self.missing}")


class ImputationError(EDALabError):
    """Raised when an imputation model cannot be fit."""


class SubmissionError(EDALabError):
    """Raised for submissions that fail format validation."""
