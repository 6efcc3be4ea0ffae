"""Output side: table snapshots and competition submissions."""

from .build_submission import TitanicSubmissionBuilder
from .exporter import TableExporter

__all__ = ["TableExporter", "TitanicSubmissionBuilder"]
