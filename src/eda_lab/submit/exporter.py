"""Writes finalized tables to CSV under a logical name."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import pandas as pd

from eda_lab.core.utils import LoggerFactory


class TableExporter:
    """
    One table in, one `<output_dir>/<name>.csv` out.

    Re-running overwrites the previous artifact; there is no partial-write recovery.
    """

    def __init__(self, output_dir: Union[str, Path], sep: str = ","):
        self.output_dir = Path(output_dir)
        self.sep = sep
        self.logger = LoggerFactory.get_logger(__name__)

    def path_for(self, name: str) -> Path:
        if not name or Path(name).name != name:
            raise ValueError(f"Invalid export name: {name!r}")
        return self.output_dir / f"{name}.csv"

    def export(self, table: pd.DataFrame, name: str) -> Path:
        """Write `table` without its index and return the file path."""
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(path, index=False, sep=self.sep)
        self.logger.info(f"Exported '{name}' {table.shape} to {path}")
        return path
