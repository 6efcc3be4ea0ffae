"""Ridge-density plot of award age per prize category."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from eda_lab.core.utils import LoggerFactory
from eda_lab.nobel.laureates import summarize_ages

logger = LoggerFactory.get_logger(__name__)


def plot_age_ridges(
    df: pd.DataFrame,
    output_path: Union[str, Path],
    category_col: str = "category",
    age_col: str = "age",
    order: Optional[List[str]] = None,
    dpi: int = 120,
) -> Path:
    """
    One KDE row per category, stacked with a small overlap, youngest median at the top.

    Returns the path of the saved PNG.
    """
    if df.empty:
        raise ValueError("Cannot plot award ages of an empty laureate table")

    if order is None:
        order = summarize_ages(df, category_col, age_col)[category_col].tolist()

    sns.set_theme(style="white", rc={"axes.facecolor": (0, 0, 0, 0)})
    palette = sns.color_palette("viridis", len(order))
    g = sns.FacetGrid(
        df, row=category_col, hue=category_col,
        row_order=order, hue_order=order,
        aspect=9, height=0.9, palette=palette,
    )
    g.map(sns.kdeplot, age_col, fill=True, alpha=0.8, linewidth=1.2, bw_adjust=0.8,
          clip_on=False, warn_singular=False)
    g.map(sns.kdeplot, age_col, color="w", linewidth=1.5, bw_adjust=0.8,
          clip_on=False, warn_singular=False)
    g.refline(y=0, linewidth=1, linestyle="-", color="0.3", clip_on=False)

    def _label(x, color, label):
        ax = plt.gca()
        ax.text(0, 0.2, label, fontweight="bold", color=color,
                ha="left", va="center", transform=ax.transAxes)

    g.map(_label, age_col)
    g.figure.subplots_adjust(hspace=-0.25)
    g.set_titles("")
    g.set(yticks=[], ylabel="")
    g.set_axis_labels("Age at award", "")
    g.despine(bottom=True, left=True)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    g.savefig(output_path, dpi=dpi)
    plt.close(g.figure)

    logger.info(f"Saved ridge plot of {len(order)} categories to {output_path}")
    return output_path
