"""Nobel laureate age analysis."""

from .laureates import birth_years, compute_award_age, load_laureates, summarize_ages
from .ridge import plot_age_ridges

__all__ = ["load_laureates", "birth_years", "compute_award_age", "summarize_ages", "plot_age_ridges"]
