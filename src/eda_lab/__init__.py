"""eda-lab: Titanic feature engineering and Nobel laureate age analysis."""

__version__ = "0.1.0"
