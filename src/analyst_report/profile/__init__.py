"""Profile stage.

Turns a TabularDataset into per-column statistics, dataset quality metrics
and a sectioned text report with rule-based recommendations.
"""

from .profiler import ProfileResult, profile_dataset
from .report import Report, Section, SectionTag
from .stats import ColumnKind, ColumnProfile, Skew

__all__ = [
    "ColumnKind",
    "ColumnProfile",
    "ProfileResult",
    "Report",
    "Section",
    "SectionTag",
    "Skew",
    "profile_dataset",
]
