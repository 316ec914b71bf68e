"""Dataset profiling and PDF report synthesis."""

from .errors import AnalystReportError, DatasetLoadError, InputShapeError, QueryError
from .models import TabularDataset
from .profile import ProfileResult, Report, profile_dataset
from .synth import LayoutConfig, render

__all__ = [
    "AnalystReportError",
    "DatasetLoadError",
    "InputShapeError",
    "LayoutConfig",
    "ProfileResult",
    "QueryError",
    "Report",
    "TabularDataset",
    "profile_dataset",
    "render",
]

__version__ = "0.1.0"
