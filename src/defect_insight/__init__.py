"""
Defect Insight - metrics-based software defect detection.

Classifies modules as defect-prone from static complexity metrics (lines of
code, McCabe complexity, Halstead measures) using an ordered chain of
threshold rules, singly or in CSV batches, and keeps per-user history.
"""

__version__ = "0.1.0"

from .batch import detect, process_batch  # noqa: E402
from .classifier import classify  # noqa: E402
from .metrics import (  # noqa: E402
    BatchResult,
    DefectVerdict,
    MetricsRecord,
    ModuleResult,
    normalize,
)

__all__ = [
    "normalize",  # raw row -> MetricsRecord
    "classify",  # MetricsRecord -> DefectVerdict
    "detect",
    "process_batch",
    "MetricsRecord",
    "DefectVerdict",
    "ModuleResult",
    "BatchResult",
]
