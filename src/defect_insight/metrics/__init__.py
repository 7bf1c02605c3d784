"""Canonical metric records and the normalizer that builds them."""

from .models import (
    CANONICAL_FIELDS,
    BatchResult,
    DefectResult,
    DefectVerdict,
    MetricsRecord,
    ModuleResult,
)
from .normalizer import ALIASES, coerce_value, has_required_metrics, missing_metrics, normalize

__all__ = [
    "CANONICAL_FIELDS",
    "ALIASES",
    "MetricsRecord",
    "DefectVerdict",
    "ModuleResult",
    "BatchResult",
    "DefectResult",
    "normalize",
    "coerce_value",
    "has_required_metrics",
    "missing_metrics",
]
