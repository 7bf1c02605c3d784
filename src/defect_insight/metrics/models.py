"""Value objects passed between the normalizer, the classifier and the batch loop.

All records are frozen: a ``MetricsRecord`` is built once per form submit or
CSV row, classified, and then only read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Canonical (CSV / wire) metric name -> MetricsRecord attribute.
# Order is the column order used in reports and exports.
CANONICAL_FIELDS: dict[str, str] = {
    "loc": "loc",
    "vg": "vg",
    "ev": "ev",
    "iv": "iv",
    "n": "n",
    "v": "v",
    "l": "l",
    "d": "d",
    "i": "i",
    "e": "e",
    "t": "t",
    "lOCode": "lo_code",
    "lOComment": "lo_comment",
    "lOBlank": "lo_blank",
    "locCodeAndComment": "loc_code_and_comment",
    "uniq_Op": "uniq_op",
    "uniq_Opnd": "uniq_opnd",
    "total_Op": "total_op",
    "total_Opnd": "total_opnd",
    "branchCount": "branch_count",
}

DEFECTS_FIELD = "defects"


@dataclass(frozen=True)
class MetricsRecord:
    """Canonical static-metrics record for one module.

    Every metric is a finite float defaulting to 0. ``defects`` carries
    externally supplied ground truth (0/1); ``None`` means none was given.
    """

    loc: float = 0.0  # lines of code
    vg: float = 0.0  # cyclomatic complexity
    ev: float = 0.0  # essential complexity
    iv: float = 0.0  # design complexity
    n: float = 0.0  # Halstead length
    v: float = 0.0  # Halstead volume
    l: float = 0.0  # Halstead level
    d: float = 0.0  # Halstead difficulty
    i: float = 0.0  # Halstead intelligence
    e: float = 0.0  # Halstead effort
    t: float = 0.0  # Halstead time
    lo_code: float = 0.0
    lo_comment: float = 0.0
    lo_blank: float = 0.0
    loc_code_and_comment: float = 0.0
    uniq_op: float = 0.0
    uniq_opnd: float = 0.0
    total_op: float = 0.0
    total_opnd: float = 0.0
    branch_count: float = 0.0
    defects: Optional[float] = None

    @property
    def has_ground_truth(self) -> bool:
        return self.defects is not None

    def get(self, canonical_name: str) -> float:
        """Look up a metric by its canonical name (e.g. ``"lOCode"``)."""
        return getattr(self, CANONICAL_FIELDS[canonical_name])

    def to_dict(self) -> dict[str, float]:
        """Serialize with canonical names; ``defects`` only when set."""
        data = {name: getattr(self, attr) for name, attr in CANONICAL_FIELDS.items()}
        if self.defects is not None:
            data[DEFECTS_FIELD] = self.defects
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetricsRecord:
        """Rebuild a record serialized by :meth:`to_dict`."""
        kwargs: dict[str, Any] = {
            attr: float(data[name]) for name, attr in CANONICAL_FIELDS.items() if name in data
        }
        if data.get(DEFECTS_FIELD) is not None:
            kwargs["defects"] = float(data[DEFECTS_FIELD])
        return cls(**kwargs)


@dataclass(frozen=True)
class DefectVerdict:
    """Classification outcome for a single module."""

    defect_detected: bool
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"defectDetected": self.defect_detected, "reason": self.reason}


@dataclass(frozen=True)
class ModuleResult:
    """One classified row of a batch."""

    index: int  # 1-based, as displayed
    metrics: MetricsRecord
    verdict: DefectVerdict
    timestamp: str  # ISO-8601, UTC

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "metrics": self.metrics.to_dict(),
            "defectDetected": self.verdict.defect_detected,
            "reason": self.verdict.reason,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class BatchResult:
    """Aggregate over a classified batch."""

    total_modules: int
    defective_modules: int
    defect_percentage: float
    results: tuple[ModuleResult, ...] = field(default_factory=tuple)

    @property
    def clean_modules(self) -> int:
        return self.total_modules - self.defective_modules

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalModules": self.total_modules,
            "defectiveModules": self.defective_modules,
            "defectPercentage": self.defect_percentage,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class DefectResult:
    """A persisted classification, as read back from the result store."""

    id: str
    user_id: str
    metrics: dict[str, float]
    defect_detected: bool
    reason: Optional[str]
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "metrics": dict(self.metrics),
            "defect_detected": self.defect_detected,
            "reason": self.reason,
            "created_at": self.created_at,
        }

