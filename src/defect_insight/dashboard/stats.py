"""Model performance and training-data figures shown on the dashboards.

These are fixed numbers describing the decision-tree reference model the
rule chain was derived from. Nothing here is computed at runtime.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ConfusionMatrix:
    true_positive: int
    true_negative: int
    false_positive: int
    false_negative: int

    @property
    def total(self) -> int:
        return self.true_positive + self.true_negative + self.false_positive + self.false_negative


@dataclass(frozen=True)
class ModelPerformance:
    accuracy: float
    precision: float
    recall: float
    f1_score: float
    confusion_matrix: ConfusionMatrix

    def to_dict(self) -> dict[str, Any]:
        return {
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
            "f1Score": self.f1_score,
            "confusionMatrix": {
                "truePositive": self.confusion_matrix.true_positive,
                "trueNegative": self.confusion_matrix.true_negative,
                "falsePositive": self.confusion_matrix.false_positive,
                "falseNegative": self.confusion_matrix.false_negative,
            },
        }


@dataclass(frozen=True)
class FeatureImportance:
    name: str
    importance: float


@dataclass(frozen=True)
class TrainingData:
    defective: int
    non_defective: int
    feature_importance: tuple[FeatureImportance, ...]

    @property
    def total_samples(self) -> int:
        return self.defective + self.non_defective

    def to_dict(self) -> dict[str, Any]:
        return {
            "defectDistribution": {
                "defective": self.defective,
                "nonDefective": self.non_defective,
            },
            "featureImportance": [asdict(f) for f in self.feature_importance],
        }


MODEL_PERFORMANCE = ModelPerformance(
    accuracy=0.87,
    precision=0.82,
    recall=0.79,
    f1_score=0.80,
    confusion_matrix=ConfusionMatrix(
        true_positive=79,
        true_negative=174,
        false_positive=17,
        false_negative=21,
    ),
)

TRAINING_DATA = TrainingData(
    defective=100,
    non_defective=191,
    # Sorted by importance, highest first
    feature_importance=(
        FeatureImportance("vg", 0.18),
        FeatureImportance("ev", 0.15),
        FeatureImportance("e", 0.14),
        FeatureImportance("loc", 0.12),
        FeatureImportance("branchCount", 0.10),
        FeatureImportance("i", 0.08),
        FeatureImportance("d", 0.07),
        FeatureImportance("lOCode", 0.06),
        FeatureImportance("total_Op", 0.05),
        FeatureImportance("uniq_Op", 0.04),
        FeatureImportance("v", 0.03),
        FeatureImportance("n", 0.03),
        FeatureImportance("l", 0.02),
        FeatureImportance("lOComment", 0.02),
        FeatureImportance("total_Opnd", 0.01),
    ),
)


def get_model_performance() -> ModelPerformance:
    return MODEL_PERFORMANCE


def get_training_data() -> TrainingData:
    return TRAINING_DATA
