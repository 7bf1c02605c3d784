"""Static model performance and training-data dashboards."""

from .stats import (
    MODEL_PERFORMANCE,
    TRAINING_DATA,
    ConfusionMatrix,
    FeatureImportance,
    ModelPerformance,
    TrainingData,
    get_model_performance,
    get_training_data,
)

__all__ = [
    "ConfusionMatrix",
    "FeatureImportance",
    "ModelPerformance",
    "TrainingData",
    "MODEL_PERFORMANCE",
    "TRAINING_DATA",
    "get_model_performance",
    "get_training_data",
]
