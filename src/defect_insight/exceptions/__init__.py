"""Exception hierarchy for Defect Insight."""

from .base import DefectInsightError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .ingestion import FetchError, IngestionError, NoValidDataError
from .persistence import PersistenceError

__all__ = [
    "DefectInsightError",
    "IngestionError",
    "NoValidDataError",
    "FetchError",
    "PersistenceError",
    "ConfigurationError",
    "InvalidConfigError",
    "ConfigFileError",
]
