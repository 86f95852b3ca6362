"""Exception hierarchy for Class Insight."""

from .analysis import AnalysisError, ClassAnalysisError, FactValidationError
from .base import ClassInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "ClassInsightError",
    "AnalysisError",
    "ClassAnalysisError",
    "FactValidationError",
    "ConfigurationError",
    "InvalidConfigError",
]
