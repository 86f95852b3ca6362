"""Analysis-related exceptions: fact validation and per-class failures."""

from typing import Any, Optional

from .base import ClassInsightError


class AnalysisError(ClassInsightError):
    """Base class for analysis-related errors."""

    pass


class FactValidationError(AnalysisError):
    """Raised when a fact record cannot be turned into a ClassFact."""

    def __init__(self, reason: str, record: Optional[Any] = None):
        details = {"reason": reason}
        if isinstance(record, dict):
            for key in ("className", "class_name", "fileName", "file_name"):
                if key in record:
                    details[key] = str(record[key])
        super().__init__(f"Invalid class fact: {reason}", details=details)
        self.reason = reason
        self.record = record


class ClassAnalysisError(AnalysisError):
    """Raised when metrics for a single class cannot be computed."""

    def __init__(self, class_name: str, reason: str):
        super().__init__(
            f"Failed to analyze class {class_name}",
            details={"class": class_name, "reason": reason},
        )
        self.class_name = class_name
        self.reason = reason
