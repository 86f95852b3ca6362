"""Quality scores, risk assessment and refactoring suggestions."""

from .models import QualityScore, RiskAssessment, RiskLevel, Suggestion
from .quality import calculate_quality_score, project_quality_score
from .risk import assess_risk, metric_breaches
from .suggestions import RULES, SuggestionContext, generate_suggestions

__all__ = [
    "QualityScore",
    "RULES",
    "RiskAssessment",
    "RiskLevel",
    "Suggestion",
    "SuggestionContext",
    "assess_risk",
    "calculate_quality_score",
    "generate_suggestions",
    "metric_breaches",
    "project_quality_score",
]
