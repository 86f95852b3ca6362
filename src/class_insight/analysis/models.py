"""Per-class and project-wide report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..architecture.models import ArchitectureAnalysis
from ..graph.models import DependencyType
from ..metrics.models import CkMetrics, ComplexityAnalysis
from ..scoring.models import QualityScore, RiskAssessment, Suggestion


@dataclass(frozen=True)
class ClassAnalysis:
    """Everything computed for one class. Built once, never mutated."""

    class_name: str
    file_name: str
    qualified_name: str
    package_name: str
    lcom: int
    method_count: int
    property_count: int
    method_details: tuple[tuple[str, frozenset[str]], ...]  # (method, properties used)
    complexity: ComplexityAnalysis
    ck_metrics: CkMetrics
    quality_score: QualityScore
    risk_assessment: RiskAssessment
    suggestions: tuple[Suggestion, ...] = ()

    @property
    def per_method_complexity(self) -> list[int]:
        return self.complexity.per_method


@dataclass(frozen=True)
class PackageMetrics:
    package_name: str
    class_count: int
    average_ck_metrics: dict[str, float] = field(hash=False, compare=False)
    quality_score: QualityScore
    issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class CouplingRelation:
    from_class: str
    to_class: str
    strength: int
    type: DependencyType


@dataclass(frozen=True)
class ProjectReport:
    """Complete result of one analysis run."""

    classes: tuple[ClassAnalysis, ...]
    architecture_analysis: ArchitectureAnalysis
    project_quality_score: QualityScore
    package_metrics: tuple[PackageMetrics, ...] = ()
    coupling_matrix: tuple[CouplingRelation, ...] = ()
    risk_assessments: tuple[RiskAssessment, ...] = ()
    summary: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_class(self, qualified_name: str) -> Optional[ClassAnalysis]:
        for analysis in self.classes:
            if analysis.qualified_name == qualified_name:
                return analysis
        return None

    def worst_offenders(self, limit: int = 10) -> list[ClassAnalysis]:
        """Classes ordered by descending risk priority, then lowest score, then name."""
        ranked = sorted(
            self.classes,
            key=lambda a: (
                -a.risk_assessment.priority,
                a.quality_score.overall,
                a.qualified_name,
            ),
        )
        return ranked[:limit]
