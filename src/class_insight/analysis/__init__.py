"""Analysis pipeline and report assembly."""

from .engine import AnalysisEngine, analyze_facts
from .models import ClassAnalysis, CouplingRelation, PackageMetrics, ProjectReport
from .packages import average_ck_metrics, build_coupling_matrix, calculate_package_metrics

__all__ = [
    "AnalysisEngine",
    "ClassAnalysis",
    "CouplingRelation",
    "PackageMetrics",
    "ProjectReport",
    "analyze_facts",
    "average_ck_metrics",
    "build_coupling_matrix",
    "calculate_package_metrics",
]
