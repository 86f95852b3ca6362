"""Per-class metrics: LCOM, cyclomatic complexity and the CK suite."""

from .ck import (
    calculate_dit,
    calculate_noc,
    calculate_rfc,
    compute_ck_metrics,
    compute_local_metrics,
)
from .complexity import analyze_complexity, calculate_cyclomatic_complexity, complexity_level
from .lcom import calculate_lcom, cohesion_level, method_groups
from .models import CkMetrics, ComplexityAnalysis, LocalMetrics, MethodComplexity

__all__ = [
    "CkMetrics",
    "ComplexityAnalysis",
    "LocalMetrics",
    "MethodComplexity",
    "analyze_complexity",
    "calculate_cyclomatic_complexity",
    "calculate_dit",
    "calculate_lcom",
    "calculate_noc",
    "calculate_rfc",
    "cohesion_level",
    "complexity_level",
    "compute_ck_metrics",
    "compute_local_metrics",
    "method_groups",
]
