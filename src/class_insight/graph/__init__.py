"""Class dependency graph: construction, cycles and package views."""

from .models import (
    Cycle,
    CycleSeverity,
    DependencyEdge,
    DependencyGraph,
    DependencyNode,
    DependencyType,
    PackageAnalysis,
)
from .builder import DependencyGraphBuilder, build_dependency_graph
from .cycles import analyze_packages, calculate_package_cohesion, detect_cycles, tarjan_scc
from .resolution import TypeResolver, split_type_names

__all__ = [
    "Cycle",
    "CycleSeverity",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyNode",
    "DependencyType",
    "PackageAnalysis",
    "TypeResolver",
    "analyze_packages",
    "build_dependency_graph",
    "calculate_package_cohesion",
    "detect_cycles",
    "split_type_names",
    "tarjan_scc",
]
