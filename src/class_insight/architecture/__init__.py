"""Layered architecture analysis: layer inference, rules, violations, patterns."""

from .models import (
    ArchitectureAnalysis,
    ArchitectureLayer,
    ArchitecturePattern,
    ArchitectureViolation,
    LayerDependency,
    LayeredArchitectureAnalysis,
    LayerType,
    ViolationType,
)
from .layers import (
    determine_architecture_pattern,
    infer_layer,
    is_inward,
    is_valid_layer_dependency,
    package_segments,
)
from .violations import detect_violations, node_layers
from .analyzer import LayeredArchitectureAnalyzer

__all__ = [
    "ArchitectureAnalysis",
    "ArchitectureLayer",
    "ArchitecturePattern",
    "ArchitectureViolation",
    "LayerDependency",
    "LayerType",
    "LayeredArchitectureAnalysis",
    "LayeredArchitectureAnalyzer",
    "ViolationType",
    "detect_violations",
    "determine_architecture_pattern",
    "infer_layer",
    "is_inward",
    "is_valid_layer_dependency",
    "node_layers",
    "package_segments",
]
