"""
Class Insight - Object-Oriented Code Quality Analysis

Turns normalized structural facts about classes into per-class metrics
(LCOM, cyclomatic complexity, the CK suite), a dependency graph with
cycles, DDD pattern confidences, layered-architecture compliance, quality
and risk scores, and refactoring suggestions.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig, ThresholdConfig, load_config
from .logging_config import get_logger, setup_logging, setup_logging_for
from .facts import ClassFact, MethodFact, NodeKind, PropertyFact, load_facts
from .metrics import CkMetrics, calculate_lcom
from .graph import DependencyGraph, DependencyGraphBuilder
from .architecture import LayeredArchitectureAnalyzer, LayerType
from .ddd import DddPatternAnalysis, detect_patterns
from .scoring import QualityScore, RiskLevel
from .analysis import AnalysisEngine, ClassAnalysis, ProjectReport, analyze_facts

__all__ = [
    "analyze_facts",  # Main entry point
    "AnalysisEngine",
    "AnalysisConfig",
    "ThresholdConfig",
    "load_config",
    "get_logger",
    "setup_logging",
    "setup_logging_for",
    "ClassFact",
    "MethodFact",
    "PropertyFact",
    "NodeKind",
    "load_facts",
    "ClassAnalysis",
    "ProjectReport",
    "CkMetrics",
    "calculate_lcom",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "LayerType",
    "LayeredArchitectureAnalyzer",
    "DddPatternAnalysis",
    "detect_patterns",
    "QualityScore",
    "RiskLevel",
]
