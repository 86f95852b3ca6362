"""Metric result models: method complexity, CK suite, phase-A local metrics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MethodComplexity:
    method_name: str
    cyclomatic_complexity: int


@dataclass(frozen=True)
class ComplexityAnalysis:
    """Complexity of every method of a class."""

    methods: tuple[MethodComplexity, ...] = ()
    total_complexity: int = 0
    average_complexity: float = 0.0
    max_complexity: int = 0
    complex_methods: tuple[MethodComplexity, ...] = ()  # CC above the complex threshold

    @property
    def per_method(self) -> list[int]:
        return [m.cyclomatic_complexity for m in self.methods]


@dataclass(frozen=True)
class CkMetrics:
    """Chidamber-Kemerer metrics for a class. All values are non-negative."""

    # Complexity
    wmc: int = 0  # Weighted Methods per Class
    cyclomatic_complexity: int = 0  # equals wmc

    # Coupling
    cbo: int = 0  # Coupling Between Objects
    rfc: int = 0  # Response For a Class
    ca: int = 0  # Afferent coupling (incoming)
    ce: int = 0  # Efferent coupling (outgoing)

    # Inheritance
    dit: int = 0  # Depth of Inheritance Tree
    noc: int = 0  # Number of Children

    # Cohesion
    lcom: int = 0

    def __post_init__(self) -> None:
        for name in ("wmc", "cyclomatic_complexity", "cbo", "rfc", "ca", "ce", "dit", "noc", "lcom"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class LocalMetrics:
    """Everything computable from a single ClassFact (pipeline phase A)."""

    qualified_name: str
    lcom: int
    method_count: int
    property_count: int
    complexity: ComplexityAnalysis
    rfc: int
