"""Architecture analysis models.

Defines layers, layer-to-layer dependencies, violations and the
project-wide architecture result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..ddd.models import DddPatternAnalysis
    from ..graph.models import DependencyGraph


class LayerType(Enum):
    """Architectural layer of a class."""

    PRESENTATION = "presentation"
    APPLICATION = "application"
    DOMAIN = "domain"
    DATA = "data"
    INFRASTRUCTURE = "infrastructure"
    UNKNOWN = "unknown"

    @property
    def level(self) -> int:
        """Position in the layer stack (presentation on top, 0 when unknown)."""
        return _LEVELS[self]

    @classmethod
    def parse(cls, value: LayerType | str | None) -> LayerType:
        """Accept a LayerType, its string value or None (-> UNKNOWN)."""
        if isinstance(value, LayerType):
            return value
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


_LEVELS = {
    LayerType.PRESENTATION: 1,
    LayerType.APPLICATION: 2,
    LayerType.DOMAIN: 3,
    LayerType.DATA: 4,
    LayerType.INFRASTRUCTURE: 4,
    LayerType.UNKNOWN: 0,
}


class ArchitecturePattern(Enum):
    LAYERED = "layered"
    CLEAN = "clean"
    HEXAGONAL = "hexagonal"
    ONION = "onion"
    UNKNOWN = "unknown"


class ViolationType(Enum):
    """Kinds of architectural rule violations."""

    LAYER_VIOLATION = "layer_violation"  # dependency against the layer rules
    CIRCULAR_DEPENDENCY = "circular_dependency"  # class takes part in a cycle
    DEPENDENCY_INVERSION = "dependency_inversion"  # core holds a concrete outer class


@dataclass(frozen=True)
class ArchitectureLayer:
    """All classes inferred to belong to one layer."""

    name: str
    type: LayerType
    packages: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    level: int = 0


@dataclass(frozen=True)
class LayerDependency:
    """Aggregated class edges between two distinct layers."""

    from_layer: LayerType
    to_layer: LayerType
    count: int
    is_valid: bool


@dataclass(frozen=True)
class ArchitectureViolation:
    from_class: str
    to_class: str
    violation_type: ViolationType
    suggestion: str


@dataclass(frozen=True)
class LayeredArchitectureAnalysis:
    layers: tuple[ArchitectureLayer, ...] = ()
    dependencies: tuple[LayerDependency, ...] = ()
    violations: tuple[ArchitectureViolation, ...] = ()
    pattern: ArchitecturePattern = ArchitecturePattern.UNKNOWN

    def violations_of(self, class_id: str) -> tuple[ArchitectureViolation, ...]:
        """Violations raised by the class (it is the depending side)."""
        return tuple(v for v in self.violations if v.from_class == class_id)


@dataclass(frozen=True)
class ArchitectureAnalysis:
    """Project-wide architecture result."""

    ddd_patterns: DddPatternAnalysis
    layered_architecture: LayeredArchitectureAnalysis
    dependency_graph: DependencyGraph
