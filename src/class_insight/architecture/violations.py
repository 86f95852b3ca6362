"""Architecture violation detection over the built dependency graph."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional

from ..facts.models import ClassFact
from ..graph.models import DependencyGraph, DependencyType
from .layers import is_valid_layer_dependency
from .models import ArchitectureViolation, LayerType, ViolationType


def node_layers(graph: DependencyGraph) -> dict[str, LayerType]:
    """Node id -> layer (UNKNOWN when not inferred)."""
    return {n.id: LayerType.parse(n.layer) for n in graph.nodes}


def detect_violations(
    facts: Iterable[ClassFact],
    graph: DependencyGraph,
    layers: Optional[Mapping[str, LayerType]] = None,
) -> list[ArchitectureViolation]:
    """Find layer-rule, cycle and dependency-inversion violations.

    Args:
        facts: Analyzed facts (used to tell concrete classes from contracts)
        graph: Built dependency graph
        layers: Node id -> layer; defaults to the layers stored on the nodes

    Returns:
        Layer violations in edge order, then one circular-dependency
        violation per cycle member, then dependency inversions.
    """
    if layers is None:
        layers = node_layers(graph)
    contracts = {
        f.qualified_name for f in facts if f.kind.is_contract or "abstract" in f.modifiers
    }

    violations: list[ArchitectureViolation] = []

    for edge in graph.edges:
        source = layers.get(edge.from_id, LayerType.UNKNOWN)
        target = layers.get(edge.to_id, LayerType.UNKNOWN)
        if not is_valid_layer_dependency(source, target):
            violations.append(
                ArchitectureViolation(
                    from_class=edge.from_id,
                    to_class=edge.to_id,
                    violation_type=ViolationType.LAYER_VIOLATION,
                    suggestion=(
                        f"The {source.value} layer should not depend on the {target.value} "
                        f"layer; move the dependency or invert it through an interface"
                    ),
                )
            )

    reported: set[str] = set()
    for cycle in graph.cycles:
        for node_id in cycle.nodes:
            if node_id in reported:
                continue
            reported.add(node_id)
            violations.append(
                ArchitectureViolation(
                    from_class=node_id,
                    to_class=cycle.successor(node_id),
                    violation_type=ViolationType.CIRCULAR_DEPENDENCY,
                    suggestion=(
                        f"Break the {len(cycle.nodes)}-class dependency cycle "
                        f"({' -> '.join(cycle.nodes)}) by extracting an interface "
                        f"or moving shared logic"
                    ),
                )
            )

    core = (LayerType.DOMAIN, LayerType.APPLICATION)
    outer = (LayerType.DATA, LayerType.INFRASTRUCTURE)
    for edge in graph.edges:
        if edge.dependency_type is not DependencyType.COMPOSITION:
            continue
        if layers.get(edge.from_id) in core and layers.get(edge.to_id) in outer:
            if edge.to_id in contracts:
                continue
            violations.append(
                ArchitectureViolation(
                    from_class=edge.from_id,
                    to_class=edge.to_id,
                    violation_type=ViolationType.DEPENDENCY_INVERSION,
                    suggestion=(
                        f"Depend on an abstraction instead of the concrete "
                        f"{edge.to_id}; inject it through an interface"
                    ),
                )
            )

    return violations
