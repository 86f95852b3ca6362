"""Layered architecture analysis over the built dependency graph."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.models import ClassFact
from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from .layers import determine_architecture_pattern, is_valid_layer_dependency
from .models import ArchitectureLayer, LayerDependency, LayeredArchitectureAnalysis, LayerType
from .violations import detect_violations, node_layers

logger = get_logger(__name__)


class LayeredArchitectureAnalyzer:
    """Group classes into layers, aggregate layer dependencies, find violations.

    Example:
        >>> analyzer = LayeredArchitectureAnalyzer()
        >>> result = analyzer.analyze(facts, graph)
        >>> result.pattern
        <ArchitecturePattern.LAYERED: 'layered'>
    """

    def __init__(self, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS):
        self.thresholds = thresholds

    def analyze(
        self, facts: Sequence[ClassFact], graph: DependencyGraph
    ) -> LayeredArchitectureAnalysis:
        layers_by_node = node_layers(graph)
        layers = self._build_layers(graph, layers_by_node)
        dependencies = self._layer_dependencies(graph, layers_by_node)
        violations = detect_violations(facts, graph, layers_by_node)
        pattern = determine_architecture_pattern(layers, dependencies)

        logger.debug(
            f"Architecture: {len(layers)} layers, {len(dependencies)} layer dependencies, "
            f"{len(violations)} violations, pattern={pattern.value}"
        )

        return LayeredArchitectureAnalysis(
            layers=tuple(layers),
            dependencies=tuple(dependencies),
            violations=tuple(violations),
            pattern=pattern,
        )

    @staticmethod
    def _build_layers(
        graph: DependencyGraph, layers_by_node: dict[str, LayerType]
    ) -> list[ArchitectureLayer]:
        members: dict[LayerType, list[str]] = defaultdict(list)
        packages: dict[LayerType, set[str]] = defaultdict(set)
        for node in graph.nodes:
            layer = layers_by_node[node.id]
            if layer is LayerType.UNKNOWN:
                continue
            members[layer].append(node.id)
            if node.package_name:
                packages[layer].add(node.package_name)

        ordered = sorted(members, key=lambda t: (t.level, t.value))
        return [
            ArchitectureLayer(
                name=layer.value,
                type=layer,
                packages=tuple(sorted(packages[layer])),
                classes=tuple(members[layer]),
                level=layer.level,
            )
            for layer in ordered
        ]

    @staticmethod
    def _layer_dependencies(
        graph: DependencyGraph, layers_by_node: dict[str, LayerType]
    ) -> list[LayerDependency]:
        counts: Counter[tuple[LayerType, LayerType]] = Counter()
        for edge in graph.edges:
            source = layers_by_node.get(edge.from_id, LayerType.UNKNOWN)
            target = layers_by_node.get(edge.to_id, LayerType.UNKNOWN)
            if LayerType.UNKNOWN in (source, target) or source is target:
                continue
            counts[(source, target)] += 1

        ordered = sorted(
            counts.items(),
            key=lambda item: (item[0][0].level, item[0][0].value, item[0][1].level, item[0][1].value),
        )
        return [
            LayerDependency(
                from_layer=source,
                to_layer=target,
                count=count,
                is_valid=is_valid_layer_dependency(source, target),
            )
            for (source, target), count in ordered
        ]
