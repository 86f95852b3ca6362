"""Dependency graph construction from class facts."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from ..architecture.layers import infer_layer
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.loader import deduplicate_facts
from ..facts.models import ClassFact
from ..logging_config import get_logger
from .cycles import analyze_packages, detect_cycles
from .models import DependencyEdge, DependencyGraph, DependencyNode, DependencyType
from .resolution import TypeResolver, split_type_names

logger = get_logger(__name__)


class DependencyGraphBuilder:
    """Build a frozen ``DependencyGraph`` from facts.

    Edge kinds:
        - supertype / interfaces -> INHERITANCE
        - property types -> COMPOSITION
        - method parameter, return and body types -> USAGE

    Only the strongest edge is kept for each ordered pair, and a class
    never depends on itself. The builder's accumulators are private; the
    returned graph shares nothing mutable with it.
    """

    def __init__(
        self, facts: Iterable[ClassFact], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
    ):
        self.thresholds = thresholds
        self.facts = deduplicate_facts(facts)

        self._resolver = TypeResolver(self.facts)
        self._edges: dict[tuple[str, str], DependencyType] = {}
        self._superclasses: dict[str, str] = {}
        self._external_superclasses: set[str] = set()

    def build(self) -> DependencyGraph:
        nodes = tuple(self._node(fact) for fact in self.facts)

        for fact in self.facts:
            self._add_inheritance(fact)
            for prop in fact.properties:
                self._add_type(fact, prop.declared_type, DependencyType.COMPOSITION)
            for method in fact.methods:
                for type_ref in method.signature_types + method.referenced_types:
                    self._add_type(fact, type_ref, DependencyType.USAGE)

        edges = tuple(
            DependencyEdge(from_id=src, to_id=dst, dependency_type=kind)
            for (src, dst), kind in self._edges.items()
        )
        cycles = detect_cycles(nodes, edges, self.thresholds)
        packages = analyze_packages(nodes, edges)

        logger.debug(
            f"Dependency graph: {len(nodes)} nodes, {len(edges)} edges, {len(cycles)} cycles"
        )

        return DependencyGraph(
            nodes=nodes,
            edges=edges,
            cycles=tuple(cycles),
            packages=tuple(packages),
            superclasses=MappingProxyType(dict(self._superclasses)),
            external_superclasses=frozenset(self._external_superclasses),
        )

    @staticmethod
    def _node(fact: ClassFact) -> DependencyNode:
        layer = infer_layer(fact.package_name, fact.class_name)
        return DependencyNode(
            id=fact.qualified_name,
            class_name=fact.class_name,
            file_name=fact.file_name,
            package_name=fact.package_name,
            node_type=fact.kind,
            layer=layer.value if layer is not None else None,
            language=fact.language,
        )

    def _add_inheritance(self, fact: ClassFact) -> None:
        node_id = fact.qualified_name
        for position, supertype in enumerate(fact.supertype_names):
            names = split_type_names(supertype)
            if not names:
                continue
            # "Base<T>" inherits from Base and uses T
            parent = self._resolver.resolve(names[0], fact)
            is_superclass = position == 0 and fact.supertype is not None
            if parent is None:
                if is_superclass:
                    self._external_superclasses.add(node_id)
            else:
                self._add_edge(node_id, parent, DependencyType.INHERITANCE)
                if is_superclass and parent != node_id:
                    self._superclasses[node_id] = parent
            for argument in names[1:]:
                target = self._resolver.resolve(argument, fact)
                if target is not None:
                    self._add_edge(node_id, target, DependencyType.USAGE)

    def _add_type(self, fact: ClassFact, type_ref: str, kind: DependencyType) -> None:
        for target in self._resolver.resolve_all(type_ref, fact):
            self._add_edge(fact.qualified_name, target, kind)

    def _add_edge(self, src: str, dst: str, kind: DependencyType) -> None:
        if src == dst:
            return
        current = self._edges.get((src, dst))
        if current is None or kind.strength > current.strength:
            self._edges[(src, dst)] = kind


def build_dependency_graph(
    facts: Iterable[ClassFact], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> DependencyGraph:
    """Build the dependency graph for a list of facts."""
    return DependencyGraphBuilder(facts, thresholds).build()
