"""Data models for the class dependency graph.

Nodes are analyzed classes (never external types); edges are derived from
inheritance, composition and usage. Everything here is frozen: the graph
is built once by ``DependencyGraphBuilder`` and read by every later phase.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Optional

from ..facts.models import NodeKind

# ── Level 2: Relationships ─────────────────────────────────────────


class DependencyType(Enum):
    """Kind of relationship between two classes."""

    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    USAGE = "usage"

    @property
    def strength(self) -> int:
        return _STRENGTH[self]


_STRENGTH = {
    DependencyType.INHERITANCE: 3,
    DependencyType.COMPOSITION: 2,
    DependencyType.USAGE: 1,
}


@dataclass(frozen=True)
class DependencyNode:
    """One analyzed class."""

    id: str  # package + class name
    class_name: str
    file_name: str
    package_name: str
    node_type: NodeKind
    layer: Optional[str] = None  # LayerType value, None when not inferable
    language: str = "unknown"


@dataclass(frozen=True)
class DependencyEdge:
    """Directed edge: ``from_id`` depends on ``to_id``."""

    from_id: str
    to_id: str
    dependency_type: DependencyType

    @property
    def strength(self) -> int:
        return self.dependency_type.strength


# ── Level 4: Derived structures ────────────────────────────────────


class CycleSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Cycle:
    """An elementary dependency loop.

    ``nodes`` lists node ids in traversal order; the first node is not
    repeated at the end.
    """

    nodes: tuple[str, ...]
    severity: CycleSeverity

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def successor(self, node_id: str) -> str:
        """Node the given member points to inside this cycle."""
        index = self.nodes.index(node_id)
        return self.nodes[(index + 1) % len(self.nodes)]


@dataclass(frozen=True)
class PackageAnalysis:
    """Per-package view of the graph."""

    package_name: str
    classes: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()  # other packages this one depends on
    layer: Optional[str] = None  # dominant layer of the package's classes
    cohesion: float = 1.0  # internal edges / edges touching the package


@dataclass(frozen=True)
class DependencyGraph:
    """Class-level dependency graph.

    ``superclasses`` maps a node id to the id of its resolved superclass
    (class inheritance only; interfaces are not included). It is a
    read-only view.
    """

    nodes: tuple[DependencyNode, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()
    cycles: tuple[Cycle, ...] = ()
    packages: tuple[PackageAnalysis, ...] = ()
    superclasses: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False, compare=False
    )
    # Node ids whose declared superclass is not an analyzed class
    external_superclasses: frozenset[str] = field(
        default_factory=frozenset, hash=False, compare=False
    )

    @cached_property
    def _node_index(self) -> dict[str, DependencyNode]:
        return {n.id: n for n in self.nodes}

    @cached_property
    def _outgoing(self) -> dict[str, tuple[DependencyEdge, ...]]:
        grouped: dict[str, list[DependencyEdge]] = defaultdict(list)
        for edge in self.edges:
            grouped[edge.from_id].append(edge)
        return {k: tuple(v) for k, v in grouped.items()}

    @cached_property
    def _incoming(self) -> dict[str, tuple[DependencyEdge, ...]]:
        grouped: dict[str, list[DependencyEdge]] = defaultdict(list)
        for edge in self.edges:
            grouped[edge.to_id].append(edge)
        return {k: tuple(v) for k, v in grouped.items()}

    def node(self, node_id: str) -> Optional[DependencyNode]:
        return self._node_index.get(node_id)

    def outgoing(self, node_id: str) -> tuple[DependencyEdge, ...]:
        return self._outgoing.get(node_id, ())

    def incoming(self, node_id: str) -> tuple[DependencyEdge, ...]:
        return self._incoming.get(node_id, ())

    def adjacency(self) -> dict[str, list[str]]:
        """Node id -> ids it depends on (every node present as a key)."""
        adj: dict[str, list[str]] = {n.id: [] for n in self.nodes}
        for edge in self.edges:
            adj[edge.from_id].append(edge.to_id)
        return adj

    def cycles_of(self, node_id: str) -> tuple[Cycle, ...]:
        return tuple(c for c in self.cycles if node_id in c)
