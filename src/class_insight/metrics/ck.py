"""Chidamber-Kemerer metric suite.

Local metrics (LCOM, complexity, RFC) depend on one ClassFact only and
are computed in parallel before the dependency graph exists. Graph
metrics (CBO, CA, CE, DIT, NOC) are filled in afterwards from the frozen
``DependencyGraph``.
"""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.models import ClassFact
from ..graph.models import DependencyGraph
from .complexity import analyze_complexity
from .lcom import calculate_lcom
from .models import CkMetrics, LocalMetrics

_SELF_QUALIFIERS = frozenset({"this", "self", "super", "cls"})


def compute_local_metrics(
    fact: ClassFact, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> LocalMetrics:
    """Phase-A metrics for one class."""
    return LocalMetrics(
        qualified_name=fact.qualified_name,
        lcom=calculate_lcom(fact.method_properties),
        method_count=len(fact.methods),
        property_count=len(fact.properties),
        complexity=analyze_complexity(fact, thresholds),
        rfc=calculate_rfc(fact),
    )


def calculate_rfc(fact: ClassFact) -> int:
    """Response For a Class: own methods + distinct external calls.

    An invocation is external when it is qualified by anything other than
    the receiver itself (``this``/``self``/``super``), or unqualified and
    not naming one of the class's own methods.
    """
    own = set(fact.method_names)
    external: set[str] = set()
    for method in fact.methods:
        for call in method.invocations:
            call = call.strip()
            if not call:
                continue
            qualifier, _, name = call.rpartition(".")
            if qualifier:
                if qualifier not in _SELF_QUALIFIERS:
                    external.add(call)
            elif name not in own:
                external.add(name)
    return len(own) + len(external)


def calculate_dit(node_id: str, graph: DependencyGraph, max_depth: int = 32) -> int:
    """Depth of Inheritance Tree.

    Each resolved superclass hop adds one. A superclass outside the
    analyzed set counts as a single, terminating hop. Walking stops on a
    revisited node (inheritance cycle) or at ``max_depth``.
    """
    depth = 0
    seen = {node_id}
    current = node_id
    while depth < max_depth:
        parent = graph.superclasses.get(current)
        if parent is None:
            if current in graph.external_superclasses:
                depth += 1
            break
        if parent in seen:
            break
        depth += 1
        seen.add(parent)
        current = parent
    return min(depth, max_depth)


def calculate_noc(node_id: str, graph: DependencyGraph) -> int:
    """Number of Children: classes whose resolved superclass is this node."""
    return sum(1 for parent in graph.superclasses.values() if parent == node_id)


def compute_ck_metrics(
    fact: ClassFact,
    graph: DependencyGraph,
    local: Optional[LocalMetrics] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> CkMetrics:
    """Full CK suite for one class against the built graph."""
    if local is None:
        local = compute_local_metrics(fact, thresholds)

    node_id = fact.qualified_name
    targets = {e.to_id for e in graph.outgoing(node_id)} - {node_id}
    sources = {e.from_id for e in graph.incoming(node_id)} - {node_id}

    wmc = local.complexity.total_complexity
    return CkMetrics(
        wmc=wmc,
        cyclomatic_complexity=wmc,
        cbo=len(targets | sources),
        rfc=local.rfc,
        ca=len(sources),
        ce=len(targets),
        dit=calculate_dit(node_id, graph, thresholds.max_inheritance_depth),
        noc=calculate_noc(node_id, graph),
        lcom=local.lcom,
    )
