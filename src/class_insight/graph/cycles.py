"""Cycle detection and package-level graph views.

Cycles are found in two steps: strongly connected components (Tarjan,
iterative) narrow the search, then each component's elementary cycles are
enumerated by a bounded depth-first search, falling back to the
component's shortest cycle (BFS) when the bounds leave nothing. A cycle is
always reported starting from its smallest node id, which makes every
loop appear exactly once.
"""

from __future__ import annotations

from collections import Counter, defaultdict, deque
from collections.abc import Iterable, Sequence
from typing import Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..logging_config import get_logger
from .models import Cycle, CycleSeverity, DependencyEdge, DependencyNode, PackageAnalysis

logger = get_logger(__name__)


def tarjan_scc(adjacency: dict[str, list[str]], all_nodes: Sequence[str]) -> list[set[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Uses an explicit call stack to avoid Python recursion limits on deep
    dependency chains.
    """
    known = set(all_nodes)
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[set[str]] = []

    def enter(node: str) -> tuple[str, Iterable[str]]:
        nonlocal counter
        index[node] = lowlink[node] = counter
        counter += 1
        scc_stack.append(node)
        on_stack.add(node)
        return node, iter([w for w in adjacency.get(node, []) if w in known])

    for root in all_nodes:
        if root in index:
            continue

        call_stack = [enter(root)]
        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    call_stack.append(enter(w))
                    pushed = True
                    break
                if w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if pushed:
                continue

            call_stack.pop()
            if call_stack:
                caller = call_stack[-1][0]
                lowlink[caller] = min(lowlink[caller], lowlink[v])

            if lowlink[v] == index[v]:
                component: set[str] = set()
                while True:
                    w = scc_stack.pop()
                    on_stack.discard(w)
                    component.add(w)
                    if w == v:
                        break
                result.append(component)

    return result


def detect_cycles(
    nodes: Sequence[DependencyNode],
    edges: Iterable[DependencyEdge],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> list[Cycle]:
    """Find the elementary dependency cycles, with severity.

    Self loops and parallel edges are ignored. Enumeration stops at
    ``max_cycle_length`` nodes per cycle, ``max_cycles`` cycles overall and
    ``max_cycle_search_steps`` edge visits per component. A component whose
    search yields nothing within those bounds still reports its shortest
    cycle, so every strongly connected component of two or more classes
    contributes at least one cycle.
    """
    node_ids = [n.id for n in nodes]
    packages = {n.id: n.package_name for n in nodes}

    successors: dict[str, set[str]] = {nid: set() for nid in node_ids}
    predecessors: dict[str, set[str]] = {nid: set() for nid in node_ids}
    for edge in edges:
        if edge.from_id != edge.to_id and edge.from_id in successors and edge.to_id in successors:
            successors[edge.from_id].add(edge.to_id)
            predecessors[edge.to_id].add(edge.from_id)
    adjacency = {nid: sorted(targets) for nid, targets in successors.items()}

    cycles: list[Cycle] = []
    for component in tarjan_scc(adjacency, node_ids):
        if len(component) < 2:
            continue
        loops = _elementary_cycles(
            component, adjacency, predecessors, thresholds, thresholds.max_cycles - len(cycles)
        )
        if not loops:
            loops = [_shortest_cycle(component, adjacency)]
            logger.debug(
                f"No cycle within bounds in a component of {len(component)} classes; "
                f"reporting its shortest cycle ({len(loops[0])} classes)"
            )
        cycles.extend(
            Cycle(nodes=loop, severity=_severity(loop, packages, thresholds)) for loop in loops
        )
        if len(cycles) >= thresholds.max_cycles:
            logger.warning(f"Cycle enumeration stopped at {thresholds.max_cycles} cycles")
            break

    cycles.sort(key=lambda c: (len(c.nodes), c.nodes))
    return cycles


def _elementary_cycles(
    component: set[str],
    adjacency: dict[str, list[str]],
    predecessors: dict[str, set[str]],
    thresholds: ThresholdConfig,
    limit: int,
) -> list[tuple[str, ...]]:
    """Enumerate the simple cycles inside one strongly connected component.

    Each start node only explores nodes ordered after it, so a loop is
    found once, from its smallest member. A step into ``w`` is taken only
    when the shortest way from ``w`` back to the start still fits within
    ``max_cycle_length``, which keeps the search away from paths that
    cannot close in time.
    """
    ordered = sorted(component)
    max_length = thresholds.max_cycle_length
    found: list[tuple[str, ...]] = []
    steps = 0

    for position, start in enumerate(ordered):
        distance = _distances_to(start, set(ordered[position:]), predecessors)
        path = [start]
        on_path = {start}
        stack = [iter(adjacency[start])]

        while stack:
            advanced = False
            for w in stack[-1]:
                steps += 1
                if steps > thresholds.max_cycle_search_steps:
                    logger.warning(
                        f"Cycle search in a component of {len(component)} classes stopped "
                        f"after {thresholds.max_cycle_search_steps} steps"
                    )
                    return found
                if w == start:
                    found.append(tuple(path))
                    if len(found) >= limit:
                        return found
                elif w in distance and w not in on_path and len(path) + distance[w] <= max_length:
                    path.append(w)
                    on_path.add(w)
                    stack.append(iter(adjacency[w]))
                    advanced = True
                    break
            if not advanced:
                stack.pop()
                on_path.discard(path.pop())

    return found


def _distances_to(
    target: str, allowed: set[str], predecessors: dict[str, set[str]]
) -> dict[str, int]:
    """Hop counts from each ``allowed`` node to ``target`` (BFS over reversed edges)."""
    distance = {target: 0}
    queue = deque([target])
    while queue:
        v = queue.popleft()
        for u in predecessors[v]:
            if u in allowed and u not in distance:
                distance[u] = distance[v] + 1
                queue.append(u)
    return distance


def _shortest_cycle(component: set[str], adjacency: dict[str, list[str]]) -> tuple[str, ...]:
    """Shortest cycle inside a strongly connected component.

    Runs a BFS from every member, abandoning a search once it can no longer
    beat the best cycle so far. The result starts from its smallest node.
    """
    best: tuple[str, ...] = ()
    for start in sorted(component):
        parent: dict[str, Optional[str]] = {start: None}
        depth = {start: 0}
        queue = deque([start])
        while queue:
            v = queue.popleft()
            if best and depth[v] + 1 >= len(best):
                break
            if start in adjacency[v]:
                path = [v]
                while parent[path[-1]] is not None:
                    path.append(parent[path[-1]])
                best = tuple(reversed(path))
                break
            for w in adjacency[v]:
                if w in component and w not in depth:
                    parent[w] = v
                    depth[w] = depth[v] + 1
                    queue.append(w)

    smallest = best.index(min(best))
    return best[smallest:] + best[:smallest]


def _severity(
    loop: tuple[str, ...], packages: dict[str, str], thresholds: ThresholdConfig
) -> CycleSeverity:
    if len(loop) > 2:
        return CycleSeverity.HIGH
    if len({packages.get(n, "") for n in loop}) == 1:
        return CycleSeverity.LOW
    return CycleSeverity(thresholds.cross_package_pair_severity.lower())


def calculate_package_cohesion(
    package: str, edges: Iterable[DependencyEdge], nodes: Iterable[DependencyNode]
) -> float:
    """Share of the edges touching ``package`` that stay inside it.

    Returns 1.0 when no edge touches the package.
    """
    members = {n.id for n in nodes if n.package_name == package}
    touching = 0
    internal = 0
    for edge in edges:
        src_in = edge.from_id in members
        dst_in = edge.to_id in members
        if src_in or dst_in:
            touching += 1
            if src_in and dst_in:
                internal += 1
    if touching == 0:
        return 1.0
    return internal / touching


def analyze_packages(
    nodes: Sequence[DependencyNode], edges: Sequence[DependencyEdge]
) -> list[PackageAnalysis]:
    """One PackageAnalysis per package, sorted by package name."""
    by_package: dict[str, list[DependencyNode]] = defaultdict(list)
    for node in nodes:
        by_package[node.package_name].append(node)
    package_of = {n.id: n.package_name for n in nodes}

    depends_on: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        src = package_of.get(edge.from_id)
        dst = package_of.get(edge.to_id)
        if src is not None and dst is not None and src != dst:
            depends_on[src].add(dst)

    result: list[PackageAnalysis] = []
    for package in sorted(by_package):
        members = by_package[package]
        layers = Counter(n.layer for n in members if n.layer is not None)
        result.append(
            PackageAnalysis(
                package_name=package,
                classes=tuple(n.id for n in members),
                dependencies=tuple(sorted(depends_on[package])),
                layer=layers.most_common(1)[0][0] if layers else None,
                cohesion=calculate_package_cohesion(package, edges, members),
            )
        )
    return result
