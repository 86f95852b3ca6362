"""LCOM (Lack of Cohesion of Methods), P - Q formulation.

P = method pairs sharing no property, Q = pairs sharing at least one.
LCOM = max(0, P - Q). Two methods that touch no property at all form a
non-cohesive pair.
"""

from collections.abc import Mapping, Set
from itertools import combinations


def calculate_lcom(method_properties: Mapping[str, Set[str]]) -> int:
    """Compute LCOM for one class.

    Args:
        method_properties: Method name -> properties referenced in its body

    Returns:
        LCOM >= 0 (0 for classes with zero or one method)
    """
    if len(method_properties) <= 1:
        return 0

    non_cohesive = 0
    cohesive = 0
    for props_a, props_b in combinations(method_properties.values(), 2):
        if props_a & props_b:
            cohesive += 1
        else:
            non_cohesive += 1

    return max(0, non_cohesive - cohesive)


def method_groups(method_properties: Mapping[str, Set[str]]) -> list[list[str]]:
    """Partition methods into groups connected through shared properties.

    Methods that reference no property are left out. Each group is a
    candidate for extraction into its own class.
    """
    methods = [m for m, props in method_properties.items() if props]
    parent = {m: m for m in methods}

    def find(m: str) -> str:
        while parent[m] != m:
            parent[m] = parent[parent[m]]
            m = parent[m]
        return m

    owner: dict[str, str] = {}
    for method in methods:
        for prop in method_properties[method]:
            if prop in owner:
                root_a, root_b = find(owner[prop]), find(method)
                if root_a != root_b:
                    parent[root_b] = root_a
            else:
                owner[prop] = method

    groups: dict[str, list[str]] = {}
    for method in methods:
        groups.setdefault(find(method), []).append(method)
    return list(groups.values())


def cohesion_level(lcom: int) -> str:
    """Human-readable cohesion level for an LCOM value."""
    if lcom == 0:
        return "Excellent"
    if lcom <= 2:
        return "Good"
    if lcom <= 5:
        return "Fair"
    if lcom <= 10:
        return "Poor"
    return "Very Poor"
