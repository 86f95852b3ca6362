"""Quality scoring from CK metrics and architecture violations.

Every component maps a metric onto [0, 10] through a step table; the
overall score is their weighted sum.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..metrics.models import CkMetrics
from .models import QualityScore

# (inclusive upper bound, score); the last entry catches everything above
COHESION_TABLE: list[tuple[float, float]] = [(0, 10.0), (2, 8.0), (5, 5.0), (float("inf"), 2.0)]
COMPLEXITY_TABLE: list[tuple[float, float]] = [
    (10, 10.0),
    (20, 8.0),
    (35, 6.0),
    (50, 4.0),
    (float("inf"), 2.0),
]
COUPLING_TABLE: list[tuple[float, float]] = [
    (5, 10.0),
    (10, 8.0),
    (20, 6.0),
    (35, 4.0),
    (50, 2.0),
    (float("inf"), 1.0),
]
ARCHITECTURE_TABLE: list[tuple[float, float]] = [
    (0, 10.0),
    (1, 8.0),
    (3, 6.0),
    (5, 4.0),
    (float("inf"), 2.0),
]
# (max DIT, max NOC, score)
INHERITANCE_TABLE: list[tuple[int, int, float]] = [
    (2, 5, 10.0),
    (4, 10, 8.0),
    (6, 15, 6.0),
    (8, 20, 4.0),
    (10, 30, 2.0),
]
INHERITANCE_FLOOR = 1.0

WEIGHTS = {
    "cohesion": 0.25,
    "complexity": 0.25,
    "coupling": 0.25,
    "inheritance": 0.15,
    "architecture": 0.10,
}


def lookup(value: float, table: Sequence[tuple[float, float]]) -> float:
    for upper, score in table:
        if value <= upper:
            return score
    return table[-1][1]


def cohesion_score(lcom: int) -> float:
    return lookup(lcom, COHESION_TABLE)


def complexity_score(wmc: int) -> float:
    return lookup(wmc, COMPLEXITY_TABLE)


def coupling_score(ck: CkMetrics) -> float:
    # RFC grows with every method, so it is damped
    return lookup(ck.cbo + ck.rfc // 5 + ck.ca + ck.ce, COUPLING_TABLE)


def inheritance_score(dit: int, noc: int) -> float:
    for max_dit, max_noc, score in INHERITANCE_TABLE:
        if dit <= max_dit and noc <= max_noc:
            return score
    return INHERITANCE_FLOOR


def architecture_score(violation_count: int) -> float:
    return lookup(violation_count, ARCHITECTURE_TABLE)


def calculate_quality_score(ck: CkMetrics, violation_count: int = 0) -> QualityScore:
    """Score one class.

    Args:
        ck: Completed CK metrics of the class
        violation_count: Architecture violations raised by the class

    Returns:
        QualityScore with every component in [0, 10]
    """
    components = {
        "cohesion": cohesion_score(ck.lcom),
        "complexity": complexity_score(ck.wmc),
        "coupling": coupling_score(ck),
        "inheritance": inheritance_score(ck.dit, ck.noc),
        "architecture": architecture_score(violation_count),
    }
    overall = sum(WEIGHTS[name] * value for name, value in components.items())
    return QualityScore(overall=round(min(10.0, max(0.0, overall)), 2), **components)


def project_quality_score(scores: Sequence[QualityScore]) -> QualityScore:
    """Component-wise mean over classes; all zeros for an empty project."""
    if not scores:
        return QualityScore()
    matrix = np.array(
        [
            [s.cohesion, s.complexity, s.coupling, s.inheritance, s.architecture, s.overall]
            for s in scores
        ],
        dtype=float,
    )
    means = np.round(matrix.mean(axis=0), 2)
    return QualityScore(
        cohesion=float(means[0]),
        complexity=float(means[1]),
        coupling=float(means[2]),
        inheritance=float(means[3]),
        architecture=float(means[4]),
        overall=float(means[5]),
    )
