"""Project aggregation: package metrics, coupling matrix, summary line."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

import numpy as np

from ..architecture.models import LayeredArchitectureAnalysis
from ..graph.models import DependencyGraph
from ..scoring.models import QualityScore, RiskLevel
from ..scoring.quality import project_quality_score
from .models import ClassAnalysis, CouplingRelation, PackageMetrics

CK_FIELDS = ("wmc", "cbo", "rfc", "ca", "ce", "dit", "noc", "lcom")

# Package cohesion below this is reported as an issue
LOW_PACKAGE_COHESION = 0.5


def average_ck_metrics(classes: Sequence[ClassAnalysis]) -> dict[str, float]:
    """Mean of every CK metric; zeros when there are no classes."""
    if not classes:
        return dict.fromkeys(CK_FIELDS, 0.0)
    matrix = np.array(
        [[getattr(c.ck_metrics, name) for name in CK_FIELDS] for c in classes], dtype=float
    )
    means = matrix.mean(axis=0)
    return {name: round(float(value), 2) for name, value in zip(CK_FIELDS, means)}


def calculate_package_metrics(
    classes: Sequence[ClassAnalysis],
    graph: DependencyGraph,
    layered: LayeredArchitectureAnalysis,
) -> list[PackageMetrics]:
    """One PackageMetrics per package, sorted by package name."""
    by_package: dict[str, list[ClassAnalysis]] = defaultdict(list)
    for analysis in classes:
        by_package[analysis.package_name].append(analysis)
    cohesion = {p.package_name: p.cohesion for p in graph.packages}

    result: list[PackageMetrics] = []
    for package in sorted(by_package):
        members = by_package[package]
        ids = {m.qualified_name for m in members}
        issues: list[str] = []

        package_cohesion = cohesion.get(package, 1.0)
        if package_cohesion < LOW_PACKAGE_COHESION:
            issues.append(f"Low package cohesion ({package_cohesion:.2f})")

        risky = [
            m
            for m in members
            if m.risk_assessment.level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
        ]
        if risky:
            issues.append(f"{len(risky)} high-risk class{'es' if len(risky) != 1 else ''}")

        violations = [v for v in layered.violations if v.from_class in ids]
        if violations:
            issues.append(f"{len(violations)} architecture violation(s)")

        result.append(
            PackageMetrics(
                package_name=package,
                class_count=len(members),
                average_ck_metrics=average_ck_metrics(members),
                quality_score=project_quality_score([m.quality_score for m in members]),
                issues=tuple(issues),
            )
        )
    return result


def build_coupling_matrix(graph: DependencyGraph) -> list[CouplingRelation]:
    return [
        CouplingRelation(
            from_class=edge.from_id,
            to_class=edge.to_id,
            strength=edge.strength,
            type=edge.dependency_type,
        )
        for edge in graph.edges
    ]


def summarize(
    classes: Sequence[ClassAnalysis],
    score: QualityScore,
    graph: DependencyGraph,
    layered: LayeredArchitectureAnalysis,
) -> str:
    """One-line summary of a run."""
    high_risk = sum(
        1
        for c in classes
        if c.risk_assessment.level in (RiskLevel.HIGH, RiskLevel.CRITICAL)
    )
    return (
        f"{len(classes)} classes in {len(graph.packages)} packages, "
        f"overall quality {score.overall:.2f}/10 ({score.quality_level}), "
        f"{high_risk} high-risk, {len(graph.cycles)} cycles, "
        f"{len(layered.violations)} violations, architecture: {layered.pattern.value}"
    )
