"""Risk assessment from the composite score and hard metric breaches."""

from __future__ import annotations

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..metrics.models import CkMetrics
from .models import QualityScore, RiskAssessment, RiskLevel

# (minimum overall score, level), checked top-down
SCORE_LEVELS: list[tuple[float, RiskLevel]] = [
    (7.0, RiskLevel.LOW),
    (5.0, RiskLevel.MEDIUM),
    (3.0, RiskLevel.HIGH),
]

IMPACT = {
    RiskLevel.CRITICAL: "Severe impact on maintainability and reliability",
    RiskLevel.HIGH: "High impact on code quality and development velocity",
    RiskLevel.MEDIUM: "Moderate impact on maintainability",
    RiskLevel.LOW: "Minimal impact on code quality",
}


def level_for_score(overall: float) -> RiskLevel:
    for minimum, level in SCORE_LEVELS:
        if overall >= minimum:
            return level
    return RiskLevel.CRITICAL


def metric_breaches(ck: CkMetrics, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> list[str]:
    """Reasons for every hard threshold the class exceeds."""
    reasons = []
    if ck.lcom > thresholds.risk_lcom_breach:
        reasons.append(f"Very poor cohesion (LCOM: {ck.lcom})")
    if ck.wmc > thresholds.risk_wmc_breach:
        reasons.append(f"Extremely high complexity (WMC: {ck.wmc})")
    if ck.cbo > thresholds.risk_cbo_breach:
        reasons.append(f"Excessive coupling (CBO: {ck.cbo})")
    if ck.dit > thresholds.risk_dit_breach:
        reasons.append(f"Deep inheritance (DIT: {ck.dit})")
    return reasons


def assess_risk(
    ck: CkMetrics, score: QualityScore, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> RiskAssessment:
    """Risk level of one class.

    The composite score sets the base level. One metric breach raises it
    to at least HIGH, two or more to CRITICAL.
    """
    level = level_for_score(score.overall)
    breaches = metric_breaches(ck, thresholds)

    if len(breaches) >= 2:
        level = RiskLevel.CRITICAL
    elif breaches and level.rank < RiskLevel.HIGH.rank:
        level = RiskLevel.HIGH

    reasons = list(breaches)
    if not reasons and level is not RiskLevel.LOW:
        reasons.append(f"Low overall quality score ({score.overall:.2f}/10)")

    return RiskAssessment(
        level=level,
        reasons=tuple(reasons),
        impact=IMPACT[level],
        priority=level.rank * 10 + len(breaches),
    )
