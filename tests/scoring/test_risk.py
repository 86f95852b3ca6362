"""Tests for risk assessment."""

import pytest

from class_insight.config import ThresholdConfig
from class_insight.metrics.models import CkMetrics
from class_insight.scoring.models import QualityScore, RiskLevel
from class_insight.scoring.risk import assess_risk, level_for_score, metric_breaches


class TestLevelForScore:
    @pytest.mark.parametrize(
        "overall,level",
        [
            (10.0, RiskLevel.LOW),
            (7.0, RiskLevel.LOW),
            (6.99, RiskLevel.MEDIUM),
            (5.0, RiskLevel.MEDIUM),
            (3.0, RiskLevel.HIGH),
            (2.99, RiskLevel.CRITICAL),
            (0.0, RiskLevel.CRITICAL),
        ],
    )
    def test_levels(self, overall, level):
        assert level_for_score(overall) is level


class TestMetricBreaches:
    def test_none(self):
        assert metric_breaches(CkMetrics()) == []

    def test_all(self):
        ck = CkMetrics(lcom=11, wmc=51, cbo=21, dit=7)
        assert metric_breaches(ck) == [
            "Very poor cohesion (LCOM: 11)",
            "Extremely high complexity (WMC: 51)",
            "Excessive coupling (CBO: 21)",
            "Deep inheritance (DIT: 7)",
        ]

    def test_thresholds_are_exclusive(self):
        assert metric_breaches(CkMetrics(lcom=10, wmc=50, cbo=20, dit=6)) == []

    def test_configurable(self):
        assert metric_breaches(CkMetrics(cbo=5), ThresholdConfig(risk_cbo_breach=4)) == [
            "Excessive coupling (CBO: 5)"
        ]


class TestAssessRisk:
    def test_healthy_class(self):
        risk = assess_risk(CkMetrics(), QualityScore(overall=9.0))
        assert risk.level is RiskLevel.LOW
        assert risk.reasons == ()
        assert risk.impact == "Minimal impact on code quality"
        assert risk.priority == 10

    def test_low_score_without_breaches(self):
        risk = assess_risk(CkMetrics(), QualityScore(overall=5.5))
        assert risk.level is RiskLevel.MEDIUM
        assert risk.reasons == ("Low overall quality score (5.50/10)",)
        assert risk.priority == 20

    def test_single_breach_raises_to_high(self):
        risk = assess_risk(CkMetrics(lcom=11), QualityScore(overall=8.0))
        assert risk.level is RiskLevel.HIGH
        assert risk.reasons == ("Very poor cohesion (LCOM: 11)",)
        assert risk.priority == 31

    def test_single_breach_keeps_critical(self):
        risk = assess_risk(CkMetrics(dit=7), QualityScore(overall=1.0))
        assert risk.level is RiskLevel.CRITICAL

    def test_two_breaches_are_critical(self):
        risk = assess_risk(CkMetrics(lcom=11, cbo=21), QualityScore(overall=9.0))
        assert risk.level is RiskLevel.CRITICAL
        assert len(risk.reasons) == 2
        assert risk.impact == "Severe impact on maintainability and reliability"
        assert risk.priority == 42

    def test_priority_orders_by_level_then_breaches(self):
        high = assess_risk(CkMetrics(lcom=11), QualityScore(overall=8.0))
        critical = assess_risk(CkMetrics(), QualityScore(overall=1.0))
        worse = assess_risk(CkMetrics(lcom=11, wmc=51, cbo=21), QualityScore(overall=1.0))
        assert high.priority < critical.priority < worse.priority

    def test_rank(self):
        ranks = [level.rank for level in RiskLevel]
        assert ranks == [1, 2, 3, 4]
