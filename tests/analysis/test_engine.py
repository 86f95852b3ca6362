"""End-to-end tests for the analysis engine."""

import logging

import pytest

from class_insight.analysis import engine as engine_module
from class_insight.analysis.engine import AnalysisEngine, analyze_facts
from class_insight.architecture.models import ArchitecturePattern
from class_insight.config import AnalysisConfig
from class_insight.facts.loader import load_facts
from class_insight.facts.models import NodeKind
from class_insight.graph.models import DependencyType
from class_insight.scoring.models import QualityScore, RiskLevel


@pytest.fixture
def many_facts(make_fact, make_method):
    facts = []
    for i in range(12):
        facts.append(
            make_fact(
                f"Worker{i}",
                package=f"jobs.group{i % 3}",
                properties=["state", "count"],
                methods=[
                    make_method("run", props=["state"], flow=["if"] * i),
                    make_method("reset", props=["count"]),
                    make_method("report", calls=["log.info"]),
                ],
            )
        )
    return facts


class TestAnalyzeFacts:
    def test_class_with_single_property(self, make_fact):
        report = analyze_facts([make_fact("Holder", properties=["value"])])
        holder = report.get_class("Holder")
        assert holder.method_count == 0
        assert holder.property_count == 1
        assert holder.lcom == 0
        assert holder.per_method_complexity == []
        assert holder.ck_metrics.wmc == 0

    def test_user_service_scenario(self, user_domain):
        report = analyze_facts(user_domain)

        assert [c.qualified_name for c in report.classes] == [
            "domain.User",
            "application.UserService",
        ]
        graph = report.architecture_analysis.dependency_graph
        assert len(graph.nodes) == 2
        assert [(e.from_id, e.to_id, e.dependency_type) for e in graph.edges] == [
            ("application.UserService", "domain.User", DependencyType.USAGE)
        ]
        layered = report.architecture_analysis.layered_architecture
        assert layered.violations == ()
        assert layered.pattern is ArchitecturePattern.LAYERED

        user = report.get_class("domain.User")
        service = report.get_class("application.UserService")
        assert user.ck_metrics.ca == 1
        assert service.ck_metrics.ce == 1
        assert service.method_details == (("register", frozenset()),)
        assert len(report.coupling_matrix) == 1
        assert len(report.risk_assessments) == 2

    def test_empty_project(self):
        report = analyze_facts([])
        assert report.classes == ()
        assert report.project_quality_score == QualityScore()
        assert report.package_metrics == ()
        assert report.architecture_analysis.layered_architecture.pattern is (
            ArchitecturePattern.UNKNOWN
        )
        assert report.summary.startswith("0 classes")

    def test_scores_are_bounded(self, many_facts):
        report = analyze_facts(many_facts)
        for analysis in report.classes:
            for value in analysis.quality_score.as_dict().values():
                assert 0.0 <= value <= 10.0
        assert 0.0 <= report.project_quality_score.overall <= 10.0

    def test_get_class_missing(self, user_domain):
        assert analyze_facts(user_domain).get_class("nope") is None

    def test_loaded_records(self):
        facts = load_facts(
            [
                {
                    "className": "Invoice",
                    "packageName": "billing.domain",
                    "properties": [{"name": "id", "type": "Long"}],
                    "methods": [{"name": "total", "controlFlow": ["for", "if"]}],
                }
            ]
        )
        invoice = analyze_facts(facts).get_class("billing.domain.Invoice")
        assert invoice.ck_metrics.wmc == 3


class TestParallelExecution:
    def test_parallel_matches_sequential(self, many_facts):
        sequential = AnalysisEngine(AnalysisConfig(parallel=False)).analyze(many_facts)
        parallel = AnalysisEngine(
            AnalysisConfig(parallel=True, parallel_min_classes=10, workers=4)
        ).analyze(many_facts)

        assert parallel.classes == sequential.classes
        assert [c.class_name for c in parallel.classes] == [f"Worker{i}" for i in range(12)]

    def test_input_facts_untouched(self, many_facts):
        before = list(many_facts)
        AnalysisEngine(AnalysisConfig(workers=2)).analyze(many_facts)
        assert many_facts == before

    def test_progress_callback(self, user_domain):
        messages = []
        AnalysisEngine().analyze(user_domain, on_progress=messages.append)
        assert len(messages) == 3
        assert messages[0].startswith("Computing local metrics")


class TestDegradedClasses:
    @pytest.mark.parametrize("parallel", [False, True])
    def test_failing_class_is_analyzed_as_empty(
        self, monkeypatch, caplog, make_fact, make_method, parallel
    ):
        real = engine_module.compute_local_metrics

        def flaky(fact, thresholds):
            if fact.class_name == "Broken" and fact.methods:
                raise RuntimeError("boom")
            return real(fact, thresholds)

        monkeypatch.setattr(engine_module, "compute_local_metrics", flaky)
        facts = [make_fact(f"Ok{i}", methods=[make_method("run")]) for i in range(11)]
        facts.append(make_fact("Broken", properties=["x"], methods=[make_method("run")]))

        config = AnalysisConfig(parallel=parallel, parallel_min_classes=10)
        with caplog.at_level(logging.WARNING, logger="class_insight"):
            report = AnalysisEngine(config).analyze(facts)

        broken = report.get_class("Broken")
        assert broken.method_count == 0
        assert broken.property_count == 0
        assert len(report.classes) == 12
        assert "Broken" in caplog.text


class TestWorstOffenders:
    def test_riskiest_first(self, make_fact, make_method):
        god = make_fact(
            "God",
            methods=[make_method(f"m{i}", props=[f"p{i}"]) for i in range(6)],
        )
        clean = make_fact("Clean", properties=["x"], methods=[make_method("get", props=["x"])])
        report = analyze_facts([clean, god])

        assert report.get_class("God").risk_assessment.level is RiskLevel.HIGH
        assert [c.class_name for c in report.worst_offenders(1)] == ["God"]
        assert [c.class_name for c in report.worst_offenders()] == ["God", "Clean"]

    def test_ties_break_on_name(self, make_fact):
        report = analyze_facts([make_fact("B"), make_fact("A")])
        assert [c.class_name for c in report.worst_offenders()] == ["A", "B"]


class TestDuplicateClassIds:
    @pytest.fixture
    def duplicated(self, make_fact, make_method):
        return [
            make_fact("User", package="domain", file_name="a/User.kt", properties=["id"]),
            make_fact(
                "User",
                package="domain",
                file_name="b/User.kt",
                methods=[make_method("rename")],
            ),
            make_fact(
                "UserRepository",
                package="domain",
                file_name="a/UserRepository.kt",
                kind=NodeKind.INTERFACE,
                methods=[make_method("save")],
            ),
            make_fact(
                "UserRepository",
                package="domain",
                file_name="b/UserRepository.kt",
                kind=NodeKind.INTERFACE,
                methods=[make_method("save")],
            ),
            make_fact("X", package="other"),
        ]

    def test_first_fact_wins(self, duplicated, caplog):
        with caplog.at_level(logging.WARNING, logger="class_insight"):
            report = analyze_facts(duplicated)
        users = [c for c in report.classes if c.qualified_name == "domain.User"]
        assert len(users) == 1
        assert users[0].file_name == "a/User.kt"
        assert users[0].property_count == 1
        assert "Duplicate class id 'domain.User'" in caplog.text

    def test_classes_match_graph_nodes(self, duplicated):
        report = analyze_facts(duplicated)
        graph = report.architecture_analysis.dependency_graph
        assert sorted(c.qualified_name for c in report.classes) == sorted(
            n.id for n in graph.nodes
        )

    def test_package_counts_and_patterns_not_inflated(self, duplicated):
        report = analyze_facts(duplicated)
        domain = next(p for p in report.package_metrics if p.package_name == "domain")
        assert domain.class_count == 2
        assert len(report.architecture_analysis.ddd_patterns.repositories) == 1
