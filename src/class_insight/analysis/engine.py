"""AnalysisEngine: facts -> ProjectReport.

Pipeline:
    A. Local metrics per class (LCOM, complexity, RFC), in parallel.
       Each class writes only its own result slot; leaving the executor
       is the single barrier.
    B. Whole-graph work on one thread: dependency graph, cycles, layers,
       violations, DDD patterns.
    C. Per class: CK completion, quality score, risk, suggestions.
    Then project aggregation.
"""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

from ..architecture.analyzer import LayeredArchitectureAnalyzer
from ..architecture.models import ArchitectureAnalysis
from ..config import AnalysisConfig
from ..ddd.detector import detect_patterns
from ..exceptions import ClassAnalysisError
from ..facts.loader import deduplicate_facts
from ..facts.models import ClassFact
from ..graph.builder import DependencyGraphBuilder
from ..logging_config import get_logger
from ..metrics.ck import compute_ck_metrics, compute_local_metrics
from ..metrics.models import LocalMetrics
from ..scoring.quality import calculate_quality_score, project_quality_score
from ..scoring.risk import assess_risk
from ..scoring.suggestions import SuggestionContext, generate_suggestions
from .models import ClassAnalysis, ProjectReport
from .packages import build_coupling_matrix, calculate_package_metrics, summarize

logger = get_logger(__name__)

ProgressCallback = Optional[Callable[[str], None]]

# Default worker count: CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


class AnalysisEngine:
    """Run the full analysis pipeline over a list of facts.

    Example:
        >>> engine = AnalysisEngine(AnalysisConfig(parallel=False))
        >>> report = engine.analyze(facts)
        >>> report.worst_offenders(5)
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self.thresholds = self.config.thresholds

    def analyze(
        self, facts: Sequence[ClassFact], on_progress: ProgressCallback = None
    ) -> ProjectReport:
        facts = deduplicate_facts(facts)
        started = time.perf_counter()

        if on_progress:
            on_progress(f"Computing local metrics for {len(facts)} classes...")
        local = self._compute_local(facts)
        logger.debug(f"Phase A: {len(facts)} classes in {time.perf_counter() - started:.3f}s")

        if on_progress:
            on_progress("Building dependency graph...")
        phase_b = time.perf_counter()
        graph = DependencyGraphBuilder(facts, self.thresholds).build()
        layered = LayeredArchitectureAnalyzer(self.thresholds).analyze(facts, graph)
        ddd = detect_patterns(facts, graph, self.thresholds)
        logger.debug(f"Phase B: {time.perf_counter() - phase_b:.3f}s")

        if on_progress:
            on_progress("Scoring classes...")
        classes = []
        for fact, metrics in zip(facts, local):
            node_id = fact.qualified_name
            ck = compute_ck_metrics(fact, graph, metrics, self.thresholds)
            violations = layered.violations_of(node_id)
            score = calculate_quality_score(ck, len(violations))
            risk = assess_risk(ck, score, self.thresholds)
            suggestions = generate_suggestions(
                SuggestionContext(
                    fact=fact,
                    ck=ck,
                    complexity=metrics.complexity,
                    cycles=graph.cycles_of(node_id),
                    violations=violations,
                    thresholds=self.thresholds,
                )
            )
            classes.append(
                ClassAnalysis(
                    class_name=fact.class_name,
                    file_name=fact.file_name,
                    qualified_name=node_id,
                    package_name=fact.package_name,
                    lcom=metrics.lcom,
                    method_count=metrics.method_count,
                    property_count=metrics.property_count,
                    method_details=tuple(fact.method_properties.items()),
                    complexity=metrics.complexity,
                    ck_metrics=ck,
                    quality_score=score,
                    risk_assessment=risk,
                    suggestions=tuple(suggestions),
                )
            )

        project_score = project_quality_score([c.quality_score for c in classes])
        report = ProjectReport(
            classes=tuple(classes),
            architecture_analysis=ArchitectureAnalysis(
                ddd_patterns=ddd,
                layered_architecture=layered,
                dependency_graph=graph,
            ),
            project_quality_score=project_score,
            package_metrics=tuple(calculate_package_metrics(classes, graph, layered)),
            coupling_matrix=tuple(build_coupling_matrix(graph)),
            risk_assessments=tuple(c.risk_assessment for c in classes),
            summary=summarize(classes, project_score, graph, layered),
        )

        logger.info(report.summary)
        logger.debug(f"Analysis finished in {time.perf_counter() - started:.3f}s")
        return report

    def _compute_local(self, facts: list[ClassFact]) -> list[LocalMetrics]:
        """Phase A. Failed classes are replaced in ``facts`` by empty facts."""
        slots: list[Optional[LocalMetrics]] = [None] * len(facts)

        if not self.config.parallel or len(facts) < self.config.parallel_min_classes:
            for index, fact in enumerate(facts):
                try:
                    slots[index] = compute_local_metrics(fact, self.thresholds)
                except Exception as e:
                    slots[index] = self._degrade(facts, index, e)
        else:
            workers = self.config.workers or _DEFAULT_WORKERS
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(compute_local_metrics, fact, self.thresholds): index
                    for index, fact in enumerate(facts)
                }
                for future in as_completed(futures):
                    index = futures[future]
                    try:
                        slots[index] = future.result()
                    except Exception as e:
                        slots[index] = self._degrade(facts, index, e)

        return [s for s in slots if s is not None]

    def _degrade(self, facts: list[ClassFact], index: int, error: Exception) -> LocalMetrics:
        fact = facts[index]
        failure = ClassAnalysisError(fact.qualified_name, str(error))
        logger.warning(f"{failure}; analyzing as an empty class")
        facts[index] = ClassFact.empty(
            fact.class_name,
            file_name=fact.file_name,
            package_name=fact.package_name,
            language=fact.language,
        )
        return compute_local_metrics(facts[index], self.thresholds)


def analyze_facts(
    facts: Sequence[ClassFact], config: Optional[AnalysisConfig] = None
) -> ProjectReport:
    """Analyze facts with the given (or default) configuration."""
    return AnalysisEngine(config).analyze(facts)
