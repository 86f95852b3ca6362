"""Cyclomatic complexity from normalized control-flow tokens.

The front-end reports one token per decision construct occurrence. Each
token carries a fixed weight; unknown tokens weigh nothing. Compound
boolean expressions count once per short-circuit operator, so
``a && b || c`` contributes 2.
"""

from __future__ import annotations

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.models import ClassFact, MethodFact
from .models import ComplexityAnalysis, MethodComplexity

BASE_COMPLEXITY = 1

# token -> complexity increment
TOKEN_WEIGHTS: dict[str, int] = {
    # conditionals
    "if": 1,
    "elif": 1,
    "else if": 1,
    "ternary": 1,
    # Kotlin elvis: one branch, taken when the left side is null
    "?:": 1,
    "elvis": 1,
    # multi-way branches: one point per branch, default included
    "case": 1,
    "when": 1,
    "default": 1,
    # loops
    "for": 1,
    "foreach": 1,
    "while": 1,
    "do": 1,
    # exception handlers
    "catch": 1,
    "except": 1,
    # short-circuit operators
    "&&": 1,
    "||": 1,
    "and": 1,
    "or": 1,
    # structure only
    "else": 0,
    "try": 0,
    "finally": 0,
}


def token_weight(token: str) -> int:
    return TOKEN_WEIGHTS.get(" ".join(token.lower().split()), 0)


def calculate_cyclomatic_complexity(method: MethodFact) -> int:
    """Cyclomatic complexity of one method (always >= 1)."""
    return BASE_COMPLEXITY + sum(token_weight(t) for t in method.control_flow)


def analyze_complexity(
    fact: ClassFact, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> ComplexityAnalysis:
    """Per-method complexity summary for a class."""
    methods = tuple(
        MethodComplexity(m.name, calculate_cyclomatic_complexity(m)) for m in fact.methods
    )
    if not methods:
        return ComplexityAnalysis()

    values = [m.cyclomatic_complexity for m in methods]
    return ComplexityAnalysis(
        methods=methods,
        total_complexity=sum(values),
        average_complexity=sum(values) / len(values),
        max_complexity=max(values),
        complex_methods=tuple(
            m for m in methods if m.cyclomatic_complexity > thresholds.complex_method_threshold
        ),
    )


def complexity_level(complexity: int) -> str:
    if complexity <= 1:
        return "Simple"
    if complexity <= 5:
        return "Low"
    if complexity <= 10:
        return "Moderate"
    if complexity <= 20:
        return "High"
    return "Very High"
