"""Refactoring suggestions as an ordered rule table.

Each rule is ``(name, predicate, builder)`` over a ``SuggestionContext``.
Every rule whose predicate holds contributes its suggestion, in table
order; rules are independent of each other.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..architecture.models import ArchitectureViolation, ViolationType
from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.models import ClassFact
from ..graph.models import Cycle
from ..metrics.lcom import method_groups
from ..metrics.models import CkMetrics, ComplexityAnalysis
from .models import Suggestion


@dataclass(frozen=True)
class SuggestionContext:
    """Everything the rules may look at for one class."""

    fact: ClassFact
    ck: CkMetrics
    complexity: ComplexityAnalysis
    cycles: tuple[Cycle, ...] = ()
    violations: tuple[ArchitectureViolation, ...] = ()
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS

    @property
    def unused_properties(self) -> list[str]:
        used: set[str] = set()
        for props in self.fact.method_properties.values():
            used |= props
        return [p for p in self.fact.property_names if p not in used]

    def violations_of_type(self, kind: ViolationType) -> list[ArchitectureViolation]:
        return [v for v in self.violations if v.violation_type is kind]


Rule = tuple[str, Callable[[SuggestionContext], bool], Callable[[SuggestionContext], Suggestion]]


def _split_class(ctx: SuggestionContext) -> Suggestion:
    groups = method_groups(ctx.fact.method_properties)
    if len(groups) > 1:
        listing = "; ".join(", ".join(group) for group in groups)
        return Suggestion(
            icon="🔀",
            message=f"Split into {len(groups)} focused classes",
            tooltip=f"LCOM is {ctx.ck.lcom}. Methods group by shared properties: {listing}",
        )
    return Suggestion(
        icon="🔧",
        message="Split into focused classes",
        tooltip=(
            f"LCOM is {ctx.ck.lcom}: most method pairs share no state. "
            f"Move unrelated responsibilities into smaller classes."
        ),
    )


def _review_cohesion(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="⚠️",
        message="Consider refactoring",
        tooltip=(
            f"Moderate LCOM ({ctx.ck.lcom}). Look for groups of methods that "
            f"could be extracted into separate classes."
        ),
    )


def _simplify_methods(ctx: SuggestionContext) -> Suggestion:
    names = ", ".join(
        f"{m.method_name} ({m.cyclomatic_complexity})" for m in ctx.complexity.complex_methods
    )
    count = len(ctx.complexity.complex_methods)
    return Suggestion(
        icon="⚡",
        message=f"Simplify {count} complex method{'s' if count != 1 else ''}",
        tooltip=f"Extract helper methods or replace conditionals with polymorphism: {names}",
    )


def _very_complex_methods(ctx: SuggestionContext) -> list[str]:
    limit = ctx.thresholds.very_complex_method_threshold
    return [m.method_name for m in ctx.complexity.methods if m.cyclomatic_complexity > limit]


def _break_down_methods(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="🧠",
        message="Break down very complex methods",
        tooltip=(
            f"Cyclomatic complexity above {ctx.thresholds.very_complex_method_threshold} "
            f"makes these hard to test: {', '.join(_very_complex_methods(ctx))}"
        ),
    )


def _remove_unused(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="📤",
        message="Remove unused properties",
        tooltip=f"Properties not used by any method: {', '.join(ctx.unused_properties)}",
    )


def _reduce_coupling(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="🔗",
        message="Reduce coupling",
        tooltip=(
            f"CBO {ctx.ck.cbo}, RFC {ctx.ck.rfc}. Introduce a facade or inject "
            f"dependencies through interfaces."
        ),
    )


def _favor_composition(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="🌳",
        message="Favor composition over inheritance",
        tooltip=f"Inheritance depth {ctx.ck.dit} is hard to follow. Delegate instead of extending.",
    )


def _too_many_methods(ctx: SuggestionContext) -> Suggestion:
    count = len(ctx.fact.methods)
    return Suggestion(
        icon="📏",
        message=f"Too many methods ({count})",
        tooltip="Classes with many methods are hard to maintain. Consider splitting into smaller classes.",
    )


def _priority_target(ctx: SuggestionContext) -> Suggestion:
    return Suggestion(
        icon="🎯",
        message="Priority refactoring target",
        tooltip=(
            f"Poor cohesion (LCOM {ctx.ck.lcom}) combined with high average complexity "
            f"({ctx.complexity.average_complexity:.1f})."
        ),
    )


def _break_cycle(ctx: SuggestionContext) -> Suggestion:
    longest = max(ctx.cycles, key=lambda c: len(c.nodes))
    return Suggestion(
        icon="🔄",
        message="Break dependency cycle",
        tooltip=f"Part of {len(ctx.cycles)} cycle(s), e.g. {' -> '.join(longest.nodes)}",
    )


def _fix_layers(ctx: SuggestionContext) -> Suggestion:
    targets = ", ".join(v.to_class for v in ctx.violations_of_type(ViolationType.LAYER_VIOLATION))
    return Suggestion(
        icon="🏗️",
        message="Fix layer violation",
        tooltip=f"Depends against the layer rules on: {targets}",
    )


def _invert_dependency(ctx: SuggestionContext) -> Suggestion:
    targets = ", ".join(
        v.to_class for v in ctx.violations_of_type(ViolationType.DEPENDENCY_INVERSION)
    )
    return Suggestion(
        icon="🔌",
        message="Depend on abstractions",
        tooltip=f"Holds concrete infrastructure classes: {targets}",
    )


def _high_lcom(ctx: SuggestionContext) -> bool:
    return ctx.ck.lcom > ctx.thresholds.lcom_split_threshold


RULES: list[Rule] = [
    ("split_class", _high_lcom, _split_class),
    (
        "review_cohesion",
        lambda c: c.thresholds.lcom_moderate_threshold < c.ck.lcom <= c.thresholds.lcom_split_threshold,
        _review_cohesion,
    ),
    ("simplify_methods", lambda c: bool(c.complexity.complex_methods), _simplify_methods),
    ("break_down_methods", lambda c: bool(_very_complex_methods(c)), _break_down_methods),
    (
        "remove_unused_properties",
        lambda c: bool(c.fact.methods) and bool(c.unused_properties),
        _remove_unused,
    ),
    (
        "reduce_coupling",
        lambda c: c.ck.cbo > c.thresholds.cbo_suggestion_threshold
        or c.ck.rfc > c.thresholds.rfc_suggestion_threshold,
        _reduce_coupling,
    ),
    ("favor_composition", lambda c: c.ck.dit > c.thresholds.dit_suggestion_threshold, _favor_composition),
    (
        "too_many_methods",
        lambda c: len(c.fact.methods) > c.thresholds.max_methods_threshold,
        _too_many_methods,
    ),
    (
        "priority_target",
        lambda c: _high_lcom(c)
        and c.complexity.average_complexity > c.thresholds.priority_complexity_threshold,
        _priority_target,
    ),
    ("break_cycle", lambda c: bool(c.cycles), _break_cycle),
    (
        "fix_layer_violation",
        lambda c: bool(c.violations_of_type(ViolationType.LAYER_VIOLATION)),
        _fix_layers,
    ),
    (
        "invert_dependency",
        lambda c: bool(c.violations_of_type(ViolationType.DEPENDENCY_INVERSION)),
        _invert_dependency,
    ),
]


def generate_suggestions(ctx: SuggestionContext) -> list[Suggestion]:
    """Suggestions from every rule that fires, in rule order."""
    return [build(ctx) for _, applies, build in RULES if applies(ctx)]
