"""Signals and weight tables for DDD pattern detection.

A signal is a predicate over one ClassFact. Each pattern owns an ordered
table of ``(signal name, weight, predicate)``; its confidence is the sum
of the weights of the signals that hold, clamped to [0, 1].
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from ..architecture.layers import infer_layer, package_segments
from ..architecture.models import LayerType
from ..facts.models import ClassFact

Signal = tuple[str, float, Callable[[ClassFact], bool]]

_DOMAIN_SEGMENTS = frozenset({"domain", "model", "models"})

# Methods that carry no business behavior
_BOILERPLATE_METHODS = frozenset(
    {
        "equals",
        "hashcode",
        "tostring",
        "copy",
        "clone",
        "constructor",
        "init",
        "__init__",
        "__eq__",
        "__hash__",
        "__repr__",
        "__str__",
        "__post_init__",
    }
)
_ACCESSOR = re.compile(r"^(get|set|is|has)([A-Z_]|$)")
_COMPONENT = re.compile(r"^component\d+$")
_SETTER = re.compile(r"^set([A-Z]|_)")

_CRUD_PREFIXES = (
    "save",
    "find",
    "delete",
    "exists",
    "count",
    "update",
    "insert",
    "remove",
    "persist",
)
_TEMPORAL_NAMES = ("timestamp", "time", "date", "created", "updated", "occurred")
_TEMPORAL_TYPES = frozenset(
    {
        "instant",
        "date",
        "datetime",
        "localdate",
        "localdatetime",
        "zoneddatetime",
        "offsetdatetime",
        "timestamp",
    }
)


# ── Helpers ─────────────────────────────────────────────────────────


def clamp_confidence(value: float) -> float:
    """Clamp to [0.0, 1.0], rounded to keep float sums stable."""
    return round(max(0.0, min(1.0, value)), 4)


def score(fact: ClassFact, table: Sequence[Signal]) -> tuple[float, list[str]]:
    """Confidence and the names of the signals that held."""
    fired = [name for name, _, predicate in table if predicate(fact)]
    weights = {name: weight for name, weight, _ in table}
    return clamp_confidence(sum(weights[name] for name in fired)), fired


def id_fields(fact: ClassFact) -> tuple[str, ...]:
    """Identifier-shaped properties: ``id``, ``uuid``, ``*Id``, ``*_id`` or UUID-typed."""
    result = []
    for prop in fact.properties:
        name = prop.name
        lower = name.lower()
        if (
            lower in ("id", "uuid", "guid")
            or (len(name) > 2 and (name.endswith("Id") or name.endswith("ID")))
            or lower.endswith("_id")
            or prop.declared_type.rstrip("?").split(".")[-1].upper() == "UUID"
        ):
            result.append(name)
    return tuple(result)


def has_equality_methods(fact: ClassFact) -> bool:
    names = {m.name for m in fact.methods}
    return {"equals", "hashCode"} <= names or {"__eq__", "__hash__"} <= names


def is_data_class(fact: ClassFact) -> bool:
    return bool({"data", "record"} & fact.modifiers) or fact.has_annotation("dataclass")


def is_trivial_method(name: str) -> bool:
    if name.lower() in _BOILERPLATE_METHODS:
        return True
    return bool(_ACCESSOR.match(name) or _COMPONENT.match(name))


def business_methods(fact: ClassFact) -> tuple[str, ...]:
    return tuple(m.name for m in fact.methods if not is_trivial_method(m.name))


def has_business_logic(fact: ClassFact) -> bool:
    return bool(business_methods(fact))


def has_mutable_state(fact: ClassFact) -> bool:
    """Any mutable property, or a setter-style method."""
    if any(p.mutable for p in fact.properties):
        return True
    return any(_SETTER.match(m.name) for m in fact.methods)


def is_fully_immutable(fact: ClassFact) -> bool:
    """Has properties and none of them is mutable."""
    return bool(fact.properties) and not any(p.mutable for p in fact.properties)


def in_domain_package(fact: ClassFact) -> bool:
    if _DOMAIN_SEGMENTS & set(package_segments(fact.package_name)):
        return True
    path = fact.file_name.replace("\\", "/")
    return "/domain/" in path or "/model/" in path


def crud_methods(fact: ClassFact) -> tuple[str, ...]:
    return tuple(m.name for m in fact.methods if m.name.lower().startswith(_CRUD_PREFIXES))


def has_timestamp(fact: ClassFact) -> bool:
    for prop in fact.properties:
        if any(word in prop.name.lower() for word in _TEMPORAL_NAMES):
            return True
        simple_type = prop.declared_type.rstrip("?").split(".")[-1].lower()
        if simple_type in _TEMPORAL_TYPES:
            return True
    return False


def has_event_naming(fact: ClassFact) -> bool:
    return fact.class_name.endswith(("Event", "Happened"))


def in_data_layer(fact: ClassFact) -> bool:
    return infer_layer(fact.package_name, fact.class_name) in (
        LayerType.DATA,
        LayerType.INFRASTRUCTURE,
    )


# ── Weight tables ──────────────────────────────────────────────────

ENTITY_SIGNALS: list[Signal] = [
    ("identifier", 0.3, lambda f: bool(id_fields(f))),
    ("mutable", 0.2, has_mutable_state),
    ("identity_equality", 0.3, has_equality_methods),
    ("naming", 0.2, lambda f: f.class_name.endswith(("Entity", "Aggregate"))),
    ("annotation", 0.4, lambda f: f.has_annotation("Entity")),
    ("domain_package", 0.1, in_domain_package),
    ("business_logic", 0.15, has_business_logic),
]

VALUE_OBJECT_SIGNALS: list[Signal] = [
    ("immutable", 0.4, is_fully_immutable),
    ("structural_equality", 0.3, has_equality_methods),
    ("data_class", 0.3, is_data_class),
    ("naming", 0.2, lambda f: f.class_name.endswith(("Value", "VO", "ValueObject"))),
    ("no_identity", 0.1, lambda f: bool(f.properties) and not id_fields(f)),
]

SERVICE_SIGNALS: list[Signal] = [
    ("stateless", 0.3, lambda f: bool(f.methods) and not has_mutable_state(f)),
    ("domain_logic", 0.4, has_business_logic),
    ("naming", 0.2, lambda f: f.class_name.endswith("Service")),
    ("annotation", 0.3, lambda f: f.has_annotation("Service")),
]

REPOSITORY_SIGNALS: list[Signal] = [
    ("naming", 0.4, lambda f: f.class_name.endswith(("Repository", "Repo"))),
    ("annotation", 0.4, lambda f: f.has_annotation("Repository")),
    ("contract", 0.2, lambda f: f.kind.is_contract),
    ("crud", 0.3, lambda f: bool(crud_methods(f))),
    ("data_layer", 0.1, in_data_layer),
]

DOMAIN_EVENT_SIGNALS: list[Signal] = [
    ("naming", 0.4, has_event_naming),
    ("immutable", 0.3, is_fully_immutable),
    ("domain_package", 0.2, in_domain_package),
    ("timestamp", 0.2, has_timestamp),
]

# Aggregate signals need the graph; weights only, evaluated by the detector
AGGREGATE_WEIGHTS: dict[str, float] = {
    "entity": 0.4,
    "composes_domain_objects": 0.3,
    "naming": 0.2,
    "unowned": 0.1,
}
