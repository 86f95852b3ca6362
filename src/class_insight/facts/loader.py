"""Convert front-end records (plain mappings) into ClassFact values.

Front-ends usually emit JSON. Keys are accepted in snake_case or
camelCase (``className`` / ``class_name``). A record that cannot be
understood degrades to an empty fact so one bad class never aborts a run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from ..exceptions import FactValidationError
from ..logging_config import get_logger
from .models import ClassFact, MethodFact, NodeKind, PropertyFact

logger = get_logger(__name__)

_KIND_ALIASES = {
    "class": NodeKind.CLASS,
    "interface": NodeKind.INTERFACE,
    "abstract": NodeKind.ABSTRACT,
    "abstract_class": NodeKind.ABSTRACT,
    "enum": NodeKind.ENUM,
    "object": NodeKind.OBJECT,
    "record": NodeKind.CLASS,
}


def load_facts(records: Iterable[Mapping[str, Any]], strict: bool = False) -> list[ClassFact]:
    """Convert records to facts, preserving order.

    Args:
        records: Decoded front-end records, one per class
        strict: Raise instead of degrading malformed records

    Returns:
        One ClassFact per record

    Raises:
        FactValidationError: Only when ``strict`` is set
    """
    facts: list[ClassFact] = []
    for position, record in enumerate(records):
        try:
            facts.append(fact_from_record(record))
        except FactValidationError as e:
            if strict:
                raise
            logger.warning(f"Record {position}: {e}; analyzing as an empty class")
            facts.append(_degraded_fact(record, position))
    return facts


def deduplicate_facts(facts: Iterable[ClassFact]) -> list[ClassFact]:
    """Keep the first fact for each qualified name, in input order."""
    unique: dict[str, ClassFact] = {}
    for fact in facts:
        kept = unique.setdefault(fact.qualified_name, fact)
        if kept is not fact:
            logger.warning(
                f"Duplicate class id '{fact.qualified_name}' in {fact.file_name}; "
                f"keeping the one from {kept.file_name}"
            )
    return list(unique.values())


def fact_from_record(record: Mapping[str, Any]) -> ClassFact:
    """Build one ClassFact from a mapping.

    Raises:
        FactValidationError: If the record is not a mapping or lacks a class name
    """
    if not isinstance(record, Mapping):
        raise FactValidationError(f"expected a mapping, got {type(record).__name__}")

    class_name = _get(record, "class_name")
    if not isinstance(class_name, str) or not class_name.strip():
        raise FactValidationError("missing class name", record=dict(record))

    try:
        return ClassFact(
            class_name=class_name.strip(),
            file_name=str(_get(record, "file_name", "")),
            package_name=str(_get(record, "package_name", "") or ""),
            language=str(_get(record, "language", "unknown")),
            kind=_parse_kind(_get(record, "kind", "class")),
            supertype=_optional_str(_get(record, "supertype")),
            interfaces=_str_tuple(_get(record, "interfaces", ())),
            properties=tuple(_parse_property(p) for p in _get(record, "properties", ()) or ()),
            methods=_parse_methods(_get(record, "methods", ())),
            imports=_str_tuple(_get(record, "imports", ())),
            annotations=_str_tuple(_get(record, "annotations", ())),
            modifiers=frozenset(_str_tuple(_get(record, "modifiers", ()))),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise FactValidationError(str(e), record=dict(record)) from e


def _degraded_fact(record: Any, position: int) -> ClassFact:
    if isinstance(record, Mapping):
        name = _get(record, "class_name")
        if isinstance(name, str) and name.strip():
            return ClassFact.empty(
                name.strip(),
                file_name=str(_get(record, "file_name", "")),
                package_name=str(_get(record, "package_name", "") or ""),
                language=str(_get(record, "language", "unknown")),
            )
    return ClassFact.empty(f"<unparsed-{position}>")


def _get(record: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Look up a snake_case key or its camelCase spelling."""
    if key in record:
        return record[key]
    head, *rest = key.split("_")
    camel = head + "".join(part.capitalize() for part in rest)
    return record.get(camel, default)


def _parse_kind(value: Any) -> NodeKind:
    if isinstance(value, NodeKind):
        return value
    kind = _KIND_ALIASES.get(str(value).strip().lower())
    if kind is None:
        raise ValueError(f"unknown node kind '{value}'")
    return kind


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _parse_property(value: Any) -> PropertyFact:
    if isinstance(value, str):
        return PropertyFact(name=value)
    return PropertyFact(
        name=str(_get(value, "name")),
        declared_type=str(_get(value, "declared_type", _get(value, "type", "")) or ""),
        mutable=bool(_get(value, "mutable", False)),
    )


def _parse_methods(value: Any) -> tuple[MethodFact, ...]:
    if not value:
        return ()
    # Ordered map form: {"name": {...}, ...}
    if isinstance(value, Mapping):
        return tuple(_parse_method(body, name=name) for name, body in value.items())
    return tuple(_parse_method(item) for item in value)


def _parse_method(value: Any, name: Optional[str] = None) -> MethodFact:
    if value is None:
        value = {}
    method_name = name if name is not None else _get(value, "name")
    if not method_name:
        raise ValueError("method without a name")
    return MethodFact(
        name=str(method_name),
        parameter_types=_str_tuple(_get(value, "parameter_types", ())),
        return_type=str(_get(value, "return_type", "") or ""),
        referenced_properties=frozenset(_str_tuple(_get(value, "referenced_properties", ()))),
        control_flow=_str_tuple(_get(value, "control_flow", ())),
        invocations=_str_tuple(_get(value, "invocations", ())),
        referenced_types=_str_tuple(_get(value, "referenced_types", ())),
    )
