"""Fact model: immutable normalized class facts and the record loader."""

from .loader import deduplicate_facts, fact_from_record, load_facts
from .models import ClassFact, MethodFact, NodeKind, PropertyFact

__all__ = [
    "ClassFact",
    "MethodFact",
    "NodeKind",
    "PropertyFact",
    "deduplicate_facts",
    "fact_from_record",
    "load_facts",
]
