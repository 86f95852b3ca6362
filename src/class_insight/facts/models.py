"""Normalized structural facts about analyzed classes.

A front-end (tree-sitter walker, compiler plugin, reflection dump) turns
source files into ``ClassFact`` values. The engine only reads them: every
fact is frozen and all collection fields are tuples or frozensets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    """Declaration kind of an analyzed type."""

    CLASS = "class"
    INTERFACE = "interface"
    ABSTRACT = "abstract"
    ENUM = "enum"
    OBJECT = "object"

    @property
    def is_contract(self) -> bool:
        """True for interfaces and abstract classes."""
        return self in (NodeKind.INTERFACE, NodeKind.ABSTRACT)


@dataclass(frozen=True)
class PropertyFact:
    """A declared field/property of a class."""

    name: str
    declared_type: str = ""
    mutable: bool = False


@dataclass(frozen=True)
class MethodFact:
    """A declared method with the body facts the metrics need.

    ``control_flow`` holds the raw decision tokens found in the body
    (``if``, ``case``, ``for``, ``&&`` ...), one entry per occurrence.
    ``invocations`` holds called signatures as ``name`` or
    ``qualifier.name``. ``referenced_types`` holds type names used in the
    body (constructor calls, casts, local declarations).
    """

    name: str
    parameter_types: tuple[str, ...] = ()
    return_type: str = ""
    referenced_properties: frozenset[str] = frozenset()
    control_flow: tuple[str, ...] = ()
    invocations: tuple[str, ...] = ()
    referenced_types: tuple[str, ...] = ()

    @property
    def signature_types(self) -> tuple[str, ...]:
        """Parameter types followed by the return type (if any)."""
        if self.return_type:
            return self.parameter_types + (self.return_type,)
        return self.parameter_types


@dataclass(frozen=True)
class ClassFact:
    """Immutable structural description of one class."""

    class_name: str
    file_name: str
    package_name: str = ""
    language: str = "unknown"
    kind: NodeKind = NodeKind.CLASS
    supertype: Optional[str] = None
    interfaces: tuple[str, ...] = ()
    properties: tuple[PropertyFact, ...] = ()
    methods: tuple[MethodFact, ...] = ()
    imports: tuple[str, ...] = ()
    annotations: tuple[str, ...] = ()
    modifiers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def empty(
        cls,
        class_name: str,
        file_name: str = "",
        package_name: str = "",
        language: str = "unknown",
    ) -> ClassFact:
        """Degenerate fact for a class the front-end could not parse."""
        return cls(
            class_name=class_name,
            file_name=file_name,
            package_name=package_name,
            language=language,
        )

    @property
    def qualified_name(self) -> str:
        if self.package_name:
            return f"{self.package_name}.{self.class_name}"
        return self.class_name

    @property
    def property_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.properties)

    @property
    def method_names(self) -> tuple[str, ...]:
        return tuple(m.name for m in self.methods)

    @property
    def method_properties(self) -> dict[str, frozenset[str]]:
        """Ordered method -> referenced properties map.

        Overloads sharing a name are merged into one entry.
        """
        result: dict[str, frozenset[str]] = {}
        for method in self.methods:
            result[method.name] = result.get(method.name, frozenset()) | method.referenced_properties
        return result

    @property
    def supertype_names(self) -> tuple[str, ...]:
        """Superclass (if any) followed by implemented interfaces."""
        if self.supertype:
            return (self.supertype,) + self.interfaces
        return self.interfaces

    def has_annotation(self, name: str) -> bool:
        """Check for an annotation/decorator by simple name (``@`` optional)."""
        wanted = name.lstrip("@").lower()
        for annotation in self.annotations:
            simple = annotation.lstrip("@").split("(")[0].split(".")[-1]
            if simple.lower() == wanted:
                return True
        return False
