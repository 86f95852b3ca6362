"""Resolve type names found in facts to analyzed class ids."""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Iterable
from typing import Optional

from ..facts.models import ClassFact
from ..logging_config import get_logger

logger = get_logger(__name__)

# Splits "Map<String, List<User>>" into its identifier parts
_TYPE_TOKEN = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


def split_type_names(type_ref: str) -> list[str]:
    """Break a declared type into the plain names it references.

    Nullable markers (``?``), array suffixes (``[]``), varargs and
    generic brackets are removed; generic arguments become separate names.
    """
    if not type_ref:
        return []
    return _TYPE_TOKEN.findall(type_ref.replace("...", " "))


class TypeResolver:
    """Map type names, as written in one class, to analyzed class ids.

    Resolution order for a simple or dotted name:
        1. Exact id of an analyzed class (fully qualified reference)
        2. Explicit import ending in the name
        3. Wildcard import whose package holds the name
        4. A class of the same package
    Anything else (library types, primitives) is unresolved.
    """

    def __init__(self, facts: Iterable[ClassFact]):
        self._ids: set[str] = set()
        self._by_package: dict[str, dict[str, str]] = defaultdict(dict)
        self._by_simple_name: dict[str, list[str]] = defaultdict(list)
        for fact in facts:
            node_id = fact.qualified_name
            if node_id in self._ids:
                continue
            self._ids.add(node_id)
            self._by_package[fact.package_name][fact.class_name] = node_id
            self._by_simple_name[fact.class_name].append(node_id)

    @staticmethod
    def _split_imports(context: ClassFact) -> tuple[list[str], list[str]]:
        """Explicit imports, and the packages of wildcard imports."""
        explicit: list[str] = []
        wildcard: list[str] = []
        for imp in context.imports:
            imp = imp.strip()
            if imp.endswith(".*") or imp.endswith("._"):
                wildcard.append(imp[:-2])
            elif imp:
                explicit.append(imp)
        return explicit, wildcard

    def resolve(self, name: str, context: ClassFact) -> Optional[str]:
        """Resolve one plain name (no generics) from ``context``'s point of view."""
        name = name.strip()
        if not name:
            return None

        if name in self._ids:
            return name

        simple = name.rsplit(".", 1)[-1]
        explicit, wildcard = self._split_imports(context)

        for imp in explicit:
            if imp.rsplit(".", 1)[-1] != simple:
                continue
            if imp in self._ids:
                return imp
            # Bare "import User" style: accept only an unambiguous match
            if "." not in imp and len(self._by_simple_name.get(simple, ())) == 1:
                return self._by_simple_name[simple][0]

        for package in wildcard:
            found = self._by_package.get(package, {}).get(simple)
            if found is not None:
                return found

        found = self._by_package.get(context.package_name, {}).get(simple)
        if found is not None:
            return found

        logger.debug(f"Unresolved type '{name}' in {context.qualified_name}")
        return None

    def resolve_all(self, type_ref: str, context: ClassFact) -> list[str]:
        """Resolve every name referenced by a declared type, in order, deduplicated."""
        result: list[str] = []
        for name in split_type_names(type_ref):
            node_id = self.resolve(name, context)
            if node_id is not None and node_id not in result:
                result.append(node_id)
        return result
