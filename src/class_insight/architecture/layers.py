"""Layer inference, layer rules and architecture pattern detection.

Layers come from naming: package segments are checked first, class-name
suffixes second. The first matching rule wins, so rule order matters.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional

from .models import ArchitectureLayer, ArchitecturePattern, LayerDependency, LayerType

# (layer, package segments) in priority order
PACKAGE_RULES: list[tuple[LayerType, frozenset[str]]] = [
    (
        LayerType.PRESENTATION,
        frozenset({"presentation", "controller", "controllers", "api", "web", "rest", "ui", "view"}),
    ),
    (
        LayerType.APPLICATION,
        frozenset({"application", "service", "services", "usecase", "usecases", "port", "ports"}),
    ),
    (LayerType.DOMAIN, frozenset({"domain", "model", "models", "entity", "entities", "core"})),
    (
        LayerType.DATA,
        frozenset({"repository", "repositories", "data", "dao", "persistence"}),
    ),
    (
        LayerType.INFRASTRUCTURE,
        frozenset({"infrastructure", "infra", "config", "configuration", "adapter", "adapters"}),
    ),
]

# (layer, class-name suffixes) in priority order
CLASS_SUFFIX_RULES: list[tuple[LayerType, tuple[str, ...]]] = [
    (LayerType.PRESENTATION, ("Controller", "Api", "Resource", "Endpoint")),
    (LayerType.APPLICATION, ("Service", "Manager", "UseCase")),
    (LayerType.DATA, ("Repository", "Dao")),
    (LayerType.DOMAIN, ("Entity", "Model")),
    (LayerType.INFRASTRUCTURE, ("Config", "Configuration")),
]

# Allowed targets per source layer; same-layer and unknown are always allowed
ALLOWED_DEPENDENCIES: dict[LayerType, frozenset[LayerType]] = {
    LayerType.PRESENTATION: frozenset(
        {LayerType.APPLICATION, LayerType.DOMAIN, LayerType.INFRASTRUCTURE}
    ),
    LayerType.APPLICATION: frozenset({LayerType.DOMAIN, LayerType.DATA, LayerType.INFRASTRUCTURE}),
    LayerType.DOMAIN: frozenset({LayerType.INFRASTRUCTURE}),
    LayerType.DATA: frozenset({LayerType.DOMAIN, LayerType.INFRASTRUCTURE}),
    LayerType.INFRASTRUCTURE: frozenset(LayerType),
}

# Concentric rings, domain at the core
_RING = {
    LayerType.DOMAIN: 1,
    LayerType.APPLICATION: 2,
    LayerType.DATA: 3,
    LayerType.INFRASTRUCTURE: 3,
    LayerType.PRESENTATION: 4,
}

_HEXAGONAL_SEGMENTS = frozenset({"port", "ports", "adapter", "adapters"})
_ONION_INWARD_RATIO = 0.7

_SEGMENT_SPLIT = re.compile(r"[./\\:]+")


def package_segments(package_name: str) -> list[str]:
    return [s.lower() for s in _SEGMENT_SPLIT.split(package_name or "") if s]


def infer_layer(package_name: str, class_name: str) -> Optional[LayerType]:
    """Infer the architectural layer of a class, or None when nothing matches."""
    segments = set(package_segments(package_name))
    for layer, keywords in PACKAGE_RULES:
        if segments & keywords:
            return layer
    for layer, suffixes in CLASS_SUFFIX_RULES:
        if class_name.endswith(suffixes):
            return layer
    return None


def is_valid_layer_dependency(
    from_layer: LayerType | str | None, to_layer: LayerType | str | None
) -> bool:
    """Check a dependency direction against the layer rules.

    Not symmetric: application -> domain is valid, domain -> application
    is not.
    """
    source = LayerType.parse(from_layer)
    target = LayerType.parse(to_layer)
    if source is LayerType.UNKNOWN or target is LayerType.UNKNOWN or source is target:
        return True
    return target in ALLOWED_DEPENDENCIES[source]


def is_inward(from_layer: LayerType, to_layer: LayerType) -> bool:
    """True when the dependency points towards the domain core."""
    if from_layer not in _RING or to_layer not in _RING:
        return False
    return _RING[from_layer] > _RING[to_layer]


def determine_architecture_pattern(
    layers: Sequence[ArchitectureLayer], dependencies: Sequence[LayerDependency]
) -> ArchitecturePattern:
    """Classify the overall architecture.

    Fewer than two known layers (including an empty project) is UNKNOWN.
    """
    known = {layer.type for layer in layers if layer.type is not LayerType.UNKNOWN}
    if len(known) < 2:
        return ArchitecturePattern.UNKNOWN

    segments = {s for layer in layers for p in layer.packages for s in package_segments(p)}
    if segments & _HEXAGONAL_SEGMENTS and LayerType.DOMAIN in known:
        return ArchitecturePattern.HEXAGONAL

    if {LayerType.DOMAIN, LayerType.APPLICATION, LayerType.INFRASTRUCTURE} <= known:
        cross = [d for d in dependencies if d.from_layer is not d.to_layer]
        total = sum(d.count for d in cross)
        inward = sum(d.count for d in cross if is_inward(d.from_layer, d.to_layer))
        if total > 0 and inward == total:
            return ArchitecturePattern.CLEAN
        if total > 0 and inward / total > _ONION_INWARD_RATIO:
            return ArchitecturePattern.ONION

    return ArchitecturePattern.LAYERED
