"""DDD pattern detection results.

Every result carries the class name, its file and a confidence in
[0.0, 1.0] plus the signals that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass


def _check_confidence(confidence: float) -> None:
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"confidence must be within [0, 1], got {confidence}")


@dataclass(frozen=True)
class DddEntity:
    class_name: str
    file_name: str
    has_unique_id: bool
    is_mutable: bool
    id_fields: tuple[str, ...]
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddValueObject:
    class_name: str
    file_name: str
    is_immutable: bool
    has_value_equality: bool
    properties: tuple[str, ...]
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddService:
    class_name: str
    file_name: str
    is_stateless: bool
    has_domain_logic: bool
    methods: tuple[str, ...]
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddRepository:
    class_name: str
    file_name: str
    is_interface: bool
    has_data_access: bool
    crud_methods: tuple[str, ...]
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddAggregate:
    class_name: str
    file_name: str
    root_entity: str
    related_entities: tuple[str, ...]
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddDomainEvent:
    class_name: str
    file_name: str
    is_event: bool
    is_immutable: bool
    has_event_naming: bool
    has_timestamp: bool
    confidence: float

    def __post_init__(self) -> None:
        _check_confidence(self.confidence)


@dataclass(frozen=True)
class DddPatternAnalysis:
    """Classes whose confidence reached the reporting threshold, per pattern."""

    entities: tuple[DddEntity, ...] = ()
    value_objects: tuple[DddValueObject, ...] = ()
    services: tuple[DddService, ...] = ()
    repositories: tuple[DddRepository, ...] = ()
    aggregates: tuple[DddAggregate, ...] = ()
    domain_events: tuple[DddDomainEvent, ...] = ()

    @property
    def total(self) -> int:
        return (
            len(self.entities)
            + len(self.value_objects)
            + len(self.services)
            + len(self.repositories)
            + len(self.aggregates)
            + len(self.domain_events)
        )
