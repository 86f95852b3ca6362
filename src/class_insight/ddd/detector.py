"""DDD pattern detection over analyzed classes.

Each ``analyze_*`` function is total over any ClassFact (an empty fact
scores 0 unless its name alone carries a signal) and never mutates it.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..facts.models import ClassFact
from ..graph.models import DependencyGraph, DependencyType
from ..logging_config import get_logger
from .models import (
    DddAggregate,
    DddDomainEvent,
    DddEntity,
    DddPatternAnalysis,
    DddRepository,
    DddService,
    DddValueObject,
)
from .rules import (
    AGGREGATE_WEIGHTS,
    DOMAIN_EVENT_SIGNALS,
    ENTITY_SIGNALS,
    REPOSITORY_SIGNALS,
    SERVICE_SIGNALS,
    VALUE_OBJECT_SIGNALS,
    clamp_confidence,
    crud_methods,
    has_equality_methods,
    has_event_naming,
    has_mutable_state,
    has_timestamp,
    id_fields,
    is_data_class,
    is_fully_immutable,
    score,
)

logger = get_logger(__name__)

# Confidence above which a class is flagged as a domain event
EVENT_CONFIDENCE = 0.5


def analyze_entity(fact: ClassFact) -> DddEntity:
    confidence, _ = score(fact, ENTITY_SIGNALS)
    ids = id_fields(fact)
    return DddEntity(
        class_name=fact.class_name,
        file_name=fact.file_name,
        has_unique_id=bool(ids),
        is_mutable=has_mutable_state(fact),
        id_fields=ids,
        confidence=confidence,
    )


def analyze_value_object(fact: ClassFact) -> DddValueObject:
    confidence, _ = score(fact, VALUE_OBJECT_SIGNALS)
    return DddValueObject(
        class_name=fact.class_name,
        file_name=fact.file_name,
        is_immutable=is_fully_immutable(fact),
        has_value_equality=has_equality_methods(fact) or is_data_class(fact),
        properties=fact.property_names,
        confidence=confidence,
    )


def analyze_service(fact: ClassFact) -> DddService:
    confidence, fired = score(fact, SERVICE_SIGNALS)
    return DddService(
        class_name=fact.class_name,
        file_name=fact.file_name,
        is_stateless="stateless" in fired,
        has_domain_logic="domain_logic" in fired,
        methods=fact.method_names,
        confidence=confidence,
    )


def analyze_repository(fact: ClassFact) -> DddRepository:
    confidence, _ = score(fact, REPOSITORY_SIGNALS)
    crud = crud_methods(fact)
    return DddRepository(
        class_name=fact.class_name,
        file_name=fact.file_name,
        is_interface=fact.kind.is_contract,
        has_data_access=bool(crud),
        crud_methods=crud,
        confidence=confidence,
    )


def analyze_domain_event(fact: ClassFact) -> DddDomainEvent:
    confidence, _ = score(fact, DOMAIN_EVENT_SIGNALS)
    return DddDomainEvent(
        class_name=fact.class_name,
        file_name=fact.file_name,
        is_event=confidence > EVENT_CONFIDENCE,
        is_immutable=is_fully_immutable(fact),
        has_event_naming=has_event_naming(fact),
        has_timestamp=has_timestamp(fact),
        confidence=confidence,
    )


def analyze_aggregate(
    fact: ClassFact,
    graph: DependencyGraph,
    entity_ids: Collection[str],
    value_object_ids: Collection[str] = (),
) -> DddAggregate:
    """Aggregate-root confidence for one class.

    Args:
        fact: Candidate root
        graph: Built dependency graph (composition edges are read)
        entity_ids: Ids of classes detected as entities
        value_object_ids: Ids of classes detected as value objects
    """
    node_id = fact.qualified_name
    is_entity = node_id in entity_ids

    related = tuple(
        e.to_id
        for e in graph.outgoing(node_id)
        if e.dependency_type is DependencyType.COMPOSITION
        and (e.to_id in entity_ids or e.to_id in value_object_ids)
    )
    owned = any(
        e.dependency_type is DependencyType.COMPOSITION and e.from_id in entity_ids
        for e in graph.incoming(node_id)
    )

    signals = {
        "entity": is_entity,
        "composes_domain_objects": bool(related),
        "naming": fact.class_name.endswith(("Aggregate", "AggregateRoot", "Root")),
        "unowned": is_entity and not owned,
    }
    confidence = clamp_confidence(
        sum(AGGREGATE_WEIGHTS[name] for name, held in signals.items() if held)
    )
    return DddAggregate(
        class_name=fact.class_name,
        file_name=fact.file_name,
        root_entity=node_id,
        related_entities=related,
        confidence=confidence,
    )


def detect_patterns(
    facts: Sequence[ClassFact],
    graph: DependencyGraph,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> DddPatternAnalysis:
    """Run every analyzer and keep results reaching ``ddd_min_confidence``."""
    minimum = thresholds.ddd_min_confidence

    entities: list[DddEntity] = []
    value_objects: list[DddValueObject] = []
    services: list[DddService] = []
    repositories: list[DddRepository] = []
    events: list[DddDomainEvent] = []
    entity_ids: set[str] = set()
    value_object_ids: set[str] = set()

    for fact in facts:
        entity = analyze_entity(fact)
        if entity.confidence >= minimum:
            entities.append(entity)
            entity_ids.add(fact.qualified_name)

        value_object = analyze_value_object(fact)
        if value_object.confidence >= minimum:
            value_objects.append(value_object)
            value_object_ids.add(fact.qualified_name)

        service = analyze_service(fact)
        if service.confidence >= minimum:
            services.append(service)

        repository = analyze_repository(fact)
        if repository.confidence >= minimum:
            repositories.append(repository)

        event = analyze_domain_event(fact)
        if event.confidence >= minimum:
            events.append(event)

    aggregates = [
        aggregate
        for aggregate in (
            analyze_aggregate(fact, graph, entity_ids, value_object_ids)
            for fact in facts
            if fact.qualified_name in entity_ids
        )
        if aggregate.confidence >= minimum
    ]

    result = DddPatternAnalysis(
        entities=tuple(entities),
        value_objects=tuple(value_objects),
        services=tuple(services),
        repositories=tuple(repositories),
        aggregates=tuple(aggregates),
        domain_events=tuple(events),
    )
    logger.debug(
        f"DDD patterns: {len(entities)} entities, {len(value_objects)} value objects, "
        f"{len(services)} services, {len(repositories)} repositories, "
        f"{len(aggregates)} aggregates, {len(events)} events"
    )
    return result
