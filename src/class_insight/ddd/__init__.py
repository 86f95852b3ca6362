"""Domain-Driven Design pattern detection."""

from .models import (
    DddAggregate,
    DddDomainEvent,
    DddEntity,
    DddPatternAnalysis,
    DddRepository,
    DddService,
    DddValueObject,
)
from .detector import (
    analyze_aggregate,
    analyze_domain_event,
    analyze_entity,
    analyze_repository,
    analyze_service,
    analyze_value_object,
    detect_patterns,
)

__all__ = [
    "DddAggregate",
    "DddDomainEvent",
    "DddEntity",
    "DddPatternAnalysis",
    "DddRepository",
    "DddService",
    "DddValueObject",
    "analyze_aggregate",
    "analyze_domain_event",
    "analyze_entity",
    "analyze_repository",
    "analyze_service",
    "analyze_value_object",
    "detect_patterns",
]
