"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Events: Domain events for communication
- Exceptions: Domain-specific error handling
"""

from carebook.core.domain.entities import (
    AggregateRoot,
    Entity,
    generate_uuid,
)
from carebook.core.domain.events import DomainEvent
from carebook.core.domain.exceptions import (
    ConcurrencyException,
    ConflictException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    SlotContentionException,
    SlotUnavailableException,
    ValidationException,
)
from carebook.core.domain.value_objects import (
    StatusEnum,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "generate_uuid",
    # Value Objects
    "ValueObject",
    "StatusEnum",
    # Events
    "DomainEvent",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "ConflictException",
    "InvalidOperationException",
    "SlotUnavailableException",
    "ConcurrencyException",
    "SlotContentionException",
]
