"""
Scheduling error taxonomy.

NotFound, Conflict, Contention and Validation failures all derive from
DomainException; carebook.api.exception_handlers maps each family to an HTTP
status and renders ``to_dict()`` as the response body.
"""

from typing import Any


class DomainException(Exception):
    """
    A business rule refused the request.

    ``code`` is the stable machine-readable identifier clients switch on
    (ENTITY_NOT_FOUND, SLOT_UNAVAILABLE, CONTENTION, ...).
    """

    default_code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationException(DomainException):
    """Input is malformed: reversed time range, unknown status, same-slot reschedule."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        self.field = field
        merged = {**(details or {}), **({"field": field} if field else {})}
        super().__init__(message, "VALIDATION_ERROR", merged)


class EntityNotFoundException(DomainException):
    def __init__(self, entity_type: str, entity_id: Any, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            message or f"{entity_type} {entity_id} not found",
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class ConflictException(DomainException):
    """Raised when the requested change conflicts with current state."""

    def __init__(self, message: str, code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(message, code, details)


class InvalidOperationException(ConflictException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


class SlotUnavailableException(ConflictException):
    """Raised when a slot is not Available at the moment it is claimed."""

    def __init__(self, slot_id: Any, current_status: str, message: str | None = None):
        self.slot_id = slot_id
        self.current_status = current_status
        msg = message or (
            f"Slot is {current_status} and cannot be booked. It may have been booked by another user."
        )
        super().__init__(
            msg,
            "SLOT_UNAVAILABLE",
            {"slot_id": str(slot_id), "current_status": current_status},
        )


class ConcurrencyException(DomainException):
    """
    Raised when a concurrent transaction holds the resource being changed.

    Transient: the caller may retry against the same or another resource.
    """

    def __init__(self, entity_type: str, entity_id: Any, message: str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} {entity_id} is being modified by another request"
        super().__init__(
            msg,
            "CONTENTION",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class SlotContentionException(ConcurrencyException):
    """Raised when the slot row lock cannot be taken, or the claim lost the race."""

    def __init__(self, slot_id: Any, message: str | None = None):
        super().__init__(
            "Slot",
            slot_id,
            message or "Failed to book slot - it is being booked by another user. Try again or pick another slot.",
        )
