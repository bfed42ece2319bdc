"""Domain errors raised by the service layer.

Each error carries a short machine-readable ``code`` and an HTTP status; the
handlers in ``eventhost.exception_handlers`` render them as typed JSON bodies.
"""
from typing import Any, Optional


class EventHostError(Exception):
    """Base class for all domain errors."""

    code = "error"
    status_code = 400
    default_detail = "Error, please try again."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def extra(self) -> dict[str, Any]:
        return {}


class NotFoundError(EventHostError):
    """Raised when an event, RSVP or other record is absent or not visible to the actor."""

    code = "not_found"
    status_code = 404
    default_detail = "Not found"


class ForbiddenError(EventHostError):
    """Raised when the actor lacks rights for the operation."""

    code = "forbidden"
    status_code = 403
    default_detail = "You are not allowed to perform this action"


class PublicEventInviteError(ForbiddenError):
    """Raised when host-issued invites are attempted on a public event."""

    code = "public_event"
    default_detail = "Invites can only be sent for private events"


class EventCanceledError(EventHostError):
    """Raised when a canceled event would be modified."""

    code = "event_canceled"
    status_code = 409
    default_detail = "Cannot modify a canceled event"


class ConflictError(EventHostError):
    """Raised when a write clashes with an existing record."""

    code = "conflict"
    status_code = 409
    default_detail = "Conflicts with an existing record"


class AlreadyInvitedError(ConflictError):
    """Raised when the invitee already holds an RSVP for the event."""

    code = "already_invited"
    default_detail = "User already has an RSVP for this event"


class InvalidTransitionError(EventHostError):
    """Reserved for RSVP status rules; every status transition is currently allowed."""

    code = "invalid_transition"
    status_code = 409
    default_detail = "Invalid status transition"


class ValidationError(EventHostError):
    """Raised for malformed or inconsistent input that passed schema validation."""

    code = "validation_error"
    status_code = 422
    default_detail = "Invalid input"


class UnauthenticatedError(EventHostError):
    """Raised when no principal can be resolved for the request."""

    code = "unauthenticated"
    status_code = 401
    default_detail = "Authentication required"


class CapacityExceededError(EventHostError):
    """Raised when admitting guests would push an event past ``max_guests``."""

    code = "capacity_exceeded"
    status_code = 409

    def __init__(self, effective_guests: int, max_guests: int, requested: int = 1, detail: Optional[str] = None):
        self.effective_guests = effective_guests
        self.max_guests = max_guests
        self.requested = requested
        self.shortfall = effective_guests + requested - max_guests
        super().__init__(detail or (
            f"Event is at capacity ({effective_guests}/{max_guests} reserved spots); "
            f"cannot add {requested} guest(s)"
        ))

    def extra(self) -> dict[str, Any]:
        return {
            "effective_guests": self.effective_guests,
            "max_guests": self.max_guests,
            "requested": self.requested,
            "shortfall": self.shortfall,
        }
