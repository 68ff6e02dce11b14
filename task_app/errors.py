"""
Error taxonomy for the task service.

Every failure the service reports to a client is a ``TaskServiceError``
subclass carrying its HTTP status code and a human-readable message. The
blueprint's error handler turns these into ``{"error": message}`` bodies.
"""

from __future__ import annotations


class TaskServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskServiceError):
    """Client supplied an unusable request (HTTP 400)."""

    status_code = 400
    default_message = "Bad request"


class InvalidId(ValidationError):
    default_message = "Task id must be a positive integer."


class InvalidPayload(ValidationError):
    default_message = "Request body must be a JSON object."


class InvalidTitle(ValidationError):
    default_message = "Task title is required."


class InvalidDescription(ValidationError):
    default_message = "Task description must be a string when provided."


class InvalidCompleted(ValidationError):
    default_message = "Task completed flag must be boolean when provided."


class InvalidPriority(ValidationError):
    default_message = "Priority must be low, medium, or high."


class InvalidTags(ValidationError):
    default_message = "Tags must be an array of strings."


class EmptyUpdate(ValidationError):
    default_message = "Provide at least one field to update."


class FeatureDisabled(ValidationError):
    """A flag-gated field was supplied while its flag is off for the user."""

    MESSAGES = {
        "priority": "Task priorities feature is not enabled for your user.",
        "tags": "Advanced filtering feature is not enabled for your user.",
    }

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            self.MESSAGES.get(field, f"Feature for '{field}' is not enabled for your user.")
        )


class NotFound(TaskServiceError):
    status_code = 404
    default_message = "Task not found."


class FlagEvaluationFailure(Exception):
    """
    Raised by flag evaluators when the provider cannot answer.

    Never reaches a client: ``FlagGateway`` converts it to a disabled flag.
    """
