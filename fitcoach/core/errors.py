"""Domain errors raised by services and mapped to HTTP responses in main."""

from __future__ import annotations


class FitCoachError(Exception):
    """Base for all domain errors."""


class ValidationError(FitCoachError):
    """Malformed or out-of-range input; names the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(FitCoachError):
    """Referenced row does not exist (or belongs to another user)."""

    def __init__(self, resource: str, resource_id: object) -> None:
        super().__init__(f"{resource} {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class ProviderError(FitCoachError):
    """Transcription / extraction / reasoning provider failed or returned garbage."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
