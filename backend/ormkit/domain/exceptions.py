"""Domain-level exception hierarchy."""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for model-layer errors."""

    def __init__(self, message: str = "Domain error") -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Raised when a requested record cannot be located."""


class ValidationError(DomainError):
    """Raised when input fails validation rules."""


class ModelValidationError(ValidationError):
    """Raised when a record fails its declared rules before being persisted.

    ``message`` holds every violation joined with commas; ``messages`` keeps
    them individually, in the order the validator reported them.
    """

    def __init__(
        self,
        messages: list[str],
        model: Any = None,
        fields: dict[str, list[str]] | None = None,
    ) -> None:
        super().__init__(",".join(messages))
        self.messages = list(messages)
        self.model = model
        self.fields = fields or {}


class RelationshipError(DomainError):
    """Raised when a relationship name does not address a many-to-many collection."""


class ModelStateError(DomainError):
    """Raised when an operation needs a session the instance is not attached to."""
