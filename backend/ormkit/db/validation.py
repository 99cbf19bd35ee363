"""Evaluate a record's attribute mapping against a pydantic rule model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

# Key used in ``ValidationResult.fields`` for model-level (cross-field) violations.
MODEL_LEVEL = "__all__"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one rule evaluation."""

    messages: list[str] = field(default_factory=list)
    fields: dict[str, list[str]] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.messages

    @property
    def failed(self) -> bool:
        return bool(self.messages)


def has_rules(rules: Optional[type[BaseModel]]) -> bool:
    """True when ``rules`` declares at least one field or model validator."""
    if rules is None:
        return False
    if rules.model_fields:
        return True
    return bool(rules.__pydantic_decorators__.model_validators)


def validate_attributes(
    attributes: Mapping[str, Any], rules: type[BaseModel]
) -> ValidationResult:
    """Run ``rules`` over ``attributes`` and collect every violation message.

    Keys in ``attributes`` the rule model does not declare are ignored unless
    the rule model itself forbids extras.
    """
    try:
        rules.model_validate(dict(attributes))
    except PydanticValidationError as exc:
        messages: list[str] = []
        fields: dict[str, list[str]] = {}
        for error in exc.errors(include_url=False):
            location = ".".join(str(part) for part in error["loc"]) or MODEL_LEVEL
            messages.append(error["msg"])
            fields.setdefault(location, []).append(error["msg"])
        return ValidationResult(messages=messages, fields=fields)
    return ValidationResult()
