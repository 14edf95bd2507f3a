"""Argument validation against action schemas.

Checks run in a fixed order and the first failure wins: missing required
parameters (in declared order), then each present parameter (also in declared
order) against its JSON-Schema property definition. Type errors win over enum
membership, which wins over numeric range. Undeclared arguments are dropped.
"""

import math
from typing import Any, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ease_actions.errors import (
    InvalidEnumValue,
    MissingParameter,
    TypeMismatch,
    ValueOutOfRange,
)
from ease_actions.models.action import ActionSchema, ParamSpec
from ease_actions.models.enums import ParamKind


_EXPECTED = {
    ParamKind.STRING: "a string",
    ParamKind.NUMBER: "a number",
    ParamKind.BOOLEAN: "a boolean",
    ParamKind.ENUM: "a string",
    ParamKind.ARRAY: "an array of strings",
}

# Lower rank is reported first
_KEYWORD_RANK = {
    "type": 0,
    "items": 0,
    "enum": 1,
    "minimum": 2,
    "maximum": 2,
}


def _first_error(spec: ParamSpec, value: Any) -> Optional[ValidationError]:
    errors = list(Draft202012Validator(spec.to_json_schema()).iter_errors(value))
    if not errors:
        return None
    return min(errors, key=lambda e: _KEYWORD_RANK.get(e.validator, 0))


def check_parameter(action: str, name: str, spec: ParamSpec, value: Any) -> None:
    """Validates one present argument value.

    Raises:
        TypeMismatch: The value has the wrong JSON type.
        InvalidEnumValue: An enum value is not an allowed member.
        ValueOutOfRange: A number is outside its declared bounds.
    """
    # JSON Schema accepts NaN and infinities as numbers
    if isinstance(value, float) and not math.isfinite(value):
        raise TypeMismatch(action, name, _EXPECTED[spec.kind], value)

    error = _first_error(spec, value)
    if error is None:
        return
    if error.validator == "enum":
        raise InvalidEnumValue(action, name, value)
    if error.validator in ("minimum", "maximum"):
        raise ValueOutOfRange(action, name, value, spec.minimum, spec.maximum)
    raise TypeMismatch(action, name, _EXPECTED[spec.kind], value)


def validate_arguments(
    schema: ActionSchema, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Validates call arguments against a schema.

    Args:
        schema: The resolved action schema.
        arguments: The decoded arguments from the call site.

    Returns:
        A new mapping holding only the declared, non-null arguments.

    Raises:
        ArgumentValidationError: The first failing check.
    """
    for name in schema.required_parameters():
        if arguments.get(name) is None:
            raise MissingParameter(schema.name, name)

    validated: dict[str, Any] = {}
    for name, spec in schema.parameters.items():
        value = arguments.get(name)
        if value is None:
            continue
        check_parameter(schema.name, name, spec, value)
        validated[name] = value
    return validated
