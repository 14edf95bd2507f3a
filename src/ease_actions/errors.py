"""Exceptions raised by the action-call engine.

Registry errors are programming errors and propagate at initialization time.
Argument validation errors are raised by the validator and converted into
failed results by the dispatcher; they never reach the caller of the
response pipeline.
"""

from typing import Any, Optional

from ease_actions.models.enums import ErrorCode


class EaseActionError(Exception):
    """Base class for all ease-actions errors."""


class RegistryError(EaseActionError):
    """Raised for invalid registry setup or lookups."""


class DuplicateSchemaError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Action already registered: {name}")
        self.name = name


class RegistryFrozenError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Registry is frozen; cannot register: {name}")
        self.name = name


class SchemaNotFound(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Action not in registry: {name}")
        self.name = name


class UnknownAction(SchemaNotFound):
    """A call referenced an action name that has no registered schema."""

    code = ErrorCode.UNKNOWN_ACTION

    @property
    def user_message(self) -> str:
        return f"Unknown function: {self.name}"


class ArgumentValidationError(EaseActionError):
    """Base class for per-call argument validation failures.

    Attributes:
        code: The machine-readable error code.
        action: The action whose arguments failed validation.
        parameter: The offending parameter name.
    """

    code: ErrorCode

    def __init__(self, action: str, parameter: str, user_message: str):
        super().__init__(user_message)
        self.action = action
        self.parameter = parameter
        self.user_message = user_message


class MissingParameter(ArgumentValidationError):
    code = ErrorCode.MISSING_PARAMETER

    def __init__(self, action: str, parameter: str):
        super().__init__(
            action,
            parameter,
            f"Missing required parameter '{parameter}' for {action}",
        )


class TypeMismatch(ArgumentValidationError):
    code = ErrorCode.TYPE_MISMATCH

    def __init__(self, action: str, parameter: str, expected: str, value: Any):
        super().__init__(
            action,
            parameter,
            f"Parameter '{parameter}' for {action} must be {expected}",
        )
        self.expected = expected
        self.value = value


class InvalidEnumValue(ArgumentValidationError):
    code = ErrorCode.INVALID_ENUM_VALUE

    def __init__(self, action: str, parameter: str, value: Any):
        super().__init__(
            action,
            parameter,
            f"Invalid value '{value}' for parameter '{parameter}' of {action}",
        )
        self.value = value


class ValueOutOfRange(ArgumentValidationError):
    code = ErrorCode.OUT_OF_RANGE

    def __init__(
        self,
        action: str,
        parameter: str,
        value: Any,
        minimum: Optional[float],
        maximum: Optional[float],
    ):
        super().__init__(
            action,
            parameter,
            f"Parameter '{parameter}' for {action} must be between "
            f"{_fmt_bound(minimum)} and {_fmt_bound(maximum)}",
        )
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class ChatBackendError(EaseActionError):
    """The generative-AI backend could not produce a reply."""


def _fmt_bound(bound: Optional[float]) -> str:
    if bound is None:
        return "unbounded"
    if float(bound).is_integer():
        return str(int(bound))
    return str(bound)
