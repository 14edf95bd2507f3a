"""Enumeration definitions for the action-call engine.

This module contains the Enum classes shared by the schema registry, the
argument validator and the dispatcher.
"""

from enum import Enum


class ParamKind(str, Enum):
    """Defines the runtime type a parameter value must have.

    Attributes:
        STRING: A JSON string.
        NUMBER: A JSON number (booleans are not numbers).
        BOOLEAN: A JSON boolean.
        ENUM: A string drawn from a fixed set of values.
        ARRAY: A JSON array of strings.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"


class ErrorCode(str, Enum):
    """Machine-readable codes attached to failed action results.

    Attributes:
        UNKNOWN_ACTION: The call names an action that is not registered.
        MISSING_PARAMETER: A required parameter was absent or null.
        TYPE_MISMATCH: A parameter value has the wrong runtime type.
        INVALID_ENUM_VALUE: An enum parameter value is not an allowed member.
        OUT_OF_RANGE: A number parameter is outside its declared bounds.
        INVALID_FORMAT: A string parameter is not in the format the
            handler expects (e.g., HH:MM).
        EXECUTION_EXCEPTION: The handler raised while executing.
        CAPABILITY_UNAVAILABLE: The execution context lacks a capability
            the handler needs.
    """

    UNKNOWN_ACTION = "action.unknown"
    MISSING_PARAMETER = "argument.missing"
    TYPE_MISMATCH = "argument.type_mismatch"
    INVALID_ENUM_VALUE = "argument.invalid_enum"
    OUT_OF_RANGE = "argument.out_of_range"
    INVALID_FORMAT = "argument.invalid_format"
    EXECUTION_EXCEPTION = "execution.exception"
    CAPABILITY_UNAVAILABLE = "context.unavailable"
