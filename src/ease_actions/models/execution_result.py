"""Data models for reporting dispatch outcomes.

This module defines the structures returned by the dispatcher after an
attempt to execute one extracted action call.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ease_actions.models.base import ActionName, ModelBase
from ease_actions.models.enums import ErrorCode


class ActionError(BaseModel):
    """Details regarding a failed call.

    Attributes:
        code: Machine-readable error code (e.g., 'argument.missing').
        detail: Human-readable explanation of the error.
        parameter: The offending parameter, when the failure concerns one.
    """

    model_config = ConfigDict(use_enum_values=True)

    code: ErrorCode = Field(
        ..., description="Machine-readable error code (e.g., 'argument.missing')."
    )
    detail: str = Field(..., description="Human-readable explanation of the error.")
    parameter: Optional[str] = Field(
        default=None,
        description="The offending parameter, when the failure concerns one.",
    )


class ActionResult(ModelBase):
    """The outcome of dispatching one action call.

    Attributes:
        success: Whether the action took effect.
        message: A summary message suitable for display to the user.
        data: Optional structured payload describing the effect.
        action: The name of the call this result belongs to.
        error: Error details when success is False.
    """

    success: bool = Field(..., description="Whether the action took effect.")
    message: str = Field(
        ..., description="A summary message suitable for display to the user."
    )
    data: Optional[Any] = Field(
        default=None,
        description="Optional structured payload describing the effect.",
    )
    action: Optional[ActionName] = Field(
        default=None, description="The name of the call this result belongs to."
    )
    error: Optional[ActionError] = Field(
        default=None, description="Error details when success is False."
    )

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(
        cls,
        message: str,
        code: ErrorCode,
        detail: Optional[str] = None,
        parameter: Optional[str] = None,
    ) -> "ActionResult":
        return cls(
            success=False,
            message=message,
            error=ActionError(
                code=code, detail=detail or message, parameter=parameter
            ),
        )
