"""Data models for defining invokable actions.

This module defines the schema for registering actions the AI companion may
request, including the typed contract of each parameter, and the transient
call objects extracted from model replies.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ease_actions.models.base import ActionName, Arguments, ModelBase
from ease_actions.models.enums import ParamKind


class ParamSpec(BaseModel):
    """Type descriptor for a single action parameter.

    Attributes:
        kind: The runtime type the value must have.
        enum_values: Allowed members when kind is ENUM.
        required: Whether the parameter must be present in every call.
        description: Human-readable explanation used in prompts and schemas.
        minimum: Optional inclusive lower bound for NUMBER parameters.
        maximum: Optional inclusive upper bound for NUMBER parameters.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ParamKind = Field(..., description="The runtime type the value must have.")
    enum_values: Optional[frozenset[str]] = Field(
        default=None, description="Allowed members when kind is 'enum'."
    )
    required: bool = Field(
        default=False,
        description="Whether the parameter must be present in every call.",
    )
    description: str = Field(
        default="", description="Human-readable explanation of the parameter."
    )
    minimum: Optional[float] = Field(
        default=None, description="Inclusive lower bound for numbers."
    )
    maximum: Optional[float] = Field(
        default=None, description="Inclusive upper bound for numbers."
    )

    @model_validator(mode="after")
    def _check_kind_specific_fields(self) -> "ParamSpec":
        if self.kind == ParamKind.ENUM:
            if not self.enum_values:
                raise ValueError("enum parameters need at least one enum value")
        elif self.enum_values is not None:
            raise ValueError("enum_values is only valid for enum parameters")

        if self.kind != ParamKind.NUMBER and (
            self.minimum is not None or self.maximum is not None
        ):
            raise ValueError("minimum/maximum are only valid for number parameters")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError("minimum must not exceed maximum")
        return self

    def to_json_schema(self) -> dict[str, Any]:
        """Renders this descriptor as a JSON-Schema property definition."""
        schema: dict[str, Any]
        if self.kind == ParamKind.ENUM:
            schema = {"type": "string", "enum": sorted(self.enum_values or ())}
        elif self.kind == ParamKind.ARRAY:
            schema = {"type": "array", "items": {"type": "string"}}
        else:
            schema = {"type": self.kind.value}

        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.description:
            schema["description"] = self.description
        return schema


class ActionSchema(BaseModel):
    """Complete definition of a registered action.

    Attributes:
        name: Unique identifier used in call sites (e.g., 'add_todo').
        description: Short summary embedded in the system prompt.
        parameters: Ordered mapping of parameter name to its descriptor.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: ActionName = Field(
        ...,
        pattern=r"^[a-z][a-z0-9_]*$",
        description="Unique identifier used in call sites (e.g., 'add_todo').",
    )
    description: str = Field(
        ..., description="Short summary embedded in the system prompt."
    )
    parameters: dict[str, ParamSpec] = Field(
        default_factory=dict,
        description="Ordered mapping of parameter name to its descriptor.",
    )

    def required_parameters(self) -> list[str]:
        """Returns the names of required parameters in declaration order."""
        return [name for name, spec in self.parameters.items() if spec.required]

    def to_json_schema(self) -> dict[str, Any]:
        """Renders the parameter contract as a JSON-Schema object definition.

        Returns:
            A draft 2020-12 compatible schema dictionary.
        """
        schema: dict[str, Any] = {
            "type": "object",
            "description": self.description,
            "properties": {
                name: spec.to_json_schema()
                for name, spec in self.parameters.items()
            },
        }
        required = self.required_parameters()
        if required:
            schema["required"] = required
        return schema


class ActionCall(ModelBase):
    """One invocation extracted from a model reply.

    Attributes:
        name: The action name written in the call site.
        arguments: Decoded JSON object of arguments.
    """

    name: str = Field(..., description="The action name written in the call site.")
    arguments: Arguments = Field(
        default_factory=dict, description="Decoded JSON object of arguments."
    )
