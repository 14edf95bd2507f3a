from typing import Any

from pydantic import BaseModel, ConfigDict


class ModelBase(BaseModel):
    """
    Base class for the mutable ease-actions models.

    Forbids unknown fields and enables assignment-time validation.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        frozen=False,
    )


ActionName = str
Arguments = dict[str, Any]
