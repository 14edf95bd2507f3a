"""Execution context handed to action handlers.

The context bundles the capabilities a caller grants for one dispatch batch:
navigation, the acting user and one persistence hook per domain object. The
engine never owns any of them.
"""

import inspect
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ease_actions.models.execution_result import ActionResult


Navigator = Callable[[str], Any]
PersistenceHook = Callable[[dict[str, Any]], Any]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExecutionContext(BaseModel):
    """Capabilities supplied by the caller at dispatch time.

    Attributes:
        navigate: Moves the UI to a destination section.
        user: Opaque record of the acting user. Handlers only read it.
        save_todo: Persists a to-do record.
        save_mood: Persists a mood entry.
        save_reminder: Persists a reminder.
        save_wellness_plan: Persists a wellness plan.
        clock: Returns the current time; injectable for tests.
    """

    model_config = ConfigDict(
        extra="forbid", frozen=True, arbitrary_types_allowed=True
    )

    navigate: Optional[Navigator] = Field(
        default=None, description="Moves the UI to a destination section."
    )
    user: Optional[Any] = Field(
        default=None, description="Opaque record of the acting user."
    )
    save_todo: Optional[PersistenceHook] = Field(
        default=None, description="Persists a to-do record."
    )
    save_mood: Optional[PersistenceHook] = Field(
        default=None, description="Persists a mood entry."
    )
    save_reminder: Optional[PersistenceHook] = Field(
        default=None, description="Persists a reminder."
    )
    save_wellness_plan: Optional[PersistenceHook] = Field(
        default=None, description="Persists a wellness plan."
    )
    clock: Callable[[], datetime] = Field(
        default=_utcnow, description="Returns the current time."
    )

    def now(self) -> datetime:
        return self.clock()


HandlerReturn = Union[ActionResult, Awaitable[ActionResult]]
ActionHandler = Callable[[dict[str, Any], ExecutionContext], HandlerReturn]


async def maybe_await(value: Any) -> Any:
    """Awaits value if it is awaitable, otherwise returns it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value
