from pydantic import BaseModel, ConfigDict, Field

from ease_actions.models.execution_result import ActionResult


class DispatchMetrics(BaseModel):
    """In-process counters of dispatch outcomes.

    Keys are ``dispatch.success``, ``dispatch.failed``, ``dispatch.<error code>``
    and ``action.<name>``.
    """

    model_config = ConfigDict(extra="forbid")

    counters: dict[str, int] = Field(
        default_factory=dict, description="Named counters for dispatch outcomes."
    )

    def inc(self, key: str, n: int = 1) -> None:
        self.counters[key] = self.counters.get(key, 0) + n

    def get(self, key: str) -> int:
        return self.counters.get(key, 0)

    def record(self, result: ActionResult) -> None:
        """Counts one dispatched call by outcome, error code and action."""
        self.inc("dispatch.success" if result.success else "dispatch.failed")
        if result.error is not None:
            self.inc(f"dispatch.{result.error.code}")
        if result.action:
            self.inc(f"action.{result.action}")

    @property
    def total(self) -> int:
        return self.get("dispatch.success") + self.get("dispatch.failed")

    def render_markdown(self) -> str:
        if not self.counters:
            return "No dispatches yet."
        lines = [f"### Dispatch metrics ({self.total} calls)"]
        for key in sorted(self.counters):
            lines.append(f"- **{key}**: {self.counters[key]}")
        return "\n".join(lines)
