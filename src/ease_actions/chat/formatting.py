"""Rendering of dispatch outcomes as chat status lines."""

from typing import Iterable

from ease_actions.models.execution_result import ActionResult


SUCCESS_PREFIX = "✅"
FAILURE_PREFIX = "❌"


def format_result_line(result: ActionResult) -> str:
    prefix = SUCCESS_PREFIX if result.success else FAILURE_PREFIX
    return f"{prefix} {result.message}"


def compose_display_text(clean_text: str, results: Iterable[ActionResult]) -> str:
    """Appends one status line per result to the cleaned prose.

    Args:
        clean_text: The reply with all call sites removed.
        results: Dispatch results, in dispatch order.

    Returns:
        clean_text unchanged when there are no results, otherwise the prose,
        a blank line and the status lines. Without prose only the status
        lines are returned.
    """
    lines = [format_result_line(r) for r in results]
    if not lines:
        return clean_text
    if not clean_text:
        return "\n".join(lines)
    return clean_text + "\n\n" + "\n".join(lines)
