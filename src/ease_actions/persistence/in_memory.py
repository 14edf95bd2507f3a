"""In-memory persistence hooks for wellness records.

Used by the CLI and tests in place of the app's real storage. Records are
kept in insertion order per kind.
"""

import copy
import threading
from typing import Any

from ease_actions.execution.context import PersistenceHook


class InMemoryWellnessStore:
    """Collects records handed to the persistence hooks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.todos: list[dict[str, Any]] = []
        self.moods: list[dict[str, Any]] = []
        self.reminders: list[dict[str, Any]] = []
        self.wellness_plans: list[dict[str, Any]] = []

    def _appender(self, bucket: list[dict[str, Any]]) -> PersistenceHook:
        def save(record: dict[str, Any]) -> None:
            with self._lock:
                bucket.append(copy.deepcopy(record))

        return save

    def hooks(self) -> dict[str, PersistenceHook]:
        """Returns the save_* callables to pass into an ExecutionContext.

        Returns:
            A mapping keyed by ExecutionContext field name.
        """
        return {
            "save_todo": self._appender(self.todos),
            "save_mood": self._appender(self.moods),
            "save_reminder": self._appender(self.reminders),
            "save_wellness_plan": self._appender(self.wellness_plans),
        }

    def snapshot(self) -> dict[str, list[dict[str, Any]]]:
        with self._lock:
            return copy.deepcopy(
                {
                    "todos": self.todos,
                    "moods": self.moods,
                    "reminders": self.reminders,
                    "wellness_plans": self.wellness_plans,
                }
            )
