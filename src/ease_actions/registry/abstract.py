"""Abstract base class for the Action Registry.

This module defines the interface for storing and retrieving action schemas
and the executable handlers bound to them.
"""

from abc import ABC, abstractmethod

from ease_actions.execution.context import ActionHandler
from ease_actions.models.action import ActionSchema


class Registry(ABC):
    """Interface for accessing action definitions and their handlers."""

    @abstractmethod
    def list_schemas(self) -> list[ActionSchema]:
        """Lists all registered actions.

        Returns:
            A list of action schemas in registration order.
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_schema(self, name: str) -> ActionSchema:
        """Retrieves an action schema by its exact name.

        Args:
            name: The action name written in call sites.

        Returns:
            The registered action schema.

        Raises:
            SchemaNotFound: If no action with that name is registered.
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_handler(self, name: str) -> ActionHandler:
        """Retrieves the executable handler for an action.

        Args:
            name: The action name.

        Returns:
            The handler callable.

        Raises:
            SchemaNotFound: If no action with that name is registered.
        """
        pass  # pragma: no cover

    def describe_for_prompt(self) -> str:
        """Renders one '- <name>: <description>' line per action.

        Returns:
            The newline-joined summary, in registration order.
        """
        return "\n".join(
            f"- {schema.name}: {schema.description}"
            for schema in self.list_schemas()
        )
