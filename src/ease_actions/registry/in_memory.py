"""In-memory implementation of the action registry."""

from ease_actions.errors import (
    DuplicateSchemaError,
    RegistryFrozenError,
    SchemaNotFound,
)
from ease_actions.execution.context import ActionHandler
from ease_actions.models.action import ActionSchema
from ease_actions.observability.logging import get_logger
from ease_actions.registry.abstract import Registry


logger = get_logger(__name__)


class InMemoryRegistry(Registry):
    """Dictionary-backed registry populated once at startup.

    Insertion order of the backing dicts is the registration order, which is
    what list_schemas() and describe_for_prompt() expose.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, ActionSchema] = {}
        self._handlers: dict[str, ActionHandler] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, schema: ActionSchema, handler: ActionHandler) -> None:
        """Registers an action schema together with its handler.

        Args:
            schema: The action definition.
            handler: The callable that executes the action.

        Raises:
            DuplicateSchemaError: If the name is already registered.
            RegistryFrozenError: If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(schema.name)
        if schema.name in self._schemas:
            raise DuplicateSchemaError(schema.name)
        if not callable(handler):
            raise TypeError(f"Handler for {schema.name} is not callable")

        self._schemas[schema.name] = schema
        self._handlers[schema.name] = handler
        logger.debug(
            "Registered action",
            extra={"extra_fields": {"event": "registry.register", "action": schema.name}},
        )

    def freeze(self) -> "InMemoryRegistry":
        """Marks the registry read-only and returns it."""
        self._frozen = True
        return self

    def list_schemas(self) -> list[ActionSchema]:
        return list(self._schemas.values())

    def get_schema(self, name: str) -> ActionSchema:
        try:
            return self._schemas[name]
        except KeyError:
            raise SchemaNotFound(name) from None

    def get_handler(self, name: str) -> ActionHandler:
        try:
            return self._handlers[name]
        except KeyError:
            raise SchemaNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)
