import pytest

from ease_actions.errors import (
    DuplicateSchemaError,
    RegistryFrozenError,
    SchemaNotFound,
)
from ease_actions.models.action import ActionSchema, ParamSpec
from ease_actions.models.execution_result import ActionResult
from ease_actions.registry.in_memory import InMemoryRegistry


def _handler(args, ctx):
    return ActionResult.ok("ok")


def _schema(name, description="D"):
    return ActionSchema(
        name=name,
        description=description,
        parameters={"p": ParamSpec(kind="string")},
    )


class TestRegistry:
    def test_action_registration(self):
        registry = InMemoryRegistry()
        schema = _schema("a1")
        registry.register(schema, _handler)

        assert registry.get_schema("a1") == schema
        assert registry.get_handler("a1") is _handler
        assert len(registry.list_schemas()) == 1
        assert "a1" in registry

    def test_list_preserves_registration_order(self):
        registry = InMemoryRegistry()
        for name in ["zeta", "alpha", "mid"]:
            registry.register(_schema(name), _handler)
        assert [s.name for s in registry.list_schemas()] == ["zeta", "alpha", "mid"]

    def test_get_schema_not_found(self):
        registry = InMemoryRegistry()
        with pytest.raises(SchemaNotFound) as exc:
            registry.get_schema("missing")
        assert exc.value.name == "missing"

    def test_get_handler_not_found(self):
        with pytest.raises(SchemaNotFound):
            InMemoryRegistry().get_handler("missing")

    def test_duplicate_name_fails_fast(self):
        registry = InMemoryRegistry()
        registry.register(_schema("a1"), _handler)
        with pytest.raises(DuplicateSchemaError):
            registry.register(_schema("a1", "other"), _handler)
        assert registry.get_schema("a1").description == "D"

    def test_frozen_registry_rejects_registration(self):
        registry = InMemoryRegistry().freeze()
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(_schema("a1"), _handler)

    def test_non_callable_handler(self):
        with pytest.raises(TypeError):
            InMemoryRegistry().register(_schema("a1"), "not callable")

    def test_describe_for_prompt(self):
        registry = InMemoryRegistry()
        registry.register(_schema("b", "Second thing"), _handler)
        registry.register(_schema("a", "First thing"), _handler)
        assert registry.describe_for_prompt() == "- b: Second thing\n- a: First thing"

    def test_describe_empty_registry(self):
        assert InMemoryRegistry().describe_for_prompt() == ""


class TestDefaultRegistry:
    def test_catalog_order(self, registry):
        assert [s.name for s in registry.list_schemas()] == [
            "navigate_to_section",
            "add_todo",
            "book_therapist_appointment",
            "track_mood",
            "create_wellness_plan",
            "schedule_reminder",
            "start_meditation",
            "create_journal_prompt",
        ]

    def test_default_registry_is_frozen(self, registry):
        assert registry.frozen

    def test_prompt_lines(self, registry):
        lines = registry.describe_for_prompt().splitlines()
        assert len(lines) == 8
        assert lines[0] == "- navigate_to_section: Navigate the user to a specific section of the app"

    def test_required_parameters(self, registry):
        assert registry.get_schema("book_therapist_appointment").required_parameters() == ["preferredDate"]
        assert registry.get_schema("create_wellness_plan").required_parameters() == ["goals", "focus"]
        assert registry.get_schema("schedule_reminder").required_parameters() == ["title", "time"]

    def test_mood_section_is_navigable(self, registry):
        section = registry.get_schema("navigate_to_section").parameters["section"]
        assert "mood" in section.enum_values
