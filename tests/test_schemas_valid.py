import jsonschema
import pytest

from ease_actions.registry.wellness_actions import WELLNESS_ACTIONS, track_mood_action


@pytest.mark.parametrize(
    "schema", [schema for schema, _ in WELLNESS_ACTIONS], ids=lambda s: s.name
)
def test_action_schemas_are_valid_jsonschema(schema):
    # Will raise if invalid
    jsonschema.Draft202012Validator.check_schema(schema.to_json_schema())


def test_schema_accepts_a_valid_call():
    validator = jsonschema.Draft202012Validator(track_mood_action.to_json_schema())

    assert validator.is_valid({"mood": "calm", "intensity": 4})
    assert not validator.is_valid({"mood": "bored"})
    assert not validator.is_valid({"intensity": 4})
    assert not validator.is_valid({"mood": "calm", "intensity": 11})
