import pytest

from ease_actions.models.action import ActionCall
from ease_actions.parsing.extractor import MarkerCallExtractor


@pytest.fixture
def extractor():
    return MarkerCallExtractor()


class TestExtraction:
    def test_single_well_formed_call(self, extractor):
        text = 'Okay! [FUNCTION:add_todo:{"title":"Walk"}] Done.'
        assert extractor.extract(text) == [
            ActionCall(name="add_todo", arguments={"title": "Walk"})
        ]

    def test_iter_calls_is_lazy(self, extractor):
        text = '[FUNCTION:a:{}] and [FUNCTION:b:{}]'
        calls = extractor.iter_calls(text)
        assert next(calls).name == "a"
        assert next(calls).name == "b"
        with pytest.raises(StopIteration):
            next(calls)

    def test_calls_in_text_order(self, extractor):
        text = '[FUNCTION:first:{"n":1}] middle [FUNCTION:second:{"n":2}]'
        assert [c.name for c in extractor.extract(text)] == ["first", "second"]

    def test_empty_object(self, extractor):
        assert extractor.extract("[FUNCTION:noop:{}]") == [ActionCall(name="noop")]

    def test_braces_inside_strings(self, extractor):
        text = '[FUNCTION:add_todo:{"title":"Meeting {at} 5 ]"}]'
        calls = extractor.extract(text)
        assert calls == [
            ActionCall(name="add_todo", arguments={"title": "Meeting {at} 5 ]"})
        ]
        assert extractor.clean(text) == ""

    def test_nested_values(self, extractor):
        text = '[FUNCTION:create_wellness_plan:{"goals":["sleep","walk"],"focus":"sleep"}]'
        (call,) = extractor.extract(text)
        assert call.arguments == {"goals": ["sleep", "walk"], "focus": "sleep"}

    def test_whitespace_around_object(self, extractor):
        (call,) = extractor.extract('[FUNCTION:track_mood: {"mood":"calm"} ]')
        assert call.arguments == {"mood": "calm"}

    def test_malformed_json_is_skipped(self, extractor):
        assert extractor.extract("[FUNCTION:add_todo:{not valid json}]") == []

    def test_truncated_marker_is_skipped(self, extractor):
        assert extractor.extract('Sure [FUNCTION:add_todo:{"title":"Walk"}') == []

    def test_non_object_payload_is_skipped(self, extractor):
        assert extractor.extract('[FUNCTION:add_todo:["Walk"]]') == []

    def test_deeply_nested_payload_is_skipped(self, extractor):
        deep = "[" * 100000 + "]" * 100000
        text = (
            'Ok [FUNCTION:navigate_to_section:{"section":"mood"}] '
            '[FUNCTION:add_todo:{"a":' + deep + "}]"
        )
        assert extractor.extract(text) == [
            ActionCall(name="navigate_to_section", arguments={"section": "mood"})
        ]
        assert "[FUNCTION:" not in extractor.clean(text)

    def test_malformed_site_does_not_hide_next_call(self, extractor):
        text = '[FUNCTION:bad:{oops} then [FUNCTION:navigate_to_section:{"section":"mood"}]'
        assert [c.name for c in extractor.extract(text)] == ["navigate_to_section"]

    def test_ordinary_brackets_are_prose(self, extractor):
        text = "Try [this] and [FUNCTION] or [function:x:{}]"
        assert extractor.extract(text) == []
        assert extractor.clean(text) == text

    def test_empty_and_none_text(self, extractor):
        assert extractor.extract("") == []
        assert extractor.clean("") == ""
        assert extractor.clean(None) == ""


class TestCleaning:
    def test_marker_removed(self, extractor):
        text = 'Sure! [FUNCTION:navigate_to_section:{"section":"mood"}] Let\'s check in.'
        cleaned = extractor.clean(text)
        assert cleaned == "Sure!  Let's check in."
        assert "FUNCTION" not in cleaned

    def test_malformed_sites_removed(self, extractor):
        text = "Hello [FUNCTION:add_todo:{not valid json}] there"
        assert extractor.clean(text) == "Hello  there"

    def test_truncated_site_removed_to_end_of_line(self, extractor):
        text = 'Hello [FUNCTION:add_todo:{"title":\nNext line'
        assert extractor.clean(text) == "Hello \nNext line"

    def test_surrounding_whitespace_stripped(self, extractor):
        assert extractor.clean('  [FUNCTION:a:{}]  Hi  ') == "Hi"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain prose",
            'A [FUNCTION:a:{"x":1}] B',
            "[FUNCTION:bad:{",
            "[FUNC[FUNCTION:x:{}]TION:a:{}] tail",
            'x [FUNCTION:a:{"t":"]"}] [FUNCTION:b:nope] y',
        ],
    )
    def test_clean_is_idempotent(self, extractor, text):
        once = extractor.clean(text)
        assert extractor.clean(once) == once
        assert "[FUNCTION:" not in once
