import asyncio

import pytest

from ease_actions.chat.formatting import compose_display_text, format_result_line
from ease_actions.chat.pipeline import ResponsePipeline
from ease_actions.models.enums import ErrorCode
from ease_actions.models.execution_result import ActionResult


@pytest.fixture
def pipeline(registry):
    return ResponsePipeline(registry)


class TestFormatting:
    def test_lines(self):
        assert format_result_line(ActionResult.ok("Done")) == "✅ Done"
        assert (
            format_result_line(ActionResult.fail("Nope", code=ErrorCode.UNKNOWN_ACTION))
            == "❌ Nope"
        )

    def test_no_results_is_exactly_prose(self):
        assert compose_display_text("Hello", []) == "Hello"

    def test_results_appended_after_blank_line(self):
        text = compose_display_text(
            "Hello",
            [ActionResult.ok("A"), ActionResult.fail("B", code=ErrorCode.UNKNOWN_ACTION)],
        )
        assert text == "Hello\n\n✅ A\n❌ B"

    def test_empty_prose_with_results(self):
        assert compose_display_text("", [ActionResult.ok("A")]) == "✅ A"


class TestPipeline:
    def test_end_to_end_navigation(self, pipeline, context, navigator):
        text = 'Sure! [FUNCTION:navigate_to_section:{"section":"mood"}] Let\'s check in.'
        response = pipeline.process(text, context)

        assert response.display_text == "Sure!  Let's check in.\n\n✅ Navigated to mood section"
        assert navigator.calls == ["mood"]
        assert len(response.results) == 1
        assert response.results[0].success

    def test_no_markers(self, pipeline, context):
        response = pipeline.process("  How are you feeling today?  ", context)
        assert response.display_text == "How are you feeling today?"
        assert response.results == []
        assert response.calls == []

    @pytest.mark.parametrize("text", ["", None, "[FUNCTION:add_todo:{not valid json}]"])
    def test_never_raises(self, pipeline, context, text):
        response = pipeline.process(text, context)
        assert response.results == []
        assert response.display_text == ""

    @pytest.mark.parametrize(
        "site, expected_line",
        [
            (
                '[FUNCTION:track_mood:{"mood":"calm","intensity":' + "9" * 400 + "}]",
                "❌ Parameter 'intensity' for track_mood must be between 1 and 10",
            ),
            (
                '[FUNCTION:track_mood:{"mood":"calm","intensity":NaN}]',
                "❌ Parameter 'intensity' for track_mood must be a number",
            ),
            (
                '[FUNCTION:start_meditation:{"type":"sleep","duration":Infinity}]',
                "❌ Parameter 'duration' for start_meditation must be a number",
            ),
            (
                '[FUNCTION:add_todo:{"title":' + "[" * 100000 + "]" * 100000 + "}]",
                None,
            ),
        ],
        ids=["huge-integer", "nan", "infinity", "deep-nesting"],
    )
    def test_extreme_arguments_do_not_affect_other_calls(
        self, pipeline, context, navigator, store, site, expected_line
    ):
        text = 'Hi [FUNCTION:navigate_to_section:{"section":"mood"}] ' + site
        response = pipeline.process(text, context)

        assert navigator.calls == ["mood"]
        assert response.results[0].success
        assert "[FUNCTION:" not in response.display_text
        if expected_line is None:
            assert len(response.results) == 1
            assert response.display_text.startswith("Hi")
            assert response.display_text.endswith("\n\n✅ Navigated to mood section")
        else:
            assert len(response.results) == 2
            assert response.display_text == (
                "Hi\n\n✅ Navigated to mood section\n" + expected_line
            )
        assert store.moods == []
        assert store.todos == []

    def test_malformed_only_reply_keeps_prose(self, pipeline, context, store):
        response = pipeline.process("Let me add that. [FUNCTION:add_todo:{not valid json}]", context)
        assert response.display_text == "Let me add that."
        assert store.todos == []

    def test_unknown_action(self, pipeline, context):
        response = pipeline.process("[FUNCTION:delete_universe:{}]", context)
        assert response.display_text == "❌ Unknown function: delete_universe"

    def test_missing_required_parameter(self, pipeline, context, store):
        response = pipeline.process(
            'Booking. [FUNCTION:book_therapist_appointment:{"sessionType":"video"}]',
            context,
        )
        (result,) = response.results
        assert not result.success
        assert "preferredDate" in result.message
        assert store.todos == []

    def test_ordering_and_structured_results(self, pipeline, context, store, navigator):
        text = (
            'Adding it. [FUNCTION:add_todo:{"title":"Walk","priority":"high"}] '
            'Opening. [FUNCTION:navigate_to_section:{"section":"todos"}]'
        )
        response = pipeline.process(text, context)
        assert [r.action for r in response.results] == ["add_todo", "navigate_to_section"]
        assert response.display_text.endswith(
            '✅ Added todo: "Walk"\n✅ Navigated to todos section'
        )
        assert response.results[0].data["points"] == 3
        assert store.todos[0]["title"] == "Walk"
        assert navigator.calls == ["todos"]

    def test_failing_handler_does_not_stop_batch(self, registry, store, navigator):
        from ease_actions.execution.context import ExecutionContext

        def broken(record):
            raise IOError("disk full")

        ctx = ExecutionContext(navigate=navigator, save_todo=broken)
        text = (
            '[FUNCTION:add_todo:{"title":"Walk"}]'
            '[FUNCTION:navigate_to_section:{"section":"mood"}]'
        )
        response = ResponsePipeline(registry).process(text, ctx)
        assert response.display_text == "❌ Execution failed for add_todo\n✅ Navigated to mood section"
        assert navigator.calls == ["mood"]

    def test_aprocess_from_coroutine(self, pipeline, context):
        async def go():
            return await pipeline.aprocess('Hi [FUNCTION:track_mood:{"mood":"calm"}]', context)

        response = asyncio.run(go())
        assert response.display_text == "Hi\n\n✅ Mood tracked: calm"

    def test_process_inside_running_loop_raises(self, pipeline, context, store):
        async def go():
            pipeline.process('[FUNCTION:track_mood:{"mood":"calm"}]', context)

        with pytest.raises(RuntimeError, match="await aprocess"):
            asyncio.run(go())
        assert store.moods == []

    def test_extractor_failure_falls_back_to_prose(self, registry, context):
        class Broken:
            def extract(self, text):
                raise RuntimeError("bad extractor")

        response = ResponsePipeline(registry, extractor=Broken()).process("  Hello  ", context)
        assert response.display_text == "Hello"
        assert response.results == []
