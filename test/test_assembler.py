#!/usr/bin/env python3
"""Tests for render list assembly and the scroll trigger."""

from types import SimpleNamespace

import pytest

from transcript_view.assembler import (
    EMPTY_TEXT,
    THINKING_TEXT,
    TranscriptView,
    assemble,
    build_display_plan,
)
from transcript_view.models import (
    DiffPlan,
    EmptyEntry,
    Fragment,
    ItemEntry,
    MalformedItemError,
    MessageItem,
    MessagePlan,
    ReasoningItem,
    ReasoningPlan,
    Role,
    TemplateTag,
    ThinkingEntry,
    ToolDisplayPlan,
)


class TestBuildDisplayPlan:
    def test_message_passes_text_through(self, user_message):
        plan = build_display_plan(user_message)
        assert plan == MessagePlan(
            item_id="msg-1", role=Role.USER, body=Fragment("Please fix the **build**")
        )
        assert plan.template is TemplateTag.MESSAGE

    def test_reasoning_has_title_and_both_texts(self, reasoning_item):
        plan = build_display_plan(reasoning_item)
        assert isinstance(plan, ReasoningPlan)
        assert plan.title == "Checking setup.cfg"
        assert [f.text for f in plan.body] == [
            reasoning_item.summary,
            "raw chain of thought",
        ]

    def test_reasoning_skips_empty_texts(self):
        plan = build_display_plan(ReasoningItem(id="r", summary="", content="only"))
        assert plan.body == [Fragment("only")]

    def test_diff_is_code_block(self, diff_item):
        plan = build_display_plan(diff_item)
        assert isinstance(plan, DiffPlan)
        assert plan.body == Fragment(diff_item.diff, code_block=True)
        assert plan.status == "completed"

    def test_tool_uses_payload_selector(self, file_change_tool):
        plan = build_display_plan(file_change_tool)
        assert isinstance(plan, ToolDisplayPlan)
        assert len(plan.file_changes) == 2

    def test_unknown_kind_raises(self):
        with pytest.raises(MalformedItemError):
            build_display_plan(SimpleNamespace(kind="video", id="v"))

    def test_kind_class_mismatch_raises(self):
        with pytest.raises(MalformedItemError, match="MessageItem"):
            build_display_plan(SimpleNamespace(kind="message", id="m", text="hi"))


class TestAssemble:
    def test_empty_transcript(self):
        render_list = assemble([], False)
        assert render_list.entries == [EmptyEntry(EMPTY_TEXT)]
        assert render_list.plans == []

    def test_empty_transcript_while_thinking(self):
        render_list = assemble([], True)
        assert render_list.entries == [ThinkingEntry(THINKING_TEXT), EmptyEntry(EMPTY_TEXT)]

    def test_thinking_after_message(self, user_message):
        render_list = assemble([user_message], True)
        assert len(render_list) == 2
        first, second = render_list.entries
        assert isinstance(first, ItemEntry)
        assert first.key == "msg-1"
        assert isinstance(second, ThinkingEntry)
        assert not render_list.is_empty

    def test_no_thinking_no_placeholder(self, user_message):
        render_list = assemble([user_message], False)
        assert not render_list.is_thinking
        assert not render_list.is_empty
        assert len(render_list) == 1

    def test_order_preserved(self, user_message, reasoning_item, diff_item, command_tool):
        items = [diff_item, user_message, command_tool, reasoning_item]
        keys = [entry.key for entry in assemble(items, False)]
        assert keys == ["diff-1", "msg-1", "tool-1", "reason-1"]

    def test_idempotent(self, user_message, reasoning_item, file_change_tool):
        items = [user_message, reasoning_item, file_change_tool]
        assert assemble(items, True) == assemble(items, True)

    def test_items_not_mutated(self, file_change_tool):
        before = file_change_tool.model_dump()
        assemble([file_change_tool], False)
        assert file_change_tool.model_dump() == before

    def test_custom_texts(self):
        render_list = assemble([], True, thinking_text="Working", empty_text="Nothing yet")
        assert render_list.entries == [ThinkingEntry("Working"), EmptyEntry("Nothing yet")]

    def test_malformed_item_fails_whole_render(self, user_message):
        with pytest.raises(MalformedItemError):
            assemble([user_message, SimpleNamespace(kind="?", id="bad")], False)


class TestTranscriptViewScroll:
    @pytest.fixture
    def calls(self) -> list[str]:
        return []

    @pytest.fixture
    def view(self, calls) -> TranscriptView:
        return TranscriptView(scroll_to_end=lambda: calls.append("scroll"))

    def test_first_render_scrolls(self, view, calls):
        view.render([], False)
        assert calls == ["scroll"]

    def test_unchanged_inputs_do_not_scroll(self, view, calls, user_message):
        view.render([user_message], False)
        view.render([user_message], False)
        assert calls == ["scroll"]

    def test_new_item_scrolls(self, view, calls, user_message, diff_item):
        view.render([user_message], False)
        view.render([user_message, diff_item], False)
        assert calls == ["scroll", "scroll"]

    def test_thinking_toggle_scrolls(self, view, calls, user_message):
        view.render([user_message], False)
        view.render([user_message], True)
        view.render([user_message], False)
        assert len(calls) == 3

    def test_same_count_different_items_does_not_scroll(self, view, calls, user_message):
        view.render([user_message], False)
        other = MessageItem(id="msg-2", role=Role.ASSISTANT, text="edited")
        view.render([other], False)
        assert calls == ["scroll"]

    def test_scroll_happens_after_render_list_is_built(self, user_message):
        order: list[str] = []
        view = TranscriptView(scroll_to_end=lambda: order.append("scroll"))
        render_list = view.render([user_message], False)
        order.append("returned")
        assert order == ["scroll", "returned"]
        assert render_list.plans[0].item_id == "msg-1"

    def test_scroll_failure_is_swallowed(self, user_message, caplog):
        def broken_scroll() -> None:
            raise RuntimeError("no scrollable container")

        view = TranscriptView(scroll_to_end=broken_scroll)
        with caplog.at_level("DEBUG", logger="transcript_view.assembler"):
            render_list = view.render([user_message], False)
        assert len(render_list) == 1
        assert "no scrollable container" in caplog.text

    def test_without_scroll_callback(self, user_message):
        view = TranscriptView()
        assert len(view.render([user_message], True)) == 2

    def test_render_matches_assemble(self, view, user_message):
        assert view.render([user_message], True) == assemble([user_message], True)
