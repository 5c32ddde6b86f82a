"""Fold conversation items into an ordered render list.

assemble() is a pure function of its inputs. TranscriptView wraps it with the
one piece of state the pipeline keeps across render cycles: the key
(item count, thinking flag) that decides whether the viewport should be
scrolled to the end after a render.
"""

import logging
from typing import Callable, Optional, Sequence

from .classifier import classify
from .models import (
    DiffItem,
    DiffPlan,
    DisplayPlan,
    EmptyEntry,
    Fragment,
    ItemEntry,
    MalformedItemError,
    MessageItem,
    MessagePlan,
    ReasoningItem,
    ReasoningPlan,
    RenderEntry,
    RenderList,
    TemplateTag,
    ThinkingEntry,
    ToolItem,
)
from .reasoning import derive_title
from .renderer_timings import log_timing
from .tool_payload import select_payload

logger = logging.getLogger(__name__)

THINKING_TEXT = "Codex is thinking..."
EMPTY_TEXT = "Start a thread and send a prompt to the agent."


def build_message_plan(item: MessageItem) -> MessagePlan:
    return MessagePlan(item_id=item.id, role=item.role, body=Fragment(item.text))


def build_reasoning_plan(item: ReasoningItem) -> ReasoningPlan:
    """Title plus the summary and content, each only if it has text."""
    body = [Fragment(text) for text in (item.summary, item.content) if text]
    return ReasoningPlan(item_id=item.id, title=derive_title(item), body=body)


def build_diff_plan(item: DiffItem) -> DiffPlan:
    return DiffPlan(
        item_id=item.id,
        title=item.title,
        status=item.status or None,
        body=Fragment(item.diff, code_block=True),
    )


PLAN_BUILDERS: dict[TemplateTag, Callable[..., DisplayPlan]] = {
    TemplateTag.MESSAGE: build_message_plan,
    TemplateTag.REASONING: build_reasoning_plan,
    TemplateTag.DIFF: build_diff_plan,
    TemplateTag.TOOL: select_payload,
}

# Item class each template expects; a mismatch means the item was built by hand
# with an inconsistent kind.
_EXPECTED_TYPES: dict[TemplateTag, type] = {
    TemplateTag.MESSAGE: MessageItem,
    TemplateTag.REASONING: ReasoningItem,
    TemplateTag.DIFF: DiffItem,
    TemplateTag.TOOL: ToolItem,
}


def build_display_plan(item: object) -> DisplayPlan:
    """Classify an item and build its display plan.

    Raises:
        MalformedItemError: If the item's kind is unknown or does not match
            its class.
    """
    template = classify(item)
    expected = _EXPECTED_TYPES[template]
    if not isinstance(item, expected):
        raise MalformedItemError(
            f"Item of kind {template.value!r} must be a {expected.__name__}, "
            f"got {type(item).__name__}"
        )
    return PLAN_BUILDERS[template](item)


def assemble(
    items: Sequence[object],
    is_thinking: bool,
    *,
    thinking_text: str = THINKING_TEXT,
    empty_text: str = EMPTY_TEXT,
) -> RenderList:
    """Build the render list for one cycle.

    Item entries come first in sequence order, then the thinking indicator
    (iff is_thinking), then the empty placeholder (iff there are no items).
    """
    entries: list[RenderEntry] = []
    with log_timing(lambda: f"Assemble ({len(items)} items)"):
        for item in items:
            entries.append(ItemEntry(build_display_plan(item)))
    if is_thinking:
        entries.append(ThinkingEntry(thinking_text))
    if not items:
        entries.append(EmptyEntry(empty_text))
    return RenderList(entries)


class TranscriptView:
    """Render transcripts and scroll to the end when the visible tail changes.

    Args:
        scroll_to_end: Fire-and-forget callable bringing the last entry into
            view. Exceptions it raises are logged and ignored.
    """

    def __init__(self, scroll_to_end: Optional[Callable[[], None]] = None):
        self.scroll_to_end = scroll_to_end
        self._scroll_key: Optional[tuple[int, bool]] = None

    def render(self, items: Sequence[object], is_thinking: bool) -> RenderList:
        render_list = assemble(items, is_thinking)

        # Scroll only after the list is fully built
        key = (len(items), is_thinking)
        if key != self._scroll_key:
            self._scroll_key = key
            self._request_scroll()
        return render_list

    def _request_scroll(self) -> None:
        if self.scroll_to_end is None:
            return
        try:
            self.scroll_to_end()
        except Exception as e:
            logger.debug("Scroll to end failed: %s", e)
