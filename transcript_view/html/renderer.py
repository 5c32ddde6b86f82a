"""HTML renderer for conversation transcripts."""

from typing import Optional, Sequence

from ..models import (
    DiffPlan,
    EmptyEntry,
    FileChangeBlock,
    MessagePlan,
    ReasoningPlan,
    ThinkingEntry,
    ToolBodyPart,
    ToolDisplayPlan,
)
from ..renderer import Renderer
from ..renderer_timings import (
    log_timing,
    report_timing_statistics,
    reset_timing_stats,
    set_current_item,
)
from .utils import (
    escape_html,
    get_pygments_css,
    get_template_environment,
    render_fragment,
)

DEFAULT_TITLE = "Conversation"


def render_card_summary(title: str, status: Optional[str] = None) -> str:
    """Render the always-visible header of a collapsible card."""
    status_html = (
        f"<span class='item-status'>{escape_html(status)}</span>" if status else ""
    )
    return (
        "<summary>"
        "<span class='item-summary-left'>"
        "<span class='item-chevron' aria-hidden='true'>▸</span>"
        f"<span class='item-title'>{escape_html(title)}</span>"
        "</span>"
        f"{status_html}"
        "</summary>"
    )


def render_card(
    item_id: str, css_class: str, summary_html: str, body_parts: list[str]
) -> str:
    body = "".join(body_parts)
    return (
        f"<details class='item-card {css_class}' id='item-{escape_html(item_id)}'>"
        f"{summary_html}<div class='item-body'>{body}</div></details>"
    )


def format_file_change_block(block: FileChangeBlock) -> str:
    """Render one file-change entry: kind label, path and optional diff."""
    kind_html = (
        f"<span class='file-change-kind'>{escape_html(block.kind_label)}</span>"
        if block.kind_label
        else ""
    )
    diff_html = render_fragment(block.diff) if block.diff else ""
    return (
        f"<div class='file-change' data-key='{escape_html(block.key)}'>"
        "<div class='file-change-header'>"
        f"{kind_html}<span class='file-change-path'>{escape_html(block.path)}</span>"
        f"</div>{diff_html}</div>"
    )


def format_tool_body(parts: list[ToolBodyPart]) -> list[str]:
    """Render tool body parts, wrapping each run of change blocks in a list."""
    html_parts: list[str] = []
    change_run: list[str] = []

    def flush_changes() -> None:
        if change_run:
            html_parts.append(f"<div class='file-change-list'>{''.join(change_run)}</div>")
            change_run.clear()

    for part in parts:
        if isinstance(part, FileChangeBlock):
            change_run.append(format_file_change_block(part))
        else:
            flush_changes()
            html_parts.append(render_fragment(part))
    flush_changes()
    return html_parts


class HtmlRenderer(Renderer):
    """HTML renderer for conversation transcripts."""

    def format_MessagePlan(self, plan: MessagePlan) -> str:
        return (
            f"<div class='message {plan.role.value}' id='item-{escape_html(plan.item_id)}'>"
            f"<div class='bubble'>{render_fragment(plan.body)}</div></div>"
        )

    def format_ReasoningPlan(self, plan: ReasoningPlan) -> str:
        return render_card(
            plan.item_id,
            "reasoning",
            render_card_summary(plan.title),
            [render_fragment(fragment) for fragment in plan.body],
        )

    def format_DiffPlan(self, plan: DiffPlan) -> str:
        return render_card(
            plan.item_id,
            "diff",
            render_card_summary(plan.title, plan.status),
            [render_fragment(plan.body)],
        )

    def format_ToolDisplayPlan(self, plan: ToolDisplayPlan) -> str:
        return render_card(
            plan.item_id,
            f"tool {escape_html(plan.tool_type)}",
            render_card_summary(plan.title, plan.status),
            format_tool_body(plan.body),
        )

    def format_ThinkingEntry(self, entry: ThinkingEntry) -> str:
        return f"<div class='thinking'>{escape_html(entry.text)}</div>"

    def format_EmptyEntry(self, entry: EmptyEntry) -> str:
        return f"<div class='empty messages-empty'>{escape_html(entry.text)}</div>"

    def generate(
        self,
        items: Sequence[object],
        is_thinking: bool = False,
        title: Optional[str] = None,
    ) -> str:
        """Generate a standalone HTML page for a transcript."""
        reset_timing_stats("markdown", "pygments")
        render_list = self.render_list(items, is_thinking)

        entries_html: list[str] = []
        with log_timing(lambda: f"Format HTML ({len(entries_html)} entries)"):
            for entry in render_list:
                set_current_item(entry.key)
                entries_html.append(self.format_entry(entry))
        report_timing_statistics()

        template = get_template_environment().get_template("transcript.html")
        return str(
            template.render(
                title=title or DEFAULT_TITLE,
                entries=entries_html,
                item_count=len(render_list.plans),
                is_thinking=render_list.is_thinking,
                is_empty=render_list.is_empty,
                pygments_css=get_pygments_css(),
            )
        )
