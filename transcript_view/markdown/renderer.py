"""Markdown renderer for conversation transcripts."""

import re
from pathlib import Path
from typing import Optional, Sequence

from ..models import (
    DiffPlan,
    EmptyEntry,
    FileChangeBlock,
    Fragment,
    MessagePlan,
    ReasoningPlan,
    ThinkingEntry,
    ToolDisplayPlan,
)
from ..renderer import Renderer
from ..renderer_timings import log_timing
from ..utils import is_unified_diff

DEFAULT_TITLE = "Conversation"

ROLE_HEADINGS = {
    "user": "User",
    "assistant": "Assistant",
    "system": "System",
}

# Extension -> fence language hint for file-change content that is not a patch
LANG_BY_EXTENSION = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".json": "json",
    ".rs": "rust",
    ".go": "go",
    ".sh": "bash",
    ".md": "markdown",
    ".html": "html",
    ".css": "css",
    ".toml": "toml",
    ".yml": "yaml",
    ".yaml": "yaml",
}


class MarkdownRenderer(Renderer):
    """Markdown renderer for conversation transcripts."""

    # -------------------------------------------------------------------------
    # Private Utility Methods
    # -------------------------------------------------------------------------

    def _quote(self, text: str) -> str:
        """Prefix each line with '> ' to create a blockquote."""
        return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))

    def _code_fence(self, text: str, lang: str = "") -> str:
        """Wrap text in a fenced code block longer than any backtick run inside it."""
        longest = max((len(m.group()) for m in re.finditer(r"`+", text)), default=0)
        fence = "`" * max(3, longest + 1)
        return f"{fence}{lang}\n{text}\n{fence}"

    def _escape_html_tag(self, text: str, tag: str) -> str:
        """Replace </tag> with &lt;/tag> so content cannot close our own blocks."""
        return text.replace(f"</{tag}>", f"&lt;/{tag}>")

    def _collapsible(self, summary: str, content: str) -> str:
        """Wrap content in a collapsible <details> block."""
        safe_summary = self._escape_html_tag(summary, "summary")
        safe_summary = self._escape_html_tag(safe_summary, "details")
        safe_content = self._escape_html_tag(content, "details")
        return f"<details>\n<summary>{safe_summary}</summary>\n\n{safe_content}\n</details>"

    def _summary(self, title: str, status: Optional[str]) -> str:
        return f"{title} · <em>{status}</em>" if status else title

    def _lang_for(self, fragment: Fragment) -> str:
        if is_unified_diff(fragment.text):
            return "diff"
        if fragment.path:
            return LANG_BY_EXTENSION.get(Path(fragment.path).suffix.lower(), "")
        return ""

    def _fragment(self, fragment: Fragment) -> str:
        if fragment.code_block:
            return self._code_fence(fragment.text, self._lang_for(fragment))
        return fragment.text

    def _file_change(self, block: FileChangeBlock) -> str:
        header = f"- **{block.kind_label}** `{block.path}`" if block.kind_label else f"- `{block.path}`"
        if block.diff is None:
            return header
        # Indent the fence so it stays inside the list item
        fence = self._fragment(block.diff)
        return header + "\n\n" + "\n".join(f"  {line}" if line else "" for line in fence.split("\n"))

    # -------------------------------------------------------------------------
    # Plan Formatters
    # -------------------------------------------------------------------------

    def format_MessagePlan(self, plan: MessagePlan) -> str:
        heading = ROLE_HEADINGS.get(plan.role.value, plan.role.value.title())
        return f"### {heading}\n\n{self._fragment(plan.body)}"

    def format_ReasoningPlan(self, plan: ReasoningPlan) -> str:
        content = "\n>\n".join(self._quote(fragment.text) for fragment in plan.body)
        return self._collapsible(plan.title, content)

    def format_DiffPlan(self, plan: DiffPlan) -> str:
        return self._collapsible(
            self._summary(plan.title, plan.status), self._fragment(plan.body)
        )

    def format_ToolDisplayPlan(self, plan: ToolDisplayPlan) -> str:
        parts: list[str] = []
        changes: list[str] = []
        for part in plan.body:
            if isinstance(part, FileChangeBlock):
                changes.append(self._file_change(part))
                continue
            if changes:
                parts.append("\n".join(changes))
                changes = []
            parts.append(self._fragment(part))
        if changes:
            parts.append("\n".join(changes))
        return self._collapsible(
            self._summary(plan.title, plan.status), "\n\n".join(parts)
        )

    def format_ThinkingEntry(self, entry: ThinkingEntry) -> str:
        return f"*{entry.text}*"

    def format_EmptyEntry(self, entry: EmptyEntry) -> str:
        return f"*{entry.text}*"

    # -------------------------------------------------------------------------
    # Rendering Entry Points
    # -------------------------------------------------------------------------

    def generate(
        self,
        items: Sequence[object],
        is_thinking: bool = False,
        title: Optional[str] = None,
    ) -> str:
        """Generate a Markdown document for a transcript."""
        render_list = self.render_list(items, is_thinking)
        parts = [f"# {title or DEFAULT_TITLE}"]
        with log_timing(lambda: f"Format Markdown ({len(parts) - 1} entries)"):
            for entry in render_list:
                parts.append(self.format_entry(entry))
        return "\n\n".join(parts) + "\n"
