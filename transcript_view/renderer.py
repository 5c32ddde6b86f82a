"""Base renderer turning render lists into an output format."""

from typing import Any, Optional, Sequence

from .assembler import assemble
from .models import RenderEntry, RenderList


class Renderer:
    """Base class for transcript renderers.

    Subclasses implement format-specific rendering (HTML, Markdown).

    The method-based dispatcher pattern:
    - format_entry() walks the MRO of an entry (or of its display plan) and
      calls the first format_{ClassName} method found
    - Subclasses define format_MessagePlan, format_ToolDisplayPlan, ... for
      the classes they know how to render
    """

    def _dispatch_format(self, obj: Any) -> str:
        """Dispatch to format_{ClassName} method based on object type."""
        for cls in type(obj).__mro__:
            if cls is object:
                break
            if method := getattr(self, f"format_{cls.__name__}", None):
                return method(obj)
        return ""

    def format_entry(self, entry: RenderEntry) -> str:
        """Format one render list entry.

        Returns:
            Formatted string, or empty string if no handler is found.
        """
        return self._dispatch_format(entry)

    def format_ItemEntry(self, entry: Any) -> str:
        """Item entries are formatted by their display plan's class."""
        return self._dispatch_format(entry.plan)

    # Plan formatters (override in subclasses)
    # def format_MessagePlan(self, plan: "MessagePlan") -> str: ...
    # def format_ReasoningPlan(self, plan: "ReasoningPlan") -> str: ...
    # def format_DiffPlan(self, plan: "DiffPlan") -> str: ...
    # def format_ToolDisplayPlan(self, plan: "ToolDisplayPlan") -> str: ...
    # def format_ThinkingEntry(self, entry: "ThinkingEntry") -> str: ...
    # def format_EmptyEntry(self, entry: "EmptyEntry") -> str: ...

    def generate(
        self,
        items: Sequence[object],
        is_thinking: bool = False,
        title: Optional[str] = None,
    ) -> Optional[str]:
        """Generate a complete document for a transcript.

        Returns None by default; subclasses override to return formatted output.
        """
        return None

    def render_list(self, items: Sequence[object], is_thinking: bool) -> RenderList:
        return assemble(items, is_thinking)


def get_renderer(format: str) -> Renderer:
    """Get a renderer instance for the specified format.

    Args:
        format: The output format ("html", "md" or "markdown").

    Raises:
        ValueError: If the format is not supported.
    """
    if format == "html":
        from .html.renderer import HtmlRenderer

        return HtmlRenderer()
    if format in ("md", "markdown"):
        from .markdown.renderer import MarkdownRenderer

        return MarkdownRenderer()
    raise ValueError(f"Unsupported format: {format}")
