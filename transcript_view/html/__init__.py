"""HTML rendering package.

Re-exports the HTML renderer and its building blocks.
"""

from .utils import (
    escape_html,
    get_pygments_css,
    get_template_environment,
    render_fragment,
    render_markdown,
)
from .renderer_code import (
    highlight_code_with_pygments,
    render_code_block,
    render_line_diff,
    render_patch,
)
from .renderer import (
    HtmlRenderer,
    format_file_change_block,
    format_tool_body,
    render_card,
    render_card_summary,
)

__all__ = [
    # utils
    "escape_html",
    "get_pygments_css",
    "get_template_environment",
    "render_fragment",
    "render_markdown",
    # renderer_code
    "highlight_code_with_pygments",
    "render_code_block",
    "render_line_diff",
    "render_patch",
    # renderer
    "HtmlRenderer",
    "format_file_change_block",
    "format_tool_body",
    "render_card",
    "render_card_summary",
]
