"""HTML-specific rendering utilities.

This module contains the shared HTML building blocks:
- HTML escaping
- Markdown rendering (mistune, with Pygments for fenced code)
- Fragment rendering (prose vs. code block)
- Template environment management
"""

import functools
import html
import logging
from pathlib import Path
from typing import Any, Optional

import mistune
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .renderer_code import render_code_block
from ..models import Fragment
from ..renderer_timings import timing_stat

logger = logging.getLogger(__name__)


def escape_html(text: str) -> str:
    """Escape HTML special characters in text.

    Also normalizes line endings (CRLF -> LF) to prevent double spacing in <pre> blocks.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return html.escape(normalized)


def _create_pygments_plugin() -> Any:
    """Create a mistune plugin that highlights fenced code blocks with a language hint."""
    from pygments import highlight  # type: ignore[reportUnknownVariableType]
    from pygments.lexers import get_lexer_by_name, TextLexer  # type: ignore[reportUnknownVariableType]
    from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]
    from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

    def plugin_pygments(md: Any) -> None:
        original_render = md.renderer.block_code

        def block_code(code: str, info: Optional[str] = None) -> str:
            if not info:
                return original_render(code, info)
            try:
                lexer = get_lexer_by_name(info.split()[0], stripall=False)  # type: ignore[reportUnknownVariableType]
            except ClassNotFound:
                lexer = TextLexer()  # type: ignore[reportUnknownVariableType]
            formatter = HtmlFormatter(cssclass="highlight", wrapcode=True)  # type: ignore[reportUnknownVariableType]
            with timing_stat("pygments"):
                return str(highlight(code, lexer, formatter))  # type: ignore[reportUnknownArgumentType]

        md.renderer.block_code = block_code

    return plugin_pygments


@functools.lru_cache(maxsize=1)
def _get_markdown_renderer() -> mistune.Markdown:
    """Get cached Mistune markdown renderer with Pygments syntax highlighting."""
    return mistune.create_markdown(
        plugins=[
            "strikethrough",
            "table",
            "url",
            "task_lists",
            _create_pygments_plugin(),
        ],
        escape=True,  # Agent output may contain stray HTML tags
        hard_wrap=True,
    )


def render_markdown(text: str) -> str:
    """Convert markdown text to HTML."""
    with timing_stat("markdown"):
        return str(_get_markdown_renderer()(text))


def _render_preformatted(text: str) -> str:
    return f"<pre>{escape_html(text)}</pre>"


def render_fragment(fragment: Fragment) -> str:
    """Render a fragment to HTML.

    Prose goes through Markdown, code blocks through the diff/Pygments path.
    A failing renderer degrades to escaped preformatted text.
    """
    try:
        if fragment.code_block:
            body = render_code_block(fragment.text, fragment.path)
        else:
            body = render_markdown(fragment.text)
    except Exception as e:
        logger.debug("Rendering fragment failed, falling back to plain text: %s", e)
        body = _render_preformatted(fragment.text)

    css_class = "item-output" if fragment.code_block else "item-text markdown"
    return f"<div class='{css_class}'>{body}</div>"


@functools.lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Get cached Jinja2 environment loading from the templates directory."""
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
    )


@functools.lru_cache(maxsize=1)
def get_pygments_css() -> str:
    """CSS rules for the Pygments 'highlight' class."""
    from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]

    return str(HtmlFormatter(cssclass="highlight").get_style_defs(".highlight"))  # type: ignore[reportUnknownArgumentType]
