"""Code rendering utilities for syntax highlighting and patches.

This module renders code-block fragments: unified-diff text becomes
line-level diff markup with intra-line highlighting, anything else is
highlighted with Pygments.
"""

import difflib
import fnmatch
import html
import os
from typing import Optional

from pygments import highlight  # type: ignore[reportUnknownVariableType]
from pygments.lexers import TextLexer, get_lexer_by_name, get_all_lexers  # type: ignore[reportUnknownVariableType]
from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]
from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

from ..renderer_timings import timing_stat
from ..utils import GIT_HEADER_PREFIX, HUNK_HEADER_PATTERN, is_unified_diff


def _escape_html(text: str) -> str:
    """Escape HTML, normalizing CRLF/CR line endings to LF."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return html.escape(normalized)


# Filename pattern -> lexer alias, built once from Pygments' registry
_pattern_cache: Optional[dict[str, str]] = None


def _get_pattern_cache() -> dict[str, str]:
    global _pattern_cache

    if _pattern_cache is None:
        cache: dict[str, str] = {}
        for _name, aliases, patterns, _mimetypes in get_all_lexers():  # type: ignore[reportUnknownVariableType]
            if aliases and patterns:
                for pattern in patterns:
                    cache.setdefault(pattern.lower(), aliases[0])
        _pattern_cache = cache
    return _pattern_cache


def lexer_alias_for_path(file_path: str) -> Optional[str]:
    """Return the Pygments lexer alias for a file path, or None."""
    basename = os.path.basename(file_path).lower()
    if not basename:
        return None
    patterns = _get_pattern_cache()
    if "." in basename:
        alias = patterns.get(f"*.{basename.rsplit('.', 1)[-1]}")
        if alias:
            return alias
    for pattern, alias in patterns.items():
        if fnmatch.fnmatch(basename, pattern):
            return alias
    return None


def highlight_code_with_pygments(code: str, file_path: Optional[str] = None) -> str:
    """Highlight code, picking the lexer from file_path when given.

    Unknown or missing paths fall back to plain text.
    """
    alias = lexer_alias_for_path(file_path) if file_path else None
    try:
        # stripall=False keeps leading indentation
        lexer = get_lexer_by_name(alias, stripall=False) if alias else TextLexer()  # type: ignore[reportUnknownVariableType]
    except ClassNotFound:
        lexer = TextLexer()  # type: ignore[reportUnknownVariableType]

    formatter = HtmlFormatter(cssclass="highlight", wrapcode=True)  # type: ignore[reportUnknownVariableType]
    with timing_stat("pygments"):
        return str(highlight(code, lexer, formatter))  # type: ignore[reportUnknownArgumentType]


def _diff_line(css_class: str, marker: str, content_html: str) -> str:
    return (
        f"<div class='diff-line {css_class}'>"
        f"<span class='diff-marker'>{marker}</span>{content_html}</div>"
    )


def render_line_diff(old_line: str, new_line: str) -> str:
    """Render a removed/added line pair with character-level highlighting."""
    sm = difflib.SequenceMatcher(None, old_line, new_line)
    old_parts: list[str] = []
    new_parts: list[str] = []
    for tag, i1, i2, j1, j2 in sm.get_opcodes():
        old_chunk = _escape_html(old_line[i1:i2])
        new_chunk = _escape_html(new_line[j1:j2])
        if tag == "equal":
            old_parts.append(old_chunk)
            new_parts.append(new_chunk)
            continue
        if old_chunk:
            old_parts.append(f"<mark class='diff-char-removed'>{old_chunk}</mark>")
        if new_chunk:
            new_parts.append(f"<mark class='diff-char-added'>{new_chunk}</mark>")
    return _diff_line("diff-removed", "-", "".join(old_parts)) + _diff_line(
        "diff-added", "+", "".join(new_parts)
    )


def _render_change_run(removed: list[str], added: list[str]) -> list[str]:
    """Pair up a run of removed lines with the added lines following it."""
    parts = [render_line_diff(old, new) for old, new in zip(removed, added)]
    for old in removed[len(added) :]:
        parts.append(_diff_line("diff-removed", "-", _escape_html(old)))
    for new in added[len(removed) :]:
        parts.append(_diff_line("diff-added", "+", _escape_html(new)))
    return parts


def render_patch(patch: str) -> str:
    """Render unified-diff text as HTML diff lines.

    File headers and hunk headers get their own classes; consecutive -/+ runs
    are paired for intra-line highlighting; everything else is context.
    """
    html_parts = ["<div class='patch-diff'>"]
    removed: list[str] = []
    added: list[str] = []
    in_hunk = False

    def flush() -> None:
        html_parts.extend(_render_change_run(removed, added))
        removed.clear()
        added.clear()

    lines = patch.replace("\r\n", "\n").rstrip("\n").split("\n")
    for i, line in enumerate(lines):
        # A ---/+++ pair starts the next file even without a "diff --git" line
        next_file = (
            line.startswith("--- ")
            and i + 1 < len(lines)
            and lines[i + 1].startswith("+++ ")
        )
        if HUNK_HEADER_PATTERN.match(line):
            flush()
            in_hunk = True
            html_parts.append(f"<div class='diff-line diff-hunk'>{_escape_html(line)}</div>")
        elif not in_hunk or next_file or line.startswith(GIT_HEADER_PREFIX):
            flush()
            in_hunk = False
            if line:
                html_parts.append(
                    f"<div class='diff-line diff-header'>{_escape_html(line)}</div>"
                )
        elif line.startswith("-"):
            if added:
                flush()
            removed.append(line[1:])
        elif line.startswith("+"):
            added.append(line[1:])
        elif line.startswith("\\"):
            # "\ No newline at end of file"
            flush()
            html_parts.append(f"<div class='diff-line diff-meta'>{_escape_html(line)}</div>")
        else:
            flush()
            html_parts.append(_diff_line("diff-context", " ", _escape_html(line[1:])))

    flush()
    html_parts.append("</div>")
    return "".join(html_parts)


def render_code_block(text: str, file_path: Optional[str] = None) -> str:
    """Render a code-block fragment: patches as diffs, other text highlighted."""
    if is_unified_diff(text):
        return render_patch(text)
    return highlight_code_with_pygments(text, file_path)
