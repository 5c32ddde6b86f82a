"""Derive a short title for collapsed reasoning entries.

Reasoning traces tend to end with their conclusion, so the last non-blank
line of the summary (or, failing that, the raw content) becomes the title
once lightweight Markdown decoration is stripped.
"""

import re

from .models import ReasoningItem

FALLBACK_TITLE = "Reasoning"
MAX_TITLE_LENGTH = 80
ELLIPSIS = "…"

DECORATION_PATTERN = re.compile(r"[`*_~]")
LINK_PATTERN = re.compile(r"\[(.*?)\]\(.*?\)")


def get_source_text(item: ReasoningItem) -> str:
    """Return the summary if it has text, else the content, else ''."""
    return item.summary or item.content or ""


def strip_markdown_decoration(text: str) -> str:
    """Remove inline emphasis/code markers and reduce links to their label.

    Examples:
        >>> strip_markdown_decoration("**bold** [link](http://x)")
        'bold link'
    """
    text = DECORATION_PATTERN.sub("", text)
    text = LINK_PATTERN.sub(r"\1", text)
    return text.strip()


def derive_title(item: ReasoningItem) -> str:
    """Return a non-empty title of at most MAX_TITLE_LENGTH + 1 characters."""
    lines = [line.strip() for line in get_source_text(item).split("\n")]
    lines = [line for line in lines if line]
    raw_title = lines[-1] if lines else FALLBACK_TITLE

    # Link rewriting must happen before truncation
    clean_title = strip_markdown_decoration(raw_title)
    if len(clean_title) > MAX_TITLE_LENGTH:
        return f"{clean_title[:MAX_TITLE_LENGTH]}{ELLIPSIS}"
    return clean_title or FALLBACK_TITLE
