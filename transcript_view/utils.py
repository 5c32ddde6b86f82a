"""Format-neutral text helpers shared by the renderers."""

import re

HUNK_HEADER_PATTERN = re.compile(r"^@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@")
GIT_HEADER_PREFIX = "diff --git "


def is_unified_diff(text: str) -> bool:
    """True if text looks like a unified diff (has a hunk header or git header)."""
    for line in text.splitlines():
        if HUNK_HEADER_PATTERN.match(line) or line.startswith(GIT_HEADER_PREFIX):
            return True
    return False
