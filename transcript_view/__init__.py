"""Render agent conversation transcripts as a scrollable visual log."""

from .assembler import TranscriptView, assemble, build_display_plan
from .classifier import classify
from .models import ConversationItem, MalformedItemError, TemplateTag
from .reasoning import derive_title
from .tool_payload import select_payload

__all__ = [
    "ConversationItem",
    "MalformedItemError",
    "TemplateTag",
    "TranscriptView",
    "assemble",
    "build_display_plan",
    "classify",
    "derive_title",
    "select_payload",
]
