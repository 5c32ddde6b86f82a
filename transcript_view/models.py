"""Models for conversation items and their derived display plans.

Conversation items are pydantic models mirroring the wire format produced by
the agent backend (camelCase field names included). Display plans are plain
dataclasses: format-neutral descriptions of what to render for one item,
rebuilt from scratch on every render cycle.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MalformedItemError(ValueError):
    """A conversation item does not match any known variant."""


class TemplateTag(str, Enum):
    """Visual template selected for an item.

    Using str as base class keeps plain string comparisons working.
    """

    MESSAGE = "message"
    REASONING = "reasoning"
    DIFF = "diff"
    TOOL = "tool"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


# Tool types are an open set; only file changes get special treatment
FILE_CHANGE_TOOL = "fileChange"


# =============================================================================
# Conversation Items (wire format)
# =============================================================================


class _Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str


class FileChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    kind: Optional[str] = None  # add, modify, delete, rename...
    diff: Optional[str] = None


class MessageItem(_Item):
    kind: Literal["message"] = "message"
    role: Role
    text: str


class ReasoningItem(_Item):
    kind: Literal["reasoning"] = "reasoning"
    summary: Optional[str] = None
    content: Optional[str] = None


class DiffItem(_Item):
    kind: Literal["diff"] = "diff"
    title: str
    status: Optional[str] = None
    diff: str


class ToolItem(_Item):
    kind: Literal["tool"] = "tool"
    title: str
    status: Optional[str] = None
    toolType: str
    detail: Optional[str] = None
    output: Optional[str] = None
    changes: Optional[list[FileChange]] = None

    @property
    def is_file_change(self) -> bool:
        return self.toolType == FILE_CHANGE_TOOL


ConversationItem = Annotated[
    Union[MessageItem, ReasoningItem, DiffItem, ToolItem],
    Field(discriminator="kind"),
]


# =============================================================================
# Display Plans (derived, format-neutral)
# =============================================================================


@dataclass(frozen=True)
class Fragment:
    """A piece of free text handed to the Markdown renderer.

    code_block selects monospace/diff-aware styling instead of prose.
    path, when set, hints the syntax of a code block (file changes).
    """

    text: str
    code_block: bool = False
    path: Optional[str] = None


@dataclass(frozen=True)
class FileChangeBlock:
    """One entry of a file-change tool: kind label, path and optional diff."""

    path: str
    index: int
    kind_label: Optional[str] = None  # Upper-cased change kind
    diff: Optional[Fragment] = None

    @property
    def key(self) -> str:
        # Paths are not unique within a tool call
        return f"{self.path}-{self.index}"


ToolBodyPart = Union[Fragment, FileChangeBlock]


@dataclass(frozen=True)
class DisplayPlan:
    """Base class for per-item display plans."""

    item_id: str

    @property
    def template(self) -> TemplateTag:
        raise NotImplementedError


@dataclass(frozen=True)
class MessagePlan(DisplayPlan):
    role: Role
    body: Fragment

    @property
    def template(self) -> TemplateTag:
        return TemplateTag.MESSAGE


@dataclass(frozen=True)
class ReasoningPlan(DisplayPlan):
    title: str
    body: list[Fragment] = field(default_factory=lambda: [])  # type: list[Fragment]

    @property
    def template(self) -> TemplateTag:
        return TemplateTag.REASONING


@dataclass(frozen=True)
class DiffPlan(DisplayPlan):
    title: str
    status: Optional[str]
    body: Fragment

    @property
    def template(self) -> TemplateTag:
        return TemplateTag.DIFF


@dataclass(frozen=True)
class ToolDisplayPlan(DisplayPlan):
    """Body parts chosen for a tool item, in display order.

    status is rendered as a badge next to the title whatever the body holds.
    """

    title: str
    status: Optional[str]
    tool_type: str
    body: list[ToolBodyPart] = field(default_factory=lambda: [])  # type: list[ToolBodyPart]

    @property
    def template(self) -> TemplateTag:
        return TemplateTag.TOOL

    @property
    def file_changes(self) -> list[FileChangeBlock]:
        return [part for part in self.body if isinstance(part, FileChangeBlock)]

    @property
    def fragments(self) -> list[Fragment]:
        return [part for part in self.body if isinstance(part, Fragment)]


# =============================================================================
# Render List
# =============================================================================


@dataclass(frozen=True)
class ItemEntry:
    plan: DisplayPlan

    @property
    def key(self) -> str:
        return self.plan.item_id


@dataclass(frozen=True)
class ThinkingEntry:
    """Transient indicator shown while the agent is working."""

    text: str

    @property
    def key(self) -> str:
        return "__thinking__"


@dataclass(frozen=True)
class EmptyEntry:
    """Placeholder shown when the transcript has no items."""

    text: str

    @property
    def key(self) -> str:
        return "__empty__"


RenderEntry = Union[ItemEntry, ThinkingEntry, EmptyEntry]


@dataclass(frozen=True)
class RenderList:
    entries: list[RenderEntry] = field(default_factory=lambda: [])  # type: list[RenderEntry]

    @property
    def plans(self) -> list[DisplayPlan]:
        return [entry.plan for entry in self.entries if isinstance(entry, ItemEntry)]

    @property
    def is_empty(self) -> bool:
        return any(isinstance(entry, EmptyEntry) for entry in self.entries)

    @property
    def is_thinking(self) -> bool:
        return any(isinstance(entry, ThinkingEntry) for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
