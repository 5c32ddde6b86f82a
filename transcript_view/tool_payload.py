"""Choose which optional fields of a tool item are displayed.

The body of a tool entry is assembled from an ordered rule table. Each rule
pairs a guard with an emitter; every rule whose guard holds contributes its
parts, in table order:

    detail   shown unless this is a file-change tool with populated changes
    changes  one block per change, file-change tools only
    output   always shown when present, once, after everything else

So a file-change tool with a non-empty ``changes`` list never shows
``detail``, even when it is set. The status badge is not part of the body and
is carried on the plan regardless of which rules fire.
"""

from typing import Callable, NamedTuple

from .models import (
    FileChangeBlock,
    Fragment,
    ToolBodyPart,
    ToolDisplayPlan,
    ToolItem,
)


class PayloadRule(NamedTuple):
    name: str
    applies: Callable[[ToolItem], bool]
    emit: Callable[[ToolItem], list[ToolBodyPart]]


def has_file_changes(item: ToolItem) -> bool:
    """True for a file-change tool with at least one change entry."""
    return item.is_file_change and bool(item.changes)


def _emit_detail(item: ToolItem) -> list[ToolBodyPart]:
    return [Fragment(item.detail or "")]


def _emit_changes(item: ToolItem) -> list[ToolBodyPart]:
    blocks: list[ToolBodyPart] = []
    for index, change in enumerate(item.changes or []):
        blocks.append(
            FileChangeBlock(
                path=change.path,
                index=index,
                kind_label=change.kind.upper() if change.kind else None,
                diff=Fragment(change.diff, code_block=True, path=change.path)
                if change.diff
                else None,
            )
        )
    return blocks


def _emit_output(item: ToolItem) -> list[ToolBodyPart]:
    return [Fragment(item.output or "", code_block=True)]


PAYLOAD_RULES: list[PayloadRule] = [
    PayloadRule(
        "detail",
        lambda item: bool(item.detail) and not has_file_changes(item),
        _emit_detail,
    ),
    PayloadRule("changes", has_file_changes, _emit_changes),
    PayloadRule("output", lambda item: bool(item.output), _emit_output),
]


def select_payload(item: ToolItem) -> ToolDisplayPlan:
    """Build the display plan for a tool item."""
    body: list[ToolBodyPart] = []
    for rule in PAYLOAD_RULES:
        if rule.applies(item):
            body.extend(rule.emit(item))
    return ToolDisplayPlan(
        item_id=item.id,
        title=item.title,
        status=item.status or None,
        tool_type=item.toolType,
        body=body,
    )
