"""Parse conversation items from JSON and JSONL transcripts.

This module provides:
- parse_conversation_item: Validate one raw item
- parse_conversation_items: Validate a list of raw items
- load_transcript: Read a .json or .jsonl transcript file

Malformed input is an upstream bug, so everything here raises
MalformedItemError rather than skipping bad entries.
"""

import json
from pathlib import Path
from typing import Any, Iterable

from pydantic import TypeAdapter, ValidationError

from .models import ConversationItem, MalformedItemError

_item_adapter: TypeAdapter[ConversationItem] = TypeAdapter(ConversationItem)


def _describe_validation_error(e: ValidationError) -> str:
    problems: list[str] = []
    for error in e.errors():
        location = ".".join(str(part) for part in error["loc"])
        problems.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(problems)


def parse_conversation_item(data: Any, where: str = "item") -> ConversationItem:
    """Validate a raw dict into a typed conversation item.

    Args:
        data: Decoded JSON object.
        where: Location used in error messages (e.g. "line 3 of log.jsonl").
    """
    if not isinstance(data, dict):
        raise MalformedItemError(f"{where} is not a JSON object: {data!r}")
    try:
        return _item_adapter.validate_python(data)
    except ValidationError as e:
        raise MalformedItemError(
            f"Invalid {where}: {_describe_validation_error(e)}"
        ) from e


def _check_unique_ids(items: list[ConversationItem], source: str) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise MalformedItemError(f"Duplicate item id {item.id!r} in {source}")
        seen.add(item.id)


def parse_conversation_items(
    data: Any, source: str = "transcript"
) -> list[ConversationItem]:
    """Validate a list of raw items, or an object holding one under "items"."""
    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise MalformedItemError(f"{source} must be a list of items")

    items = [
        parse_conversation_item(raw, where=f"item {index} of {source}")
        for index, raw in enumerate(data)
    ]
    _check_unique_ids(items, source)
    return items


def _iter_jsonl(lines: Iterable[str], source: str) -> Iterable[ConversationItem]:
    for line_no, line in enumerate(lines, 1):
        line = line.strip()
        if not line:
            continue
        where = f"line {line_no} of {source}"
        try:
            raw = json.loads(line)
        except json.JSONDecodeError as e:
            raise MalformedItemError(f"Invalid JSON on {where}: {e}") from e
        yield parse_conversation_item(raw, where=where)


def load_transcript(path: Path) -> list[ConversationItem]:
    """Load conversation items from a transcript file.

    .jsonl files hold one item per line (blank lines are skipped); anything
    else is read as a single JSON document.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedItemError: If the file or any item in it is invalid.
    """
    source = path.name
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".jsonl":
            items = list(_iter_jsonl(f, source))
            _check_unique_ids(items, source)
            return items

        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedItemError(f"Invalid JSON in {source}: {e}") from e
    return parse_conversation_items(data, source=source)
