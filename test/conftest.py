"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from transcript_view.models import (
    DiffItem,
    FileChange,
    MessageItem,
    ReasoningItem,
    Role,
    ToolItem,
)


@pytest.fixture
def user_message() -> MessageItem:
    return MessageItem(id="msg-1", role=Role.USER, text="Please fix the **build**")


@pytest.fixture
def reasoning_item() -> ReasoningItem:
    return ReasoningItem(
        id="reason-1",
        summary="Looking at the failing test\n\n**Checking `setup.cfg`**\n",
        content="raw chain of thought",
    )


@pytest.fixture
def diff_item() -> DiffItem:
    return DiffItem(
        id="diff-1",
        title="Turn diff",
        status="completed",
        diff="diff --git a/app.py b/app.py\n--- a/app.py\n+++ b/app.py\n@@ -1 +1 @@\n-x = 1\n+x = 2\n",
    )


@pytest.fixture
def command_tool() -> ToolItem:
    return ToolItem(
        id="tool-1",
        title="Command: pytest -q",
        status="completed",
        toolType="commandExecution",
        detail="cwd: /repo",
        output="3 passed in 0.12s",
    )


@pytest.fixture
def file_change_tool() -> ToolItem:
    return ToolItem(
        id="tool-2",
        title="File changes",
        status="completed",
        toolType="fileChange",
        detail="ignored",
        output="Applied patch",
        changes=[
            FileChange(
                path="a.ts",
                kind="modify",
                diff="@@ -1 +1 @@\n-const a = 1;\n+const a = 2;\n",
            ),
            FileChange(path="notes.md", kind="add"),
        ],
    )


@pytest.fixture
def sample_items_data() -> list[dict[str, Any]]:
    """Raw wire-format items covering every kind."""
    return [
        {"kind": "message", "id": "m1", "role": "user", "text": "Hello"},
        {"kind": "reasoning", "id": "r1", "summary": "Planning\nRun the tests"},
        {
            "kind": "tool",
            "id": "t1",
            "title": "Command: ls",
            "status": "completed",
            "toolType": "commandExecution",
            "output": "README.md",
        },
        {
            "kind": "diff",
            "id": "d1",
            "title": "Turn diff",
            "diff": "@@ -1 +1 @@\n-a\n+b\n",
        },
        {"kind": "message", "id": "m2", "role": "assistant", "text": "Done."},
    ]


@pytest.fixture
def transcript_json(tmp_path: Path, sample_items_data: list[dict[str, Any]]) -> Path:
    path = tmp_path / "conversation.json"
    path.write_text(json.dumps({"items": sample_items_data}), encoding="utf-8")
    return path


@pytest.fixture
def transcript_jsonl(tmp_path: Path, sample_items_data: list[dict[str, Any]]) -> Path:
    path = tmp_path / "conversation.jsonl"
    lines = [json.dumps(item) for item in sample_items_data]
    path.write_text("\n".join(lines) + "\n\n", encoding="utf-8")
    return path
