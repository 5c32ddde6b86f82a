#!/usr/bin/env python3
"""Tests for item classification."""

from types import SimpleNamespace

import pytest

from transcript_view.classifier import TEMPLATE_REGISTRY, classify
from transcript_view.models import MalformedItemError, TemplateTag


class TestClassify:
    """Every item kind maps to exactly one template."""

    def test_message(self, user_message):
        assert classify(user_message) is TemplateTag.MESSAGE

    def test_reasoning(self, reasoning_item):
        assert classify(reasoning_item) is TemplateTag.REASONING

    def test_diff(self, diff_item):
        assert classify(diff_item) is TemplateTag.DIFF

    def test_tool(self, command_tool, file_change_tool):
        assert classify(command_tool) is TemplateTag.TOOL
        assert classify(file_change_tool) is TemplateTag.TOOL

    def test_tag_compares_as_string(self, diff_item):
        assert classify(diff_item) == "diff"

    def test_registry_covers_every_tag(self):
        assert set(TEMPLATE_REGISTRY.values()) == set(TemplateTag)


class TestMalformedItems:
    """Unknown kinds fail loudly instead of rendering nothing."""

    def test_unknown_kind(self):
        with pytest.raises(MalformedItemError, match="'image'"):
            classify(SimpleNamespace(kind="image", id="x1"))

    def test_missing_kind(self):
        with pytest.raises(MalformedItemError):
            classify(SimpleNamespace(id="x2"))

    def test_non_string_kind(self):
        with pytest.raises(MalformedItemError):
            classify(SimpleNamespace(kind=3, id="x3"))

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            classify(object())
