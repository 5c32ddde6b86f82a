"""Markdown rendering package."""

from .renderer import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
