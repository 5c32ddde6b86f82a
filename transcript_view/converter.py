"""Convert transcript files to HTML or Markdown documents."""

import logging
from pathlib import Path
from typing import Optional

from .parser import load_transcript
from .renderer import get_renderer
from .renderer_timings import log_timing

logger = logging.getLogger(__name__)


def get_file_extension(format: str) -> str:
    """Get the file extension for a format.

    Normalizes 'markdown' to 'md' for consistent file extensions.
    """
    return "md" if format in ("md", "markdown") else format


def convert_transcript(
    input_path: Path,
    output_path: Optional[Path] = None,
    output_format: str = "html",
    is_thinking: bool = False,
    title: Optional[str] = None,
) -> Path:
    """Render a transcript file and write the result next to it (or to output_path).

    Returns:
        The path of the written file.

    Raises:
        FileNotFoundError: If input_path does not exist.
        MalformedItemError: If the transcript holds an invalid item.
        ValueError: If output_format is not supported.
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    renderer = get_renderer(output_format)
    if output_path is None:
        output_path = input_path.with_suffix(f".{get_file_extension(output_format)}")

    with log_timing(f"Load {input_path.name}"):
        items = load_transcript(input_path)
    logger.info("Loaded %d items from %s", len(items), input_path)

    content = renderer.generate(items, is_thinking, title or input_path.stem)
    if content is None:
        raise ValueError(f"Renderer for {output_format!r} produced no output")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return output_path
