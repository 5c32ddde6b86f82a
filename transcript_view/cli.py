#!/usr/bin/env python3
"""CLI interface for transcript-view."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .converter import convert_transcript
from .models import MalformedItemError


@click.command()
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output file path (default: input file with the format's extension)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["html", "md", "markdown"]),
    default="html",
    help="Output format (default: html).",
)
@click.option(
    "--thinking",
    is_flag=True,
    help="Show the 'thinking' indicator after the last item",
)
@click.option(
    "--title",
    type=str,
    default=None,
    help="Document title (default: input file name)",
)
@click.option(
    "--open-browser",
    is_flag=True,
    help="Open the generated file in the default browser",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log progress information.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show full traceback on errors.",
)
def main(
    input_path: Path,
    output: Optional[Path],
    output_format: str,
    thinking: bool,
    title: Optional[str],
    open_browser: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """Render a conversation transcript to HTML or Markdown.

    INPUT_PATH: A .json file (list of items, or an object with an "items" list)
    or a .jsonl file with one item per line.
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        output_path = convert_transcript(
            input_path,
            output,
            output_format=output_format,
            is_thinking=thinking,
            title=title,
        )
        click.echo(f"Successfully converted {input_path} to {output_path}")

        if open_browser:
            click.launch(str(output_path))

    except (FileNotFoundError, MalformedItemError) as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error converting file: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
