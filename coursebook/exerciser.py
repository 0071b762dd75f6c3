"""Extract exercise files from code blocks in a book's chapters.

A code block preceded by an HTML comment of the form
``<!-- File path/to/name.rs -->`` is written to that path below the output
directory.  Code blocks without such a comment are ignored, as are comments
that are not followed by a code block.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Any

from markdown_it import MarkdownIt

from coursebook.book import Book, book_from_json

FILENAME_START = "<!-- File "
FILENAME_END = " -->"

_log = logging.getLogger(__name__)
_MARKDOWN = MarkdownIt("commonmark")


def _filename_from_html(html: str) -> str | None:
    html = html.strip()
    if (
        html.startswith(FILENAME_START)
        and html.endswith(FILENAME_END)
        and len(html) >= len(FILENAME_START) + len(FILENAME_END)
    ):
        return html[len(FILENAME_START) : len(html) - len(FILENAME_END)]
    return None


def process(output_directory: str | os.PathLike, input_contents: str) -> None:
    """Write every announced code block in ``input_contents`` to a file."""
    output = Path(output_directory)
    next_filename: str | None = None
    for token in _MARKDOWN.parse(input_contents):
        _log.debug("%s", token.type)
        if token.type == "html_block":
            for line in token.content.splitlines():
                filename = _filename_from_html(line)
                if filename is not None:
                    next_filename = filename
                    _log.info("Next file: %r", next_filename)
        elif token.type in ("fence", "code_block"):
            if next_filename is None:
                continue
            target = output / next_filename
            _log.info("Writing %s", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8", newline="") as file:
                file.write(token.content)
            next_filename = None


def process_all(book: Book, output_directory: str | os.PathLike) -> None:
    """Extract exercises from every chapter into a directory per chapter."""
    output = Path(output_directory)
    for chapter in book.iter_chapters():
        _log.debug("Chapter %s / %s", chapter.path, chapter.source_path)
        if chapter.path is None:
            continue
        stem = chapter.path.stem
        if not stem:
            raise ValueError(f"Chapter {chapter.path} has no file stem")
        process(output / stem, chapter.content)


def _output_directory(context: Any) -> str:
    try:
        config = context["config"]["output"]["exerciser"]
    except (KeyError, TypeError):
        raise ValueError("Missing output.exerciser configuration") from None
    if not isinstance(config, dict) or "output-directory" not in config:
        raise ValueError(
            "Missing output.exerciser.output-directory configuration value"
        )
    value = config["output-directory"]
    if not isinstance(value, str):
        raise ValueError("Expected a string for output.exerciser.output-directory")
    return value


def main(argv: list[str] | None = None) -> int:
    """Run as a book renderer, reading the render context from stdin."""
    argparse.ArgumentParser(
        prog="mdbook-exerciser", description="Extract exercise files from a book"
    ).parse_args(argv)
    logging.basicConfig(level=logging.WARNING)

    try:
        context = json.load(sys.stdin)
    except json.JSONDecodeError as error:
        print(f"Parsing stdin: {error}", file=sys.stderr)
        return 1

    try:
        output_directory = Path(_output_directory(context))
        book = book_from_json(context.get("book"))
    except (ValueError, AttributeError) as error:
        print(error, file=sys.stderr)
        return 1

    shutil.rmtree(output_directory, ignore_errors=True)
    try:
        output_directory.mkdir()
    except OSError as error:
        print(
            f"Failed to create output directory {str(output_directory)!r}: {error}",
            file=sys.stderr,
        )
        return 1

    try:
        process_all(book, output_directory)
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())