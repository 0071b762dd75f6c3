"""Book preprocessor that adds course outlines and timing information."""

from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

from coursebook.book import Chapter, book_from_json, book_to_json
from coursebook.course import extract_structure
from coursebook.replacements import replace
from coursebook.timing_info import insert_timing_info


def _parse_input(input_stream: TextIO):
    data = json.load(input_stream)
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("preprocessor input must be a [context, book] pair")
    _context, book_data = data
    return book_from_json(book_data)


def preprocess(input_stream: TextIO, output_stream: TextIO) -> None:
    """Read a book from ``input_stream`` and write the processed book out."""
    courses, book = extract_structure(_parse_input(input_stream))

    def visit(chapter: Chapter) -> None:
        found = courses.find_slide(chapter)
        if found is None:
            # Outside of a course, only the replacements apply.
            replace(courses, None, None, None, chapter)
            return
        course, session, segment, slide = found
        insert_timing_info(slide, chapter)
        replace(courses, course, session, segment, chapter)

    book.for_each_chapter(visit)
    json.dump(book_to_json(book), output_stream)


def main(argv: list[str] | None = None) -> int:
    """Run the preprocessor on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="mdbook-course", description="Book preprocessor for course content"
    )
    commands = parser.add_subparsers(dest="command")
    supports = commands.add_parser("supports")
    supports.add_argument("renderer")
    args = parser.parse_args(argv)

    if args.command == "supports":
        # Every renderer is supported.
        return 0

    try:
        preprocess(sys.stdin, sys.stdout)
    except (ValueError, OSError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())