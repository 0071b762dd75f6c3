"""Dump the source of every slide, grouped by course structure."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from coursebook.book import load_book
from coursebook.course import Courses, extract_structure


def course_content(courses: Courses, src_dir: str | os.PathLike) -> str:
    """Return the text of every slide file, with structure headings."""
    src = Path(src_dir)
    lines: list[str] = []
    for course in courses:
        lines.append(f"# COURSE: {course.name}")
        for session in course:
            lines.append(f"# SESSION: {session.name}")
            for segment in session:
                lines.append(f"# SEGMENT: {segment.name}")
                for slide in segment:
                    lines.append(f"# SLIDE: {slide.name}")
                    lines.extend(
                        (src / path).read_text(encoding="utf-8")
                        for path in slide.source_paths
                    )
    return "".join(f"{line}\n" for line in lines)


def main(argv: list[str] | None = None) -> int:
    """Print the content of the book in the current directory."""
    try:
        courses, _ = extract_structure(load_book("."))
        text = course_content(courses, "src")
    except (ValueError, OSError) as error:
        print(f"Unable to read the course content: {error}", file=sys.stderr)
        return 1
    sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())