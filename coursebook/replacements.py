"""Expansion of ``{{%...}}`` directives in chapter content."""

from __future__ import annotations

import re

from coursebook.book import Chapter
from coursebook.course import Course, Courses, Segment, Session

_DIRECTIVE = re.compile(r"\{\{%([^}]*)}}")


def replace(
    courses: Courses,
    course: Course | None,
    session: Session | None,
    segment: Segment | None,
    chapter: Chapter,
) -> None:
    """Replace the first supported directive in ``chapter`` with its content.

    ``{{%session outline}}``, ``{{%segment outline}}`` and
    ``{{%course outline}}`` refer to the structure the chapter belongs to;
    ``{{%course outline NAME}}`` refers to the course called NAME.
    Unrecognised directives are replaced by their own text.
    """
    source_path = chapter.source_path
    if source_path is None:
        return

    def expand(found: re.Match[str]) -> str:
        directive = found[1].strip()
        match directive.split():
            case ["session", "outline"] if session is not None:
                return session.outline(source_path)
            case ["segment", "outline"] if segment is not None:
                return segment.outline(source_path)
            case ["course", "outline"] if course is not None:
                return course.schedule(source_path)
            case ["course", "outline", name]:
                named = courses.find_course(name)
                return found[0] if named is None else named.schedule(source_path)
            case _:
                return directive

    chapter.content = _DIRECTIVE.sub(expand, chapter.content, count=1)