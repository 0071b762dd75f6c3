"""Parsing of YAML frontmatter at the start of a chapter."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import yaml

from coursebook.book import Chapter

_FRONTMATTER = re.compile(
    r"\A\s*---[ \t]*\r?\n(?:(?P<matter>.*?)\r?\n)??---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


class FrontmatterError(ValueError):
    """Raised when a chapter's frontmatter cannot be parsed."""


@dataclass
class Frontmatter:
    """Course annotations given in a chapter's frontmatter."""

    minutes: int | None = None
    target_minutes: int | None = None
    course: str | None = None
    session: str | None = None


def _field(data: dict, key: str, kind: type, where: str) -> Any:
    value = data.get(key)
    if value is None:
        return None
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise FrontmatterError(
                f"error parsing frontmatter in {where}: "
                f"'{key}' must be a non-negative integer"
            )
    elif not isinstance(value, kind):
        raise FrontmatterError(
            f"error parsing frontmatter in {where}: '{key}' must be a string"
        )
    return value


def _parse(text: str, where: str) -> Frontmatter:
    try:
        data = yaml.safe_load(text) if text else None
    except yaml.YAMLError as error:
        raise FrontmatterError(f"error parsing frontmatter in {where}") from error
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"error parsing frontmatter in {where}: expected a mapping"
        )
    return Frontmatter(
        minutes=_field(data, "minutes", int, where),
        target_minutes=_field(data, "target_minutes", int, where),
        course=_field(data, "course", str, where),
        session=_field(data, "session", str, where),
    )


def split_frontmatter(chapter: Chapter) -> tuple[Frontmatter, str]:
    """Split a chapter's content into its frontmatter and the remaining text."""
    match = _FRONTMATTER.match(chapter.content)
    if match is None:
        return Frontmatter(), chapter.content
    frontmatter = _parse(match["matter"] or "", str(chapter.source_path))
    return frontmatter, chapter.content[match.end():]