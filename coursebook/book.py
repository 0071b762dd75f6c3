"""In-memory model of a book: chapters, separators and part titles.

A book is read either from a directory holding ``SUMMARY.md`` and the chapter
files, or from the JSON structure that book preprocessors exchange.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Union
from urllib.parse import unquote


def _as_path(value: Any) -> PurePosixPath | None:
    if value is None:
        return None
    return PurePosixPath(value)


@dataclass
class Chapter:
    """A chapter of the book, possibly holding nested items."""

    name: str
    content: str = ""
    number: list[int] | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    path: PurePosixPath | None = None
    source_path: PurePosixPath | None = None
    parent_names: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.path = _as_path(self.path)
        self.source_path = _as_path(self.source_path)


@dataclass(frozen=True)
class Separator:
    """A horizontal separator between groups of chapters."""


@dataclass(frozen=True)
class PartTitle:
    """A title introducing a part of the book."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


def _walk(items: Iterable[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if isinstance(item, Chapter):
            yield item
            yield from _walk(item.sub_items)


def _each(items: Iterable[BookItem], func: Callable[[Chapter], Any]) -> None:
    for item in items:
        if isinstance(item, Chapter):
            _each(item.sub_items, func)
            func(item)


@dataclass
class Book:
    """A sequence of top-level book items."""

    sections: list[BookItem] = field(default_factory=list)

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter, parents before their sub-chapters."""
        yield from _walk(self.sections)

    def for_each_chapter(self, func: Callable[[Chapter], Any]) -> None:
        """Call ``func`` on every chapter, sub-chapters before their parent."""
        _each(self.sections, func)


# --- JSON -----------------------------------------------------------------


def _chapter_from_json(data: Any) -> Chapter:
    if not isinstance(data, Mapping) or not isinstance(data.get("name"), str):
        raise ValueError(f"invalid chapter: {data!r}")
    number = data.get("number")
    return Chapter(
        name=data["name"],
        content=data.get("content") or "",
        number=None if number is None else [int(n) for n in number],
        sub_items=[_item_from_json(item) for item in data.get("sub_items") or []],
        path=data.get("path"),
        source_path=data.get("source_path"),
        parent_names=list(data.get("parent_names") or []),
    )


def _item_from_json(data: Any) -> BookItem:
    if data == "Separator":
        return Separator()
    if isinstance(data, Mapping) and len(data) == 1:
        ((kind, value),) = data.items()
        if kind == "Chapter":
            return _chapter_from_json(value)
        if kind == "PartTitle" and isinstance(value, str):
            return PartTitle(value)
    raise ValueError(f"unrecognised book item: {data!r}")


def book_from_json(data: Any) -> Book:
    """Build a book from its decoded JSON form."""
    if not isinstance(data, Mapping) or "sections" not in data:
        raise ValueError("book data must be an object with 'sections'")
    return Book([_item_from_json(item) for item in data["sections"]])


def _path_to_json(path: PurePosixPath | None) -> str | None:
    return None if path is None else str(path)


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Separator):
        return "Separator"
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return {
        "Chapter": {
            "name": item.name,
            "content": item.content,
            "number": None if item.number is None else list(item.number),
            "sub_items": [_item_to_json(sub) for sub in item.sub_items],
            "path": _path_to_json(item.path),
            "source_path": _path_to_json(item.source_path),
            "parent_names": list(item.parent_names),
        }
    }


def book_to_json(book: Book) -> dict[str, Any]:
    """Return the JSON-ready form of a book."""
    return {
        "sections": [_item_to_json(item) for item in book.sections],
        "__non_exhaustive": None,
    }


# --- Loading from disk ----------------------------------------------------

_TABLE = re.compile(r"^\s*\[([^\]]+)\]\s*(?:#.*)?$")
_SRC_KEY = re.compile(r"""^\s*src\s*=\s*(["'])(.*?)\1\s*(?:#.*)?$""")
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_LINK = re.compile(r"\[(?P<name>[^\]]*)\]\((?P<target>[^)]*)\)")
_LIST_ITEM = re.compile(r"^(?P<indent>[ \t]*)[-*+][ \t]+(?P<rest>.*)$")
_HEADING = re.compile(r"^#[ \t]+(?P<title>.*?)[ \t]*#*[ \t]*$")
_SEPARATOR = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")


def _source_dir(root: Path) -> str:
    config = root / "book.toml"
    if not config.is_file():
        return "src"
    table = ""
    for line in config.read_text(encoding="utf-8").splitlines():
        if match := _TABLE.match(line):
            table = match[1].strip()
        elif table == "book" and (match := _SRC_KEY.match(line)):
            return match[2]
    return "src"


def _make_chapter(
    link: re.Match[str], number: list[int] | None, parent_names: list[str]
) -> Chapter:
    target = unquote(link["target"].strip())
    path = PurePosixPath(target) if target else None
    return Chapter(
        name=link["name"].strip(),
        number=number,
        path=path,
        source_path=path,
        parent_names=parent_names,
    )


def _parse_summary(text: str) -> list[BookItem]:
    sections: list[BookItem] = []
    stack: list[tuple[int, Chapter]] = []
    top_number = 0
    title_allowed = True

    for raw in _COMMENT.sub("", text).splitlines():
        stripped = raw.strip()
        if not stripped:
            continue
        if _SEPARATOR.match(stripped):
            sections.append(Separator())
            stack.clear()
        elif heading := _HEADING.match(stripped):
            if not title_allowed:
                sections.append(PartTitle(heading["title"]))
            stack.clear()
        elif item := _LIST_ITEM.match(raw.rstrip()):
            link = _LINK.fullmatch(item["rest"].strip())
            if link is None:
                raise ValueError(f"invalid summary entry: {raw!r}")
            indent = len(item["indent"].expandtabs(4))
            while stack and stack[-1][0] >= indent:
                stack.pop()
            if stack:
                parent = stack[-1][1]
                siblings = parent.sub_items
                position = sum(isinstance(s, Chapter) for s in siblings) + 1
                number = [*(parent.number or []), position]
                parent_names = [*parent.parent_names, parent.name]
            else:
                top_number += 1
                siblings = sections
                number = [top_number]
                parent_names = []
            chapter = _make_chapter(link, number, parent_names)
            siblings.append(chapter)
            stack.append((indent, chapter))
        elif link := _LINK.fullmatch(stripped):
            sections.append(_make_chapter(link, None, []))
            stack.clear()
        else:
            raise ValueError(f"invalid summary entry: {raw!r}")
        title_allowed = False
    return sections


def load_book(root: str | Path) -> Book:
    """Load the book rooted at ``root`` from its SUMMARY.md and chapter files."""
    root = Path(root)
    src = root / _source_dir(root)
    summary = (src / "SUMMARY.md").read_text(encoding="utf-8")
    book = Book(_parse_summary(summary))
    for chapter in book.iter_chapters():
        if chapter.path is not None:
            chapter.content = (src / chapter.path).read_text(encoding="utf-8")
    return book