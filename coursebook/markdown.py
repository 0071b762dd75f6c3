"""Helpers for generating Markdown links and durations."""

from __future__ import annotations

import os
from pathlib import PurePosixPath


def relative_link(doc_path: str | os.PathLike, target_path: str | os.PathLike) -> str:
    """Return a link to ``target_path`` relative to the document at ``doc_path``.

    Both paths are relative to the book's source directory.
    """
    doc = PurePosixPath(os.fspath(doc_path))
    target = PurePosixPath(os.fspath(target_path))

    dotdot = -1
    for ancestor in (doc, *doc.parents):
        if target.parts[: len(ancestor.parts)] == ancestor.parts:
            break
        dotdot += 1
    if dotdot > 0:
        return "../" * dotdot + str(target)
    return f"./{target}"


def duration(minutes: int) -> str:
    """Describe a number of minutes in a human-readable way.

    Times longer than 5 minutes are rounded up to the next 5-minute interval.
    """
    if minutes < 0:
        raise ValueError("duration cannot be negative")
    if minutes > 5:
        minutes += 4
        minutes -= minutes % 5

    hours, minutes = divmod(minutes, 60)
    match hours, minutes:
        case 0, 1:
            return "1 minute"
        case 0, m:
            return f"{m} minutes"
        case 1, 0:
            return "1 hour"
        case 1, m:
            return f"1 hour and {m} minutes"
        case h, 0:
            return f"{h} hours"
        case h, m:
            return f"{h} hours and {m} minutes"