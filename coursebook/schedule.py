"""Summaries of course timing, for sessions or for pull requests."""

from __future__ import annotations

import argparse
import sys

from coursebook.book import load_book
from coursebook.course import Courses, extract_structure
from coursebook.markdown import duration


def timediff(actual: int, target: int, slop: int) -> str:
    """Describe ``actual`` minutes, noting how far it misses ``target``."""
    if actual > target + slop:
        return (
            f"{duration(actual)} (\u23f0 *{duration(actual - target)} too long*)"
        )
    if actual < target - slop:
        return f"{duration(actual)}: ({duration(target - actual)} short)"
    return duration(actual)


def _text(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def session_summary(courses: Courses) -> str:
    """Markdown summary of every session and its segments."""
    lines: list[str] = []
    for course in courses:
        if course.target_minutes() == 0:
            break
        for session in course:
            lines.append(f"### {course.name} // {session.name}")
            lines.append(
                f"_{timediff(session.minutes(), session.target_minutes(), 15)}_"
            )
            lines.append("")
            lines.extend(
                f"* {segment.name} - _{duration(segment.minutes())}_"
                for segment in session
            )
            lines.append("")
    return _text(lines)


def pr_summary(courses: Courses) -> str:
    """Markdown summary of the course schedule for a pull request."""
    lines = [
        "## Course Schedule",
        "With this pull request applied, the course schedule is as follows:",
    ]
    for course in courses:
        if course.target_minutes() == 0:
            break
        lines.append(f"### {course.name}")
        lines.append(f"_{timediff(course.minutes(), course.target_minutes(), 15)}_")
        lines.extend(
            f"* {session.name} - "
            f"_{timediff(session.minutes(), session.target_minutes(), 5)}_"
            for session in course
        )
    return _text(lines)


def main(argv: list[str] | None = None) -> int:
    """Print a summary of the book in the current directory."""
    parser = argparse.ArgumentParser(
        prog="course-schedule", description="Show the course schedule"
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("sessions", help="Show session summary (default)")
    commands.add_parser("segments", help="Show segment summary")
    commands.add_parser("pr", help="Show summary for a PR")
    args = parser.parse_args(argv)

    if args.command == "segments":
        parser.error("the segment summary is not available")

    try:
        courses, _ = extract_structure(load_book("."))
    except (ValueError, OSError) as error:
        print(f"Unable to load the book: {error}", file=sys.stderr)
        return 1

    summary = pr_summary if args.command == "pr" else session_summary
    sys.stdout.write(summary(courses))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())