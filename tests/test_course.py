from pathlib import PurePosixPath

import pytest

from coursebook.book import Book, Chapter, Separator
from coursebook.course import (
    BREAK_DURATION,
    CourseError,
    extract_structure,
)
from coursebook.markdown import duration


def make_chapter(name, path, fm=None, body="Body text.\n", subs=()):
    content = f"---\n{fm}\n---\n{body}" if fm else body
    return Chapter(
        name=name, content=content, path=path, source_path=path, sub_items=list(subs)
    )


def sample_book():
    details = make_chapter("Details", "hello/details.md", "minutes: 3")
    what = make_chapter("What Is", "hello/what.md", "minutes: 10", subs=[details])
    hello = make_chapter(
        "Hello",
        "hello.md",
        "course: Fundamentals\nsession: Morning\nminutes: 5\ntarget_minutes: 180",
        subs=[what],
    )
    return Book(
        [
            make_chapter("Welcome", "welcome.md", "course: none"),
            hello,
            make_chapter("Types", "types.md", "minutes: 20"),
            make_chapter("Wrap Up", "wrap.md"),
            Separator(),
            make_chapter("Afternoon", "afternoon.md", "session: Afternoon\nminutes: 15"),
            make_chapter(
                "Android", "android.md", "course: Android\nsession: Day 1\nminutes: 30"
            ),
        ]
    )


@pytest.fixture
def extracted():
    return extract_structure(sample_book())


def test_course_and_session_names(extracted):
    courses, _ = extracted
    assert [c.name for c in courses] == ["Fundamentals", "Android"]
    fundamentals = courses.find_course("Fundamentals")
    assert [s.name for s in fundamentals] == ["Morning", "Afternoon"]


def test_segments_and_slides(extracted):
    courses, _ = extracted
    morning = courses.find_course("Fundamentals").sessions[0]
    assert [seg.name for seg in morning] == ["Hello", "Types", "Wrap Up"]
    hello = morning.segments[0]
    assert [slide.name for slide in hello] == ["Hello", "What Is"]
    assert hello.slides[1].source_paths == [
        PurePosixPath("hello/what.md"),
        PurePosixPath("hello/details.md"),
    ]


def test_slide_minutes_include_sub_chapters(extracted):
    courses, _ = extracted
    hello = courses.find_course("Fundamentals").sessions[0].segments[0]
    assert hello.slides[0].minutes == 5
    assert hello.slides[1].minutes == 13
    assert hello.minutes() == sum(slide.minutes for slide in hello)


def test_frontmatter_stripped(extracted):
    _, book = extracted
    assert all(ch.content == "Body text.\n" for ch in book.iter_chapters())


def test_course_none_excluded(extracted):
    courses, _ = extracted
    assert courses.find_course("none") is None
    welcome = next(c for c in extracted[1].iter_chapters() if c.name == "Welcome")
    assert courses.find_slide(welcome) is None


def test_session_minutes_count_breaks_between_timed_segments(extracted):
    courses, _ = extracted
    morning = courses.find_course("Fundamentals").sessions[0]
    timed = [seg.minutes() for seg in morning if seg.minutes() > 0]
    assert morning.minutes() == sum(timed) + (len(timed) - 1) * BREAK_DURATION


def test_empty_session_has_no_minutes():
    book = Book([make_chapter("Intro", "intro.md", "course: C\nsession: S")])
    courses, _ = extract_structure(book)
    session = courses.find_course("C").sessions[0]
    assert session.minutes() == 0
    assert session.target_minutes() == 0


def test_target_minutes(extracted):
    courses, _ = extracted
    fundamentals = courses.find_course("Fundamentals")
    morning, afternoon = fundamentals.sessions
    assert morning.target_minutes() == 180
    assert afternoon.target_minutes() == afternoon.minutes()
    assert fundamentals.target_minutes() == 180 + afternoon.minutes()


def test_course_minutes_is_sum_of_sessions(extracted):
    courses, _ = extracted
    fundamentals = courses.find_course("Fundamentals")
    assert fundamentals.minutes() == sum(s.minutes() for s in fundamentals)


def test_repeated_session_name_merges():
    book = Book(
        [
            make_chapter("A", "a.md", "course: C\nsession: S\nminutes: 5"),
            make_chapter("B", "b.md", "session: T\nminutes: 5"),
            make_chapter("C", "c.md", "session: S\nminutes: 5"),
        ]
    )
    courses, _ = extract_structure(book)
    course = courses.find_course("C")
    assert [s.name for s in course] == ["S", "T"]
    assert [seg.name for seg in course.sessions[0]] == ["A", "C"]


def test_course_without_session_raises():
    book = Book([make_chapter("A", "a.md", "course: C\nminutes: 5")])
    with pytest.raises(CourseError, match="'session' must appear"):
        extract_structure(book)


def test_sub_slide_with_course_raises():
    bad = make_chapter("Bad", "x/bad.md", "course: Other")
    slide = make_chapter("Slide", "x/slide.md", subs=[bad])
    top = make_chapter("Top", "x.md", "course: C\nsession: S", subs=[slide])
    with pytest.raises(CourseError, match="sub-slides may not have"):
        extract_structure(Book([top]))


def test_find_slide_and_is_sub_chapter(extracted):
    courses, book = extracted
    chapters = {c.name: c for c in book.iter_chapters()}
    course, session, segment, slide = courses.find_slide(chapters["Details"])
    assert (course.name, session.name, segment.name, slide.name) == (
        "Fundamentals",
        "Morning",
        "Hello",
        "What Is",
    )
    assert slide.is_sub_chapter(chapters["Details"])
    assert not slide.is_sub_chapter(chapters["What Is"])


def test_find_slide_without_source_path(extracted):
    courses, _ = extracted
    assert courses.find_slide(Chapter(name="Draft")) is None


def test_session_outline(extracted):
    courses, _ = extracted
    morning = courses.find_course("Fundamentals").sessions[0]
    outline = morning.outline("hello.md")
    lines = outline.splitlines()
    assert lines[0] == "In this session:"
    assert lines[1] == f" * [Hello](./hello.md) ({duration(morning.segments[0].minutes())})"
    assert "Wrap Up" not in outline
    assert outline.endswith(
        f"this session should take about {duration(morning.minutes())}\n"
    )
    assert f"Including {BREAK_DURATION} minute breaks" in outline


def test_segment_outline_relative_links(extracted):
    courses, _ = extracted
    hello = courses.find_course("Fundamentals").sessions[0].segments[0]
    outline = hello.outline("hello/what.md")
    assert outline.startswith("In this segment:\n")
    assert " * [What Is](../hello/what.md) (" in outline
    assert outline.endswith(f"\nThis segment should take about {duration(hello.minutes())}\n")


def test_course_schedule(extracted):
    courses, _ = extracted
    fundamentals = courses.find_course("Fundamentals")
    schedule = fundamentals.schedule("welcome.md")
    lines = schedule.splitlines()
    assert lines[0] == "Course schedule:"
    morning = fundamentals.sessions[0]
    assert lines[1] == f" * Morning ({duration(morning.minutes())}, including breaks)"
    assert "   * [Types](./types.md) (" in schedule
    assert "Wrap Up" not in schedule
    assert " * Afternoon (" in schedule