"""The course structure of a book: courses, sessions, segments and slides.

The structure is read from the order of chapters in the book together with
the frontmatter of each chapter.  A top-level chapter whose frontmatter names a
``course`` starts that course, and one that names a ``session`` starts that
session.  Every top-level chapter inside a course and session becomes a
segment.  The chapter itself is the segment's first slide, and each of its
sub-chapters is a further slide that also takes in its own sub-chapters.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from coursebook.book import Book, Chapter
from coursebook.frontmatter import Frontmatter, split_frontmatter
from coursebook.markdown import duration, relative_link

BREAK_DURATION = 10
"""Minutes of break between segments of a session."""


class CourseError(ValueError):
    """Raised when the book's frontmatter does not describe a valid course."""


def _take_frontmatter(chapter: Chapter) -> Frontmatter:
    frontmatter, content = split_frontmatter(chapter)
    chapter.content = content
    return frontmatter


@dataclass
class Slide:
    """A single topic, possibly spread over several chapters."""

    name: str
    minutes: int = 0
    source_paths: list[PurePosixPath] = field(default_factory=list)

    @classmethod
    def _from_chapter(cls, frontmatter: Frontmatter, chapter: Chapter) -> Slide:
        slide = cls(chapter.name)
        slide._add(frontmatter, chapter)
        return slide

    def _add(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        self.minutes += frontmatter.minutes or 0
        if chapter.source_path is not None:
            self.source_paths.append(chapter.source_path)

    def _add_sub_chapters(self, chapter: Chapter) -> None:
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            frontmatter = _take_frontmatter(sub)
            if frontmatter.course is not None or frontmatter.session is not None:
                raise CourseError(
                    f"{sub.path}: sub-slides may not have 'course' or 'session' set"
                )
            self._add(frontmatter, sub)
            self._add_sub_chapters(sub)

    def is_sub_chapter(self, chapter: Chapter) -> bool:
        """Tell whether ``chapter`` is a sub-chapter rather than the slide's own."""
        first = self.source_paths[0] if self.source_paths else None
        return chapter.source_path != first


@dataclass
class Segment:
    """A collection of slides with a related theme."""

    name: str
    slides: list[Slide] = field(default_factory=list)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def _add_slide(
        self, frontmatter: Frontmatter, chapter: Chapter, recurse: bool
    ) -> None:
        slide = Slide._from_chapter(frontmatter, chapter)
        if recurse:
            slide._add_sub_chapters(chapter)
        self.slides.append(slide)

    def minutes(self) -> int:
        """Total minutes of the slides in this segment."""
        return sum(slide.minutes for slide in self)

    def outline(self, at_source_path: str | PurePosixPath) -> str:
        """Markdown outline of this segment for a page at ``at_source_path``."""
        lines = ["In this segment:\n"]
        for slide in self:
            if slide.minutes == 0:
                continue
            link = relative_link(at_source_path, slide.source_paths[0])
            lines.append(f" * [{slide.name}]({link}) ({duration(slide.minutes)})\n")
        lines.append(f"\nThis segment should take about {duration(self.minutes())}\n")
        return "".join(lines)


@dataclass
class Session:
    """A block of instructional time made of segments."""

    name: str
    segments: list[Segment] = field(default_factory=list)
    _target: int = field(default=0, repr=False)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def _add_segment(self, frontmatter: Frontmatter, chapter: Chapter) -> None:
        segment = Segment(chapter.name)
        segment._add_slide(frontmatter, chapter, recurse=False)
        for sub in chapter.sub_items:
            if not isinstance(sub, Chapter):
                continue
            segment._add_slide(_take_frontmatter(sub), sub, recurse=True)
        self.segments.append(segment)

    def outline(self, at_source_path: str | PurePosixPath) -> str:
        """Markdown outline of this session for a page at ``at_source_path``."""
        lines = ["In this session:\n"]
        for segment in self:
            # Short segments (welcomes, wrap-ups) are left out.
            if segment.minutes() == 0:
                continue
            link = relative_link(at_source_path, segment.slides[0].source_paths[0])
            lines.append(
                f" * [{segment.name}]({link}) ({duration(segment.minutes())})\n"
            )
        lines.append(
            f"\nIncluding {BREAK_DURATION} minute breaks, this session should "
            f"take about {duration(self.minutes())}\n"
        )
        return "".join(lines)

    def minutes(self) -> int:
        """Total minutes of this session, including breaks between segments."""
        timed = [segment.minutes() for segment in self if segment.minutes() > 0]
        if not timed:
            return 0
        return sum(timed) + (len(timed) - 1) * BREAK_DURATION

    def target_minutes(self) -> int:
        """Target minutes of this session, or its actual minutes if none is set."""
        return self._target if self._target > 0 else self.minutes()


@dataclass
class Course:
    """The level of content at which students enroll."""

    name: str
    sessions: list[Session] = field(default_factory=list)

    def __iter__(self) -> Iterator[Session]:
        return iter(self.sessions)

    def _session(self, name: str) -> Session:
        for session in self.sessions:
            if session.name == name:
                return session
        session = Session(name)
        self.sessions.append(session)
        return session

    def minutes(self) -> int:
        """Sum of the session durations, not counting time between sessions."""
        return sum(session.minutes() for session in self)

    def target_minutes(self) -> int:
        """Sum of the session target durations."""
        return sum(session.target_minutes() for session in self)

    def schedule(self, at_source_path: str | PurePosixPath) -> str:
        """Markdown schedule of this course for a page at ``at_source_path``."""
        lines = ["Course schedule:\n"]
        for session in self:
            lines.append(
                f" * {session.name} ({duration(session.minutes())}, including breaks)\n"
            )
            for segment in session:
                if segment.minutes() == 0:
                    continue
                link = relative_link(
                    at_source_path, segment.slides[0].source_paths[0]
                )
                lines.append(
                    f"   * [{segment.name}]({link}) ({duration(segment.minutes())})\n"
                )
        return "".join(lines)


@dataclass
class Courses:
    """All the courses of a book, in order of first appearance."""

    courses: list[Course] = field(default_factory=list)

    def __iter__(self) -> Iterator[Course]:
        return iter(self.courses)

    def _course(self, name: str) -> Course:
        found = self.find_course(name)
        if found is not None:
            return found
        course = Course(name)
        self.courses.append(course)
        return course

    def find_course(self, name: str) -> Course | None:
        """Return the course called ``name``, or None."""
        return next((course for course in self if course.name == name), None)

    def find_slide(
        self, chapter: Chapter
    ) -> tuple[Course, Session, Segment, Slide] | None:
        """Find the slide made from ``chapter`` and the path leading to it."""
        if chapter.source_path is None:
            return None
        for course in self:
            for session in course:
                for segment in session:
                    for slide in segment:
                        if chapter.source_path in slide.source_paths:
                            return course, session, segment, slide
        return None


def extract_structure(book: Book) -> tuple[Courses, Book]:
    """Read the course structure from ``book``.

    The frontmatter is stripped from every chapter that is visited.
    """
    courses = Courses()
    course_name: str | None = None
    session_name: str | None = None

    for item in book.sections:
        if not isinstance(item, Chapter):
            continue
        frontmatter = _take_frontmatter(item)

        if frontmatter.course is not None:
            session_name = None
            course_name = None if frontmatter.course == "none" else frontmatter.course
        if frontmatter.session is not None:
            session_name = frontmatter.session

        if course_name is not None and session_name is None:
            raise CourseError(
                f"{item.path}: 'session' must appear in frontmatter "
                "when 'course' appears"
            )
        if course_name is not None and session_name is not None:
            session = courses._course(course_name)._session(session_name)
            session._target += frontmatter.target_minutes or 0
            session._add_segment(frontmatter, item)

    return courses, book