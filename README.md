# coursebook

Tools for books written as a series of Markdown chapters that are organised
into courses. A course is made of sessions, a session of segments, and a
segment of slides. The structure comes from the order of the chapters in
`SUMMARY.md` and from YAML frontmatter at the top of each chapter:

```markdown
---
course: Fundamentals
session: Day 1 Morning
minutes: 10
target_minutes: 180
---
# Welcome
```

- `course` starts a new course; `course: none` leaves course content.
- `session` starts a new session within the current course. A chapter that
  names a `course` must also name a `session`.
- `minutes` is how long a slide takes to teach.
- `target_minutes` is added to the intended length of the session.

Every top-level chapter inside a course and session becomes a segment; the
chapter itself is the segment's first slide, and each sub-chapter is a further
slide that takes in its own sub-chapters. Sub-slides may not set `course` or
`session`. Sessions are timed with 10-minute breaks between segments that have
any minutes.

## Commands

### `mdbook-course`

An mdBook preprocessor. It reads the `[context, book]` JSON pair on standard
input, strips frontmatter, adds a timing note after `<details>` in the
chapter that opens each timed slide, expands a directive and writes the book
as JSON to standard output. Errors are printed to standard error with exit
status 1.

Supported directives (the first `{{%...}}` directive in each chapter is
expanded):

- `{{%session outline}}` — the timed segments of the current session.
- `{{%segment outline}}` — the timed slides of the current segment.
- `{{%course outline}}` — the schedule of the current course.
- `{{%course outline NAME}}` — the schedule of the course called NAME; left
  unchanged if there is no such course.

Any other directive is replaced by its own text.

`mdbook-course supports <renderer>` exits successfully for every renderer.

### `course-schedule`

Run from the book's root directory. Reads `book.toml` (for the `src` setting
of `[book]`, default `src`) and `SUMMARY.md`, then prints a summary:

```
course-schedule            # session summary (the default)
course-schedule sessions   # the same
course-schedule pr         # a summary suited to a pull request description
```

Sessions more than 15 minutes (5 in the `pr` per-session lines) away from
their target are marked as too long or short.

### `course-content`

Run from the book's root directory. Prints every slide's source Markdown,
read from `src/`, in course order, with `# COURSE:`, `# SESSION:`,
`# SEGMENT:` and `# SLIDE:` headings.

### `mdbook-exerciser`

An mdBook renderer. It reads the render context as JSON on standard input and
writes each code block (fenced or indented) that follows a comment such as

```markdown
<!-- File src/main.rs -->
```

into that path below the directory configured as
`output.exerciser.output-directory`, in a subdirectory named after each
chapter file's stem. The output directory is removed and recreated first.

### `collatz` and `expression-parser`

Small exercise programs. `collatz [START]` prints the length of the Collatz
sequence starting at START (11 by default). `expression-parser` tokenizes and
parses the expression `10+foo+20-30` and prints the resulting tree.

## Library use

```python
from coursebook.book import load_book
from coursebook.course import extract_structure
from coursebook.markdown import duration

courses, book = extract_structure(load_book("."))
for course in courses:
    print(course.name, duration(course.minutes()))
```

Other entry points: `coursebook.book` (`Book`, `Chapter`, `book_from_json`,
`book_to_json`), `coursebook.frontmatter.split_frontmatter`,
`coursebook.markdown.relative_link`, `coursebook.replacements.replace`,
`coursebook.timing_info.insert_timing_info`, `coursebook.exerciser.process`,
`coursebook.collatz.collatz_length` and `coursebook.expression`
(`tokenize`, `parse`).

## What it does not do

- It does not build, render or serve a book; it only reads `SUMMARY.md` and
  the chapter files, or the JSON exchanged with mdBook.
- `course-schedule segments` is accepted on the command line but there is no
  segment summary; it exits with an error.

## Tests

```
pip install -e .[test]
pytest
```