import io
import json
import sys

import pytest

from coursebook.book import Book, Chapter
from coursebook.exerciser import main, process, process_all

CODE = "fn main() {\n    println!(\"hi\");\n}\n"


def announced(name: str, code: str = CODE) -> str:
    return f"# Title\n\n<!-- File {name} -->\n\n```rust\n{code}```\n"


def test_writes_announced_code_block(tmp_path):
    process(tmp_path, announced("main.rs"))
    assert (tmp_path / "main.rs").read_text(encoding="utf-8") == CODE


def test_creates_nested_directories(tmp_path):
    process(tmp_path / "out", announced("src/bin/main.rs"))
    assert (tmp_path / "out" / "src" / "bin" / "main.rs").read_text(
        encoding="utf-8"
    ) == CODE


def test_code_block_without_comment_is_ignored(tmp_path):
    process(tmp_path, "```rust\nfn x() {}\n```\n")
    assert list(tmp_path.iterdir()) == []


def test_comment_without_code_block_is_ignored(tmp_path):
    process(tmp_path, "<!-- File lonely.rs -->\n\nJust text.\n")
    assert list(tmp_path.iterdir()) == []


def test_filename_used_only_once(tmp_path):
    text = announced("a.rs") + "\n```rust\nfn other() {}\n```\n"
    process(tmp_path, text)
    assert [p.name for p in tmp_path.iterdir()] == ["a.rs"]
    assert (tmp_path / "a.rs").read_text(encoding="utf-8") == CODE


def test_other_comments_are_ignored(tmp_path):
    process(tmp_path, "<!-- a remark -->\n\n```\ncode\n```\n")
    assert list(tmp_path.iterdir()) == []


def test_several_files(tmp_path):
    text = announced("one.rs", "fn one() {}\n") + "\n" + announced(
        "two.rs", "fn two() {}\n"
    )
    process(tmp_path, text)
    assert (tmp_path / "one.rs").read_text(encoding="utf-8") == "fn one() {}\n"
    assert (tmp_path / "two.rs").read_text(encoding="utf-8") == "fn two() {}\n"


def test_process_all_uses_chapter_stem(tmp_path):
    sub = Chapter("Sub", content=announced("sub.rs"), path="deep/sub-page.md")
    top = Chapter(
        "Top", content=announced("top.rs"), path="dir/exercise.md", sub_items=[sub]
    )
    draft = Chapter("Draft", content=announced("draft.rs"))
    process_all(Book([top, draft]), tmp_path)
    assert (tmp_path / "exercise" / "top.rs").read_text(encoding="utf-8") == CODE
    assert (tmp_path / "sub-page" / "sub.rs").read_text(encoding="utf-8") == CODE
    assert sorted(p.name for p in tmp_path.iterdir()) == ["exercise", "sub-page"]


def render_context(config, content):
    return json.dumps(
        {
            "version": "0",
            "root": ".",
            "destination": ".",
            "config": config,
            "book": {
                "sections": [
                    {
                        "Chapter": {
                            "name": "Ex",
                            "content": content,
                            "number": [1],
                            "sub_items": [],
                            "path": "ex.md",
                            "source_path": "ex.md",
                            "parent_names": [],
                        }
                    }
                ]
            },
        }
    )


def test_main_writes_exercises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out").mkdir()
    (tmp_path / "out" / "stale.txt").write_text("old", encoding="utf-8")
    config = {"output": {"exerciser": {"output-directory": "out"}}}
    monkeypatch.setattr(sys, "stdin", io.StringIO(render_context(config, announced("m.rs"))))
    assert main([]) == 0
    assert (tmp_path / "out" / "ex" / "m.rs").read_text(encoding="utf-8") == CODE
    assert not (tmp_path / "out" / "stale.txt").exists()


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"output": {"exerciser": {}}},
        {"output": {"exerciser": {"output-directory": 3}}},
    ],
)
def test_main_rejects_bad_config(tmp_path, monkeypatch, config):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO(render_context(config, "")))
    assert main([]) == 1
    assert list(tmp_path.iterdir()) == []


def test_main_rejects_invalid_json(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "stdin", io.StringIO("not json"))
    assert main([]) == 1