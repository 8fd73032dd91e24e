"""Tests for the code/backlog cross-reference validator."""

from pathlib import Path

from contractlint.config import TodoConfig
from contractlint.todos import (
    extract_todo_annotations,
    extract_todo_entries,
    find_source_files,
    load_document,
    validate_todo_contract,
)

BACKLOG = """---
title: Backlog
---

# Backlog

## Active

#### Retry uploads {#retry-uploads}
**Function:** `uploadFile()`
**File:** `js/upload.js:12`

#### Cache warmup {#cache-warmup}
**Function:** `warmCache()`
**File:** `services/cache.js`

#### Docs only {#docs-only}
Some text without a function.

## Done
"""


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _kinds(report) -> list[str]:
    return [i.kind for i in report.result.issues]


def test_extract_entries_requires_function():
    entries = extract_todo_entries(BACKLOG)
    assert [(e.anchor, e.function, e.file) for e in entries] == [
        ("retry-uploads", "uploadFile()", "js/upload.js:12"),
        ("cache-warmup", "warmCache()", "services/cache.js"),
    ]
    assert entries[0].file_path == "js/upload.js"


def test_entry_ends_at_section_heading():
    text = "### Loose end {#loose}\n\n## Notes\n**Functions:** `stray()`\n"
    assert extract_todo_entries(text) == []
    text = "### Loose end {#loose}\n**Functions:** `a()`, `b()`\n"
    assert [e.function for e in extract_todo_entries(text)] == ["a()"]


def test_extract_annotations(tmp_path: Path):
    _write(tmp_path / "js" / "upload.js", "// @todo: docs/TODO.md#retry-uploads\nfunction uploadFile() {}\n")
    _write(tmp_path / "js" / "other.js", "x();\n// @TODO: docs/TODO.md#later\n// @todo: elsewhere.md#ignored\n")
    annotations = extract_todo_annotations(tmp_path, ["js/upload.js", "js/other.js", "js/gone.js"], "docs/TODO.md")
    assert [(a.file, a.line, a.anchor) for a in annotations] == [
        ("js/upload.js", 1, "retry-uploads"),
        ("js/other.js", 2, "later"),
    ]


def test_find_source_files(tmp_path: Path):
    _write(tmp_path / "js" / "a.js", "")
    _write(tmp_path / "js" / "b.ts", "")
    _write(tmp_path / "js" / "node_modules" / "x.js", "")
    _write(tmp_path / "routes" / "api.mjs", "")
    assert find_source_files(tmp_path, TodoConfig()) == ["js/a.js", "routes/api.mjs"]


def test_both_directions(tmp_path: Path):
    _write(tmp_path / "docs" / "TODO.md", BACKLOG)
    _write(tmp_path / "js" / "upload.js", "// @todo: docs/TODO.md#retry-uploads\nfunction uploadFile() {}\n")
    _write(tmp_path / "js" / "other.js", "// @todo: docs/TODO.md#unknown-anchor\nfunction later() {}\n")

    report = validate_todo_contract(tmp_path, TodoConfig())
    assert sorted(_kinds(report)) == ["missing-code-annotation", "missing-todo-entry"]

    missing_entry = next(i for i in report.result.issues if i.kind == "missing-todo-entry")
    assert (missing_entry.file, missing_entry.line) == ("js/other.js", 1)
    assert "#unknown-anchor" in missing_entry.message

    missing_code = next(i for i in report.result.issues if i.kind == "missing-code-annotation")
    assert missing_code.function == "warmCache()"
    assert report.exit_code == 1


def test_file_path_mismatch_is_only_a_warning(tmp_path: Path):
    _write(tmp_path / "docs" / "TODO.md", BACKLOG)
    _write(tmp_path / "js" / "moved.js", "// @todo: docs/TODO.md#retry-uploads\n")
    _write(tmp_path / "services" / "cache.js", "// @todo: docs/TODO.md#cache-warmup\n")

    report = validate_todo_contract(tmp_path, TodoConfig())
    assert _kinds(report) == ["file-path-mismatch"]
    assert report.result.issues[0].severity == "warning"
    assert "js/moved.js" in report.result.issues[0].message
    assert report.exit_code == 0


def test_duplicate_anchor_first_entry_wins(tmp_path: Path):
    doc = (
        "#### First {#dup}\n**Function:** `a()`\n**File:** `js/a.js`\n\n"
        "#### Second {#dup}\n**Function:** `b()`\n**File:** `js/b.js`\n"
    )
    _write(tmp_path / "docs" / "TODO.md", doc)
    _write(tmp_path / "js" / "a.js", "// @todo: docs/TODO.md#dup\n")

    report = validate_todo_contract(tmp_path, TodoConfig())
    assert _kinds(report) == ["duplicate-todo-anchor"]
    assert report.result.issues[0].function == "b()"
    assert report.exit_code == 1


def test_missing_document(tmp_path: Path):
    report = validate_todo_contract(tmp_path, TodoConfig(document="docs/BACKLOG.md"))
    assert _kinds(report) == ["missing-todo-document"]
    assert report.exit_code == 1


def test_fixture_repo_is_consistent(fixture_repo_path: Path):
    report = validate_todo_contract(fixture_repo_path, TodoConfig(source_dirs=["js"]))
    assert report.result.issues == []
    assert [a.anchor for a in report.annotations] == ["persist-prefs"]


def test_sub_headings_stay_inside_entry():
    text = (
        "#### Retry {#retry}\n##### Details\n**Function:** `up()`\n"
        "### Notes without anchor\n**File:** `js/up.js`\n\n## Done\n"
    )
    entries = extract_todo_entries(text)
    assert [(e.anchor, e.function, e.file) for e in entries] == [("retry", "up()", "js/up.js")]


def test_leading_thematic_break_is_not_front_matter(tmp_path: Path):
    doc = "---\n#### Retry {#retry}\n**Function:** `up()`\n---\n\n#### Other {#other}\n**Function:** `other()`\n"
    _write(tmp_path / "docs" / "TODO.md", doc)
    _write(tmp_path / "js" / "up.js", "// @todo: docs/TODO.md#retry\n// @todo: docs/TODO.md#other\n")

    assert load_document(tmp_path / "docs" / "TODO.md") == doc
    report = validate_todo_contract(tmp_path, TodoConfig())
    assert [e.anchor for e in report.entries] == ["retry", "other"]
    assert report.result.issues == []


def test_yaml_like_block_holding_entries_is_kept(tmp_path: Path):
    doc = "---\n#### Retry {#retry}\n---\n**Function:** `up()`\n"
    _write(tmp_path / "docs" / "TODO.md", doc)
    assert [e.anchor for e in extract_todo_entries(load_document(tmp_path / "docs" / "TODO.md"))] == ["retry"]

    doc = "---\nowner: web\n#### Retry {#retry}\n---\n**Function:** `up()`\n"
    _write(tmp_path / "docs" / "TODO.md", doc)
    assert load_document(tmp_path / "docs" / "TODO.md") == doc


def test_real_front_matter_is_stripped(tmp_path: Path):
    _write(tmp_path / "docs" / "TODO.md", BACKLOG)
    content = load_document(tmp_path / "docs" / "TODO.md")
    assert "title: Backlog" not in content
    assert "# Backlog" in content
    assert not content.lstrip().startswith("---")
