"""
Two-way contract between ``@todo:`` annotations in code and a backlog document.

1. Code -> document: every ``@todo: <document>#<anchor>`` must have an entry.
2. Document -> code: every entry that declares a **Function:** must have an
   annotation carrying its anchor.
3. The **File:** path recorded in an entry is compared with where the
   annotation was found; a mismatch is a warning only.

Backlog entries look like::

    #### Retry failed uploads {#retry-uploads}
    **Function:** `uploadFile()`
    **File:** `js/upload.js:42`
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

import frontmatter
import yaml

from ..config import TodoConfig
from ..models import CheckResult, Issue, TodoAnnotation, TodoEntry

logger = logging.getLogger(__name__)

ENTRY_HEADING = re.compile(r"^#{3,4}\s+(?P<title>[^{]+?)\s*\{#(?P<anchor>[\w-]+)\}")
SECTION_HEADING = re.compile(r"^#{1,2}\s+")
FUNCTION_FIELD = re.compile(r"\*\*Functions?:\*\*\s*`([^`]+)`")
FILE_FIELD = re.compile(r"\*\*File:\*\*\s*`([^`]+)`")


def annotation_pattern(document: str) -> re.Pattern[str]:
    """Regex for ``@todo: <document>#<anchor>``; group 1 is the anchor."""
    return re.compile(rf"@todo:\s*{re.escape(document)}#([\w-]+)", re.I)


def find_source_files(root: Path, config: TodoConfig) -> list[str]:
    """Repository-relative source files under the configured directories."""
    extensions = tuple(config.extensions)
    excluded = set(config.exclude_dirs)
    found: list[str] = []
    for directory in config.source_dirs:
        base = root / directory
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if not path.is_file() or not path.name.endswith(extensions):
                continue
            rel = path.relative_to(root)
            if excluded.intersection(rel.parts):
                continue
            found.append(rel.as_posix())
    return found


def extract_todo_annotations(root: Path, files: Iterable[str], document: str) -> list[TodoAnnotation]:
    """Collect annotations from ``files``; unreadable files are skipped."""
    pattern = annotation_pattern(document)
    annotations: list[TodoAnnotation] = []
    for rel_path in files:
        try:
            text = (root / rel_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable file %s: %s", rel_path, exc)
            continue
        for line_no, line in enumerate(text.splitlines(), start=1):
            for m in pattern.finditer(line):
                annotations.append(TodoAnnotation(file=rel_path, line=line_no, anchor=m.group(1)))
    return annotations


def extract_todo_entries(content: str) -> list[TodoEntry]:
    """Parse headed entries that declare a function, in document order.

    Entries without a **Function:** field are not part of the contract and
    are dropped. Duplicate anchors are kept; callers decide what to do.
    """
    entries: list[TodoEntry] = []
    current: dict[str, str | None] | None = None

    def flush() -> None:
        if current is not None and current["function"]:
            entries.append(
                TodoEntry(
                    anchor=current["anchor"] or "",
                    title=current["title"] or "",
                    function=current["function"],
                    file=current["file"],
                )
            )

    for line in content.splitlines():
        heading = ENTRY_HEADING.match(line)
        if heading:
            flush()
            current = {
                "title": heading.group("title").strip(),
                "anchor": heading.group("anchor"),
                "function": None,
                "file": None,
            }
            continue
        # Sub-headings and unanchored headings stay inside the current entry
        if SECTION_HEADING.match(line):
            flush()
            current = None
            continue
        if current is None:
            continue
        function_match = FUNCTION_FIELD.search(line)
        if function_match:
            current["function"] = function_match.group(1).strip()
        file_match = FILE_FIELD.search(line)
        if file_match:
            current["file"] = file_match.group(1).strip()

    flush()
    return entries


def _count_entry_headings(text: str) -> int:
    return sum(1 for line in text.splitlines() if ENTRY_HEADING.match(line))


def load_document(path: Path) -> str | None:
    """Body of the backlog document, or None if unreadable.

    Front matter is stripped only when it parses to a non-empty mapping and
    holds no entry headings; a leading ``---`` thematic break is kept as text.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Backlog document %s unreadable: %s", path, exc)
        return None

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        logger.debug("Backlog document %s has no parseable front matter: %s", path, exc)
        return text

    if not isinstance(post.metadata, dict) or not post.metadata:
        return text
    if _count_entry_headings(post.content) < _count_entry_headings(text):
        return text
    return post.content


def index_entries(entries: Sequence[TodoEntry]) -> dict[str, TodoEntry]:
    """Anchor index; the first entry for an anchor wins."""
    index: dict[str, TodoEntry] = {}
    for entry in entries:
        index.setdefault(entry.anchor, entry)
    return index


def find_duplicate_anchors(entries: Sequence[TodoEntry], document: str) -> list[Issue]:
    seen: set[str] = set()
    issues = []
    for entry in entries:
        if entry.anchor in seen:
            issues.append(
                Issue(
                    file=document,
                    line=None,
                    function=entry.function,
                    kind="duplicate-todo-anchor",
                    severity="error",
                    message=f"{document} has more than one entry for #{entry.anchor}",
                    suggestion=f"Give '{entry.title}' a unique anchor",
                )
            )
        seen.add(entry.anchor)
    return issues


def validate_code_to_document(
    annotations: Sequence[TodoAnnotation],
    entries: Sequence[TodoEntry],
    document: str,
) -> list[Issue]:
    anchors = set(index_entries(entries))
    return [
        Issue(
            file=a.file,
            line=a.line,
            function=None,
            kind="missing-todo-entry",
            severity="error",
            message=f"Code has @todo: annotation for #{a.anchor}, but {document} has no matching entry",
            suggestion=f"Add '#### <title> {{#{a.anchor}}}' with a **Function:** field to {document}",
        )
        for a in annotations
        if a.anchor not in anchors
    ]


def validate_document_to_code(
    entries: Sequence[TodoEntry],
    annotations: Sequence[TodoAnnotation],
    document: str,
) -> list[Issue]:
    code_anchors = {a.anchor for a in annotations}
    issues = []
    for entry in index_entries(entries).values():
        if entry.anchor in code_anchors:
            continue
        location = f" in {entry.file}" if entry.file else ""
        issues.append(
            Issue(
                file=document,
                line=None,
                function=entry.function,
                kind="missing-code-annotation",
                severity="error",
                message=(
                    f"{document} has entry #{entry.anchor} for function {entry.function}, "
                    "but code has no @todo: annotation"
                ),
                suggestion=f"Add '// @todo: {document}#{entry.anchor}' above {entry.function}{location}",
            )
        )
    return issues


def validate_file_paths(
    annotations: Sequence[TodoAnnotation],
    entries: Sequence[TodoEntry],
    document: str,
) -> list[Issue]:
    """Warn when no annotation for an anchor lives in the file the entry names."""
    files_by_anchor: dict[str, list[str]] = {}
    for a in annotations:
        files_by_anchor.setdefault(a.anchor, []).append(a.file)

    issues = []
    for entry in index_entries(entries).values():
        declared = entry.file_path
        code_files = files_by_anchor.get(entry.anchor)
        if not declared or not code_files:
            continue
        if any(declared in code_file for code_file in code_files):
            continue
        issues.append(
            Issue(
                file=document,
                line=None,
                function=entry.function,
                kind="file-path-mismatch",
                severity="warning",
                message=(
                    f"{document} says {entry.function} is in {entry.file}, "
                    f"but @todo: annotation found in {code_files[0]}"
                ),
                suggestion=f"Update **File:** for #{entry.anchor} to `{code_files[0]}`",
            )
        )
    return issues


@dataclass
class TodoReport:
    """Outcome of one cross-reference validation."""

    document: str
    annotations: list[TodoAnnotation] = field(default_factory=list)
    entries: list[TodoEntry] = field(default_factory=list)
    result: CheckResult = field(default_factory=CheckResult)

    @property
    def exit_code(self) -> int:
        """0 unless an error exists; path-mismatch warnings never fail the run."""
        return 1 if self.result.has_errors else 0


def validate_todo_contract(root: Path, config: TodoConfig, files: Sequence[str] | None = None) -> TodoReport:
    """Validate both directions of the code/backlog contract under ``root``."""
    document = config.document
    report = TodoReport(document=document)

    content = load_document(root / document)
    if content is None:
        report.result.issues.append(
            Issue(
                file=document,
                line=None,
                function=None,
                kind="missing-todo-document",
                severity="error",
                message=f"TODO file not found: {document}",
                suggestion=f"Create {document} or set [todos] document in the configuration",
            )
        )
        return report

    if files is None:
        files = find_source_files(root, config)
    report.annotations = extract_todo_annotations(root, files, document)
    report.entries = extract_todo_entries(content)

    report.result.issues.extend(find_duplicate_anchors(report.entries, document))
    report.result.issues.extend(validate_code_to_document(report.annotations, report.entries, document))
    report.result.issues.extend(validate_document_to_code(report.entries, report.annotations, document))
    report.result.issues.extend(validate_file_paths(report.annotations, report.entries, document))
    logger.debug(
        "Validated %d annotations against %d entries in %s",
        len(report.annotations),
        len(report.entries),
        document,
    )
    return report
