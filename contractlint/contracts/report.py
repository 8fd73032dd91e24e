"""Plain-text report derived from a checker's issue list."""

from __future__ import annotations

from typing import Sequence

from ..models import Issue
from .base import ContractChecker

MAX_FILES = 5
MAX_ISSUES_PER_FILE = 3


def group_by_file(issues: Sequence[Issue]) -> dict[str, list[Issue]]:
    """Group issues by file, keeping first-seen file order."""
    by_file: dict[str, list[Issue]] = {}
    for issue in issues:
        by_file.setdefault(issue.file, []).append(issue)
    return by_file


def generate_report(
    checker: ContractChecker,
    issues: Sequence[Issue],
    *,
    max_files: int = MAX_FILES,
    max_per_file: int = MAX_ISSUES_PER_FILE,
) -> str:
    """Summarize ``issues`` grouped by file.

    Only the first ``max_files`` files and ``max_per_file`` issues per file are
    detailed; the rest are counted in "... and N more" lines. The report
    always ends with the checker's fix hint.
    """
    if not issues:
        return "\n".join([checker.empty_message, "", f"  {checker.fix_hint}"])

    lines = [f"Found {len(issues)} {checker.subject}:", ""]
    by_file = group_by_file(issues)

    for file, file_issues in list(by_file.items())[:max_files]:
        lines.append(f"  {file}:")
        for issue in file_issues[:max_per_file]:
            lines.extend(f"    {detail}" for detail in checker.describe(issue))
        if len(file_issues) > max_per_file:
            lines.append(f"    ... and {len(file_issues) - max_per_file} more in this file")

    if len(by_file) > max_files:
        lines.append(f"  ... and {len(by_file) - max_files} more files")

    lines.append("")
    lines.append(f"  {checker.fix_hint}")
    return "\n".join(lines)
