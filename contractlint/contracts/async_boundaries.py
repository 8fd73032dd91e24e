"""Asynchronous functions must mark their await boundary."""

from __future__ import annotations

from ..models import FunctionRecord, Issue
from ..scan.source import SourceFile
from .base import ContractChecker


class AsyncBoundaryChecker(ContractChecker):
    id = "async-boundaries"
    kind = "missing-async-boundary"
    tag = "async-boundary"
    subject = "async functions missing @async-boundary annotations"
    empty_message = "All async functions have @async-boundary annotations"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-async"

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        if not record.is_async or self.has_tag(source, record):
            return None
        return self.issue(
            record,
            message=f"Async function '{record.name}' missing @async-boundary annotation",
            suggestion="Add: // @async-boundary\n// @requires await",
        )

    def describe(self, issue: Issue) -> list[str]:
        return [f"Line {issue.line}: async {issue.function}() needs @async-boundary"]
