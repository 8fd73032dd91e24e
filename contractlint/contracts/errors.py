"""Functions that raise errors must document them with @throws."""

from __future__ import annotations

from ..models import FunctionRecord, Issue
from ..scan.source import SourceFile
from ..signals.detectors import detect_throws
from .base import ContractChecker


class ErrorContractChecker(ContractChecker):
    id = "error-contracts"
    kind = "missing-throws"
    tag = "throws"
    subject = "functions missing @throws annotations"
    empty_message = "All functions that throw errors have @throws annotations"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-throws"

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        body = source.body(record, max_lookahead=self.config.body_lookahead)
        error_types = tuple(signal.detail for signal in detect_throws(body.code))
        if not error_types:
            return None
        if self.has_tag(source, record):
            return None

        return self.issue(
            record,
            message=f"Function '{record.name}' throws {', '.join(error_types)} but missing @throws annotation",
            suggestion="Add: " + "\n".join(f"// @throws {{{name}}}" for name in error_types),
            error_types=error_types,
        )

    def describe(self, issue: Issue) -> list[str]:
        return [
            f"Line {issue.line}: {issue.function}() throws {', '.join(issue.error_types)}",
            f"  {issue.suggestion.replace(chr(10), ', ')}",
        ]
