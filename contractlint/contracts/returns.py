"""Functions that produce a value must document it with @returns."""

from __future__ import annotations

from ..models import FunctionRecord, Issue
from ..scan.source import SourceFile
from ..signals.detectors import detect_returns
from .base import ContractChecker


class ReturnTypeChecker(ContractChecker):
    """Void functions (no return-with-value) are exempt unless asynchronous."""

    id = "return-types"
    kind = "missing-returns"
    tag = "returns"
    subject = "functions missing @returns annotations"
    empty_message = "All functions have @returns annotations"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-returns"

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        if not record.is_async:
            body = source.body(record, max_lookahead=self.config.body_lookahead)
            if not detect_returns(body.code):
                return None
        if self.has_tag(source, record):
            return None

        suggestion = "Add: // @returns {Promise<...>}" if record.is_async else "Add: // @returns {...}"
        return self.issue(
            record,
            message=f"Function '{record.name}' missing @returns annotation",
            suggestion=suggestion,
        )
