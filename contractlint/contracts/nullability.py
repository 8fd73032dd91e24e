"""Optional parameters must carry a nullability marker in their @param line."""

from __future__ import annotations

import re

from ..models import FunctionRecord, Issue
from ..scan.source import SourceFile
from ..signals.detectors import detect_optional_parameters, parameter_list
from .base import ContractChecker

NULLABILITY_MARKERS = ("?}", "OPTIONAL", "REQUIRED", "nullable", "can be null")


def has_nullability_marker(comment_lines, parameter: str) -> bool:
    """True when a ``@param`` line naming ``parameter`` states its nullability."""
    named = re.compile(rf"@param\b.*(?<![\w$]){re.escape(parameter)}(?![\w$])")
    return any(
        named.search(line) and any(marker in line for marker in NULLABILITY_MARKERS)
        for line in comment_lines
    )


class NullabilityChecker(ContractChecker):
    """One issue per parameter that has a default or is null-checked but is not marked."""

    id = "nullability"
    kind = "missing-nullability"
    tag = "param"
    subject = "parameters missing nullability annotations"
    empty_message = "All optional parameters have nullability annotations"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-nullability"

    def issues_for(self, source: SourceFile, record: FunctionRecord) -> list[Issue]:
        params = parameter_list(source.code_lines[record.line_index], record.name)
        if not params:
            return []
        body = source.body(record, max_lookahead=self.config.body_lookahead)
        optional = detect_optional_parameters(params, body.code)
        if not optional:
            return []

        block = source.annotations(record, lookback=self.config.annotation_lookback)
        comment_lines = block.raw_lines if block is not None else ()
        return [
            self.issue(
                record,
                message=(
                    f"Parameter '{signal.detail}' in '{record.name}' appears optional "
                    "but lacks nullability annotation"
                ),
                suggestion=f"Add: // @param {{type?}} {signal.detail} - OPTIONAL, can be null/undefined",
                parameter=signal.detail,
            )
            for signal in optional
            if not has_nullability_marker(comment_lines, signal.detail)
        ]

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        issues = self.issues_for(source, record)
        return issues[0] if issues else None

    def describe(self, issue: Issue) -> list[str]:
        return [f"Line {issue.line}: {issue.function}({issue.parameter})", f"  {issue.suggestion}"]
