"""Tagged comment blocks must sit directly above the definition they document."""

from __future__ import annotations

from ..config import ContractConfig
from ..models import FunctionRecord, Issue
from ..scan.annotations import detect_tags, find_comment_blocks, validate_comment_structure
from ..scan.source import SourceFile
from ..signals.detectors import Detector, collect_signals, default_detectors, detect_side_effects
from ..signals.registry import SetterRegistry
from .base import ContractChecker


class AnnotationStructureChecker(ContractChecker):
    """Reports tagged blocks separated from their function by blank lines.

    Untagged comments are ignored; so are functions with no comment at all and
    functions whose bodies carry no signal.
    """

    id = "annotation-structure"
    kind = "detached-annotation"
    tag = ""
    subject = "functions with detached annotation blocks"
    empty_message = "All annotation blocks sit directly above their functions"
    default_fix_hint = "💡 Remove the blank lines between each annotation block and its function"

    def __init__(self, config: ContractConfig | None = None, registry: SetterRegistry | None = None):
        super().__init__(config, registry)
        self.detectors = [*default_detectors(self.registry), Detector("side-effects", detect_side_effects)]

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        blocks = find_comment_blocks(source.lines, record.line_index)
        if not blocks:
            return None
        tags = detect_tags([line for block in blocks for line in block.lines])
        if not tags:
            return None

        report = validate_comment_structure(blocks, record.line_index)
        if report.valid or not self._has_signal(source, record):
            return None
        return self.issue(
            record,
            message=f"Annotations for '{record.name}' are detached: {report.reason}",
            suggestion=f"Move {', '.join('@' + t for t in sorted(tags))} directly above line {record.start_line}",
        )

    def _has_signal(self, source: SourceFile, record: FunctionRecord) -> bool:
        if record.is_async:
            return True
        body = source.body(record, max_lookahead=self.config.body_lookahead)
        return bool(collect_signals(body.code, self.detectors))

    def describe(self, issue: Issue) -> list[str]:
        return [f"Line {issue.line}: {issue.function}() - {issue.message.split(': ', 1)[-1]}"]
