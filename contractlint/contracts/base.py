"""Base class for contract checkers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Iterable

from ..config import ContractConfig
from ..models import CheckResult, FunctionRecord, Issue
from ..scan.source import SourceFile
from ..signals.registry import SetterRegistry


class ContractChecker(ABC):
    """Compares detected signals with declared annotations, one function at a time.

    Subclasses implement ``check_function``; file iteration, loading and
    ordering are shared.
    """

    id: ClassVar[str]
    kind: ClassVar[str]
    tag: ClassVar[str]
    subject: ClassVar[str]  # "functions missing @throws annotations"
    empty_message: ClassVar[str]
    default_fix_hint: ClassVar[str]

    def __init__(
        self,
        config: ContractConfig | None = None,
        registry: SetterRegistry | None = None,
    ):
        self.config = config or ContractConfig()
        self.registry = registry or SetterRegistry()

    @property
    def severity(self) -> str:
        return self.config.severity_for(self.id)

    @property
    def fix_hint(self) -> str:
        return self.config.fix_hints.get(self.id, self.default_fix_hint)

    def check(self, files: Iterable[str], *, root: Path | None = None, jobs: int = 1) -> CheckResult:
        """Check repository-relative ``files`` under ``root`` (default: cwd)."""
        from .engine import run_checkers

        results = run_checkers([self], files, root=root or Path.cwd(), jobs=jobs)
        return results[self.id]

    def check_source(self, source: SourceFile) -> list[Issue]:
        issues = []
        for record in source.functions:
            issues.extend(self.issues_for(source, record))
        return issues

    def issues_for(self, source: SourceFile, record: FunctionRecord) -> list[Issue]:
        """All issues for one function; checkers reporting per parameter override this."""
        issue = self.check_function(source, record)
        return [] if issue is None else [issue]

    def check_text(self, text: str, path: str = "<memory>") -> CheckResult:
        """Check an in-memory buffer."""
        source = SourceFile.from_text(text, path, literal_aware=self.config.literal_aware)
        return CheckResult(self.check_source(source))

    @abstractmethod
    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        """Return an issue for ``record`` or None when its contract holds."""

    def has_tag(self, source: SourceFile, record: FunctionRecord, *, lookback: int | None = None) -> bool:
        block = source.annotations(record, lookback=lookback or self.config.annotation_lookback)
        return block is not None and block.has(self.tag)

    def describe(self, issue: Issue) -> list[str]:
        """Detail lines for the human-readable report."""
        return [f"Line {issue.line}: {issue.function}() - {issue.suggestion}"]

    def issue(self, record: FunctionRecord, message: str, suggestion: str, **extra) -> Issue:
        return Issue(
            file=record.file,
            line=record.start_line,
            function=record.name,
            kind=self.kind,
            severity=self.severity,  # type: ignore[arg-type]
            message=message,
            suggestion=suggestion,
            **extra,
        )
