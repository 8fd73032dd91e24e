"""A loaded source file with its definitions, bodies and annotations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from ..models import AnnotationBlock, BodyExtent, FunctionRecord
from .annotations import associate
from .boundary import trace_body
from .lexer import mask_literals
from .scanner import scan_functions

logger = logging.getLogger(__name__)


@dataclass
class SourceFile:
    """Text of one file plus a literal-masked copy used for analysis."""

    path: str
    lines: list[str]
    code_lines: list[str] = field(repr=False)

    @classmethod
    def from_text(cls, text: str, path: str = "<memory>", *, literal_aware: bool = True) -> "SourceFile":
        lines = text.splitlines()
        code_lines = mask_literals(lines) if literal_aware else list(lines)
        return cls(path=path, lines=lines, code_lines=code_lines)

    @classmethod
    def load(cls, root: Path, rel_path: str, *, literal_aware: bool = True) -> "SourceFile | None":
        """Read ``rel_path`` under ``root``; unreadable files yield None."""
        try:
            text = (root / rel_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable file %s: %s", rel_path, exc)
            return None
        return cls.from_text(text, rel_path, literal_aware=literal_aware)

    @cached_property
    def functions(self) -> list[FunctionRecord]:
        return scan_functions(self.code_lines, self.path)

    def body(self, record: FunctionRecord, *, max_lookahead: int) -> BodyExtent:
        return trace_body(
            self.lines,
            record.line_index,
            max_lookahead=max_lookahead,
            code_lines=self.code_lines,
        )

    def annotations(self, record: FunctionRecord, *, lookback: int) -> AnnotationBlock | None:
        # Comments are blanked in code_lines, so association reads the raw text
        return associate(self.lines, record.line_index, lookback=lookback)
