"""Line-oriented discovery of function-like definitions."""

from __future__ import annotations

import re
from typing import Sequence

from ..models import FunctionRecord

IDENT = r"[A-Za-z_$][\w$]*"

# Definition shapes in priority order; the first match on a line wins.
EXPORTED_DECLARATION = re.compile(
    rf"^\s*export\s+(?:default\s+)?(?P<async>async\s+)?function\s*\*?\s*(?P<name>{IDENT})\s*\("
)
DECLARATION = re.compile(
    rf"(?:^|[^\w$.])(?P<async>async\s+)?function\s*\*?\s*(?P<name>{IDENT})\s*\("
)
BOUND_ANONYMOUS = re.compile(
    rf"(?:^|[^\w$.])(?:const|let|var)\s+(?P<name>{IDENT})\s*(?::[^=]+)?=\s*(?P<async>async\s+)?"
    rf"(?:\([^)]*\)\s*(?::\s*[^=]+?)?=>|{IDENT}\s*=>|function\b\s*\*?\s*\()"
)

DEFINITION_SHAPES: tuple[re.Pattern[str], ...] = (EXPORTED_DECLARATION, DECLARATION, BOUND_ANONYMOUS)

COMMENT_PREFIXES = ("//", "/*", "*")


def match_definition(line: str) -> tuple[str, bool] | None:
    """Return ``(name, is_async)`` for the first definition shape matching ``line``."""
    if line.lstrip().startswith(COMMENT_PREFIXES):
        return None
    for shape in DEFINITION_SHAPES:
        m = shape.search(line)
        if m:
            return m.group("name"), bool(m.group("async"))
    return None


def scan_functions(source: str | Sequence[str], file: str = "<memory>") -> list[FunctionRecord]:
    """Find function-like definitions, in line order.

    Named declarations, exported declarations and names bound to an anonymous
    function literal all produce the same record shape. At most one record is
    produced per line.
    """
    lines = source.splitlines() if isinstance(source, str) else source
    records: list[FunctionRecord] = []
    for index, line in enumerate(lines):
        found = match_definition(line)
        if found is None:
            continue
        name, is_async = found
        records.append(FunctionRecord(name=name, file=file, start_line=index + 1, is_async=is_async))
    return records
