"""Function body extent by balanced-delimiter counting."""

from __future__ import annotations

import logging
from typing import Sequence

from ..models import BodyExtent

logger = logging.getLogger(__name__)

OPEN = "{"
CLOSE = "}"
NESTING = {"{": 1, "(": 1, "[": 1, "}": -1, ")": -1, "]": -1}


def _is_expression_body(line: str) -> bool:
    # `const f = (x) => x * 2;` opens no block and ends on its own line
    return OPEN not in line and line.rstrip().endswith(";")


def _continues_expression_body(code: Sequence[str], start_index: int) -> bool:
    """True for ``const f = (x) =>`` whose body on the following lines is not a block."""
    if OPEN in code[start_index] or not code[start_index].rstrip().endswith("=>"):
        return False
    for text in code[start_index + 1:]:
        if text.strip():
            return not text.lstrip().startswith(OPEN)
    return False


def _trace_expression(lines: Sequence[str], code: Sequence[str], start_index: int, stop: int) -> BodyExtent:
    # Ends at the first `;` outside nested delimiters, or before a blank line
    depth = 0
    last_code = None
    for index in range(start_index + 1, stop):
        text = code[index]
        if not text.strip():
            if depth <= 0 and last_code is not None:
                return _extent(lines, code, start_index, last_code, complete=True)
            continue
        last_code = index
        depth += sum(NESTING.get(ch, 0) for ch in text)
        if depth <= 0 and text.rstrip().endswith(";"):
            return _extent(lines, code, start_index, index, complete=True)

    logger.debug("Expression body at line %d not terminated within the lookahead", start_index + 1)
    return _extent(lines, code, start_index, stop - 1, complete=False)


def trace_body(
    lines: Sequence[str],
    start_index: int,
    *,
    max_lookahead: int,
    code_lines: Sequence[str] | None = None,
) -> BodyExtent:
    """Return the body extent of the definition at ``start_index`` (0-based).

    Counts open-minus-close delimiters per line over ``code_lines`` (defaults
    to ``lines``). Stops at the first line where the body has been entered and
    the running count is back to zero. Never looks past ``max_lookahead``
    lines; when the cap is hit the partial range is returned with
    ``complete=False``.
    """
    if max_lookahead <= 0:
        raise ValueError("max_lookahead must be a positive integer")
    if not 0 <= start_index < len(lines):
        raise IndexError(f"start_index {start_index} outside 0..{len(lines) - 1}")

    code = code_lines if code_lines is not None else lines

    if _is_expression_body(code[start_index]):
        return _extent(lines, code, start_index, start_index, complete=True)

    stop = min(start_index + max_lookahead, len(lines))
    if _continues_expression_body(code, start_index):
        return _trace_expression(lines, code, start_index, stop)

    depth = 0
    entered = False
    for index in range(start_index, stop):
        text = code[index]
        opens = text.count(OPEN)
        closes = text.count(CLOSE)
        if opens:
            entered = True
        depth += opens - closes
        if entered and depth <= 0:
            return _extent(lines, code, start_index, index, complete=True)

    logger.debug(
        "Body at line %d not balanced within %d lines; using partial range",
        start_index + 1,
        max_lookahead,
    )
    return _extent(lines, code, start_index, stop - 1, complete=False)


def _extent(
    lines: Sequence[str],
    code: Sequence[str],
    first: int,
    last: int,
    *,
    complete: bool,
) -> BodyExtent:
    return BodyExtent(
        start_line=first + 1,
        end_line=last + 1,
        text="\n".join(lines[first:last + 1]),
        code="\n".join(code[first:last + 1]),
        complete=complete,
    )
