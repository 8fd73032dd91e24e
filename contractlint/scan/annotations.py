"""
Association of documentation comments with definitions.

Two readers live here:

- ``associate`` is the bounded one used by the contract checkers. It walks a
  fixed number of lines upward from a definition, gathers the comment lines it
  meets (blank lines are stepped over) and stops at the first line of code.
  Only tag keywords are detected; payloads are not parsed.

- ``find_comment_blocks`` / ``validate_comment_structure`` walk without a
  window and describe the block layout (gaps between blocks and the
  definition). They back the annotation-structure check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Sequence

from ..models import AnnotationBlock

TAG_PATTERNS: dict[str, re.Pattern[str]] = {
    "throws": re.compile(r"@throws\b"),
    "returns": re.compile(r"@returns?\b"),
    "mutates-state": re.compile(r"@mutates-state\b"),
    "async-boundary": re.compile(r"@async-boundary\b|@requires[- ]await\b"),
    "side-effects": re.compile(r"@side-effects\b"),
    "pure": re.compile(r"@pure\b"),
}


def detect_tags(lines: Sequence[str]) -> frozenset[str]:
    """Return the recognized tag names present in ``lines``."""
    content = "\n".join(lines)
    return frozenset(tag for tag, pattern in TAG_PATTERNS.items() if pattern.search(content))


def associate(lines: Sequence[str], start_index: int, *, lookback: int) -> AnnotationBlock | None:
    """Find the comment block above the definition at ``start_index`` (0-based).

    Looks at most ``lookback`` lines up. Returns None when no comment line is
    found before code or the window edge.
    """
    if lookback <= 0:
        raise ValueError("lookback must be a positive integer")

    floor = max(0, start_index - lookback)
    collected: list[int] = []
    in_block = False

    for index in range(start_index - 1, floor - 1, -1):
        stripped = lines[index].strip()
        if in_block:
            collected.append(index)
            if "/*" in stripped:
                in_block = False
            continue
        if not stripped:
            continue
        if stripped.startswith("//"):
            collected.append(index)
            continue
        if stripped.endswith("*/"):
            collected.append(index)
            if "/*" not in stripped:
                in_block = True
            continue
        if stripped.startswith(("/*", "*")):
            collected.append(index)
            continue
        break

    if not collected:
        return None

    collected.reverse()
    raw = tuple(lines[i] for i in collected)
    return AnnotationBlock(
        tags=detect_tags(raw),
        raw_lines=raw,
        start_line=collected[0] + 1,
        end_line=collected[-1] + 1,
    )


# -----------------------------------------------------------------------------
# Structural reader
# -----------------------------------------------------------------------------

CommentStyle = Literal["compact", "jsdoc"]


@dataclass(frozen=True)
class CommentBlock:
    """A run of comment lines; indices are 0-based and inclusive."""

    style: CommentStyle
    start: int
    end: int
    lines: tuple[str, ...]


@dataclass(frozen=True)
class StructureReport:
    valid: bool
    reason: str = ""
    gap_lines: int = 0


def comment_style(line: str) -> CommentStyle | None:
    stripped = line.strip()
    if stripped.startswith("//"):
        return "compact"
    if stripped.startswith(("/**", "/*", "*")):
        return "jsdoc"
    return None


def _extract_block(lines: Sequence[str], index: int) -> CommentBlock:
    style = comment_style(lines[index])
    if style == "compact":
        start = index
        while start > 0 and lines[start - 1].strip().startswith("//"):
            start -= 1
        end = index
        while end < len(lines) - 1 and lines[end + 1].strip().startswith("//"):
            end += 1
    else:
        start = index
        while start > 0 and not lines[start].strip().startswith("/*"):
            start -= 1
        end = index
        while end < len(lines) - 1 and "*/" not in lines[end]:
            end += 1
    return CommentBlock(style=style or "jsdoc", start=start, end=end, lines=tuple(lines[start:end + 1]))


def find_comment_blocks(lines: Sequence[str], start_index: int) -> list[CommentBlock]:
    """Collect every comment block above a definition, nearest last."""
    blocks: list[CommentBlock] = []
    index = start_index - 1
    while index >= 0:
        if not lines[index].strip():
            index -= 1
            continue
        if comment_style(lines[index]) is None:
            break
        block = _extract_block(lines, index)
        blocks.insert(0, block)
        index = block.start - 1
    return blocks


def validate_comment_structure(blocks: Sequence[CommentBlock], start_index: int) -> StructureReport:
    """Check that the nearest block touches the definition and has no inner gaps."""
    if not blocks:
        return StructureReport(valid=False, reason="No comment blocks found above function")

    gap = start_index - blocks[-1].end - 1
    if gap > 0:
        return StructureReport(
            valid=False,
            reason=f"{gap} blank line(s) between comment and function",
            gap_lines=gap,
        )

    for block in blocks:
        if any(not line.strip() for line in block.lines):
            return StructureReport(
                valid=False,
                reason=f"Blank line within comment block (lines {block.start + 1}-{block.end + 1})",
            )

    return StructureReport(valid=True)
