"""
Literal masking for brace-delimited source text.

Blanks out the contents of string, template and regex literals and the whole
of line and block comments, so that delimiter counting and signal detection
only see code. Quote characters are kept; every masked character becomes a
space, so line lengths and columns are preserved.

This is a lexer, not a parser. Regex literals are recognized with the usual
"previous significant token" heuristic.
"""

from __future__ import annotations

from typing import Sequence

# A "/" after one of these starts a regex literal rather than a division
REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
REGEX_KEYWORDS = frozenset({
    "return", "typeof", "instanceof", "case", "do", "else", "in", "of",
    "void", "yield", "await", "delete", "throw", "new",
})


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _starts_regex(chars: list[str], index: int) -> bool:
    j = index - 1
    while j >= 0 and chars[j].isspace():
        j -= 1
    if j < 0:
        return True
    prev = chars[j]
    if _is_ident_char(prev):
        end = j + 1
        while j >= 0 and _is_ident_char(chars[j]):
            j -= 1
        return "".join(chars[j + 1:end]) in REGEX_KEYWORDS
    return prev in REGEX_PRECEDERS


def mask_literals(lines: Sequence[str]) -> list[str]:
    """Return ``lines`` with literal and comment contents replaced by spaces.

    Block comments and template literals carry over line breaks; single- and
    double-quoted strings and regex literals end at the end of a line.
    """
    masked: list[str] = []
    carry: str | None = None  # "block" or "template"

    for line in lines:
        chars = list(line)
        n = len(chars)
        i = 0
        quote: str | None = None  # ', " or / (regex)
        in_class = False

        while i < n:
            ch = line[i]

            if carry == "block":
                if line.startswith("*/", i):
                    chars[i] = chars[i + 1] = " "
                    carry = None
                    i += 2
                    continue
                chars[i] = " "
                i += 1
                continue

            if carry == "template":
                if ch == "\\":
                    chars[i] = " "
                    if i + 1 < n:
                        chars[i + 1] = " "
                    i += 2
                    continue
                if ch == "`":
                    carry = None
                else:
                    chars[i] = " "
                i += 1
                continue

            if quote is not None:
                if ch == "\\":
                    chars[i] = " "
                    if i + 1 < n:
                        chars[i + 1] = " "
                    i += 2
                    continue
                if quote == "/":
                    if ch == "[":
                        in_class = True
                    elif ch == "]":
                        in_class = False
                    elif ch == "/" and not in_class:
                        quote = None
                        i += 1
                        continue
                elif ch == quote:
                    quote = None
                    i += 1
                    continue
                chars[i] = " "
                i += 1
                continue

            if line.startswith("//", i):
                for k in range(i, n):
                    chars[k] = " "
                break
            if line.startswith("/*", i):
                chars[i] = chars[i + 1] = " "
                carry = "block"
                i += 2
                continue
            if ch in ("'", '"'):
                quote = ch
            elif ch == "`":
                carry = "template"
            elif ch == "/" and _starts_regex(chars, i):
                quote = "/"
                in_class = False
            i += 1

        masked.append("".join(chars))

    return masked
