"""Lexical structure of scanned source: definitions, bodies, annotations."""

from .annotations import (
    TAG_PATTERNS,
    associate,
    detect_tags,
    find_comment_blocks,
    validate_comment_structure,
)
from .boundary import trace_body
from .lexer import mask_literals
from .scanner import match_definition, scan_functions
from .source import SourceFile

__all__ = [
    "TAG_PATTERNS",
    "associate",
    "detect_tags",
    "find_comment_blocks",
    "validate_comment_structure",
    "trace_body",
    "mask_literals",
    "match_definition",
    "scan_functions",
    "SourceFile",
]
