"""Cross-reference validation between code annotations and a backlog document."""

from .validator import (
    TodoReport,
    extract_todo_annotations,
    extract_todo_entries,
    find_source_files,
    load_document,
    validate_code_to_document,
    validate_document_to_code,
    validate_file_paths,
    validate_todo_contract,
)

__all__ = [
    "TodoReport",
    "extract_todo_annotations",
    "extract_todo_entries",
    "find_source_files",
    "load_document",
    "validate_code_to_document",
    "validate_document_to_code",
    "validate_file_paths",
    "validate_todo_contract",
]
