"""Data models shared by the scanner, checkers and validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Severity = Literal["error", "warning"]

SignalKind = Literal[
    "throws",
    "returns",
    "state-mutation",
    "interface-mutation",
    "persistence-write",
    "side-effect",
    "optional-parameter",
]

# Signal kinds that count towards the mutation contract
MUTATION_KINDS: tuple[str, ...] = ("state-mutation", "interface-mutation", "persistence-write")


@dataclass(frozen=True)
class FunctionRecord:
    """A function-like definition found by the scanner.

    Identity is ``(file, start_line)``; ``start_line`` is 1-based.
    """

    name: str
    file: str
    start_line: int
    is_async: bool = False

    @property
    def line_index(self) -> int:
        return self.start_line - 1


@dataclass(frozen=True)
class BodyExtent:
    """Line range of a function body as traced by the boundary tracer."""

    start_line: int
    end_line: int
    text: str
    code: str  # text with literal contents blanked (equals text when masking is off)
    complete: bool = True


@dataclass(frozen=True)
class AnnotationBlock:
    """Comment block found above a definition."""

    tags: frozenset[str]
    raw_lines: tuple[str, ...]
    start_line: int
    end_line: int

    def has(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True)
class Signal:
    """A behavioral fact detected in a function body."""

    kind: SignalKind
    detail: str
    source: str = ""
    field: str | None = None  # logical state field for state-mutation signals


@dataclass(frozen=True)
class Issue:
    """A single finding. Severity comes from configuration, never from a detector."""

    file: str
    line: int | None
    function: str | None
    kind: str
    severity: Severity
    message: str
    suggestion: str = ""
    error_types: tuple[str, ...] = ()
    mutations: tuple[Signal, ...] = ()
    side_effects: tuple[str, ...] = ()
    parameter: str | None = None

    @property
    def detected_mutations(self) -> dict[str, list[str]]:
        """Mutation breakdown grouped as state / interface / persistence."""
        groups: dict[str, list[str]] = {"state": [], "interface": [], "persistence": []}
        for signal in self.mutations:
            if signal.kind == "state-mutation":
                groups["state"].append(signal.detail)
            elif signal.kind == "interface-mutation":
                groups["interface"].append(signal.detail)
            elif signal.kind == "persistence-write":
                groups["persistence"].append(signal.detail)
        return groups

    def __str__(self) -> str:
        loc = self.file
        if self.line:
            loc += f":{self.line}"
        return f"{self.severity.upper()}: [{self.kind}] {loc} - {self.message}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "file": self.file,
            "line": self.line,
            "function": self.function,
            "kind": self.kind,
            "severity": self.severity,
            "message": self.message,
            "suggestion": self.suggestion,
        }
        if self.error_types:
            data["errorTypes"] = list(self.error_types)
        if self.mutations:
            data["detectedMutations"] = self.detected_mutations
        if self.side_effects:
            data["detectedSideEffects"] = list(self.side_effects)
        if self.parameter:
            data["parameter"] = self.parameter
        return data


@dataclass
class CheckResult:
    """Issues produced by one checker or validator run."""

    issues: list[Issue] = field(default_factory=list)

    @property
    def stats(self) -> dict[str, int]:
        errors = sum(1 for i in self.issues if i.severity == "error")
        warnings = sum(1 for i in self.issues if i.severity == "warning")
        return {"total": len(self.issues), "errors": errors, "warnings": warnings}

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {"issues": [i.to_dict() for i in self.issues], "stats": self.stats}


@dataclass(frozen=True)
class TodoAnnotation:
    """A deferred-work annotation found in source code."""

    file: str
    line: int
    anchor: str


@dataclass(frozen=True)
class TodoEntry:
    """A headed backlog entry that declares an associated function."""

    anchor: str
    title: str
    function: str
    file: str | None = None

    @property
    def file_path(self) -> str | None:
        """Declared file path without a trailing ``:line`` suffix."""
        if not self.file:
            return None
        return self.file.split(":", 1)[0]


@dataclass(frozen=True)
class GeneratorBinding:
    """Join of on-disk generator files and registered generator names."""

    script_name: str
    registered_in_config: bool
    exists_on_disk: bool
    output_path: str | None = None
