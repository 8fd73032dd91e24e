"""
Behavioral signal detectors.

Every detector is a pure function of a body's text returning a list of
Signal. Detectors do not depend on one another; checkers compose them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from ..models import Signal
from .registry import SetterRegistry

DetectFn = Callable[[str], list[Signal]]

# `throw new TypeError(...)`, `throw new errors.NotFound(...)`, `throw ValidationError(...)`
THROW_PATTERN = re.compile(
    r"\bthrow\s+(?:new\s+(?P<constructed>[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)"
    r"|(?P<called>[A-Z][\w$]*)\s*\()"
)

# `return` followed by a value on the same line; bare `return;` / `return` do not count
RETURN_PATTERN = re.compile(r"\breturn\b[ \t]*(?=[^\s;}])")

INTERFACE_MUTATIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\.innerHTML\s*=(?!=)"), "DOM: element.innerHTML"),
    (re.compile(r"\.outerHTML\s*=(?!=)"), "DOM: element.outerHTML"),
    (re.compile(r"\.textContent\s*=(?!=)"), "DOM: element.textContent"),
    (re.compile(r"\.value\s*=(?!=)"), "DOM: input.value"),
    (re.compile(r"\.setAttribute\s*\("), "DOM: element.setAttribute"),
    (re.compile(r"\.classList\.(?:add|remove|toggle)\s*\("), "DOM: element.classList"),
    (re.compile(r"\.appendChild\s*\("), "DOM: appendChild"),
    (re.compile(r"\.insertBefore\s*\("), "DOM: insertBefore"),
    (re.compile(r"\.removeChild\s*\("), "DOM: removeChild"),
    (re.compile(r"\.remove\(\s*\)"), "DOM: element.remove()"),
    (re.compile(r"\bdocument\.createElement\s*\("), "DOM: createElement"),
)

PERSISTENCE_WRITES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\baddDoc\s*\("), "Firestore: addDoc()"),
    (re.compile(r"\bsetDoc\s*\("), "Firestore: setDoc()"),
    (re.compile(r"\bupdateDoc\s*\("), "Firestore: updateDoc()"),
    (re.compile(r"\bdeleteDoc\s*\("), "Firestore: deleteDoc()"),
    (re.compile(r"\blocalStorage\.setItem\s*\("), "localStorage.setItem"),
    (re.compile(r"\bsessionStorage\.setItem\s*\("), "sessionStorage.setItem"),
)

SIDE_EFFECTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bfetch\s*\("), "Network: fetch() call"),
    (re.compile(r"\.(?:post|get|put|delete)\s*\("), "Network: HTTP request"),
    (re.compile(r"\blocalStorage\.setItem\s*\("), "Storage: localStorage write"),
    (re.compile(r"\bsessionStorage\.setItem\s*\("), "Storage: sessionStorage write"),
    (re.compile(r"\baddDoc\s*\("), "Database: Firestore addDoc()"),
    (re.compile(r"\bsetDoc\s*\("), "Database: Firestore setDoc()"),
    (re.compile(r"\bupdateDoc\s*\("), "Database: Firestore updateDoc()"),
    (re.compile(r"\bdeleteDoc\s*\("), "Database: Firestore deleteDoc()"),
    (re.compile(r"\.innerHTML\s*=(?!=)"), "DOM: Modifies innerHTML"),
    (re.compile(r"\.appendChild\s*\("), "DOM: Appends elements"),
    (re.compile(r"\.removeChild\s*\(|\.remove\(\s*\)"), "DOM: Removes elements"),
    (re.compile(r"\.classList\.(?:add|remove|toggle)\s*\("), "DOM: Modifies classes"),
    (re.compile(r"\bdocument\.createElement\s*\("), "DOM: Creates elements"),
    (re.compile(r"\bsetTimeout\s*\("), "Timer: setTimeout()"),
    (re.compile(r"\bsetInterval\s*\("), "Timer: setInterval()"),
    (re.compile(r"\bconsole\.(?:log|warn|error|info)\b"), "Console: Logging"),
    (re.compile(r"\.addEventListener\s*\("), "Events: Adds event listener"),
    (re.compile(r"\.removeEventListener\s*\("), "Events: Removes event listener"),
    (re.compile(r"\bwindow\.[\w$]+\s*=(?!=)"), "Global: Mutates window property"),
    (re.compile(r"\bdocument\.[\w$]+\s*=(?!=)"), "Global: Mutates document property"),
    (re.compile(r"\bnew\s+Audio\s*\("), "Media: Creates Audio element"),
    (re.compile(r"\.play\(\s*\)"), "Media: Plays audio/video"),
    (re.compile(r"\.pause\(\s*\)"), "Media: Pauses audio/video"),
)

IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


def detect_throws(body: str) -> list[Signal]:
    """One signal per distinct raised error kind, in order of first appearance."""
    seen: dict[str, None] = {}
    for m in THROW_PATTERN.finditer(body):
        kind = m.group("constructed") or m.group("called")
        seen.setdefault(kind.rsplit(".", 1)[-1], None)
    return [Signal(kind="throws", detail=name, source=name) for name in seen]


def detect_returns(body: str) -> list[Signal]:
    signals = []
    for m in RETURN_PATTERN.finditer(body):
        line_end = body.find("\n", m.start())
        statement = body[m.start():line_end if line_end != -1 else None].strip()
        signals.append(Signal(kind="returns", detail=statement[:60]))
    return signals


def _match_catalogue(
    body: str,
    catalogue: Iterable[tuple[re.Pattern[str], str]],
    kind: str,
) -> list[Signal]:
    return [
        Signal(kind=kind, detail=label, source=pattern.pattern)  # type: ignore[arg-type]
        for pattern, label in catalogue
        if pattern.search(body)
    ]


def detect_interface_mutations(body: str) -> list[Signal]:
    return _match_catalogue(body, INTERFACE_MUTATIONS, "interface-mutation")


def detect_persistence_writes(body: str) -> list[Signal]:
    return _match_catalogue(body, PERSISTENCE_WRITES, "persistence-write")


def detect_side_effects(body: str) -> list[Signal]:
    """Observable effects of any kind: I/O, DOM, timers, logging, listeners, globals."""
    return _match_catalogue(body, SIDE_EFFECTS, "side-effect")


def parameter_list(signature: str, name: str) -> str | None:
    """Text between the parentheses of ``name``'s parameter list on its definition line.

    A bare single arrow parameter (``const f = x => ...``) is returned as is.
    """
    escaped = re.escape(name)
    m = re.search(
        rf"(?<![\w$]){escaped}\s*(?:=\s*(?:async\s+)?(?:function\b\s*\*?\s*[\w$]*\s*)?)?\(([^)]*)\)",
        signature,
    )
    if m:
        return m.group(1)
    m = re.search(rf"(?<![\w$]){escaped}\s*=\s*(?:async\s+)?([A-Za-z_$][\w$]*)\s*=>", signature)
    return m.group(1) if m else None


def parse_parameters(params: str) -> list[tuple[str, bool]]:
    """``(name, has_default)`` pairs; destructuring patterns are skipped."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in params:
        if ch in "{[(":
            depth += 1
        elif ch in "}])":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))

    parsed = []
    for part in parts:
        name, sep, _ = part.partition("=")
        name = name.split(":", 1)[0].strip().removeprefix("...").rstrip("?").strip()
        if IDENTIFIER.fullmatch(name):
            parsed.append((name, bool(sep)))
    return parsed


def _has_null_check(name: str, body: str) -> bool:
    escaped = re.escape(name)
    patterns = (
        rf"\bif\s*\(\s*!\s*{escaped}\s*\)",
        rf"(?<![\w$.]){escaped}\s*={{2,3}}\s*(?:null|undefined)\b",
        rf"(?<![\w$.]){escaped}\s*(?:\|\||\?\?)",
    )
    return any(re.search(pattern, body) for pattern in patterns)


def detect_optional_parameters(params: str, body: str) -> list[Signal]:
    """Parameters that have a default value or are null-checked in ``body``."""
    signals = []
    for name, has_default in parse_parameters(params):
        if has_default:
            signals.append(Signal(kind="optional-parameter", detail=name, source="default"))
        elif _has_null_check(name, body):
            signals.append(Signal(kind="optional-parameter", detail=name, source="null-check"))
    return signals


class StateSetterDetector:
    """Finds calls to registered setters and maps each to its state field."""

    def __init__(self, registry: SetterRegistry):
        self.registry = registry
        self._patterns = {
            setter: re.compile(rf"(?<![\w$]){re.escape(setter)}\s*\(") for setter in registry
        }

    def __call__(self, body: str) -> list[Signal]:
        signals = []
        for setter, pattern in self._patterns.items():
            if pattern.search(body):
                signals.append(
                    Signal(
                        kind="state-mutation",
                        detail=self.registry.qualified(setter),
                        source=setter,
                        field=self.registry.field_for(setter),
                    )
                )
        return signals


@dataclass(frozen=True)
class Detector:
    """A named detector, iterated uniformly by checkers."""

    name: str
    detect: DetectFn


def mutation_detectors(registry: SetterRegistry) -> list[Detector]:
    return [
        Detector("state", StateSetterDetector(registry)),
        Detector("interface", detect_interface_mutations),
        Detector("persistence", detect_persistence_writes),
    ]


def default_detectors(registry: SetterRegistry) -> list[Detector]:
    return [
        Detector("throws", detect_throws),
        Detector("returns", detect_returns),
        *mutation_detectors(registry),
    ]


def collect_signals(body: str, detectors: Iterable[Detector]) -> list[Signal]:
    signals: list[Signal] = []
    for detector in detectors:
        signals.extend(detector.detect(body))
    return signals
