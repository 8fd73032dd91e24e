"""Functions with several side effects must document them with @mutates-state."""

from __future__ import annotations

from ..config import ContractConfig
from ..models import FunctionRecord, Issue, Signal
from ..scan.source import SourceFile
from ..signals.detectors import collect_signals, mutation_detectors
from ..signals.registry import SetterRegistry
from .base import ContractChecker

MAX_SUGGESTED_INTERFACE = 5
MAX_REPORTED_PER_GROUP = 3


class MutationChecker(ContractChecker):
    """Flags functions whose distinct mutations reach ``mutation_threshold``.

    State setters count through the injected registry; the setters themselves
    are exempt by name.
    """

    id = "mutations"
    kind = "missing-mutates-state"
    tag = "mutates-state"
    subject = "functions with undocumented state mutations"
    empty_message = "All functions document their state mutations"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-mutations"

    def __init__(self, config: ContractConfig | None = None, registry: SetterRegistry | None = None):
        super().__init__(config, registry)
        self.detectors = mutation_detectors(self.registry)

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        if record.name in self.registry:
            return None

        body = source.body(record, max_lookahead=self.config.body_lookahead)
        mutations = tuple(collect_signals(body.code, self.detectors))
        if len(mutations) < self.config.mutation_threshold:
            return None
        if self.has_tag(source, record, lookback=self.config.mutation_lookback):
            return None

        return self.issue(
            record,
            message=(
                f"Function '{record.name}' mutates {len(mutations)} things "
                "but lacks @mutates-state annotation"
            ),
            suggestion=suggest_mutates_state(mutations),
            mutations=mutations,
        )

    def describe(self, issue: Issue) -> list[str]:
        groups = issue.detected_mutations
        lines = [f"Line {issue.line}: {issue.function}()", f"  Mutates {len(issue.mutations)} things:"]
        for label, key in (("State", "state"), ("DOM", "interface")):
            items = groups[key]
            if items:
                more = "..." if len(items) > MAX_REPORTED_PER_GROUP else ""
                lines.append(f"    {label}: {', '.join(items[:MAX_REPORTED_PER_GROUP])}{more}")
        if groups["persistence"]:
            lines.append(f"    Database: {', '.join(groups['persistence'])}")
        lines.append("  Add:")
        lines.extend(f"    {line}" for line in issue.suggestion.splitlines())
        return lines


def suggest_mutates_state(mutations: tuple[Signal, ...]) -> str:
    """Build the ``// @mutates-state`` block listing each detected mutation."""
    lines = ["// @mutates-state"]
    interface_count = 0
    for signal in mutations:
        if signal.kind == "interface-mutation":
            interface_count += 1
            if interface_count > MAX_SUGGESTED_INTERFACE:
                continue
        lines.append(f"// - {signal.detail}")
    return "\n".join(lines)
