"""Functions with several side effects must document them with @side-effects or @pure."""

from __future__ import annotations

from ..models import FunctionRecord, Issue
from ..scan.source import SourceFile
from ..signals.detectors import detect_side_effects
from .base import ContractChecker

MAX_LISTED_PER_CATEGORY = 5


class SideEffectChecker(ContractChecker):
    """Flags functions whose distinct side effects reach ``side_effect_threshold``.

    Either tag satisfies the contract; ``@pure`` on an effectful function is
    left for a reviewer to judge.
    """

    id = "side-effects"
    kind = "missing-side-effects"
    tag = "side-effects"
    subject = "functions with undocumented side effects"
    empty_message = "All functions document their side effects"
    default_fix_hint = "💡 To auto-fix: npm run annotations:generate-side-effects"

    def check_function(self, source: SourceFile, record: FunctionRecord) -> Issue | None:
        body = source.body(record, max_lookahead=self.config.body_lookahead)
        effects = tuple(signal.detail for signal in detect_side_effects(body.code))
        if len(effects) < self.config.side_effect_threshold:
            return None

        block = source.annotations(record, lookback=self.config.mutation_lookback)
        if block is not None and (block.has("side-effects") or block.has("pure")):
            return None

        return self.issue(
            record,
            message=(
                f"Function '{record.name}' has {len(effects)} side effects "
                "but lacks @side-effects annotation"
            ),
            suggestion=suggest_side_effects(effects),
            side_effects=effects,
        )

    def describe(self, issue: Issue) -> list[str]:
        lines = [f"Line {issue.line}: {issue.function}()", f"  Has {len(issue.side_effects)} side effects:"]
        lines.extend(f"    - {effect}" for effect in issue.side_effects[:MAX_LISTED_PER_CATEGORY])
        if len(issue.side_effects) > MAX_LISTED_PER_CATEGORY:
            lines.append(f"    ... and {len(issue.side_effects) - MAX_LISTED_PER_CATEGORY} more")
        lines.append("  Add:")
        lines.extend(f"    {line}" for line in issue.suggestion.splitlines())
        return lines


def suggest_side_effects(effects: tuple[str, ...]) -> str:
    """``// @side-effects`` block listing effects grouped by category."""
    by_category: dict[str, list[str]] = {}
    for effect in effects:
        by_category.setdefault(effect.split(":", 1)[0], []).append(effect)

    lines = ["// @side-effects"]
    for category, items in by_category.items():
        lines.extend(f"// - {item}" for item in items[:MAX_LISTED_PER_CATEGORY])
        if len(items) > MAX_LISTED_PER_CATEGORY:
            lines.append(f"// ... and {len(items) - MAX_LISTED_PER_CATEGORY} more {category} effects")
    lines.append("// @pure false")
    return "\n".join(lines)
