"""Explain command implementation."""

from rich.console import Console
from rich.markdown import Markdown

from ..rules import RULE_EXPLANATIONS, get_rule_ids


def run_explain(rule_id: str) -> int:
    """Explain an issue kind.

    Returns:
        Exit code (0 = success, 1 = rule not found)
    """
    console = Console()
    rule_id = rule_id.lower().strip()

    if rule_id not in RULE_EXPLANATIONS:
        console.print(f"Unknown rule: {rule_id}", style="bold red")
        console.print()
        console.print("Known rules:", style="bold")
        for rid in sorted(get_rule_ids()):
            console.print(f"  - {rid}")
        return 1

    console.print(Markdown(RULE_EXPLANATIONS[rule_id]))
    return 0
