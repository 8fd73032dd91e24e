"""Todos command implementation."""

import json

from rich.console import Console

from ..config import Config
from ..models import Issue
from ..todos import validate_todo_contract


def run_todos(config: Config, output_format: str = "text") -> int:
    """Validate @todo: annotations against the backlog document.

    Returns:
        Exit code (0 = success, 1 = anchor errors found)
    """
    report = validate_todo_contract(config.root, config.todos)

    if output_format == "json":
        output = {
            "document": report.document,
            "annotations": len(report.annotations),
            "entries": len(report.entries),
            **report.result.to_dict(),
        }
        print(json.dumps(output, indent=2, default=str))
        return report.exit_code

    console = Console()
    console.print(f"Validating TODO contract against {report.document}...", style="dim")
    console.print(f"  Found {len(report.annotations)} @todo: annotation(s) in code", style="dim")
    console.print(f"  Found {len(report.entries)} entries with functions in {report.document}", style="dim")
    console.print()

    errors = [i for i in report.result.issues if i.severity == "error"]
    warnings = [i for i in report.result.issues if i.severity == "warning"]

    for issue in errors:
        _print_issue(console, issue, "ERROR", "bold red")
    for issue in warnings:
        _print_issue(console, issue, "WARN", "yellow")

    if not errors and not warnings:
        console.print("✅ TODO contract valid", style="bold green")
    else:
        console.print()
        if errors:
            console.print(f"❌ {len(errors)} error(s)", style="bold red")
        if warnings:
            console.print(f"⚠️  {len(warnings)} warning(s)", style="yellow")
    return report.exit_code


def _print_issue(console: Console, issue: Issue, prefix: str, style: str) -> None:
    file_ref = issue.file
    if issue.line:
        file_ref += f":{issue.line}"
    console.print(f"{prefix}: [{issue.kind}] {file_ref} - {issue.message}", style=style, markup=False)
    if issue.suggestion:
        console.print(f"    {issue.suggestion}", style="dim", markup=False)
