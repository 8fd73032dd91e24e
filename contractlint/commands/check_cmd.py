"""Check command implementation."""

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import Config
from ..contracts import build_checkers, discover_files, generate_report, merge_issues, run_checkers
from ..models import CheckResult, Issue
from ..signals import load_registry

logger = logging.getLogger(__name__)


def run_check(
    config: Config,
    paths: list[Path] | None = None,
    only: list[str] | None = None,
    fail_on: str = "error",
    output_format: str = "text",
    jobs: int = 1,
) -> int:
    """Run the enabled contract checkers.

    Args:
        config: Loaded configuration (root, checker settings, registry source)
        paths: Files or directories to check (default: configured include globs)
        only: Restrict to these checker ids
        fail_on: Exit with error if this level or higher found ("error" or "warning")
        output_format: "text" or "json"
        jobs: Worker threads for file processing

    Returns:
        Exit code (0 = success, 1 = failures found)
    """
    console = Console(stderr=True)
    contracts = config.contracts

    registry = load_registry(contracts.registry, config.root)
    checkers = build_checkers(contracts, registry, only)
    files = discover_files(config.root, contracts.include, contracts.exclude, paths or None)

    if output_format != "json":
        console.print(
            f"Checking {len(files)} file(s) with {len(checkers)} checker(s) in {config.root}...",
            style="dim",
        )
    logger.debug("Registry has %d setters", len(registry))

    results = run_checkers(checkers, files, root=config.root, jobs=jobs)
    merged = merge_issues(results, files)

    if output_format == "json":
        _output_json(results, merged, files)
    else:
        _print_human_output(Console(), checkers, results, merged, len(files))

    counts = merged.stats
    if fail_on == "warning":
        if counts["errors"] > 0 or counts["warnings"] > 0:
            return 1
    elif counts["errors"] > 0:
        return 1
    return 0


def _output_json(results: dict[str, CheckResult], merged: CheckResult, files: list[str]) -> None:
    output = {
        "checkers": {checker_id: result.to_dict() for checker_id, result in results.items()},
        "issues": [issue.to_dict() for issue in merged.issues],
        "summary": {"files": len(files), **merged.stats},
    }
    print(json.dumps(output, indent=2, default=str))


def _print_human_output(console: Console, checkers, results: dict[str, CheckResult], merged: CheckResult, file_count: int) -> None:
    for checker in checkers:
        result = results[checker.id]
        style = _style_for(result.issues)
        console.print()
        console.print(f"[{checker.id}]", style="bold", markup=False)
        console.print(generate_report(checker, result.issues), style=style, markup=False, highlight=False)

    console.print()
    table = Table(title="Contract Summary")
    table.add_column("Checker", style="cyan")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    for checker in checkers:
        stats = results[checker.id].stats
        table.add_row(checker.id, str(stats["errors"]), str(stats["warnings"]))
    console.print(table)

    counts = merged.stats
    console.print()
    console.print(f"Scanned {file_count} file(s)", style="dim")
    if counts["errors"] > 0:
        console.print(f"❌ {counts['errors']} error(s)", style="bold red")
    if counts["warnings"] > 0:
        console.print(f"⚠️  {counts['warnings']} warning(s)", style="yellow")
    if counts["total"] == 0:
        console.print("✅ All contracts satisfied", style="bold green")


def _style_for(issues: list[Issue]) -> str:
    if any(i.severity == "error" for i in issues):
        return "red"
    if issues:
        return "yellow"
    return "green"
