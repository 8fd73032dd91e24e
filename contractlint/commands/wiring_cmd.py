"""Wiring command implementation."""

import json
from dataclasses import asdict

from rich.console import Console
from rich.table import Table

from ..config import Config
from ..wiring import validate_wiring


def run_wiring(config: Config, output_format: str = "text") -> int:
    """Validate that generator files and registered generators agree.

    Returns:
        Exit code (0 = fully wired, 1 = any error or warning)
    """
    report = validate_wiring(config.root, config.wiring)

    if output_format == "json":
        output = {
            "bindings": [asdict(b) for b in report.bindings],
            **report.result.to_dict(),
        }
        print(json.dumps(output, indent=2, default=str))
        return report.exit_code

    console = Console()
    console.print(f"Validating generator wiring ({config.wiring.script})...", style="dim")

    if report.bindings:
        table = Table(title="Generators")
        table.add_column("Generator", style="cyan")
        table.add_column("Registered", justify="center")
        table.add_column("On disk", justify="center")
        table.add_column("Output")
        for binding in report.bindings:
            table.add_row(
                binding.script_name,
                "✓" if binding.registered_in_config else "✗",
                "✓" if binding.exists_on_disk else "✗",
                binding.output_path or "-",
            )
        console.print(table)

    for issue in report.result.issues:
        if issue.severity == "error":
            prefix, style = "ERROR", "bold red"
        else:
            prefix, style = "WARN", "yellow"
        console.print(f"{prefix}: [{issue.kind}] {issue.file} - {issue.message}", style=style, markup=False)
        console.print(f"    Fix: {issue.suggestion}", style="dim", markup=False)

    if report.exit_code == 0:
        console.print("✅ All generators properly wired", style="bold green")
    else:
        console.print("❌ Generator wiring validation failed", style="bold red")
    return report.exit_code
