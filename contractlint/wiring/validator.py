"""
Generator wiring: files on disk vs. names registered in the build configuration.

The registration is a single script string in ``package.json`` such as::

    "rules:generate": "node scripts/generate-api-rule.mjs && node scripts/generate-schema-rule.mjs"

Both directions of the set difference are errors. A generator whose source
shows no sign of writing to a recognized output path gets a warning.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..config import WiringConfig
from ..models import CheckResult, GeneratorBinding, Issue

logger = logging.getLogger(__name__)

COMMAND_TOKEN = re.compile(r"[^\s;&|'\"]+")


def _normalize_dir(path: str) -> str:
    path = path.strip().replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    path = path.strip("/")
    return "" if path == "." else path


def registered_generators(command: str, pattern: str, generators_dir: str | None = None) -> dict[str, str]:
    """Map generator basename -> the path token referencing it, in command order.

    With ``generators_dir`` only tokens whose directory is that directory count.
    """
    expected_dir = _normalize_dir(generators_dir) if generators_dir is not None else None
    registered: dict[str, str] = {}
    for token in COMMAND_TOKEN.findall(command):
        directory, _, name = token.rpartition("/")
        if not fnmatch.fnmatchcase(name, pattern):
            continue
        if expected_dir is not None and _normalize_dir(directory) != expected_dir:
            continue
        registered.setdefault(name, token)
    return registered


def generator_files(directory: Path, pattern: str) -> list[str]:
    """Basenames in ``directory`` (non-recursive) matching the naming convention."""
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file() and fnmatch.fnmatchcase(p.name, pattern))


def find_output_path(text: str, output_patterns: Iterable[str]) -> str | None:
    """First recognized output path the generator source mentions, if any."""
    for pattern in output_patterns:
        m = re.search(pattern, text)
        if m:
            return m.group(0)
    return None


def load_registration(config_path: Path, script: str) -> str | None:
    """The registration script string, or None if absent or unreadable."""
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Cannot read %s: %s", config_path, exc)
        return None
    scripts = data.get("scripts") if isinstance(data, dict) else None
    if not isinstance(scripts, dict):
        return None
    command = scripts.get(script)
    return command if isinstance(command, str) and command.strip() else None


@dataclass
class WiringReport:
    """Outcome of one wiring validation."""

    bindings: list[GeneratorBinding] = field(default_factory=list)
    result: CheckResult = field(default_factory=CheckResult)

    @property
    def exit_code(self) -> int:
        """0 only when the sets agree and every generator shows output evidence."""
        return 1 if self.result.issues else 0


def _issue(file: str, kind: str, severity: str, message: str, suggestion: str) -> Issue:
    return Issue(
        file=file,
        line=None,
        function=None,
        kind=kind,
        severity=severity,
        message=message,
        suggestion=suggestion,
    )


def validate_wiring(root: Path, config: WiringConfig) -> WiringReport:
    """Compare registered generators with generator files under ``root``."""
    report = WiringReport()
    issues = report.result.issues

    command = load_registration(root / config.config_file, config.script)
    if command is None:
        issues.append(
            _issue(
                config.config_file,
                "missing-generator-script",
                "error",
                f'No "{config.script}" script found in {config.config_file}',
                f'Add a "{config.script}" entry to the scripts section',
            )
        )
        return report

    registered = registered_generators(command, config.pattern, config.generators_dir)
    directory = root / config.generators_dir
    on_disk = generator_files(directory, config.pattern)
    logger.debug("%d registered generators, %d on disk", len(registered), len(on_disk))

    for name in on_disk:
        if name not in registered:
            issues.append(
                _issue(
                    f"{config.generators_dir}/{name}",
                    "unregistered-generator",
                    "error",
                    f"Generator {name} is not wired into {config.script}",
                    f'Add it to the "{config.script}" script in {config.config_file}',
                )
            )

    for name, token in registered.items():
        if name not in on_disk:
            issues.append(
                _issue(
                    config.config_file,
                    "missing-generator-file",
                    "error",
                    f"{config.script} references {token}, which does not exist",
                    f"Remove it from {config.script} or create {config.generators_dir}/{name}",
                )
            )

    for name in on_disk:
        output_path = None
        try:
            text = (directory / name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable generator %s: %s", name, exc)
        else:
            output_path = find_output_path(text, config.output_patterns)
            if output_path is None:
                issues.append(
                    _issue(
                        f"{config.generators_dir}/{name}",
                        "missing-output-path",
                        "warning",
                        f"{name} doesn't seem to write to a recognized output path",
                        "Write the generated rule under .cursor/rules/ or desloppify-local/cursor-docs/",
                    )
                )
        report.bindings.append(
            GeneratorBinding(
                script_name=name,
                registered_in_config=name in registered,
                exists_on_disk=True,
                output_path=output_path,
            )
        )

    for name in registered:
        if name not in on_disk:
            report.bindings.append(GeneratorBinding(script_name=name, registered_in_config=True, exists_on_disk=False))

    return report
