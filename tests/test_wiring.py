"""Tests for the generator wiring validator."""

import json
from pathlib import Path

from contractlint.config import WiringConfig
from contractlint.wiring import find_output_path, registered_generators, validate_wiring


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _package_json(root: Path, command: str) -> None:
    _write(root / "package.json", json.dumps({"scripts": {"rules:generate": command}}))


def test_registered_generators_from_command():
    command = "node scripts/generate-a-rule.mjs&&node ./scripts/generate-b-rule.mjs; echo done"
    assert registered_generators(command, "generate-*-rule.mjs") == {
        "generate-a-rule.mjs": "scripts/generate-a-rule.mjs",
        "generate-b-rule.mjs": "./scripts/generate-b-rule.mjs",
    }


def test_find_output_path():
    patterns = WiringConfig().output_patterns
    assert find_output_path("write('.cursor/rules/20-schema.mdc')", patterns) == ".cursor/rules/20-schema.mdc"
    assert find_output_path("out = 'desloppify-local/cursor-docs/db.mdc'", patterns) == (
        "desloppify-local/cursor-docs/db.mdc"
    )
    assert find_output_path("write('docs/rules.md')", patterns) is None


def test_set_differences_and_output_evidence(tmp_path: Path):
    _package_json(
        tmp_path,
        "node scripts/generate-api-rule.mjs && node scripts/generate-schema-rule.mjs"
        " && node scripts/generate-gone-rule.mjs",
    )
    _write(tmp_path / "scripts" / "generate-api-rule.mjs", "write('.cursor/rules/10-api.mdc');\n")
    _write(tmp_path / "scripts" / "generate-schema-rule.mjs", "write('desloppify-local/cursor-docs/schema.mdc');\n")
    _write(tmp_path / "scripts" / "generate-extra-rule.mjs", "console.log('nothing');\n")
    _write(tmp_path / "scripts" / "helper.mjs", "")

    report = validate_wiring(tmp_path, WiringConfig())
    by_kind = {(i.kind, i.severity): i for i in report.result.issues}
    assert set(by_kind) == {
        ("unregistered-generator", "error"),
        ("missing-generator-file", "error"),
        ("missing-output-path", "warning"),
    }
    assert by_kind[("unregistered-generator", "error")].file == "scripts/generate-extra-rule.mjs"
    assert "generate-gone-rule.mjs" in by_kind[("missing-generator-file", "error")].message
    assert report.exit_code == 1

    bindings = {b.script_name: b for b in report.bindings}
    assert bindings["generate-api-rule.mjs"].output_path == ".cursor/rules/10-api.mdc"
    assert not bindings["generate-extra-rule.mjs"].registered_in_config
    assert not bindings["generate-gone-rule.mjs"].exists_on_disk
    assert "helper.mjs" not in bindings


def test_missing_output_evidence_alone_fails(tmp_path: Path):
    _package_json(tmp_path, "node scripts/generate-api-rule.mjs")
    _write(tmp_path / "scripts" / "generate-api-rule.mjs", "console.log('hi');\n")
    report = validate_wiring(tmp_path, WiringConfig())
    assert [i.kind for i in report.result.issues] == ["missing-output-path"]
    assert not report.result.has_errors
    assert report.exit_code == 1


def test_missing_script_entry(tmp_path: Path):
    _write(tmp_path / "package.json", json.dumps({"scripts": {"build": "vite build"}}))
    report = validate_wiring(tmp_path, WiringConfig())
    assert [i.kind for i in report.result.issues] == ["missing-generator-script"]
    assert report.exit_code == 1


def test_fixture_repo_is_wired(fixture_repo_path: Path):
    report = validate_wiring(fixture_repo_path, WiringConfig())
    assert report.result.issues == []
    assert report.exit_code == 0


def test_registered_generators_only_count_the_generators_dir():
    command = "node tools/generate-x-rule.mjs && node ./scripts/generate-y-rule.mjs"
    assert registered_generators(command, "generate-*-rule.mjs", "scripts") == {
        "generate-y-rule.mjs": "./scripts/generate-y-rule.mjs",
    }


def test_generator_registered_from_another_dir_is_not_wired(tmp_path: Path):
    _package_json(tmp_path, "node tools/generate-x-rule.mjs")
    _write(tmp_path / "scripts" / "generate-x-rule.mjs", "write('.cursor/rules/30-x.mdc');\n")
    _write(tmp_path / "tools" / "generate-x-rule.mjs", "write('.cursor/rules/30-x.mdc');\n")

    report = validate_wiring(tmp_path, WiringConfig())
    assert [(i.kind, i.file) for i in report.result.issues] == [
        ("unregistered-generator", "scripts/generate-x-rule.mjs"),
    ]
    assert report.exit_code == 1
