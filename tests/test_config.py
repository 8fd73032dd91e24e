"""Tests for configuration loading."""

from pathlib import Path

import pytest

from contractlint.config import ConfigError, ContractConfig, load_config


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_defaults_without_config_file(tmp_path: Path):
    config = load_config(tmp_path)
    assert config.source is None
    assert config.contracts.mutation_threshold == 2
    assert config.contracts.body_lookahead == 200
    assert config.contracts.annotation_lookback == 10
    assert config.contracts.mutation_lookback == 15
    assert config.contracts.enabled == ["error-contracts", "return-types", "mutations"]
    assert config.todos.document == "docs/TODO.md"
    assert config.wiring.script == "rules:generate"


def test_contractlint_toml(tmp_path: Path):
    _write(
        tmp_path / "contractlint.toml",
        """
[contracts]
errorContractSeverity = "error"
mutation_severity = "ERROR"
mutation_threshold = 3
literal_aware = false
enabled = ["error-contracts", "async-boundaries"]

[contracts.fix_hints]
mutations = "Run make annotate"

[contracts.registry]
setters = ["setSpeed"]
namespace = "store"

[todos]
document = "BACKLOG.md"
source_dirs = ["src"]

[wiring]
script = "generate"
generators_dir = "tools"
""",
    )
    config = load_config(tmp_path)
    contracts = config.contracts
    assert config.source == tmp_path.resolve() / "contractlint.toml"
    assert contracts.severity_for("error-contracts") == "error"
    assert contracts.severity_for("mutations") == "error"
    assert contracts.severity_for("return-types") == "warning"
    assert contracts.mutation_threshold == 3
    assert contracts.literal_aware is False
    assert contracts.enabled == ["error-contracts", "async-boundaries"]
    assert contracts.fix_hints == {"mutations": "Run make annotate"}
    assert contracts.registry.setters == ["setSpeed"]
    assert contracts.registry.namespace == "store"
    assert config.todos.document == "BACKLOG.md"
    assert config.todos.source_dirs == ["src"]
    assert config.wiring.script == "generate"
    assert config.wiring.generators_dir == "tools"
    assert config.wiring.pattern == "generate-*-rule.mjs"


def test_pyproject_tool_table(tmp_path: Path):
    _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "x"\n\n[tool.contractlint.contracts]\nreturn_type_severity = "error"\n',
    )
    config = load_config(tmp_path)
    assert config.contracts.severity_for("return-types") == "error"


def test_pyproject_without_tool_table_uses_defaults(tmp_path: Path):
    _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert load_config(tmp_path).source is None


def test_invalid_values(tmp_path: Path):
    _write(tmp_path / "contractlint.toml", "[contracts]\nmutation_threshold = 0\n")
    with pytest.raises(ConfigError, match="positive"):
        load_config(tmp_path)

    _write(tmp_path / "contractlint.toml", "[contracts\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_explicit_missing_config(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path, tmp_path / "nope.toml")


def test_unknown_checker_severity_defaults_to_warning():
    assert ContractConfig().severity_for("no-such-checker") == "warning"


def test_literal_aware_must_be_boolean(tmp_path: Path):
    _write(tmp_path / "contractlint.toml", '[contracts]\nliteral_aware = "false"\n')
    with pytest.raises(ConfigError, match="literal_aware must be true or false"):
        load_config(tmp_path)


def test_supplemental_checker_options(tmp_path: Path):
    _write(
        tmp_path / "contractlint.toml",
        '[contracts]\nsideEffectsSeverity = "error"\nnullability_severity = "error"\nside_effect_threshold = 3\n',
    )
    contracts = load_config(tmp_path).contracts
    assert contracts.severity_for("side-effects") == "error"
    assert contracts.severity_for("nullability") == "error"
    assert contracts.side_effect_threshold == 3
