"""Configuration loading (contractlint.toml or [tool.contractlint] in pyproject.toml)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

CONFIG_FILENAME = "contractlint.toml"

SEVERITY_KEYS = {
    "error-contracts": "error_contract_severity",
    "return-types": "return_type_severity",
    "mutations": "mutation_severity",
    "async-boundaries": "async_boundary_severity",
    "annotation-structure": "annotation_structure_severity",
    "side-effects": "side_effect_severity",
    "nullability": "nullability_severity",
}

# camelCase spellings accepted for the severity options
_CAMEL_ALIASES = {
    "errorContractSeverity": "error_contract_severity",
    "returnTypeSeverity": "return_type_severity",
    "mutationSeverity": "mutation_severity",
    "asyncBoundarySeverity": "async_boundary_severity",
    "annotationStructureSeverity": "annotation_structure_severity",
    "sideEffectsSeverity": "side_effect_severity",
    "nullabilitySeverity": "nullability_severity",
}

_POSITIVE_INT_KEYS = (
    "mutation_threshold",
    "side_effect_threshold",
    "body_lookahead",
    "annotation_lookback",
    "mutation_lookback",
)

DEFAULT_ENABLED = ("error-contracts", "return-types", "mutations")

DEFAULT_OUTPUT_PATTERNS = (
    r"\.cursor/rules/(\d+-[a-z-]+\.mdc)",
    r"desloppify-local/cursor-docs/([a-z-]+\.mdc)",
)


class ConfigError(ValueError):
    """Raised when the configuration file cannot be parsed or is invalid."""


@dataclass
class RegistryConfig:
    """Where the state-setter registry comes from."""

    setters: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)
    namespace: str = "app"
    state_module: str | None = None
    file: str | None = None


@dataclass
class ContractConfig:
    """Settings for the contract checkers."""

    error_contract_severity: str = "warning"
    return_type_severity: str = "warning"
    mutation_severity: str = "warning"
    async_boundary_severity: str = "warning"
    annotation_structure_severity: str = "warning"
    side_effect_severity: str = "warning"
    nullability_severity: str = "warning"
    mutation_threshold: int = 2
    side_effect_threshold: int = 2
    body_lookahead: int = 200
    annotation_lookback: int = 10
    mutation_lookback: int = 15
    literal_aware: bool = True
    enabled: list[str] = field(default_factory=lambda: list(DEFAULT_ENABLED))
    include: list[str] = field(default_factory=lambda: ["**/*.js", "**/*.mjs"])
    exclude: list[str] = field(default_factory=lambda: ["node_modules/**", "**/node_modules/**"])
    fix_hints: dict[str, str] = field(default_factory=dict)
    registry: RegistryConfig = field(default_factory=RegistryConfig)

    def severity_for(self, checker_id: str) -> str:
        """Return the configured severity for a checker ("error" or "warning")."""
        key = SEVERITY_KEYS.get(checker_id)
        value = getattr(self, key, "warning") if key else "warning"
        return "error" if value == "error" else "warning"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ContractConfig":
        """Build from a plain mapping; accepts snake_case and camelCase severity keys."""
        config = cls()
        for raw_key, value in data.items():
            key = _CAMEL_ALIASES.get(raw_key, raw_key)
            if key in SEVERITY_KEYS.values():
                setattr(config, key, _as_severity(value))
            elif key in _POSITIVE_INT_KEYS:
                setattr(config, key, _as_positive_int(key, value))
            elif key == "literal_aware":
                config.literal_aware = _as_bool(key, value)
            elif key in ("enabled", "include", "exclude"):
                setattr(config, key, _as_str_list(value))
            elif key == "fix_hints":
                config.fix_hints = {str(k): str(v) for k, v in _coerce_dict(value).items()}
            elif key == "registry":
                config.registry = _load_registry(_coerce_dict(value))
        return config


@dataclass
class TodoConfig:
    """Settings for the code/backlog cross-reference validator."""

    document: str = "docs/TODO.md"
    source_dirs: list[str] = field(default_factory=lambda: ["js", "services", "routes", "middleware"])
    extensions: list[str] = field(default_factory=lambda: [".js", ".mjs"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["node_modules"])


@dataclass
class WiringConfig:
    """Settings for the generator wiring validator."""

    config_file: str = "package.json"
    script: str = "rules:generate"
    generators_dir: str = "scripts"
    pattern: str = "generate-*-rule.mjs"
    output_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_OUTPUT_PATTERNS))


@dataclass
class Config:
    """Top-level configuration for one repository."""

    root: Path
    contracts: ContractConfig = field(default_factory=ContractConfig)
    todos: TodoConfig = field(default_factory=TodoConfig)
    wiring: WiringConfig = field(default_factory=WiringConfig)
    source: Path | None = None


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if isinstance(v, (str, int, float))]
    return []


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def _as_severity(value: Any) -> str:
    return "error" if str(value).strip().lower() == "error" else "warning"


def _as_positive_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return number


def _load_registry(data: dict[str, Any]) -> RegistryConfig:
    namespace = str(data.get("namespace", "app")).strip() or "app"
    state_module = data.get("state_module")
    registry_file = data.get("file")
    return RegistryConfig(
        setters=_as_str_list(data.get("setters")),
        fields={str(k): str(v) for k, v in _coerce_dict(data.get("fields")).items()},
        namespace=namespace,
        state_module=str(state_module) if isinstance(state_module, str) else None,
        file=str(registry_file) if isinstance(registry_file, str) else None,
    )


def _load_todos(data: dict[str, Any]) -> TodoConfig:
    config = TodoConfig()
    if isinstance(data.get("document"), str):
        config.document = data["document"]
    if "source_dirs" in data:
        config.source_dirs = _as_str_list(data["source_dirs"])
    if "extensions" in data:
        config.extensions = _as_str_list(data["extensions"])
    if "exclude_dirs" in data:
        config.exclude_dirs = _as_str_list(data["exclude_dirs"])
    return config


def _load_wiring(data: dict[str, Any]) -> WiringConfig:
    config = WiringConfig()
    for key in ("config_file", "script", "generators_dir", "pattern"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            setattr(config, key, value.strip())
    if "output_patterns" in data:
        config.output_patterns = _as_str_list(data["output_patterns"])
    return config


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def find_config_file(root: Path) -> tuple[Path, bool] | None:
    """Locate the configuration file for a repository root.

    Returns ``(path, nested)`` where ``nested`` means the settings live under
    ``[tool.contractlint]`` in pyproject.toml.
    """
    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return candidate, False
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        data = _read_toml(pyproject)
        if isinstance(data.get("tool"), dict) and "contractlint" in data["tool"]:
            return pyproject, True
    return None


def load_config(root: Path, config_path: Path | None = None) -> Config:
    """Load configuration for ``root``; missing files yield defaults."""
    root = root.resolve()
    nested = False
    if config_path is None:
        found = find_config_file(root)
        if found is None:
            return Config(root=root)
        config_path, nested = found
    elif not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {config_path}")
    else:
        nested = config_path.name == "pyproject.toml"

    data = _read_toml(config_path)
    if nested:
        data = _coerce_dict(_coerce_dict(data.get("tool")).get("contractlint"))

    return Config(
        root=root,
        contracts=ContractConfig.from_mapping(_coerce_dict(data.get("contracts"))),
        todos=_load_todos(_coerce_dict(data.get("todos"))),
        wiring=_load_wiring(_coerce_dict(data.get("wiring"))),
        source=config_path,
    )
