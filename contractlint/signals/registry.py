"""Registry of state-setter names and the logical state fields they write."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Mapping

import yaml

from ..config import ConfigError, RegistryConfig

logger = logging.getLogger(__name__)

# `export function setX(` and `export const setX = (` in a state module
EXPORTED_SETTER = re.compile(
    r"^\s*export\s+(?:(?:async\s+)?function\s+(set[A-Z][\w$]*)\s*\(|(?:const|let)\s+(set[A-Z][\w$]*)\s*=)",
    re.M,
)


def field_for_setter(setter: str) -> str:
    """Derive the logical field name: ``setVoiceIndex`` -> ``voiceIndex``."""
    stem = setter[3:] if setter.startswith("set") else setter
    return stem[:1].lower() + stem[1:]


@dataclass(frozen=True)
class SetterRegistry:
    """Single source of truth for setter -> field mapping.

    Passed to every detector and checker that needs it.
    """

    setters: Mapping[str, str] = field(default_factory=dict)
    namespace: str = "app"

    @classmethod
    def from_names(cls, names: Iterable[str], namespace: str = "app") -> "SetterRegistry":
        return cls({name: field_for_setter(name) for name in names}, namespace)

    @classmethod
    def from_state_module(cls, text: str, namespace: str = "app") -> "SetterRegistry":
        """Discover exported setters in the text of a state module."""
        names = [m.group(1) or m.group(2) for m in EXPORTED_SETTER.finditer(text)]
        return cls.from_names(names, namespace)

    @classmethod
    def from_yaml(cls, text: str, namespace: str = "app") -> "SetterRegistry":
        """Load a YAML registry: either a list of setters or a setter -> field mapping."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid setter registry: {exc}") from exc
        if isinstance(data, dict) and ("setters" in data or "namespace" in data):
            namespace = str(data.get("namespace") or namespace)
            data = data.get("setters") or {}
        if isinstance(data, list):
            return cls.from_names([str(n) for n in data], namespace)
        if isinstance(data, dict):
            return cls({str(k): str(v) if v else field_for_setter(str(k)) for k, v in data.items()}, namespace)
        raise ConfigError("Setter registry must be a list or a mapping")

    def merged(self, other: "SetterRegistry") -> "SetterRegistry":
        combined = dict(self.setters)
        combined.update(other.setters)
        return SetterRegistry(combined, self.namespace)

    def field_for(self, setter: str) -> str | None:
        return self.setters.get(setter)

    def qualified(self, setter: str) -> str:
        """Human-readable target, e.g. ``app.voiceIndex (via setVoiceIndex)``."""
        return f"{self.namespace}.{self.setters[setter]} (via {setter})"

    def __contains__(self, name: object) -> bool:
        return name in self.setters

    def __iter__(self) -> Iterator[str]:
        return iter(self.setters)

    def __len__(self) -> int:
        return len(self.setters)


def load_registry(config: RegistryConfig, root: Path) -> SetterRegistry:
    """Assemble the registry from inline names, explicit fields, a state module and a YAML file."""
    registry = SetterRegistry.from_names(config.setters, config.namespace)
    if config.fields:
        registry = registry.merged(SetterRegistry(dict(config.fields), config.namespace))

    if config.state_module:
        path = root / config.state_module
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("State module %s unreadable: %s", path, exc)
        else:
            discovered = SetterRegistry.from_state_module(text, config.namespace)
            logger.debug("Discovered %d setters in %s", len(discovered), config.state_module)
            registry = registry.merged(discovered)

    if config.file:
        path = root / config.file
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Setter registry file not readable: {path}") from exc
        registry = registry.merged(SetterRegistry.from_yaml(text, config.namespace))

    return registry
