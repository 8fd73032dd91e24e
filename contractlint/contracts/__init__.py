"""Contract checkers (signals vs. annotations) and their shared engine."""

from __future__ import annotations

from typing import Iterable

from ..config import ConfigError, ContractConfig
from ..signals.registry import SetterRegistry
from .async_boundaries import AsyncBoundaryChecker
from .base import ContractChecker
from .engine import discover_files, merge_issues, run_checkers
from .errors import ErrorContractChecker
from .mutations import MutationChecker
from .nullability import NullabilityChecker
from .report import generate_report
from .returns import ReturnTypeChecker
from .side_effects import SideEffectChecker
from .structure import AnnotationStructureChecker

CHECKERS: dict[str, type[ContractChecker]] = {
    ErrorContractChecker.id: ErrorContractChecker,
    ReturnTypeChecker.id: ReturnTypeChecker,
    MutationChecker.id: MutationChecker,
    AsyncBoundaryChecker.id: AsyncBoundaryChecker,
    AnnotationStructureChecker.id: AnnotationStructureChecker,
    SideEffectChecker.id: SideEffectChecker,
    NullabilityChecker.id: NullabilityChecker,
}


def build_checkers(
    config: ContractConfig,
    registry: SetterRegistry,
    only: Iterable[str] | None = None,
) -> list[ContractChecker]:
    """Instantiate the enabled checkers (or ``only`` those named), in registry order."""
    wanted = set(only) if only else set(config.enabled)
    unknown = wanted - set(CHECKERS)
    if unknown:
        raise ConfigError(f"Unknown checker(s): {', '.join(sorted(unknown))}")
    return [cls(config, registry) for cid, cls in CHECKERS.items() if cid in wanted]


__all__ = [
    "CHECKERS",
    "AnnotationStructureChecker",
    "AsyncBoundaryChecker",
    "ContractChecker",
    "ErrorContractChecker",
    "MutationChecker",
    "NullabilityChecker",
    "ReturnTypeChecker",
    "SideEffectChecker",
    "build_checkers",
    "discover_files",
    "generate_report",
    "merge_issues",
    "run_checkers",
]
