"""Behavioral signal detection for function bodies."""

from .detectors import (
    INTERFACE_MUTATIONS,
    PERSISTENCE_WRITES,
    SIDE_EFFECTS,
    Detector,
    StateSetterDetector,
    collect_signals,
    default_detectors,
    detect_interface_mutations,
    detect_optional_parameters,
    detect_persistence_writes,
    detect_returns,
    detect_side_effects,
    detect_throws,
    mutation_detectors,
    parameter_list,
    parse_parameters,
)
from .registry import SetterRegistry, field_for_setter, load_registry

__all__ = [
    "INTERFACE_MUTATIONS",
    "PERSISTENCE_WRITES",
    "SIDE_EFFECTS",
    "Detector",
    "StateSetterDetector",
    "collect_signals",
    "default_detectors",
    "detect_interface_mutations",
    "detect_optional_parameters",
    "detect_persistence_writes",
    "detect_returns",
    "detect_side_effects",
    "detect_throws",
    "mutation_detectors",
    "parameter_list",
    "parse_parameters",
    "SetterRegistry",
    "field_for_setter",
    "load_registry",
]
