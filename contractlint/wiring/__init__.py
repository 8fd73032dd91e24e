"""Generator wiring validation."""

from .validator import WiringReport, find_output_path, generator_files, registered_generators, validate_wiring

__all__ = ["WiringReport", "find_output_path", "generator_files", "registered_generators", "validate_wiring"]
