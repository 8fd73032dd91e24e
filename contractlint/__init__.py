"""contractlint - contract and cross-reference checks for JavaScript codebases."""

__version__ = "0.1.0"
