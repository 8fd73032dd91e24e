"""Tests for the human-readable checker report."""

from contractlint.config import ContractConfig
from contractlint.contracts import ErrorContractChecker, generate_report
from contractlint.models import Issue


def _issue(file: str, line: int) -> Issue:
    return Issue(
        file=file,
        line=line,
        function=f"fn{line}",
        kind="missing-throws",
        severity="warning",
        message="m",
        suggestion="Add: // @throws {X}",
        error_types=("X",),
    )


def test_empty_report_ends_with_hint():
    checker = ErrorContractChecker()
    lines = generate_report(checker, []).splitlines()
    assert lines[0] == checker.empty_message
    assert lines[-1] == f"  {checker.default_fix_hint}"


def test_report_truncates_files_and_issues():
    checker = ErrorContractChecker()
    issues = [_issue(f"f{f}.js", line) for f in range(7) for line in range(1, 5)]
    report = generate_report(checker, issues)
    lines = report.splitlines()

    assert lines[0] == "Found 28 functions missing @throws annotations:"
    assert "  f0.js:" in lines
    assert "  f4.js:" in lines
    assert "  f5.js:" not in lines
    assert report.count("... and 1 more in this file") == 5
    assert "  ... and 2 more files" in lines
    assert "fn4() throws" not in report
    assert lines[-1] == f"  {checker.default_fix_hint}"


def test_fix_hint_is_configurable():
    checker = ErrorContractChecker(ContractConfig(fix_hints={"error-contracts": "Run make annotate"}))
    report = generate_report(checker, [_issue("a.js", 1)])
    assert report.splitlines()[-1] == "  Run make annotate"
    assert "    Line 1: fn1() throws X" in report.splitlines()
