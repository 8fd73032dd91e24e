"""Run several checkers over one pass of the input files."""

from __future__ import annotations

import fnmatch
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Sequence

from ..models import CheckResult, Issue
from ..scan.source import SourceFile
from .base import ContractChecker

logger = logging.getLogger(__name__)


def _check_file(
    checkers: Sequence[ContractChecker],
    root: Path,
    rel_path: str,
    literal_aware: bool,
) -> dict[str, list[Issue]]:
    source = SourceFile.load(root, rel_path, literal_aware=literal_aware)
    if source is None:
        return {}
    return {checker.id: checker.check_source(source) for checker in checkers}


def run_checkers(
    checkers: Sequence[ContractChecker],
    files: Iterable[str],
    *,
    root: Path,
    jobs: int = 1,
) -> dict[str, CheckResult]:
    """Run ``checkers`` over ``files`` and return one result per checker id.

    Files are independent; with ``jobs > 1`` they are processed on a thread
    pool. Issues are always ordered by input file order, then discovery order
    within the file, whatever the completion order.
    """
    paths = list(dict.fromkeys(files))
    literal_aware = all(c.config.literal_aware for c in checkers) if checkers else True

    def work(rel_path: str) -> dict[str, list[Issue]]:
        return _check_file(checkers, root, rel_path, literal_aware)

    if jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            per_file = list(pool.map(work, paths))
    else:
        per_file = [work(p) for p in paths]

    results = {checker.id: CheckResult() for checker in checkers}
    for file_issues in per_file:
        for checker_id, issues in file_issues.items():
            results[checker_id].issues.extend(issues)

    logger.debug("Checked %d files with %d checkers", len(paths), len(checkers))
    return results


def merge_issues(results: dict[str, CheckResult], files: Sequence[str] | None = None) -> CheckResult:
    """Merge per-checker results grouped by file, then line, then checker order."""
    file_order: dict[str, int] = {}
    if files is not None:
        file_order = {f: i for i, f in enumerate(dict.fromkeys(files))}

    merged: list[tuple[int, Issue]] = []
    for checker_index, result in enumerate(results.values()):
        for issue in result.issues:
            merged.append((checker_index, issue))
            file_order.setdefault(issue.file, len(file_order))

    merged.sort(key=lambda pair: (file_order[pair[1].file], pair[1].line or 0, pair[0]))
    return CheckResult([issue for _, issue in merged])


def _excluded(rel_path: str, exclude: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(rel_path, pattern) for pattern in exclude)


def discover_files(
    root: Path,
    include: Sequence[str],
    exclude: Sequence[str] = (),
    paths: Iterable[Path] | None = None,
) -> list[str]:
    """Repository-relative files to check, sorted and deduplicated.

    Without ``paths`` the include globs are expanded under ``root``. Explicit
    files are taken as given; explicit directories are expanded with the
    include globs. Exclude globs apply to both.
    """
    root = root.resolve()
    bases = [root] if paths is None else [Path(p) if Path(p).is_absolute() else root / p for p in paths]

    found: list[str] = []
    for base in bases:
        if base.is_file():
            candidates = [base]
        elif base.is_dir():
            candidates = [p for pattern in include for p in base.glob(pattern) if p.is_file()]
        else:
            logger.debug("Skipping missing path %s", base)
            continue
        for path in sorted(candidates):
            resolved = path.resolve()
            try:
                rel_path = resolved.relative_to(root).as_posix()
            except ValueError:
                rel_path = resolved.as_posix()
            if not _excluded(rel_path, exclude):
                found.append(rel_path)
    return list(dict.fromkeys(found))
