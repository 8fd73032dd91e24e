"""CLI entrypoint for contractlint."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import ConfigError, load_config


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("contractlint")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if verbose and not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@click.group()
@click.version_option(__version__, prog_name="contractlint")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    help="Repository root to analyse (default: current directory)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: contractlint.toml or [tool.contractlint] in pyproject.toml)",
)
@click.option("--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, root: Path, config_path: Path | None, verbose: bool) -> None:
    """contractlint - Contract and cross-reference checks for JavaScript codebases.

    Verifies that functions document what they throw, return and mutate, that
    @todo: annotations and the backlog document agree, and that rule
    generators are wired into the build.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(root, config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--only",
    multiple=True,
    metavar="CHECKER",
    help="Run only this checker (repeatable), e.g. --only mutations",
)
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning"]),
    default="error",
    help="Exit with error if this level or higher found",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--jobs", type=click.IntRange(min=1), default=1, help="Worker threads for file processing")
@click.pass_context
def check(
    ctx: click.Context,
    paths: tuple[Path, ...],
    only: tuple[str, ...],
    fail_on: str,
    output_format: str,
    jobs: int,
) -> None:
    """Check functions against their @throws, @returns and @mutates-state contracts.

    Without PATHS, the include globs from the configuration are used.

    Examples:

        contractlint check

        contractlint check js/ --only mutations --fail-on warning

        contractlint --root ../app check --format json --jobs 4
    """
    from .commands.check_cmd import run_check

    try:
        exit_code = run_check(
            ctx.obj["config"],
            paths=list(paths) or None,
            only=list(only) or None,
            fail_on=fail_on,
            output_format=output_format,
            jobs=jobs,
        )
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    sys.exit(exit_code)


@cli.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def todos(ctx: click.Context, output_format: str) -> None:
    """Validate @todo: annotations against the backlog document (both directions)."""
    from .commands.todo_cmd import run_todos

    sys.exit(run_todos(ctx.obj["config"], output_format))


@cli.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def wiring(ctx: click.Context, output_format: str) -> None:
    """Validate that every rule generator is registered and every registration exists."""
    from .commands.wiring_cmd import run_wiring

    sys.exit(run_wiring(ctx.obj["config"], output_format))


@cli.command()
@click.argument("rule_id")
def explain(rule_id: str) -> None:
    """Explain an issue kind (e.g. contractlint explain missing-throws)."""
    from .commands.explain_cmd import run_explain

    sys.exit(run_explain(rule_id))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
