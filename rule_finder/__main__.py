import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from rule_finder.errors import ConfigResolutionError, InvalidOptionError
from rule_finder.finder import create_rule_finder
from rule_finder.models import FinderOptions, RuleQuery
from rule_finder.tui import RuleConsoleUI

FAILING_QUERIES = (RuleQuery.UNUSED, RuleQuery.DEPRECATED)


class FatalError(click.ClickException):
    exit_code = 2


def _configure_logging(debug: bool) -> None:
    package_logger = logging.getLogger("rule_finder")
    package_logger.setLevel(logging.DEBUG if debug else logging.ERROR)
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


def _selected_queries(flags: dict[RuleQuery, bool]) -> list[RuleQuery]:
    return [query for query in RuleQuery if flags.get(query)]


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Find current, plugin, available, unused and deprecated lint rules for FILE.",
)
@click.option("-c", "--current", is_flag=True, help="List rules enabled in the config.")
@click.option("-p", "--plugin", is_flag=True, help="List rules supplied by plugins.")
@click.option("-a", "--all-available", is_flag=True, help="List every available rule.")
@click.option("-u", "--unused", is_flag=True, help="List available rules not enabled in the config.")
@click.option("-d", "--deprecated", is_flag=True, help="List enabled rules that are deprecated.")
@click.option("-n", "--no-error", is_flag=True, help="Exit 0 even if unused or deprecated rules are found.")
@click.option("--core/--no-core", default=True, help="Include base registry rules.")
@click.option(
    "-i",
    "--include",
    type=click.Choice(["deprecated"], case_sensitive=False),
    multiple=True,
    help="Include extra rule groups (deprecated).",
)
@click.option("--ext", "extensions", multiple=True, help="File extension to resolve config for (repeatable).")
@click.option("-v", "--verbose", is_flag=True, help="Show per-rule provenance.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.argument("file", required=False, type=click.Path(path_type=Path), default=Path("."))
@click.pass_context
def cli(
    ctx: click.Context,
    current: bool,
    plugin: bool,
    all_available: bool,
    unused: bool,
    deprecated: bool,
    no_error: bool,
    core: bool,
    include: tuple[str, ...],
    extensions: tuple[str, ...],
    verbose: bool,
    debug: bool,
    file: Path,
) -> None:
    _configure_logging(debug)
    ui = RuleConsoleUI(Console())

    queries = _selected_queries(
        {
            RuleQuery.CURRENT: current,
            RuleQuery.PLUGIN: plugin,
            RuleQuery.ALL_AVAILABLE: all_available,
            RuleQuery.UNUSED: unused,
            RuleQuery.DEPRECATED: deprecated,
        }
    )
    if not queries:
        ui.render_no_option()
        raise click.UsageError("no option provided, please provide a valid option", ctx=ctx)

    try:
        options = FinderOptions.from_values(
            omit_core=not core,
            include_deprecated="deprecated" in {item.lower() for item in include},
            extensions=list(extensions),
            verbose=verbose,
        )
    except InvalidOptionError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param_hint="--ext")

    try:
        finder = asyncio.run(create_rule_finder(file, options))
    except ConfigResolutionError as exc:
        raise FatalError(str(exc))

    if verbose:
        ui.render_overview(str(finder.target), finder.config, options)

    exit_code = 0
    errors: list[Exception] = []
    for query in queries:
        report = finder.run(query)
        details = finder.rule_details(report.rules) if verbose else None
        ui.render_report(query, report, details)
        for error in report.errors:
            if error not in errors:
                errors.append(error)
        if query in FAILING_QUERIES and report.rules and not no_error:
            exit_code = 1

    ui.render_errors(errors)
    if errors:
        exit_code = 1
    if exit_code:
        raise click.exceptions.Exit(exit_code)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        return 1
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
