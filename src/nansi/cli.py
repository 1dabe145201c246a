# cli.py
from __future__ import annotations

import json
import os
import sys

import click

from nansi.loader import load_nansifile
from nansi.plan import ConfigError
from nansi.runner import execute
from nansi.model import CommandStatus
from nansi.ui.console import Console, set_console, get_console

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def _report_config_error(err: ConfigError) -> None:
    console = get_console()
    console.print_error(
        "Invalid NansiFile" if err.source else "Invalid command list",
        f"{err.source + ': ' if err.source else ''}{err.message}",
        details=err.problems or None,
        suggestion="Nothing was executed. Fix the file and run again.",
    )


@click.group()
@click.version_option(package_name="nansi")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    envvar="NANSI_DEBUG",
    help="Enable debug mode (show decisions and stack traces)",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Colorize status tags (disabled when NO_COLOR is set)",
)
@click.pass_context
def cli(ctx, debug, color):
    """nansi: run a declared list of commands, skipping those whose dependencies failed."""
    if "NO_COLOR" in os.environ:
        color = False
    set_console(Console(debug=debug, color=color))
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["color"] = color


@cli.command()
@click.argument("nansifile", type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the run report as JSON")
@click.option("--quiet", is_flag=True, default=False, help="Only print the final summary")
@click.pass_context
def run(ctx, nansifile, as_json, quiet):
    """Run every command in NANSIFILE in order."""
    console = get_console()
    console.quiet = quiet or as_json

    try:
        nf = load_nansifile(nansifile)
    except ConfigError as e:
        _report_config_error(e)
        sys.exit(EXIT_CONFIG_ERROR)

    if not as_json:
        console.print_using_file(nf.path)

    def on_result(idx, cmd, result):
        console.print_status(idx + 1, cmd, result)
        if result.status is CommandStatus.SKIPPED:
            console.print_skip_reason(idx + 1, cmd, result)
        else:
            console.print_output(cmd, result)

    try:
        report = execute(nf.commands, on_result=on_result)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except ConfigError as e:
        _report_config_error(e)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        console.print_exception(e)
        sys.exit(EXIT_RUN_FAILED)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        console.print_results(report)

    sys.exit(EXIT_OK if report.succeeded else EXIT_RUN_FAILED)


@cli.command()
@click.argument("nansifile", type=click.Path(dir_okay=False))
def validate(nansifile):
    """Check NANSIFILE without executing anything."""
    console = get_console()
    try:
        nf = load_nansifile(nansifile)
    except ConfigError as e:
        _report_config_error(e)
        sys.exit(EXIT_CONFIG_ERROR)

    noun = "command" if len(nf) == 1 else "commands"
    console.print_info(f"{nf.path}: valid ({len(nf)} {noun})")


@cli.command(name="help")
@click.argument("command", required=False)
@click.pass_context
def help_(ctx, command):
    """Show help for nansi or for one COMMAND."""
    group = ctx.parent.command
    if command is None:
        click.echo(group.get_help(ctx.parent))
        return

    sub = group.get_command(ctx.parent, command)
    if sub is None:
        raise click.UsageError(f"No such command '{command}'.", ctx=ctx)
    with click.Context(sub, info_name=command, parent=ctx.parent) as sub_ctx:
        click.echo(sub.get_help(sub_ctx))


def main() -> None:
    cli(prog_name="nansi")


if __name__ == "__main__":
    main()
