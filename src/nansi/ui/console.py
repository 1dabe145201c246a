"""Console output formatting utilities for nansi."""

from __future__ import annotations

import sys
from typing import Optional

import click

from nansi.model import CommandDef, CommandResult, CommandStatus, RunReport
from nansi.shell import SPAWN_FAILED


STATUS_TAGS = {
    CommandStatus.SUCCEEDED: ("OK", "green"),
    CommandStatus.FAILED: ("FAIL", "red"),
    CommandStatus.SKIPPED: ("SKIP", "yellow"),
    CommandStatus.PENDING: ("....", None),
}


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, color: bool = True, quiet: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show debug traces and full stack traces
            color: If False, never emit ANSI colors
            quiet: If True, per-command status lines are suppressed
        """
        self.debug = debug
        self.color = color
        self.quiet = quiet

    def _style(self, text: str, fg: Optional[str]) -> str:
        if not self.color or fg is None:
            return text
        return click.style(text, fg=fg)

    def _out(self, message: str = "", err: bool = False) -> None:
        click.echo(message, err=err)

    def print_using_file(self, path: str) -> None:
        """Print which NansiFile is being run."""
        self._out(f"Using NansiFile: {path}")

    def print_status(self, idx: int, cmd: CommandDef, result: CommandResult) -> None:
        """
        Print the one-line status of a finished command.

        Format: [TAG] [idx][name] exec args...
        """
        if self.quiet or not cmd.print_status:
            return
        text, fg = STATUS_TAGS[result.status]
        self._out(f"[{self._style(text, fg)}] [{idx}][{cmd.name}] {cmd.command_line}")

    def print_output(self, cmd: CommandDef, result: CommandResult) -> None:
        """Print captured output when the command asks for it, or when it could not start."""
        if self.quiet or not result.output:
            return
        if cmd.print_output or result.exit_code == SPAWN_FAILED:
            self._out(result.output.rstrip("\n"))

    def print_skip_reason(self, idx: int, cmd: CommandDef, result: CommandResult) -> None:
        if self.quiet:
            return
        self._out(f"Prerequisites for item [{idx}][{cmd.name}] are not met ({result.reason}).")

    def print_results(self, report: RunReport) -> None:
        """Print final results summary."""
        counts = report.counts()
        self._out("\n" + "=" * 40)
        self._out("RESULTS")
        self._out("=" * 40)
        for status in (CommandStatus.SUCCEEDED, CommandStatus.FAILED, CommandStatus.SKIPPED):
            text, fg = STATUS_TAGS[status]
            self._out(f"  {self._style(text, fg)}: {counts[status.value]}")
        outcome = "SUCCESS" if report.succeeded else "FAILED"
        self._out(f"Outcome: {self._style(outcome, 'green' if report.succeeded else 'red')}")

    def print_warning(self, message: str) -> None:
        self._out(f"{self._style('[WARN]', 'yellow')} {message}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        self._out(f"\n{self._style('ERROR', 'red')}: {title}", err=True)
        self._out(message, err=True)
        if details:
            for detail in details:
                self._out(f"  {detail}", err=True)
        if suggestion:
            self._out(f"\n{suggestion}", err=True)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)
        else:
            self._out(f"Error: {exc}", err=True)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        self._out(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self._out(f"[DEBUG] {message}", err=True)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
