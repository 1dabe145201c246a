from __future__ import annotations

import sys

import pytest

from nansi.model import CommandDef, CommandResult, CommandStatus
from nansi.ui.console import Console, set_console


@pytest.fixture(autouse=True)
def plain_console():
    console = Console(color=False)
    set_console(console)
    yield console
    set_console(Console())


def py(name: str, code: str, depends_on=(), **kw) -> CommandDef:
    """A command that runs a snippet with the current interpreter (works on every OS)."""
    if isinstance(depends_on, str):
        depends_on = (depends_on,)
    return CommandDef(name=name, exec=sys.executable, args=("-c", code), depends_on=tuple(depends_on), **kw)


def ok(name: str, depends_on=()) -> CommandDef:
    return py(name, "pass", depends_on)


def fail(name: str, depends_on=(), code: int = 1) -> CommandDef:
    return py(name, f"import sys; sys.exit({code})", depends_on)


class FakeInvoker:
    """Records which commands were invoked and answers with canned exit codes."""

    def __init__(self, exit_codes: dict[str, int] | None = None):
        self.exit_codes = exit_codes or {}
        self.calls: list[str] = []

    def __call__(self, cmd: CommandDef) -> CommandResult:
        self.calls.append(cmd.name)
        code = self.exit_codes.get(cmd.name, 0)
        status = CommandStatus.SUCCEEDED if code == 0 else CommandStatus.FAILED
        return CommandResult.pending(cmd.name).finish(status, exit_code=code, output=f"{cmd.name} ran\n")
