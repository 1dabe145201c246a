# shell.py
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Dict, Optional

from .model import CommandDef, CommandResult, CommandStatus

# Reported when the process never started. Real exit codes are either
# non-negative or the negated number of a signal, so this cannot collide.
SPAWN_FAILED = -1000


class ShellInvoker:
    """
    Runs one command as an OS process.

    exec/args are handed to the OS as-is: no shell, no expansion. Anything
    like globbing or pipes is the job of the interpreter named in `exec`
    (e.g. /bin/bash -c "..." or cmd /C ...).
    """

    def __init__(self, cwd: str | Path | None = None, env: Optional[Dict[str, str]] = None):
        self.cwd = str(cwd) if cwd is not None else None
        self.env = env

    def _environ(self) -> Optional[Dict[str, str]]:
        if self.env is None:
            return None
        env = os.environ.copy()
        env.update(self.env)
        return env

    def invoke(self, cmd: CommandDef) -> CommandResult:
        result = CommandResult.pending(cmd.name)

        try:
            proc = subprocess.run(
                [cmd.exec, *cmd.args],
                cwd=self.cwd,
                env=self._environ(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,  # one stream, in write order
            )
        except (OSError, ValueError) as e:
            # missing binary, permission denied, bad cwd, NUL byte in an argument
            return result.finish(
                CommandStatus.FAILED,
                exit_code=SPAWN_FAILED,
                output=f"{cmd.exec}: {getattr(e, 'strerror', None) or e}",
            )

        output = proc.stdout.decode("utf-8", errors="replace") if proc.stdout else ""
        status = CommandStatus.SUCCEEDED if proc.returncode == 0 else CommandStatus.FAILED
        return result.finish(status, exit_code=proc.returncode, output=output)

    __call__ = invoke


def invoke(cmd: CommandDef) -> CommandResult:
    """Run `cmd` in the current working directory and environment."""
    return ShellInvoker().invoke(cmd)
