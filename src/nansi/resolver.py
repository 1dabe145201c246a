# resolver.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .model import CommandDef, CommandStatus
from .plan import ConfigError


@dataclass(frozen=True)
class Decision:
    run: bool
    reason: Optional[str] = None


RUN = Decision(run=True)


def resolve(cmd: CommandDef, results: Mapping[str, CommandStatus]) -> Decision:
    """
    Decide whether `cmd` should run, given the statuses recorded so far.

    - no dependencies -> run
    - every dependency succeeded -> run
    - any dependency failed or skipped -> skip (skips cascade down a chain)

    A dependency missing from `results` is a forward reference and therefore
    a configuration error, never a skip.
    """
    for dep in cmd.depends_on:
        if dep not in results:
            raise ConfigError(
                kind="invalid-config",
                message=f"Command '{cmd.name}' depends on '{dep}' which has no result yet",
                problems=[f"'{dep}' must be declared before '{cmd.name}'"],
            )

    for dep in cmd.depends_on:
        status = results[dep]
        if status is not CommandStatus.SUCCEEDED:
            return Decision(run=False, reason=f"dependency '{dep}' {status.value}")

    return RUN
