# runner.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from .model import CommandDef, CommandResult, CommandStatus, RunReport
from .plan import validate_definitions
from .resolver import resolve
from .shell import ShellInvoker
from .ui.console import get_console

Invoker = Callable[[CommandDef], CommandResult]
StartHook = Callable[[int, CommandDef], None]
ResultHook = Callable[[int, CommandDef, CommandResult], None]


def execute(
    definitions: Iterable[CommandDef],
    *,
    invoker: Optional[Invoker] = None,
    on_start: Optional[StartHook] = None,
    on_result: Optional[ResultHook] = None,
) -> RunReport:
    """
    Run every command once, in declared order, and return the report.

    - Validates the whole list first; a ConfigError is raised before any
      process is spawned.
    - A failed command never stops the run. Only its dependents
      (direct or transitive) are skipped.
    - on_start / on_result are progress hooks (index is 0-based); they do
      not influence what runs.
    """
    definitions = validate_definitions(definitions)
    run_one = invoker or ShellInvoker()
    console = get_console()

    # name -> latest status, filled in declared order
    statuses: Dict[str, CommandStatus] = {}
    results: List[CommandResult] = []

    for idx, cmd in enumerate(definitions):
        if on_start is not None:
            on_start(idx, cmd)

        decision = resolve(cmd, statuses)
        if decision.run:
            console.print_debug(f"running [{idx + 1}][{cmd.name}] {cmd.command_line}")
            result = run_one(cmd)
        else:
            console.print_debug(f"skipping [{idx + 1}][{cmd.name}]: {decision.reason}")
            result = CommandResult.pending(cmd.name).finish(
                CommandStatus.SKIPPED,
                reason=decision.reason,
            )

        if result.name != cmd.name or not result.status.is_final:
            raise RuntimeError(f"invoker returned an unfinished or foreign result for '{cmd.name}'")

        results.append(result)
        statuses[cmd.name] = result.status

        if on_result is not None:
            on_result(idx, cmd, result)

    report = RunReport(results=tuple(results))
    console.print_debug(f"run finished: {report.outcome.value} {report.counts()}")
    return report
