# plan.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .model import CommandDef


@dataclass
class ConfigError(Exception):
    """
    Structured configuration error.

    Raised before anything runs, so callers can tell "did not run"
    apart from "ran and failed".
    """
    kind: str
    message: str
    problems: List[str] = field(default_factory=list)
    source: Optional[str] = None

    def __str__(self) -> str:
        head = f"{self.kind}: {self.message}"
        if self.source:
            head = f"{self.source}: {head}"
        lines = [head]
        for p in self.problems:
            lines.append(f"  - {p}")
        return "\n".join(lines)


def _label(idx: int, cmd: CommandDef) -> str:
    return f"[{idx + 1}][{cmd.name}]"


def find_problems(definitions: Sequence[CommandDef]) -> List[str]:
    """
    Check a command list for everything that must be fixed before running.

    Requires:
      - cmd.name: unique across the list
      - cmd.exec: non-empty
      - cmd.args: strings only
      - cmd.depends_on: names of commands declared EARLIER in the list
    """
    problems: List[str] = []
    seen: set[str] = set()
    all_names = {c.name for c in definitions}

    for idx, cmd in enumerate(definitions):
        label = _label(idx, cmd)

        if not cmd.name:
            problems.append(f"{label} has an empty name")
        elif cmd.name in seen:
            problems.append(f"{label} duplicate command name '{cmd.name}'")

        if not isinstance(cmd.exec, str) or not cmd.exec.strip():
            problems.append(f"{label} 'exec' must be a non-empty string")

        bad_args = [a for a in cmd.args if not isinstance(a, str)]
        if bad_args:
            problems.append(f"{label} arguments must be strings, got {bad_args!r}")

        for dep in cmd.depends_on:
            if dep == cmd.name:
                problems.append(f"{label} depends on itself")
            elif dep in seen:
                continue
            elif dep in all_names:
                problems.append(f"{label} depends on '{dep}' which is declared later")
            else:
                problems.append(f"{label} depends on unknown command '{dep}'. Known commands: {sorted(all_names)}")

        seen.add(cmd.name)

    return problems


def validate_definitions(definitions: Iterable[CommandDef], *, source: str | None = None) -> List[CommandDef]:
    """Return the definitions as a list, or raise ConfigError listing every problem."""
    definitions = list(definitions)
    problems = find_problems(definitions)
    if problems:
        noun = "problem" if len(problems) == 1 else "problems"
        raise ConfigError(
            kind="invalid-config",
            message=f"{len(problems)} {noun} found, nothing was executed",
            problems=problems,
            source=source,
        )
    return definitions
