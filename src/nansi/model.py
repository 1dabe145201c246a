# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class CommandStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_final(self) -> bool:
        return self is not CommandStatus.PENDING


@dataclass(frozen=True)
class CommandDef:
    """A single command (step) inside a NansiFile."""
    name: str
    exec: str
    args: Tuple[str, ...] = ()

    # names of earlier commands that must have succeeded
    depends_on: Tuple[str, ...] = ()

    # presentation only, the engine never looks at these
    print_status: bool = True
    print_output: bool = False

    @property
    def command_line(self) -> str:
        return " ".join([self.exec, *self.args])


@dataclass
class CommandResult:
    """
    Outcome of one command.

    Starts as PENDING and is finished exactly once. After that the
    object rejects any further attribute writes.
    """
    name: str
    status: CommandStatus = CommandStatus.PENDING
    exit_code: Optional[int] = None
    output: str = ""
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if self.status.is_final:
            object.__setattr__(self, "_sealed", True)

    def __setattr__(self, key, value) -> None:
        if self.__dict__.get("_sealed", False):
            raise AttributeError(f"result for {self.name!r} is final and cannot be modified")
        super().__setattr__(key, value)

    @classmethod
    def pending(cls, name: str) -> CommandResult:
        return cls(name=name)

    def finish(
        self,
        status: CommandStatus,
        *,
        exit_code: Optional[int] = None,
        output: str = "",
        reason: Optional[str] = None,
    ) -> CommandResult:
        if self.status.is_final:
            raise RuntimeError(f"result for {self.name!r} already finished as {self.status.value}")
        if not status.is_final:
            raise ValueError("a result can only be finished as succeeded, failed or skipped")

        self.exit_code = exit_code
        self.output = output
        self.reason = reason
        self.status = status
        object.__setattr__(self, "_sealed", True)
        return self

    def to_dict(self) -> Dict:
        data: Dict = {"name": self.name, "status": self.status.value}
        if self.status in (CommandStatus.SUCCEEDED, CommandStatus.FAILED):
            data["exit_code"] = self.exit_code
            data["output"] = self.output
        if self.reason:
            data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class RunReport:
    """Ordered per-command outcomes of one full pass over a NansiFile."""
    results: Tuple[CommandResult, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, idx: int) -> CommandResult:
        return self.results[idx]

    @property
    def outcome(self) -> CommandStatus:
        # skipped entries alone never fail a run
        if any(r.status is CommandStatus.FAILED for r in self.results):
            return CommandStatus.FAILED
        return CommandStatus.SUCCEEDED

    @property
    def succeeded(self) -> bool:
        return self.outcome is CommandStatus.SUCCEEDED

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @property
    def statuses(self) -> Tuple[CommandStatus, ...]:
        return tuple(r.status for r in self.results)

    def get(self, name: str) -> Optional[CommandResult]:
        for r in self.results:
            if r.name == name:
                return r
        return None

    def counts(self) -> Dict[str, int]:
        out = {s.value: 0 for s in CommandStatus if s.is_final}
        for r in self.results:
            out[r.status.value] += 1
        return out

    def to_dict(self) -> Dict:
        return {
            "outcome": self.outcome.value,
            "counts": self.counts(),
            "results": [r.to_dict() for r in self.results],
        }
