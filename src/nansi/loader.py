# loader.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .model import CommandDef
from .plan import ConfigError, validate_definitions


# -------------------- Schemas --------------------

class CommandSpec(BaseModel):
    """One entry of `exec_list` as written in the JSON file."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "label"))
    exec: str
    args: List[str] = Field(default_factory=list)
    depends_on: Union[str, List[str], None] = Field(
        default=None,
        validation_alias=AliasChoices("dependsOn", "depends_on", "prerequisites"),
    )
    print_status: bool = Field(default=True, validation_alias=AliasChoices("print_status", "printStatus"))
    print_output: bool = Field(default=False, validation_alias=AliasChoices("print_output", "printOutput"))

    def to_def(self, position: int) -> CommandDef:
        deps = self.depends_on
        if deps is None:
            deps_t: Tuple[str, ...] = ()
        elif isinstance(deps, str):
            deps_t = (deps,)
        else:
            deps_t = tuple(deps)

        return CommandDef(
            # unnamed commands are addressed by their 1-based position
            name=self.name or str(position),
            exec=self.exec,
            args=tuple(self.args),
            depends_on=deps_t,
            print_status=self.print_status,
            print_output=self.print_output,
        )


class NansiFileSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exec_list: List[CommandSpec]
    file_path: Optional[str] = None  # tolerated, the real path always wins


# -------------------- Loaded file --------------------

@dataclass(frozen=True)
class NansiFile:
    """A validated command list plus the path it was read from."""
    path: str
    commands: Tuple[CommandDef, ...]

    def __len__(self) -> int:
        return len(self.commands)


def _format_loc(loc: tuple) -> str:
    parts = []
    for p in loc:
        parts.append(f"[{p}]" if isinstance(p, int) else f".{p}")
    return "".join(parts).lstrip(".") or "<root>"


def parse_definitions(data: object, *, source: str | None = None) -> List[CommandDef]:
    """
    Turn already-decoded JSON into validated CommandDefs.

    Accepts {"exec_list": [...]} or a bare list of command objects.
    """
    if isinstance(data, list):
        data = {"exec_list": data}

    try:
        spec = NansiFileSpec.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            kind="invalid-schema",
            message="the command list does not match the expected schema",
            problems=[f"{_format_loc(err['loc'])}: {err['msg']}" for err in e.errors()],
            source=source,
        ) from e

    defs = [c.to_def(i + 1) for i, c in enumerate(spec.exec_list)]
    return validate_definitions(defs, source=source)


def load_nansifile(path: str | Path) -> NansiFile:
    """
    Load and validate a NansiFile (JSON).

    Every problem, from a missing file to a forward dependency, is raised as
    ConfigError so nothing runs unless the whole file is sound.
    """
    p = Path(path)
    source = str(path)

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            kind="unreadable-file",
            message=e.strerror or str(e),
            source=source,
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigError(kind="unreadable-file", message=f"not UTF-8 text ({e.reason})", source=source) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            kind="invalid-json",
            message=f"{e.msg} at line {e.lineno} column {e.colno}",
            source=source,
        ) from e

    defs = parse_definitions(data, source=source)
    return NansiFile(path=source, commands=tuple(defs))
