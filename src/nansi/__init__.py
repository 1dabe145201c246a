from .model import CommandDef, CommandResult, CommandStatus, RunReport
from .plan import ConfigError, validate_definitions
from .resolver import Decision, resolve
from .shell import SPAWN_FAILED, ShellInvoker, invoke
from .runner import execute
from .loader import NansiFile, load_nansifile

__all__ = [
    "CommandDef", "CommandResult", "CommandStatus", "RunReport",
    "ConfigError", "validate_definitions",
    "Decision", "resolve",
    "SPAWN_FAILED", "ShellInvoker", "invoke",
    "execute",
    "NansiFile", "load_nansifile",
]
