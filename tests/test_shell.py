import sys

from conftest import py

from nansi.model import CommandDef, CommandStatus
from nansi.shell import SPAWN_FAILED, ShellInvoker, invoke


def test_zero_exit_is_success_with_output():
    result = invoke(py("hello", "print('hello')"))
    assert result.name == "hello"
    assert result.status is CommandStatus.SUCCEEDED
    assert result.exit_code == 0
    assert result.output.strip() == "hello"


def test_non_zero_exit_is_failure_with_code():
    result = invoke(py("boom", "import sys; sys.exit(3)"))
    assert result.status is CommandStatus.FAILED
    assert result.exit_code == 3


def test_stderr_is_captured_with_stdout():
    code = "import sys; print('out', flush=True); print('err', file=sys.stderr, flush=True); sys.exit(1)"
    result = invoke(py("both", code))
    assert result.status is CommandStatus.FAILED
    assert result.output.split() == ["out", "err"]


def test_args_are_not_shell_expanded():
    cmd = CommandDef(
        name="echo",
        exec=sys.executable,
        args=("-c", "import sys; print(sys.argv[1])", "$HOME *"),
    )
    assert invoke(cmd).output.strip() == "$HOME *"


def test_missing_binary_fails_with_sentinel():
    result = invoke(CommandDef(name="asd", exec="nansi-definitely-not-a-real-binary"))
    assert result.status is CommandStatus.FAILED
    assert result.exit_code == SPAWN_FAILED
    assert "nansi-definitely-not-a-real-binary" in result.output


def test_bad_cwd_fails_with_sentinel(tmp_path):
    result = ShellInvoker(cwd=tmp_path / "missing").invoke(py("x", "pass"))
    assert result.status is CommandStatus.FAILED
    assert result.exit_code == SPAWN_FAILED


def test_cwd_override(tmp_path):
    result = ShellInvoker(cwd=tmp_path).invoke(py("pwd", "import os; print(os.getcwd())"))
    assert result.status is CommandStatus.SUCCEEDED
    assert result.output.strip() == str(tmp_path.resolve()) or result.output.strip() == str(tmp_path)


def test_env_override_keeps_parent_environment(monkeypatch):
    monkeypatch.setenv("NANSI_PARENT", "kept")
    invoker = ShellInvoker(env={"NANSI_EXTRA": "added"})
    result = invoker(py("env", "import os; print(os.environ['NANSI_PARENT'], os.environ['NANSI_EXTRA'])"))
    assert result.output.split() == ["kept", "added"]


def test_undecodable_output_is_replaced():
    result = invoke(py("bytes", "import sys; sys.stdout.buffer.write(b'ok\\xff')"))
    assert result.status is CommandStatus.SUCCEEDED
    assert result.output.startswith("ok")
    assert "�" in result.output
