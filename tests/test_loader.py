import json
from pathlib import Path

import pytest

from nansi.loader import load_nansifile, parse_definitions
from nansi.plan import ConfigError

TESTDATA = Path(__file__).resolve().parent.parent / "testdata"


def write(tmp_path, data, name="nansifile.json"):
    p = tmp_path / name
    p.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return p


def test_loads_exec_list_document(tmp_path):
    p = write(tmp_path, {"exec_list": [
        {"label": "ls", "exec": "ls"},
        {"label": "l2", "exec": "ls", "args": ["-12345"], "prerequisites": ["ls"], "print_output": True},
    ]})

    nf = load_nansifile(p)

    assert nf.path == str(p)
    assert len(nf) == 2
    first, second = nf.commands
    assert (first.name, first.exec, first.args, first.depends_on) == ("ls", "ls", (), ())
    assert second.depends_on == ("ls",)
    assert second.print_output is True
    assert second.print_status is True


def test_depends_on_as_string_or_list():
    defs = parse_definitions([
        {"name": "a", "exec": "x"},
        {"name": "b", "exec": "x", "dependsOn": "a"},
        {"name": "c", "exec": "x", "dependsOn": ["a", "b"]},
    ])
    assert [d.depends_on for d in defs] == [(), ("a",), ("a", "b")]


def test_unnamed_commands_get_their_position():
    defs = parse_definitions([
        {"exec": "x"},
        {"label": "", "exec": "x"},
        {"exec": "x", "dependsOn": "1"},
    ])
    assert [d.name for d in defs] == ["1", "2", "3"]
    assert defs[2].depends_on == ("1",)


def test_missing_exec_is_schema_error():
    with pytest.raises(ConfigError) as exc:
        parse_definitions({"exec_list": [{"name": "a", "args": []}]})
    assert exc.value.kind == "invalid-schema"
    assert exc.value.problems[0].startswith("exec_list[0].exec")


def test_non_string_arg_is_schema_error():
    with pytest.raises(ConfigError) as exc:
        parse_definitions([{"exec": "x", "args": ["-c", 5]}])
    assert exc.value.kind == "invalid-schema"


def test_unknown_key_is_schema_error():
    with pytest.raises(ConfigError) as exc:
        parse_definitions([{"exec": "x", "retries": 3}])
    assert exc.value.kind == "invalid-schema"


def test_forward_reference_is_config_error(tmp_path):
    p = write(tmp_path, [
        {"name": "touch", "exec": "x", "dependsOn": "mkdir"},
        {"name": "mkdir", "exec": "x"},
    ])
    with pytest.raises(ConfigError) as exc:
        load_nansifile(p)
    assert exc.value.kind == "invalid-config"
    assert exc.value.source == str(p)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError) as exc:
        load_nansifile(tmp_path / "nope.json")
    assert exc.value.kind == "unreadable-file"


def test_invalid_json(tmp_path):
    p = write(tmp_path, "{ not json")
    with pytest.raises(ConfigError) as exc:
        load_nansifile(p)
    assert exc.value.kind == "invalid-json"
    assert "line 1" in exc.value.message


def test_bundled_samples_load():
    assert len(load_nansifile(TESTDATA / "nansifile_linux.json")) == 4
    assert len(load_nansifile(TESTDATA / "nansifile_linux_prereq.json")) == 7
    assert len(load_nansifile(TESTDATA / "nansifile_windows.json")) == 2
    with pytest.raises(ConfigError):
        load_nansifile(TESTDATA / "nansifile_forward_ref.json")
