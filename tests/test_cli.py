import json
import logging
import sys
from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from pal import pal_cli

SOURCE = """
program Demo;
val c = -3;
var v: int;
fun f(x: int): int;
  var y: bool;
  begin end;
v = c
.
"""


def test_run_pal_string_json(capsys: pytest.CaptureFixture[str]) -> None:
    pal_cli.run_pal(SOURCE, is_string=True)
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "program"
    assert data["name"] == "Demo"
    assert data["body"]["val_decls"] == [{"kind": "val", "name": "c", "value": -3}]
    assert data["body"]["fun_decls"][0]["params"][0]["type"] == "int"


def test_run_pal_tree_format() -> None:
    text = pal_cli.run_pal(SOURCE, is_string=True, fmt="tree")
    lines = text.splitlines()
    assert lines[0] == "program"
    assert "  name: Demo" in lines
    assert any(line.strip() == "return_type: int" for line in lines)
    assert any(line.strip() == "fun_decls: []" for line in lines)


def test_run_pal_file_input(tmp_path: Path) -> None:
    path = tmp_path / "demo.pal"
    path.write_text(SOURCE)
    text = pal_cli.run_pal(str(path))
    assert json.loads(text)["name"] == "Demo"


def test_run_pal_rejects_other_extensions(tmp_path: Path) -> None:
    path = tmp_path / "demo.txt"
    path.write_text(SOURCE)
    with pytest.raises(ValueError):
        pal_cli.run_pal(str(path))


def test_run_pal_rejects_unknown_format() -> None:
    with pytest.raises(ValueError):
        pal_cli.run_pal(SOURCE, is_string=True, fmt="xml")


def test_run_pal_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "out.json"
    pal_cli.run_pal(SOURCE, is_string=True, out=str(out))
    assert capsys.readouterr().out == ""
    assert json.loads(out.read_text())["name"] == "Demo"


def test_run_pal_tokens() -> None:
    text = pal_cli.run_pal("program P;", is_string=True, tokens=True)
    toks = json.loads(text)
    assert [t["type"] for t in toks] == ["PROGRAM", "ID", "SEMI", "EOF"]
    assert toks[1] == {"type": "ID", "lexeme": "P", "line": 1, "col": 9}


def test_run_pal_tokens_tree() -> None:
    text = pal_cli.run_pal("val", is_string=True, tokens=True, fmt="tree")
    assert text.splitlines() == ["1:1\tVAL\tval", "1:4\tEOF\tEOF"]


def test_format_tree_accepts_dicts() -> None:
    assert pal_cli.format_tree({"kind": "id", "name": "x"}) == "id\n  name: x"


def test_main_success(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["pal", "-s", "program P; begin end."])
    pal_cli.main()
    assert json.loads(capsys.readouterr().out)["name"] == "P"


def test_main_syntax_error_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        pal_cli.main(["-s", "program P; begin end"])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "Expected PERIOD but found Token(EOF, EOF)"


def test_main_invalid_type_message(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        pal_cli.main(["-s", "program P; var v: string; begin end."])
    err = capsys.readouterr().err.strip().splitlines()
    assert len(err) == 1
    assert "INT, BOOL, or VOID" in err[0]


def test_main_lex_error_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        pal_cli.main(["-s", "program P; begin end. @"])
    assert exc.value.code == 1
    assert "'@'" in capsys.readouterr().err


def test_main_verbose_sets_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(pal_cli.LOG_LEVEL_ENV, raising=False)
    pal_cli.main(["-s", "-v", "program P; begin end."])
    assert logging.getLogger().level == logging.INFO


def test_main_debug_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(pal_cli.LOG_LEVEL_ENV, "error")
    pal_cli.main(["-s", "--debug", "program P; begin end."])
    assert logging.getLogger().level == logging.DEBUG


def test_main_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(pal_cli.LOG_LEVEL_ENV, "error")
    pal_cli.main(["-s", "program P; begin end."])
    assert logging.getLogger().level == logging.ERROR


def test_main_bad_env_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(pal_cli.LOG_LEVEL_ENV, "chatty")
    pal_cli.main(["-s", "program P; begin end."])
    assert logging.getLogger().level == logging.WARNING


def test_main_requires_source() -> None:
    with pytest.raises(SystemExit) as exc:
        pal_cli.main([])
    assert exc.value.code == 2


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(source=st.text(max_size=60))  # type: ignore[misc]
def test_main_random_input_exits_cleanly(
    source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    try:
        pal_cli.main(["-s", "--", source])
    except SystemExit as e:
        assert e.code == 1
    capsys.readouterr()


def test_main_overlong_numeral_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    source = "program P; val c = " + "9" * 5000 + "; begin end."
    with pytest.raises(SystemExit) as exc:
        pal_cli.main(["-s", source])
    assert exc.value.code == 1
    err = capsys.readouterr().err.strip().splitlines()
    assert len(err) == 1
    assert err[0].startswith("Numeral too long")


def test_main_deep_nesting_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    source = "program P; x = " + "(" * 5000 + "1" + ")" * 5000 + "."
    with pytest.raises(SystemExit) as exc:
        pal_cli.main(["-s", source])
    assert exc.value.code == 1
    assert capsys.readouterr().err.strip() == "Program nests too deeply to parse"


def test_main_missing_file_exits_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc:
        pal_cli.main([str(tmp_path / "missing.pal")])
    assert exc.value.code == 1
    assert "missing.pal" in capsys.readouterr().err


def test_main_wrong_extension_exits_1(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        pal_cli.main(["demo.txt"])
    assert exc.value.code == 1
    assert capsys.readouterr().err.strip() == "Only .pal files are supported."
