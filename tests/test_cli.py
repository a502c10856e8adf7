from __future__ import annotations

import io
import json

from sqlident.cli import main
from sqlident.store import read_properties


def test_split_command(capsys):
    assert main(["split", 'abc foo."null".bar null']) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == [["ABC"], ["FOO", "null", "BAR"], [None]]


def test_split_from_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("a.b c\n\"X y\";\n"))
    assert main(["split", "-"]) == 0
    rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert rows == [[["A", "B"], ["C"]], [["X y"]]]


def test_center_command(capsys):
    assert main(["center", "abc", "5"]) == 0
    assert capsys.readouterr().out == "| abc |\n"


def test_set_saves_to_rcfile(tmp_path):
    rcfile = tmp_path / "rc.properties"
    assert main(["set", "--rcfile", str(rcfile), "RowLimit", "10"]) == 0
    assert read_properties(rcfile)["sqlline.rowlimit"] == "10"


def test_set_unknown_option_fails(tmp_path):
    rcfile = tmp_path / "rc.properties"
    assert main(["set", "--rcfile", str(rcfile), "bogus", "1"]) == 1
    assert not rcfile.exists()


def test_options_lists_values(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "300")
    rcfile = tmp_path / "rc.properties"
    rcfile.write_text("sqlline.outputformat=vertical\n", encoding="utf-8")
    assert main(["options", "--rcfile", str(rcfile)]) == 0
    out = capsys.readouterr().out
    assert "outputformat" in out
    assert "vertical" in out


def test_options_render_booleans_like_properties(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("COLUMNS", "300")
    rcfile = tmp_path / "rc.properties"
    assert main(["options", "--rcfile", str(rcfile)]) == 0
    out = capsys.readouterr().out
    assert "true" in out
    assert "True" not in out
    assert "False" not in out
