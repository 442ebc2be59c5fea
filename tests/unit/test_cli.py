"""Tests for the command-line front-end."""

import json

import pytest

from tolcalc.cli import EXIT_INPUT_ERROR, EXIT_OK, main


def test_general(capsys):
    assert main(["general", "3", "--class", "m"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "3 ±0.1 mm" in out
    assert "3 - 6 mm" in out
    assert "3.100" in out
    assert "2.900" in out


def test_fit_json(capsys):
    assert main(["fit", "10", "--category", "shaft", "--class", "h6", "--json"]) == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["found"] is True
    assert data["result"]["lower_limit_text"] == "9.989"


def test_fit_uses_settings_defaults(capsys, monkeypatch):
    monkeypatch.setenv("DEFAULT_FIT_CATEGORY", "hole")
    monkeypatch.setenv("DEFAULT_FIT_CLASS", "H7")
    assert main(["fit", "25"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "hole H7" in out
    assert "25.021" in out


def test_not_found_is_reported_not_failed(capsys):
    assert main(["general", "-5", "--class", "m"]) == EXIT_OK
    assert "Awaiting valid input" in capsys.readouterr().out


def test_invalid_class_exits_with_input_error(capsys):
    assert main(["general", "3", "--class", "q"]) == EXIT_INPUT_ERROR
    assert "Invalid tolerance class" in capsys.readouterr().err


def test_classes(capsys):
    assert main(["classes", "--mode", "fit", "--category", "shaft"]) == EXIT_OK
    labels = capsys.readouterr().out.split()
    assert labels.index("h9") < labels.index("h11")


def test_table_marks_active_bracket(capsys):
    assert main(["table", "--mode", "general", "--dimension", "50"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "[30 - 120]" in out
    assert "±0.3" in out


def test_remap(capsys):
    assert main(["remap", "h6", "--to", "hole"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "H6"


def test_pair(capsys):
    assert main(["pair", "25", "H7", "p6"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "H7/p6" in out
    assert "interference" in out


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        main([])
