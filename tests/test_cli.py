"""Tests for the typer CLI (keys, run, repl)."""

import json

from typer.testing import CliRunner

from pocketcalc.__main__ import app

runner = CliRunner()


def test_run_prints_final_display():
    result = runner.invoke(app, ["run", "2", "+", "3", "=", "="])
    assert result.exit_code == 0
    assert result.output.strip().endswith("8")


def test_run_glued_keys():
    result = runner.invoke(app, ["run", "200+10%="])
    assert result.exit_code == 0
    assert "220" in result.output


def test_run_divide_by_zero():
    result = runner.invoke(app, ["run", "5/0="])
    assert result.exit_code == 0
    assert "Cannot divide by zero" in result.output


def test_run_unknown_key_exits_nonzero():
    result = runner.invoke(app, ["run", "2", "banana"])
    assert result.exit_code == 1
    assert "Unknown key" in result.output


def test_run_trace_lists_each_key():
    result = runner.invoke(app, ["run", "--trace", "9", "sqrt"])
    assert result.exit_code == 0
    assert "Key trace" in result.output
    assert "sqrt" in result.output
    assert "Memory" not in result.output


def test_run_trace_shows_memory_once_expanded():
    result = runner.invoke(app, ["run", "--trace", "--json", "4", "MS", "Mv"])
    assert result.exit_code == 0
    table = result.output[: result.output.index("{")]
    assert "Memory" in table
    assert "--" in table


def test_run_json_snapshot():
    result = runner.invoke(app, ["run", "--json", "5", "MS"])
    assert result.exit_code == 0
    start = result.output.index("{")
    data = json.loads(result.output[start:])
    assert data["display"] == "5"
    assert data["memory"]["entries"][0]["value"] == 5


def test_keys_table():
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "sqrt" in result.output
    assert "MR" in result.output


def test_repl_session():
    result = runner.invoke(app, ["repl"], input="2 + 3 =\nbogus\nq\n")
    assert result.exit_code == 0
    assert "5" in result.output
    assert "Unknown key" in result.output
