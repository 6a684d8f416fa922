"""
Tests for settings persistence and the command line entry point.

Usage:
    pytest tests/test_cli.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from tetonor import settings
from tetonor.solver import sample_puzzle


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory so config.json and solver.log stay local."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "SETTINGS_FILE", tmp_path / "config.json")
    return tmp_path


def test_settings_default_when_missing(workdir):
    """No config file means defaults."""
    assert settings.load_settings() == settings.DEFAULT_SETTINGS


def test_settings_round_trip(workdir):
    """Saved values are merged over defaults on load."""
    settings.save_settings({"max_attempts": 123})
    loaded = settings.load_settings()

    assert loaded["max_attempts"] == 123
    assert loaded["strategy_name"] == settings.DEFAULT_SETTINGS["strategy_name"]


def test_settings_corrupt_file(workdir):
    """Unparseable config falls back to defaults."""
    (workdir / "config.json").write_text("{not json", encoding="utf-8")
    assert settings.load_settings() == settings.DEFAULT_SETTINGS

    (workdir / "config.json").write_text("[1, 2]", encoding="utf-8")
    assert settings.load_settings() == settings.DEFAULT_SETTINGS


def test_cli_solves_sample(workdir, capsys):
    """With no input the sample puzzle is solved."""
    assert main.main([]) == main.EXIT_FOUND

    out = capsys.readouterr().out
    assert "Strip: 1 2 2 5 6 6 8 10 14 16 21 23 24 26 28 42" in out
    assert "252 = 6 x 42" in out


def test_cli_reads_puzzle_file(workdir, capsys):
    """A JSON puzzle file is loaded and solved."""
    path = workdir / "puzzle.json"
    path.write_text(json.dumps(sample_puzzle().to_dict()), encoding="utf-8")

    assert main.main(["--puzzle", str(path), "--explain"]) == main.EXIT_FOUND


def test_cli_budget_exit_code(workdir, capsys):
    """A zero budget is reported as not found."""
    assert main.main(["--max-attempts", "0"]) == main.EXIT_NOT_FOUND
    assert "No solution: budget" in capsys.readouterr().out


def test_cli_budget_from_settings(workdir):
    """The configured budget applies when no flag is given."""
    settings.save_settings({"max_attempts": 0})
    assert main.main([]) == main.EXIT_NOT_FOUND


def test_cli_bad_puzzle_file(workdir):
    """Malformed input exits with the bad-input code."""
    path = workdir / "bad.json"
    path.write_text(json.dumps({"grid": [1, 2, 3], "strip": [None] * 16}), encoding="utf-8")
    assert main.main(["--puzzle", str(path)]) == main.EXIT_BAD_INPUT

    assert main.main(["--puzzle", str(workdir / "missing.json")]) == main.EXIT_BAD_INPUT


def test_cli_debug_image(workdir):
    """--debug writes a PNG under ./debug."""
    assert main.main(["--debug"]) == main.EXIT_FOUND
    assert list((workdir / "debug").glob("debug_*.png"))


def test_cli_lists_strategies(workdir, capsys):
    """--list-strategies prints the registry and skips solving."""
    assert main.main(["--list-strategies"]) == main.EXIT_FOUND

    out = capsys.readouterr().out
    assert out.startswith("backtrack (default): ")
    assert "Strip:" not in out


def test_explain_truncates_both_operations():
    """Products and sums are cut to the same limit with the same note."""
    assert main.format_options([(1, 2), (3, 4)], "x", 5) == "1x2, 3x4"
    assert main.format_options([(1, 36), (2, 18), (3, 12)], "x", 2) == "1x36, 2x18 ... and 1 more"
    assert main.format_options([(1, 4), (2, 3)], "+", 1) == "1+4 ... and 1 more"


def test_package_readme_is_shipped():
    """The readme named in pyproject.toml exists at the project root."""
    root = Path(__file__).parent.parent
    pyproject = (root / "pyproject.toml").read_text(encoding="utf-8")

    assert 'readme = "README.md"' in pyproject
    assert (root / "README.md").read_text(encoding="utf-8").startswith("# Tetonor Solver")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
