import re
from pathlib import Path

import pytest
from click.testing import CliRunner

import frayed as fry
from frayed._cli import main


TEXT = "alpha\nbeta\ngamma\n\n\ndelta\nepsilon\n"


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "groups.txt"
    path.write_text(TEXT)
    return path


def test_summary(text_file: Path) -> None:
    """Tests that each group is tabulated with its length and first
    line.
    """
    result = CliRunner().invoke(main, ["summary", str(text_file)])
    assert result.exit_code == 0, result.output
    assert re.search(r"\b0\W+3\W+alpha\b", result.output)
    assert re.search(r"\b1\W+2\W+delta\b", result.output)


def test_head(text_file: Path) -> None:
    """Tests printing the first line of each group."""
    result = CliRunner().invoke(main, ["head", "-n", "1", str(text_file)])
    assert result.exit_code == 0, result.output
    assert result.output == "alpha\n\ndelta\n"


def test_head_stdin() -> None:
    """Tests reading groups from standard input."""
    result = CliRunner().invoke(main, ["head", "-n", "2", "-"], input=TEXT)
    assert result.exit_code == 0, result.output
    assert result.output == "alpha\nbeta\n\ndelta\nepsilon\n"


def test_head_config(text_file: Path, tmp_path: Path) -> None:
    """Tests that the config file sets the default number of lines, and
    that the command line overrides it.
    """
    conf_path = tmp_path / "frayed.yaml"
    conf_path.write_text("head: 1\n")
    runner = CliRunner()
    args = ["--config", str(conf_path), "head"]
    result = runner.invoke(main, args + [str(text_file)])
    assert result.exit_code == 0, result.output
    assert result.output == "alpha\n\ndelta\n"
    result = runner.invoke(main, args + ["-n", "3", str(text_file)])
    assert result.output == "alpha\nbeta\ngamma\n\ndelta\nepsilon\n"


def test_bad_config(text_file: Path, tmp_path: Path) -> None:
    """Tests that unknown settings are reported as usage errors."""
    conf_path = tmp_path / "frayed.yaml"
    conf_path.write_text("lines: 1\n")
    result = CliRunner().invoke(
        main, ["--config", str(conf_path), "head", str(text_file)]
    )
    assert result.exit_code == 2


def test_negative_head_config(text_file: Path, tmp_path: Path) -> None:
    """Tests that a negative default line count is reported as a usage
    error.
    """
    conf_path = tmp_path / "frayed.yaml"
    conf_path.write_text("head: -1\n")
    result = CliRunner().invoke(
        main, ["--config", str(conf_path), "head", str(text_file)]
    )
    assert result.exit_code == 2
    assert "head must not be negative" in result.output


def test_verbose(text_file: Path) -> None:
    """Tests that debug logging does not disturb the command."""
    result = CliRunner().invoke(
        main, ["-vv", "head", "-n", "0", str(text_file)]
    )
    assert result.exit_code == 0


def test_version() -> None:
    """Tests the version option."""
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert fry.__version__ in result.output
