import json
import pathlib

import pytest
from typer.testing import CliRunner

from iniprofile.cli import app

runner = CliRunner()

SAMPLE = """\
[Net]
Host=example.com
Port=8080
[Paths]
home=/home/user
"""


@pytest.fixture(autouse=True)
def emulated(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("INIPROFILE_BACKEND", "emulated")
    monkeypatch.delenv("INIPROFILE_ASSUME_YES", raising=False)


@pytest.fixture
def file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "sample.ini"
    path.write_text(SAMPLE)
    return path


def test_get(file: pathlib.Path):
    result = runner.invoke(app, ["get", str(file), "Net", "Host"])

    assert result.exit_code == 0
    assert result.stdout == "example.com\n"


def test_get_default(file: pathlib.Path):
    result = runner.invoke(app, ["get", str(file), "Net", "Missing", "--default", "x"])

    assert result.exit_code == 0
    assert result.stdout == "x\n"


def test_get_missing_prints_nothing(file: pathlib.Path):
    result = runner.invoke(app, ["get", str(file), "Net", "Missing"])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_get_missing_file(tmp_path: pathlib.Path):
    result = runner.invoke(app, ["get", str(tmp_path / "missing.ini"), "Net", "Host"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_get_invalid_key(file: pathlib.Path):
    result = runner.invoke(app, ["get", str(file), "Net", "a=b"])

    assert result.exit_code == 2
    assert "'='" in result.output


def test_sections(file: pathlib.Path):
    result = runner.invoke(app, ["sections", str(file)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Net", "Paths"]


def test_keys(file: pathlib.Path):
    result = runner.invoke(app, ["keys", str(file), "Net"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Host", "Port"]


def test_dump_json(file: pathlib.Path):
    result = runner.invoke(app, ["dump", str(file), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"section": "Net", "key": "Host", "value": "example.com"},
        {"section": "Net", "key": "Port", "value": "8080"},
        {"section": "Paths", "key": "home", "value": "/home/user"},
    ]


def test_dump_table(file: pathlib.Path):
    result = runner.invoke(app, ["dump", str(file), "--section", "Paths"])

    assert result.exit_code == 0
    assert "/home/user" in result.stdout
    assert "example.com" not in result.stdout


def test_set_creates_file(tmp_path: pathlib.Path):
    path = tmp_path / "a.ini"

    result = runner.invoke(app, ["set", str(path), "Net", "Host", "example.com"])

    assert result.exit_code == 0
    assert path.read_bytes() == b"[Net]\r\nHost=example.com\r\n"


def test_remove_key_confirmed(file: pathlib.Path):
    result = runner.invoke(app, ["remove-key", str(file), "Net", "Port"], input="y\n")

    assert result.exit_code == 0
    assert "Port" not in file.read_text()


def test_remove_key_declined(file: pathlib.Path):
    result = runner.invoke(app, ["remove-key", str(file), "Net", "Port"], input="n\n")

    assert result.exit_code == 0
    assert "Nothing removed" in result.output
    assert file.read_text() == SAMPLE


def test_remove_section_yes(file: pathlib.Path):
    result = runner.invoke(app, ["remove-section", str(file), "Net", "--yes"])

    assert result.exit_code == 0
    assert file.read_text() == "[Paths]\nhome=/home/user\n"


def test_remove_section_assume_yes(file: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("INIPROFILE_ASSUME_YES", "1")

    result = runner.invoke(app, ["remove-section", str(file), "Net"])

    assert result.exit_code == 0
    assert "[Net]" not in file.read_text()


def test_remove_section_invalid(file: pathlib.Path):
    result = runner.invoke(app, ["remove-section", str(file), "Net]", "--yes"])

    assert result.exit_code == 2
    assert file.read_text() == SAMPLE


def test_buffer_increment_option(file: pathlib.Path):
    result = runner.invoke(
        app, ["--buffer-increment", "4", "get", str(file), "Net", "Host"]
    )

    assert result.exit_code == 0
    assert result.stdout == "example.com\n"


def test_invalid_buffer_increment(file: pathlib.Path):
    result = runner.invoke(app, ["--buffer-increment", "1", "sections", str(file)])

    assert result.exit_code != 0
