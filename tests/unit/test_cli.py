"""
Unit tests for the command-line entry point.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from vfind.cli import main
from vfind.config import ConfigParser


def touch(p: Path, data: bytes = b"") -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test from tmp_path with no discoverable configuration."""
    monkeypatch.chdir(tmp_path)
    with patch.object(ConfigParser, '_search_paths', return_value=[]):
        yield


def test_cli_prints_matches(tmp_path: Path, capsys):
    touch(tmp_path / "a" / "b.txt", b"x")
    touch(tmp_path / "a" / "c.log")

    rc = main([".", "-type", "f", "-name", "*.txt"])
    assert rc == 0
    assert capsys.readouterr().out == "./a/b.txt\n"


def test_cli_print0(tmp_path: Path, capsys):
    touch(tmp_path / "x")
    rc = main(["-type", "f", "-print0"])
    assert rc == 0
    assert capsys.readouterr().out == "./x\0"


def test_cli_help(capsys):
    rc = main(["--help"])
    assert rc == 0
    assert "Usage: find [path...] [expression]" in capsys.readouterr().out


def test_cli_parse_error(capsys):
    rc = main(["-bogus"])
    assert rc == 1
    assert capsys.readouterr().err == "find: unknown predicate '-bogus'\n"


def test_cli_negative_numbers_pass_through(tmp_path: Path, capsys):
    touch(tmp_path / "fresh.txt", b"x")
    rc = main([".", "-type", "f", "-mtime", "-1"])
    assert rc == 0
    assert capsys.readouterr().out == "./fresh.txt\n"


def test_cli_exec(tmp_path: Path, capsys):
    touch(tmp_path / "a.txt", b"hello")
    rc = main([".", "-name", "*.txt", "-exec", "cat", "{}", ";"])
    assert rc == 0
    assert capsys.readouterr().out == "hello"


def test_cli_exec_disabled_by_config(tmp_path: Path, capsys):
    touch(tmp_path / "a.txt")
    config = tmp_path / "cfg.yaml"
    config.write_text("exec:\n  enabled: false\n")
    rc = main(["--config", str(config), ".", "-name", "*.txt", "-exec", "cat", "{}", ";"])
    assert rc == 1
    assert capsys.readouterr().err == "find: -exec not supported in this context\n"


def test_cli_bad_config(tmp_path: Path, capsys):
    rc = main(["--config", str(tmp_path / "missing.yaml"), "."])
    assert rc == 2
    assert "Configuration file not found" in capsys.readouterr().err


def test_cli_init_config(tmp_path: Path, capsys):
    target = tmp_path / ".vfind.yaml"
    rc = main(["--init-config", str(target)])
    assert rc == 0
    assert target.exists()
    assert "Configuration template written" in capsys.readouterr().out


def test_cli_delete(tmp_path: Path, capsys):
    touch(tmp_path / "junk" / "a.tmp")
    touch(tmp_path / "keep.txt")
    rc = main([".", "-name", "*.tmp", "-delete"])
    assert rc == 0
    assert not (tmp_path / "junk" / "a.tmp").exists()
    assert (tmp_path / "keep.txt").exists()
