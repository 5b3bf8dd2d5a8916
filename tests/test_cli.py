"""
Tests for the Command-Line Tool

Run with: python -m pytest tests/test_cli.py -v
"""

import os

import pytest

from pantry import Entry
from pantry.cache import persistence
from pantry.cli import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_OK, main


@pytest.fixture
def directory(tmp_path) -> str:
    return str(tmp_path / "data")


class TestCLI:
    """Test the pantry sub-commands."""

    def test_set_then_get(self, directory: str, capsys):
        assert main(["--directory", directory, "set", "k", "v", "--ttl", "60"]) == EXIT_OK
        assert os.path.exists(os.path.join(directory, "k"))
        capsys.readouterr()

        assert main(["--directory", directory, "get", "k"]) == EXIT_OK
        assert capsys.readouterr().out == "v\n"

    def test_get_missing(self, directory: str):
        assert main(["--directory", directory, "get", "nope"]) == EXIT_NOT_FOUND

    def test_list(self, directory: str, capsys):
        main(["--directory", directory, "set", "b", "2"])
        main(["--directory", directory, "set", "a", "1"])
        capsys.readouterr()

        assert main(["--directory", directory, "list"]) == EXIT_OK
        assert capsys.readouterr().out == "a\t1\nb\t2\n"

    def test_remove(self, directory: str):
        main(["--directory", directory, "set", "k", "v"])

        assert main(["--directory", directory, "remove", "k"]) == EXIT_OK
        assert not os.path.exists(os.path.join(directory, "k"))

    def test_purge(self, directory: str, capsys):
        persistence.write_entry(directory, "dead", Entry(value="x", expires_at=0.0))
        main(["--directory", directory, "set", "live", "y"])
        capsys.readouterr()

        assert main(["--directory", directory, "purge"]) == EXIT_OK
        assert "1 expired" in capsys.readouterr().out
        assert os.listdir(directory) == ["live"]

    def test_corrupt_directory(self, directory: str):
        os.makedirs(directory)
        with open(os.path.join(directory, "bad"), "wb") as f:
            f.write(b"")

        assert main(["--directory", directory, "list"]) == EXIT_ERROR

    def test_oversized_frame_file(self, directory: str):
        """Test a damaged file is reported as an error, not a crash."""
        main(["--directory", directory, "set", "bad", "v"])
        path = os.path.join(directory, "bad")
        with open(path, "rb") as f:
            damaged = bytearray(f.read())
        damaged[3:11] = b"\xff" * 8
        with open(path, "wb") as f:
            f.write(bytes(damaged))

        assert main(["--directory", directory, "list"]) == EXIT_ERROR

    def test_missing_directory_option(self, monkeypatch):
        monkeypatch.setattr("pantry.cli.settings.PERSISTENCE_DIRECTORY", None)
        assert main(["list"]) == EXIT_ERROR
