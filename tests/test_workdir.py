"""Tests for branchpub.lib.workdir module."""

import os

import pytest

from branchpub.lib.workdir import working_directory


class TestWorkingDirectory:
    """Tests for working_directory() context manager."""

    def test_enters_and_restores(self, tmp_path, monkeypatch):
        start = tmp_path / "start"
        target = tmp_path / "target"
        start.mkdir()
        target.mkdir()
        monkeypatch.chdir(start)

        with working_directory(target):
            assert os.getcwd() == str(target.resolve())

        assert os.getcwd() == str(start.resolve())

    def test_restores_on_exception(self, tmp_path, monkeypatch):
        start = tmp_path / "start"
        target = tmp_path / "target"
        start.mkdir()
        target.mkdir()
        monkeypatch.chdir(start)

        with pytest.raises(RuntimeError):
            with working_directory(target):
                raise RuntimeError("boom")

        assert os.getcwd() == str(start.resolve())

    def test_missing_target_leaves_cwd_alone(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError):
            with working_directory(tmp_path / "missing"):
                pass

        assert os.getcwd() == str(tmp_path.resolve())
