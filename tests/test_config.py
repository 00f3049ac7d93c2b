"""Tests for branchpub.lib.config module."""

import pytest
from pathlib import Path

from branchpub.lib.config import (
    PublishConfig,
    load_publish_config,
    DEFAULT_COMMIT_MSG,
)
from branchpub.lib.errors import ConfigurationError


class TestPublishConfig:
    """Tests for PublishConfig.from_options()."""

    def test_defaults(self):
        config = PublishConfig.from_options(
            {"branch": "gh-pages", "dir": "build", "remote": "origin"}
        )
        assert config.branch == "gh-pages"
        assert config.dir == Path("build")
        assert config.remote == "origin"
        assert config.commit is False
        assert config.push is False
        assert config.force is False
        assert config.commit_msg == DEFAULT_COMMIT_MSG

    def test_default_message_mentions_all_tokens(self):
        assert "%sourceName%" in DEFAULT_COMMIT_MSG
        assert "%sourceCommit%" in DEFAULT_COMMIT_MSG
        assert "%sourceBranch%" in DEFAULT_COMMIT_MSG

    def test_accepts_camel_case_commit_msg(self):
        config = PublishConfig.from_options({"commitMsg": "rev %sourceCommit%"})
        assert config.commit_msg == "rev %sourceCommit%"

    def test_accepts_snake_case_commit_msg(self):
        config = PublishConfig.from_options({"commit_msg": "rev %sourceCommit%"})
        assert config.commit_msg == "rev %sourceCommit%"

    def test_accepts_path_for_dir(self):
        config = PublishConfig.from_options({"dir": Path("/srv/site")})
        assert config.dir == Path("/srv/site")

    def test_is_immutable(self):
        config = PublishConfig(branch="gh-pages")
        with pytest.raises(AttributeError):
            config.branch = "main"

    def test_rejects_unknown_option(self):
        with pytest.raises(ConfigurationError):
            PublishConfig.from_options({"brnach": "gh-pages"})

    def test_rejects_wrong_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PublishConfig.from_options({"push": "yes"})
        assert exc_info.value.option == "push"

    def test_rejects_empty_commit_msg(self):
        with pytest.raises(ConfigurationError) as exc_info:
            PublishConfig.from_options({"commitMsg": ""})
        assert exc_info.value.option == "commitMsg"

    def test_missing_options(self):
        config = PublishConfig(branch="gh-pages", remote="")
        assert config.missing_options() == ["dir", "remote"]

    def test_no_missing_options(self):
        config = PublishConfig(branch="gh-pages", dir=Path("build"), remote="origin")
        assert config.missing_options() == []


class TestLoadPublishConfig:
    """Tests for load_publish_config()."""

    def _write(self, tmp_path, text):
        path = tmp_path / "publish.yaml"
        path.write_text(text)
        return path

    def test_single_target_selected_implicitly(self, tmp_path):
        path = self._write(tmp_path, (
            "options:\n"
            "  remote: origin\n"
            "targets:\n"
            "  site:\n"
            "    branch: gh-pages\n"
            "    dir: build\n"
        ))
        config = load_publish_config(path)
        assert config.branch == "gh-pages"
        assert config.remote == "origin"

    def test_relative_dir_resolved_against_file(self, tmp_path):
        path = self._write(tmp_path, "targets:\n  site:\n    dir: build\n")
        config = load_publish_config(path)
        assert config.dir == tmp_path / "build"

    def test_absolute_dir_kept(self, tmp_path):
        path = self._write(tmp_path, "targets:\n  site:\n    dir: /srv/site\n")
        config = load_publish_config(path)
        assert config.dir == Path("/srv/site")

    def test_target_options_override_shared(self, tmp_path):
        path = self._write(tmp_path, (
            "options:\n"
            "  remote: origin\n"
            "  commit: true\n"
            "targets:\n"
            "  dist:\n"
            "    remote: upstream\n"
            "    commit: false\n"
            "    push: true\n"
        ))
        config = load_publish_config(path, "dist")
        assert config.remote == "upstream"
        assert config.commit is False
        assert config.push is True

    def test_overrides_win_and_none_is_ignored(self, tmp_path):
        path = self._write(tmp_path, (
            "targets:\n"
            "  site:\n"
            "    branch: gh-pages\n"
            "    remote: origin\n"
        ))
        config = load_publish_config(path, overrides={"branch": "pages", "remote": None})
        assert config.branch == "pages"
        assert config.remote == "origin"

    def test_multiple_targets_require_a_name(self, tmp_path):
        path = self._write(tmp_path, "targets:\n  a:\n    branch: x\n  b:\n    branch: y\n")
        with pytest.raises(ConfigurationError, match="Multiple targets"):
            load_publish_config(path)

    def test_unknown_target(self, tmp_path):
        path = self._write(tmp_path, "targets:\n  a:\n    branch: x\n")
        with pytest.raises(ConfigurationError, match="not found"):
            load_publish_config(path, "b")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_publish_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = self._write(tmp_path, "targets: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_publish_config(path)

    def test_non_mapping_file(self, tmp_path):
        path = self._write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_publish_config(path)

    def test_empty_file_uses_overrides(self, tmp_path):
        path = self._write(tmp_path, "")
        config = load_publish_config(path, overrides={"branch": "gh-pages"})
        assert config.branch == "gh-pages"

    def test_overrides_only(self):
        config = load_publish_config(
            None, overrides={"branch": "gh-pages", "dir": "out", "remote": "origin", "push": True}
        )
        assert config.dir == Path("out")
        assert config.push is True

    def test_target_without_file(self):
        with pytest.raises(ConfigurationError):
            load_publish_config(None, "site")

    def test_schema_violation_in_file(self, tmp_path):
        path = self._write(tmp_path, "targets:\n  site:\n    commit: 3\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_publish_config(path)
        assert exc_info.value.option == "commit"
