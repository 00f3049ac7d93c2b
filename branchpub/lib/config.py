"""
Configuration loaders for branchpub.

Options come from a publish.yaml file and/or the command line. The file is
laid out as a multi-target task:

    options:            # shared by every target
      remote: origin
      commit: true
    targets:
      site:
        branch: gh-pages
        dir: build/site
      dist:
        branch: dist
        dir: dist
        push: true

Target options override shared options; command-line overrides win over both.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from branchpub.lib import validate
from branchpub.lib.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "publish.yaml"

DEFAULT_COMMIT_MSG = "Built from %sourceName%, commit %sourceCommit% on branch %sourceBranch%"

REQUIRED_OPTIONS = ("branch", "dir", "remote")


@dataclass(frozen=True)
class PublishConfig:
    """Options for one publish run.

    branch, dir and remote are required; they default to None here so a
    missing one can be reported by name when the run starts.
    """
    branch: Optional[str] = None
    dir: Optional[Path] = None
    remote: Optional[str] = None
    commit: bool = False
    push: bool = False
    commit_msg: str = DEFAULT_COMMIT_MSG
    force: bool = False  # force the final push

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "PublishConfig":
        """Build a PublishConfig from an option mapping.

        Accepts the camelCase commitMsg key as well as commit_msg.

        Raises:
            ConfigurationError: If an option is unknown or has the wrong type.
        """
        data = dict(options)
        if isinstance(data.get("dir"), Path):
            data["dir"] = str(data["dir"])
        validate.validate(data, "publish")

        commit_msg = options.get("commitMsg", options.get("commit_msg", DEFAULT_COMMIT_MSG))
        target_dir = options.get("dir")
        return cls(
            branch=options.get("branch"),
            dir=Path(target_dir) if target_dir else None,
            remote=options.get("remote"),
            commit=options.get("commit", False),
            push=options.get("push", False),
            commit_msg=commit_msg,
            force=options.get("force", False),
        )

    def missing_options(self) -> list[str]:
        """Names of required options that are unset or empty."""
        return [name for name in REQUIRED_OPTIONS if not getattr(self, name)]


def _read_config_file(config_path: Path) -> dict:
    """Parse publish.yaml into a mapping."""
    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError("(file)", f"Failed to parse {config_path}: {e}") from None
    except OSError as e:
        raise ConfigurationError("(file)", f"Could not read {config_path}: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("(file)", f"{config_path} must contain a mapping")
    return data


def _select_target(targets: dict, target: Optional[str], config_path: Path) -> Optional[str]:
    """Pick the target to publish; implicit when the file defines only one."""
    if target is not None:
        if target not in targets:
            known = ", ".join(sorted(targets)) or "(none)"
            raise ConfigurationError(
                "target", f"Target '{target}' not found in {config_path}. Known targets: {known}"
            )
        return target

    if len(targets) == 1:
        return next(iter(targets))
    if len(targets) > 1:
        raise ConfigurationError(
            "target",
            f"Multiple targets in {config_path}, choose one: {', '.join(sorted(targets))}",
        )
    return None


def load_publish_config(
    config_path: Optional[Path],
    target: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> PublishConfig:
    """Load publish options and return PublishConfig.

    Args:
        config_path: Path to publish.yaml, or None to use overrides only
        target: Target name in the file (optional if the file has one target)
        overrides: Options that win over the file; None values are ignored

    Raises:
        ConfigurationError: If the file is missing or malformed, the target is
            unknown or ambiguous, or an option fails schema validation.

    A relative dir from the file is resolved against the file's directory.
    """
    options: dict[str, Any] = {}

    if config_path is not None:
        if not config_path.exists():
            raise ConfigurationError("(file)", f"Config file not found: {config_path}")

        data = _read_config_file(config_path)
        shared = data.get("options") or {}
        targets = data.get("targets") or {}
        if not isinstance(shared, dict) or not isinstance(targets, dict):
            raise ConfigurationError("(file)", f"'options' and 'targets' in {config_path} must be mappings")

        selected = _select_target(targets, target, config_path)
        options.update(shared)
        if selected is not None:
            logger.debug(f"Using target '{selected}' from {config_path}")
            options.update(targets[selected] or {})

        if options.get("dir") and not Path(options["dir"]).is_absolute():
            options["dir"] = str(config_path.parent / options["dir"])
    elif target is not None:
        raise ConfigurationError("target", f"Target '{target}' given but no config file was found")

    for key, value in (overrides or {}).items():
        if value is not None:
            options[key] = value

    return PublishConfig.from_options(options)
