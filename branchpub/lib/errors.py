"""
Error types for branchpub.

Every mandatory publish step raises one of these on failure. The publish
flow catches them once, logs them, and reports failure to the caller.
"""

from dataclasses import dataclass


class PublishError(Exception):
    """A publish step failed."""
    pass


@dataclass
class ConfigurationError(PublishError):
    """A required option is missing or an option has an invalid value."""
    option: str
    message: str

    def __str__(self):
        return self.message


@dataclass
class FilesystemError(PublishError):
    """The target directory could not be created."""
    path: str
    message: str

    def __str__(self):
        return self.message


@dataclass
class VcsCommandError(PublishError):
    """A git command exited non-zero in a mandatory step."""
    step: str
    message: str
    output: str = ""

    def __str__(self):
        return f"[{self.step}] {self.message}"
