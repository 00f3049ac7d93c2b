"""Publish a build-output directory to a git branch with independent history."""

__version__ = "0.1.0"
