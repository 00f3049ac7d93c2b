"""Shared constants for branchpub."""

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1  # publish step failed
EXIT_CONFIG_ERROR = 2  # missing or invalid options
