#!/usr/bin/env python3
"""branchpub CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from branchpub.lib.config import DEFAULT_CONFIG_FILE, load_publish_config
from branchpub.lib.constants import EXIT_SUCCESS, EXIT_ERROR, EXIT_CONFIG_ERROR
from branchpub.lib.errors import ConfigurationError
from branchpub.workflow.publish import publish


def get_config_path(args) -> Path | None:
    """Resolve the config file: --config if given, else publish.yaml if present."""
    if args.config:
        return Path(args.config)

    default = Path(DEFAULT_CONFIG_FILE)
    if default.exists():
        return default
    return None


def get_overrides(args) -> dict:
    """Options given on the command line. Unset flags are None so the file wins."""
    return {
        "branch": args.branch,
        "dir": args.dir,
        "remote": args.remote,
        "commit": True if args.commit else None,
        "push": True if args.push else None,
        "commitMsg": args.message,
        "force": True if args.force else None,
    }


def cmd_publish(args) -> int:
    try:
        config = load_publish_config(get_config_path(args), args.target, get_overrides(args))
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    result = publish(config)
    if result.success:
        return EXIT_SUCCESS

    print(f"ERROR: {result.error}", file=sys.stderr)
    if isinstance(result.error, ConfigurationError):
        return EXIT_CONFIG_ERROR
    return EXIT_ERROR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='branchpub',
        description='Publish a build directory to a branch with its own history',
    )
    parser.add_argument('target', nargs='?', help='Target name in the config file (optional if it has one)')
    parser.add_argument('--config', '-c', help=f'Config file (default: {DEFAULT_CONFIG_FILE} if present)')
    parser.add_argument('--branch', '-b', help='Branch to publish to')
    parser.add_argument('--dir', '-d', help='Directory to publish')
    parser.add_argument('--remote', '-r', help='Remote name or URL')
    parser.add_argument('--commit', action='store_true', help='Commit changes in the directory')
    parser.add_argument('--push', action='store_true', help='Push the branch (commits first)')
    parser.add_argument('--message', '-m', help='Commit message template (%%sourceName%%, %%sourceCommit%%, %%sourceBranch%%)')
    parser.add_argument('--force', action='store_true', help='Force the final push')
    parser.add_argument('--verbose', '-v', action='store_true', help='Show git details')
    parser.set_defaults(func=cmd_publish)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
