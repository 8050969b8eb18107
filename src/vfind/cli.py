"""
Command-line entry point for vfind.

Tool options (``--config``, ``--log-level``, ``--init-config``) are read with
argparse; every other argument, ``--help`` included, is passed to the find
command unchanged.
"""

import os
import sys
import logging
import argparse
import contextlib
from typing import Optional, Sequence

from .command import CommandContext, FindCommand
from .config import ConfigurationError, create_config_template, load_config
from .fs import LocalFileSystem, SubprocessExecutor
from .models.config import LOG_LEVELS


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vfind",
        description="Search for files in a directory hierarchy.",
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument("--config", dest="config", help="Path to a YAML configuration file")
    p.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured logging level",
    )
    p.add_argument("--init-config", dest="init_config", help="Write a configuration template and exit")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    ns, find_args = p.parse_known_args(argv)

    if ns.init_config:
        try:
            create_config_template(ns.init_config)
        except ConfigurationError as e:
            print(f"vfind: {e}", file=sys.stderr)
            return 2
        print(f"Configuration template written to {ns.init_config}")
        return 0

    try:
        result = load_config(ns.config)
    except ConfigurationError as e:
        print(f"vfind: {e}", file=sys.stderr)
        return 2

    config = result.config
    logging.basicConfig(
        level=getattr(logging, ns.log_level or config.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    report = logger.info if result.is_default else logger.warning
    for warning in result.warnings:
        report(warning)

    cwd = os.getcwd()
    executor = SubprocessExecutor(cwd=cwd, shell=config.exec.shell) if config.exec.enabled else None
    context = CommandContext(
        fs=LocalFileSystem(sort_entries=config.filesystem.sort_entries),
        cwd=cwd,
        executor=executor,
    )

    outcome = FindCommand().execute(find_args, context)

    try:
        sys.stdout.write(outcome.stdout)
        sys.stdout.flush()
    except BrokenPipeError:
        with contextlib.suppress(Exception):
            sys.stdout.close()
    sys.stderr.write(outcome.stderr)
    return outcome.exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
