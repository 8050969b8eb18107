"""
The ``find`` command for vfind.

``FindCommand.execute`` is the component boundary: it parses the arguments,
resolves ``-newer`` references, walks the tree, runs the actions and always
returns an ``ExecResult``. Engine errors never propagate past it.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .fs.base import FileSystem
from .fs.executor import CommandExecutor
from .models.search import ExecResult
from .tools.actions import ActionExecutor
from .tools.errors import FindError, SearchPathError
from .tools.evaluator import resolve_reference_times
from .tools.expression_parser import parse_find_arguments
from .tools.fs_walker import FSWalker


logger = logging.getLogger(__name__)

HELP_FLAG = '--help'

FIND_HELP_OPTIONS = [
    "-name PATTERN    file name matches shell pattern PATTERN",
    "-iname PATTERN   like -name but case insensitive",
    "-path PATTERN    file path matches shell pattern PATTERN",
    "-ipath PATTERN   like -path but case insensitive",
    "-type TYPE       file is of type: f (regular file), d (directory)",
    "-empty           file is empty or directory is empty",
    "-mtime N         file's data was modified N*24 hours ago",
    "-newer FILE      file was modified more recently than FILE",
    "-size N[ckMGb]   file uses N units of space (c=bytes, k=KB, M=MB, G=GB, b=512B blocks)",
    "-maxdepth LEVELS descend at most LEVELS directories",
    "-mindepth LEVELS do not apply tests at levels less than LEVELS",
    "-not, !          negate the following expression",
    "-a, -and         logical AND (default)",
    "-o, -or          logical OR",
    "-exec CMD {} ;   execute CMD on each file ({} is replaced by filename)",
    "-exec CMD {} +   execute CMD with multiple files at once",
    "-print           print the full file name (default action)",
    "-print0          print the full file name followed by a null character",
    "-delete          delete found files/directories",
    "    --help       display this help and exit",
]


def render_help() -> str:
    """Static usage text for ``find --help``."""
    lines = [
        "find - search for files in a directory hierarchy",
        "",
        "Usage: find [path...] [expression]",
        "",
        "Options:",
    ]
    lines.extend(f"  {option}" for option in FIND_HELP_OPTIONS)
    return "\n".join(lines) + "\n"


@dataclass
class CommandContext:
    """
    Capabilities provided by the host for one invocation.

    Attributes:
        fs: File system to search
        cwd: Absolute working directory
        executor: Command executor for ``-exec``, None when unavailable
        clock: Source of the evaluation time for ``-mtime``
    """
    fs: FileSystem
    cwd: str
    executor: Optional[CommandExecutor] = None
    clock: Callable[[], float] = field(default=time.time)


class FindCommand:
    """Search a directory hierarchy for entries matching an expression."""

    name = "find"

    def execute(self, args: Sequence[str], context: CommandContext) -> ExecResult:
        """
        Run one find invocation.

        Args:
            args: Arguments after the command name
            context: Host capabilities

        Returns:
            Captured stdout, stderr and exit code
        """
        args = list(args)
        if HELP_FLAG in args:
            return ExecResult(stdout=render_help())

        try:
            return self._run(args, context)
        except FindError as e:
            logger.debug(f"find failed: {e.message}")
            return ExecResult(stderr=e.to_stderr(), exit_code=e.exit_code)

    def _run(self, args: List[str], context: CommandContext) -> ExecResult:
        invocation = parse_find_arguments(args)
        search_path = invocation.traversal.search_path

        base_path = context.fs.resolve_path(context.cwd, search_path)
        try:
            context.fs.stat(base_path)
        except OSError:
            raise SearchPathError(search_path)

        reference_times = resolve_reference_times(invocation.expression, context.fs, context.cwd)

        walker = FSWalker(context.fs, invocation.traversal)
        matches = walker.walk(base_path, invocation.expression, reference_times, now=context.clock())
        logger.debug(f"Walk finished: {walker.get_stats()}")

        executor = ActionExecutor(context.fs, context.cwd, context.executor)
        return executor.run(matches, invocation.actions)


def run_find(args: Sequence[str], context: CommandContext) -> ExecResult:
    """Convenience function to run a single find invocation."""
    return FindCommand().execute(args, context)
