"""
Action execution for vfind.

Actions run once, after traversal has finished, over the complete ordered list
of matches. Output of every action is accumulated into a single result triple.
"""

import logging
from typing import List, Optional, Sequence

from ..fs.base import FileSystem
from ..fs.executor import CommandExecutor
from ..models.actions import Action, DeleteAction, ExecAction, Print0Action, PrintAction
from ..models.search import ExecResult
from .errors import ExecUnavailableError


logger = logging.getLogger(__name__)


class ActionExecutor:
    """
    Run registered actions over a match list.

    Attributes:
        fs: File system used by ``-delete``
        cwd: Working directory used to resolve matches for ``-delete``
        executor: Command executor for ``-exec``, None if unavailable
    """

    def __init__(self, fs: FileSystem, cwd: str, executor: Optional[CommandExecutor] = None):
        self.fs = fs
        self.cwd = cwd
        self.executor = executor

    def run(self, matches: Sequence[str], actions: Sequence[Action]) -> ExecResult:
        """
        Run every action in registration order.

        With no actions the matches are printed one per line.

        Args:
            matches: Reported paths in traversal order
            actions: Registered actions

        Returns:
            Accumulated stdout, stderr and exit code

        Raises:
            ExecUnavailableError: If an ``-exec`` action is registered but no
                executor was provided; no action runs in that case
        """
        if not actions:
            actions = [PrintAction()]

        if self.executor is None and any(isinstance(a, ExecAction) for a in actions):
            raise ExecUnavailableError()

        result = ExecResult()
        for action in actions:
            if isinstance(action, PrintAction):
                result.stdout += self._print(matches, '\n')
            elif isinstance(action, Print0Action):
                result.stdout += self._print(matches, '\0')
            elif isinstance(action, DeleteAction):
                self._delete(matches, result)
            elif isinstance(action, ExecAction):
                self._exec(matches, action, result)
            else:
                raise TypeError(f"Unknown action: {type(action).__name__}")
        return result

    @staticmethod
    def _print(matches: Sequence[str], separator: str) -> str:
        if not matches:
            return ""
        return separator.join(matches) + separator

    def _delete(self, matches: Sequence[str], result: ExecResult) -> None:
        # Longest paths first so children go before their directories
        for path in sorted(matches, key=len, reverse=True):
            full_path = self.fs.resolve_path(self.cwd, path)
            try:
                self.fs.remove(full_path)
            except OSError as e:
                message = e.strerror or str(e)
                logger.debug(f"Failed to delete {full_path}: {e}")
                result.stderr += f"find: cannot delete '{path}': {message}\n"
                result.exit_code = 1

    def _exec(self, matches: Sequence[str], action: ExecAction, result: ExecResult) -> None:
        if action.batch:
            command_lines: List[str] = [action.render(list(matches))]
        else:
            command_lines = [action.render([path]) for path in matches]

        for command_line in command_lines:
            outcome = self.executor(command_line)
            result.stdout += outcome.stdout
            result.stderr += outcome.stderr
            if outcome.exit_code != 0:
                result.exit_code = outcome.exit_code
