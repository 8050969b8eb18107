"""
Command execution capability for vfind.

``-exec`` hands a fully composed command line to a ``CommandExecutor`` and
collects its output. The host decides whether such a capability exists at all.
"""

import logging
import subprocess
from typing import Callable, Optional

from ..models.search import ExecResult


logger = logging.getLogger(__name__)

CommandExecutor = Callable[[str], ExecResult]


class SubprocessExecutor:
    """
    Run command lines through the host shell and capture their output.

    Attributes:
        cwd: Working directory for the commands
        shell: Shell executable, None for the platform default
    """

    def __init__(self, cwd: Optional[str] = None, shell: Optional[str] = None):
        self.cwd = cwd
        self.shell = shell

    def __call__(self, command: str) -> ExecResult:
        logger.debug(f"Executing: {command}")
        try:
            completed = subprocess.run(
                command,
                shell=True,
                executable=self.shell,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            return ExecResult(stderr=f"{e}\n", exit_code=127)
        except OSError as e:
            return ExecResult(stderr=f"{e}\n", exit_code=e.errno or 1)
        except ValueError as e:
            # Command lines with an embedded NUL cannot be passed to the shell
            return ExecResult(stderr=f"{e}\n", exit_code=1)
        return ExecResult(
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_code=completed.returncode,
        )
