"""
Host file system implementation of the ``FileSystem`` capability.
"""

import os
import stat
import errno
import logging
from typing import List

from .base import FileStat, FileSystem


logger = logging.getLogger(__name__)


def _invalid_path(path: str, e: ValueError) -> OSError:
    """Report a path the OS cannot represent (such as one with a NUL byte) as an OSError."""
    return OSError(errno.EINVAL, str(e), path)


class LocalFileSystem(FileSystem):
    """
    ``FileSystem`` backed by the operating system.

    Symbolic links are followed when stat'ing, like ``find -L`` would for the
    entry itself; a dangling link fails the stat and is skipped by the walker.
    """

    def __init__(self, sort_entries: bool = True):
        """
        Initialize the local file system.

        Args:
            sort_entries: Return directory listings sorted by name. The order
                of ``os.listdir`` is arbitrary, so sorting keeps output stable.
        """
        self.sort_entries = sort_entries

    def resolve_path(self, cwd: str, path: str) -> str:
        return os.path.normpath(os.path.join(cwd, path))

    def stat(self, path: str) -> FileStat:
        try:
            stat_result = os.stat(path)
        except ValueError as e:
            raise _invalid_path(path, e) from e
        return FileStat(
            is_file=stat.S_ISREG(stat_result.st_mode),
            is_directory=stat.S_ISDIR(stat_result.st_mode),
            size=stat_result.st_size,
            mtime=stat_result.st_mtime,
        )

    def readdir(self, path: str) -> List[str]:
        try:
            entries = os.listdir(path)
        except ValueError as e:
            raise _invalid_path(path, e) from e
        if self.sort_entries:
            entries.sort()
        return entries

    def remove(self, path: str) -> None:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.remove(path)
        except ValueError as e:
            raise _invalid_path(path, e) from e
        logger.debug(f"Removed {path}")
