"""
File system capability for vfind.

The traversal engine and the action executor never touch the host file system
directly; they go through a ``FileSystem`` so the same search can run against
the real disk or a virtual tree. Paths are POSIX-style absolute strings.
"""

import posixpath
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FileStat:
    """
    Metadata of one file system entry.

    Attributes:
        is_file: Entry is a regular file
        is_directory: Entry is a directory
        size: Size in bytes
        mtime: Modification time in seconds since the epoch
    """
    is_file: bool
    is_directory: bool
    size: int
    mtime: float


class FileSystem(ABC):
    """Operations the find engine needs from a file system."""

    def resolve_path(self, cwd: str, path: str) -> str:
        """
        Map a working directory and a relative or absolute path to a
        normalized absolute path.
        """
        if not posixpath.isabs(path):
            path = posixpath.join(cwd, path)
        return posixpath.normpath(path)

    @abstractmethod
    def stat(self, path: str) -> FileStat:
        """
        Get metadata for an absolute path.

        Raises:
            FileNotFoundError: If the path does not exist
            OSError: If the entry cannot be inspected
        """

    @abstractmethod
    def readdir(self, path: str) -> List[str]:
        """
        List the entry names of an absolute directory path in a stable order.

        Raises:
            OSError: If the directory cannot be listed
        """

    @abstractmethod
    def remove(self, path: str) -> None:
        """
        Remove a single entry. Directories are removed only when empty.

        Raises:
            OSError: With a descriptive message if the entry cannot be removed
        """

    @staticmethod
    def join(parent: str, name: str) -> str:
        """Child path of ``parent`` without doubling the root separator."""
        if parent == '/':
            return '/' + name
        return f"{parent}/{name}"
