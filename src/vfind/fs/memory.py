"""
In-memory implementation of the ``FileSystem`` capability.

Useful for virtualized environments that have no backing disk and for tests
that need exact control over sizes, timestamps, listing order and failures.
"""

import time
import errno
import logging
import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .base import FileStat, FileSystem


logger = logging.getLogger(__name__)


@dataclass
class _Node:
    is_directory: bool
    size: int = 0
    mtime: float = 0.0
    children: List[str] = field(default_factory=list)


class InMemoryFileSystem(FileSystem):
    """
    Virtual POSIX-style tree held in a dictionary.

    Directory listings are returned in insertion order. Removal failures can
    be injected per path with ``fail_removal``.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._nodes: Dict[str, _Node] = {'/': _Node(is_directory=True, mtime=clock())}
        self._removal_failures: Dict[str, str] = {}

    def _normalize(self, path: str) -> str:
        return self.resolve_path('/', path)

    def _attach(self, path: str, node: _Node) -> None:
        parent = posixpath.dirname(path)
        if parent not in self._nodes:
            self.add_directory(parent)
        parent_node = self._nodes[parent]
        if not parent_node.is_directory:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", parent)
        name = posixpath.basename(path)
        if name not in parent_node.children:
            parent_node.children.append(name)
        self._nodes[path] = node

    def add_directory(self, path: str, mtime: Optional[float] = None) -> str:
        """
        Create a directory and any missing parents.

        Returns:
            The normalized absolute path
        """
        path = self._normalize(path)
        existing = self._nodes.get(path)
        if existing is not None:
            if not existing.is_directory:
                raise FileExistsError(errno.EEXIST, "File exists", path)
            if mtime is not None:
                existing.mtime = mtime
            return path
        self._attach(path, _Node(is_directory=True, mtime=self._clock() if mtime is None else mtime))
        return path

    def add_file(self, path: str, content: Union[str, bytes] = b"",
                 mtime: Optional[float] = None, size: Optional[int] = None) -> str:
        """
        Create or replace a regular file, creating missing parents.

        Args:
            path: Absolute or root-relative path
            content: File content; only its length is kept
            mtime: Modification time, defaults to the clock
            size: Explicit size overriding the content length

        Returns:
            The normalized absolute path
        """
        path = self._normalize(path)
        if isinstance(content, str):
            content = content.encode('utf-8')
        node = _Node(
            is_directory=False,
            size=len(content) if size is None else size,
            mtime=self._clock() if mtime is None else mtime,
        )
        self._attach(path, node)
        return path

    def fail_removal(self, path: str, message: str = "Permission denied") -> None:
        """Make every later ``remove`` of ``path`` raise ``PermissionError``."""
        self._removal_failures[self._normalize(path)] = message

    def exists(self, path: str) -> bool:
        return self._normalize(path) in self._nodes

    def stat(self, path: str) -> FileStat:
        node = self._nodes.get(path)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        return FileStat(
            is_file=not node.is_directory,
            is_directory=node.is_directory,
            size=node.size,
            mtime=node.mtime,
        )

    def readdir(self, path: str) -> List[str]:
        node = self._nodes.get(path)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        if not node.is_directory:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        return list(node.children)

    def remove(self, path: str) -> None:
        path = self._normalize(path)
        if path in self._removal_failures:
            raise PermissionError(errno.EACCES, self._removal_failures[path], path)
        node = self._nodes.get(path)
        if node is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
        if path == '/':
            raise PermissionError(errno.EBUSY, "Cannot remove the root directory", path)
        if node.is_directory and node.children:
            raise OSError(errno.ENOTEMPTY, "Directory not empty", path)
        parent = self._nodes[posixpath.dirname(path)]
        parent.children.remove(posixpath.basename(path))
        del self._nodes[path]
        logger.debug(f"Removed {path}")
