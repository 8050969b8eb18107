"""
Host capabilities for vfind.

The find engine reaches the outside world only through the classes here: a
``FileSystem`` for metadata, listings and removal, and an optional
``CommandExecutor`` for ``-exec``.
"""

from .base import FileStat, FileSystem
from .executor import CommandExecutor, SubprocessExecutor
from .local import LocalFileSystem
from .memory import InMemoryFileSystem

__all__ = [
    'FileStat',
    'FileSystem',
    'CommandExecutor',
    'SubprocessExecutor',
    'LocalFileSystem',
    'InMemoryFileSystem',
]
