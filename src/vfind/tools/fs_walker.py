"""
Filesystem walker for vfind.

This module traverses the subtree under a search root, builds an evaluation
context for every visited entry and collects the reported paths of the entries
that satisfy the expression. Traversal is a depth-first pre-order recursion
bounded by ``-maxdepth``; ``-mindepth`` only decides which entries may match.
"""

import time
import logging
from typing import Dict, List, Mapping, Optional

from ..fs.base import FileStat, FileSystem
from ..models.expression import Expression
from ..models.search import EvaluationContext, TraversalConfig
from .evaluator import evaluate, uses_empty_predicate


logger = logging.getLogger(__name__)


class FSWalker:
    """
    Filesystem walker that visits entries and matches them against an expression.

    This class provides:
    - Depth-bounded recursive traversal in listing order
    - Reported paths that keep the user's search path prefix
    - Silent skipping of entries that disappear or cannot be stat'ed
    """

    def __init__(self, fs: FileSystem, config: TraversalConfig):
        """
        Initialize the filesystem walker.

        Args:
            fs: File system to traverse
            config: Search path and depth bounds
        """
        self.fs = fs
        self.config = config
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'nodes_visited': 0,
            'nodes_matched': 0,
            'directories_traversed': 0,
            'errors': 0
        }

    def walk(self, base_path: str, expression: Optional[Expression],
             reference_times: Optional[Mapping[str, float]] = None,
             now: Optional[float] = None) -> List[str]:
        """
        Walk the tree under ``base_path`` and collect matching entries.

        Args:
            base_path: Absolute path the search path resolved to
            expression: Expression to evaluate, None to match every entry
            reference_times: Resolved ``-newer`` reference times
            now: Evaluation time for ``-mtime``, defaults to the current time

        Returns:
            Reported paths of matching entries in discovery order
        """
        matches: List[str] = []
        reference_times = reference_times if reference_times is not None else {}
        now = time.time() if now is None else now
        needs_empty = uses_empty_predicate(expression)

        logger.info(f"Walking directory tree: {base_path}")
        self._visit(base_path, base_path, 0, expression, reference_times, now, needs_empty, matches)
        return matches

    def _visit(self, current_path: str, base_path: str, depth: int,
               expression: Optional[Expression], reference_times: Mapping[str, float],
               now: float, needs_empty: bool, matches: List[str]) -> None:
        if not self.config.allows_visit(depth):
            return

        try:
            file_stat = self.fs.stat(current_path)
        except OSError as e:
            logger.debug(f"Skipping {current_path}: {e}")
            return

        self._stats['nodes_visited'] += 1
        is_base = current_path == base_path
        relative_path = self._relative_path(current_path, base_path)

        # Listing is needed for -empty on directories and for descending
        descend = file_stat.is_directory and self.config.allows_visit(depth + 1)
        entries: Optional[List[str]] = None
        if file_stat.is_directory and (descend or needs_empty):
            entries = self._list_directory(current_path)

        if self.config.allows_match(depth):
            matched = True
            if expression is not None:
                ctx = EvaluationContext(
                    name=self._display_name(current_path, is_base),
                    relative_path=relative_path,
                    is_file=file_stat.is_file,
                    is_directory=file_stat.is_directory,
                    is_empty=self._is_empty(file_stat, entries),
                    mtime=file_stat.mtime,
                    size=file_stat.size,
                    reference_times=reference_times,
                    now=now,
                )
                matched = evaluate(expression, ctx)
            if matched:
                self._stats['nodes_matched'] += 1
                matches.append(relative_path)

        if descend and entries:
            self._stats['directories_traversed'] += 1
            for entry in entries:
                child_path = self.fs.join(current_path, entry)
                self._visit(child_path, base_path, depth + 1, expression,
                            reference_times, now, needs_empty, matches)

    def _list_directory(self, path: str) -> Optional[List[str]]:
        try:
            return self.fs.readdir(path)
        except OSError as e:
            logger.warning(f"Cannot list directory {path}: {e}")
            self._stats['errors'] += 1
            return None

    @staticmethod
    def _is_empty(file_stat: FileStat, entries: Optional[List[str]]) -> bool:
        if file_stat.is_file:
            return file_stat.size == 0
        if file_stat.is_directory:
            # An unreadable directory is not reported as empty
            return entries is not None and len(entries) == 0
        return False

    def _display_name(self, current_path: str, is_base: bool) -> str:
        """
        Name tested by ``-name``.

        The search root uses the last component of the path as typed, so that
        searching ``.`` tests the name ``.``.
        """
        if is_base:
            search_path = self.config.search_path
            return search_path.rsplit('/', 1)[-1] or search_path
        return current_path.rsplit('/', 1)[-1]

    def _relative_path(self, current_path: str, base_path: str) -> str:
        """
        Path reported for an entry, built on the search path as typed.

        Examples with search path ``.`` and ``src/``:
            ``/cwd/a/b`` -> ``./a/b`` and ``src/a/b``
        """
        search_path = self.config.search_path
        if current_path == base_path:
            return search_path
        suffix = current_path[len(base_path):] if base_path != '/' else current_path
        if search_path.endswith('/'):
            return search_path + suffix.lstrip('/')
        return search_path + suffix

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last walks.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()
