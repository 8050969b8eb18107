"""
Search data models for vfind.

This module holds the per-invocation structures that flow between the argument
parser, the traversal engine and the action executor: the traversal bounds, the
parsed invocation, the per-entry evaluation context and the result triple.
"""

from typing import Dict, List, Mapping, Optional
from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict, Field

from .actions import Action
from .expression import Expression, describe_expression


class TraversalConfig(BaseModel):
    """
    Where to search and how deep.

    Attributes:
        search_path: Search root exactly as the user typed it
        max_depth: Deepest level visited (root is depth 0), None for unbounded
        min_depth: Shallowest level reported as a match, None for no bound
    """
    model_config = ConfigDict(frozen=True)

    search_path: str = Field(".", min_length=1, description="Search root as typed by the user")
    max_depth: Optional[int] = Field(None, description="Inclusive upper depth bound")
    min_depth: Optional[int] = Field(None, description="Inclusive lower depth bound for matching")

    def allows_visit(self, depth: int) -> bool:
        """Check whether an entry at ``depth`` is visited at all."""
        return self.max_depth is None or depth <= self.max_depth

    def allows_match(self, depth: int) -> bool:
        """Check whether an entry at ``depth`` may be reported as a match."""
        return self.min_depth is None or depth >= self.min_depth


class FindInvocation(BaseModel):
    """
    Everything parsed out of one argument vector.

    Attributes:
        expression: Predicate tree, None when every entry matches
        actions: Actions in registration order
        traversal: Search root and depth bounds
    """
    model_config = ConfigDict(frozen=True)

    expression: Optional[Expression] = None
    actions: List[Action] = Field(default_factory=list)
    traversal: TraversalConfig = Field(default_factory=TraversalConfig)

    def __str__(self) -> str:
        parts = [f"Path: '{self.traversal.search_path}'"]
        parts.append(f"Expression: {describe_expression(self.expression)}")
        if self.traversal.max_depth is not None:
            parts.append(f"Max depth: {self.traversal.max_depth}")
        if self.traversal.min_depth is not None:
            parts.append(f"Min depth: {self.traversal.min_depth}")
        parts.append(f"Actions: {', '.join(a.kind for a in self.actions) or 'print'}")
        return " | ".join(parts)


@dataclass
class EvaluationContext:
    """
    Attributes of one visited entry, as seen by predicates.

    A fresh context is built for every entry. ``reference_times`` is the
    same read-only mapping for the whole traversal.
    """
    name: str
    relative_path: str
    is_file: bool
    is_directory: bool
    is_empty: bool
    mtime: float
    size: int
    reference_times: Mapping[str, float] = field(default_factory=dict)
    now: float = 0.0


@dataclass
class ExecResult:
    """Captured standard output, standard error and exit code."""
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {'stdout': self.stdout, 'stderr': self.stderr, 'exit_code': self.exit_code}
