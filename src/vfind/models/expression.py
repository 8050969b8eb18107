"""
Expression data models for vfind.

This module defines the predicate expression tree evaluated against every
visited file system entry. The tree is a closed tagged union: each node carries
a ``kind`` literal, and every consumer dispatches over the full set of node
types. Nodes are frozen so a tree built for one invocation can never change
while it is being evaluated.
"""

from typing import Annotated, Iterator, Literal, Optional, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class FileType(Enum):
    """File kinds accepted by ``-type``."""
    FILE = "f"
    DIRECTORY = "d"


class Comparison(Enum):
    """Numeric comparison modes for ``-mtime`` and ``-size``."""
    EXACT = "exact"
    MORE = "more"
    LESS = "less"


class SizeUnit(Enum):
    """Unit suffixes accepted by ``-size``."""
    BYTES = "c"
    KILOBYTES = "k"
    MEGABYTES = "M"
    GIGABYTES = "G"
    BLOCKS = "b"

    @property
    def multiplier(self) -> int:
        """Number of bytes in one unit."""
        return _UNIT_BYTES[self]


_UNIT_BYTES = {
    SizeUnit.BYTES: 1,
    SizeUnit.KILOBYTES: 1024,
    SizeUnit.MEGABYTES: 1024 * 1024,
    SizeUnit.GIGABYTES: 1024 * 1024 * 1024,
    SizeUnit.BLOCKS: 512,
}


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class NamePredicate(_Node):
    """Glob match against the entry's basename."""
    kind: Literal["name"] = "name"
    pattern: str
    ignore_case: bool = False


class PathPredicate(_Node):
    """Glob match against the entry's reported relative path."""
    kind: Literal["path"] = "path"
    pattern: str
    ignore_case: bool = False


class TypePredicate(_Node):
    kind: Literal["type"] = "type"
    file_type: FileType


class EmptyPredicate(_Node):
    """Zero-byte file or directory without entries."""
    kind: Literal["empty"] = "empty"


class MtimePredicate(_Node):
    """Modification age in days relative to evaluation time."""
    kind: Literal["mtime"] = "mtime"
    days: int
    comparison: Comparison = Comparison.EXACT


class NewerPredicate(_Node):
    """
    Entry modified strictly after a reference file.

    The reference is resolved once before traversal; a reference that could not
    be resolved makes this predicate false for every entry.
    """
    kind: Literal["newer"] = "newer"
    reference_path: str


class SizePredicate(_Node):
    kind: Literal["size"] = "size"
    value: int = Field(..., ge=0)
    unit: SizeUnit = SizeUnit.BLOCKS
    comparison: Comparison = Comparison.EXACT

    @property
    def target_bytes(self) -> int:
        return self.value * self.unit.multiplier


class NotExpression(_Node):
    kind: Literal["not"] = "not"
    inner: "Expression"


class AndExpression(_Node):
    kind: Literal["and"] = "and"
    left: "Expression"
    right: "Expression"


class OrExpression(_Node):
    kind: Literal["or"] = "or"
    left: "Expression"
    right: "Expression"


Expression = Annotated[
    Union[
        NamePredicate,
        PathPredicate,
        TypePredicate,
        EmptyPredicate,
        MtimePredicate,
        NewerPredicate,
        SizePredicate,
        NotExpression,
        AndExpression,
        OrExpression,
    ],
    Field(discriminator="kind"),
]

NotExpression.model_rebuild()
AndExpression.model_rebuild()
OrExpression.model_rebuild()


def iter_expression(expression: Optional[Expression]) -> Iterator[Expression]:
    """
    Walk an expression tree in pre-order.

    Args:
        expression: Root of the tree, or None for an empty expression

    Yields:
        Every node of the tree, parents before children, left before right
    """
    if expression is None:
        return
    yield expression
    if isinstance(expression, NotExpression):
        yield from iter_expression(expression.inner)
    elif isinstance(expression, (AndExpression, OrExpression)):
        yield from iter_expression(expression.left)
        yield from iter_expression(expression.right)


def describe_expression(expression: Optional[Expression]) -> str:
    """Render an expression tree as a fully parenthesized string (for logs)."""
    if expression is None:
        return "<match-all>"
    if isinstance(expression, NotExpression):
        return f"NOT {describe_expression(expression.inner)}"
    if isinstance(expression, AndExpression):
        return f"({describe_expression(expression.left)} AND {describe_expression(expression.right)})"
    if isinstance(expression, OrExpression):
        return f"({describe_expression(expression.left)} OR {describe_expression(expression.right)})"
    if isinstance(expression, (NamePredicate, PathPredicate)):
        flag = "i" if expression.ignore_case else ""
        return f"{flag}{expression.kind}={expression.pattern}"
    if isinstance(expression, TypePredicate):
        return f"type={expression.file_type.value}"
    if isinstance(expression, EmptyPredicate):
        return "empty"
    if isinstance(expression, MtimePredicate):
        return f"mtime[{expression.comparison.value}]={expression.days}"
    if isinstance(expression, NewerPredicate):
        return f"newer={expression.reference_path}"
    if isinstance(expression, SizePredicate):
        return f"size[{expression.comparison.value}]={expression.value}{expression.unit.value}"
    raise TypeError(f"Unknown expression node: {type(expression).__name__}")
