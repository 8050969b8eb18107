"""
Predicate evaluation for vfind.

``evaluate`` is a pure function of an expression node and an evaluation
context. Combinators always evaluate both operands.
"""

import math
import logging
from typing import Dict, Optional

from ..fs.base import FileSystem
from ..models.expression import (
    AndExpression,
    Comparison,
    EmptyPredicate,
    Expression,
    FileType,
    MtimePredicate,
    NamePredicate,
    NewerPredicate,
    NotExpression,
    OrExpression,
    PathPredicate,
    SizePredicate,
    SizeUnit,
    TypePredicate,
    iter_expression,
)
from ..models.search import EvaluationContext
from .glob import match_glob


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def _matches_mtime(predicate: MtimePredicate, ctx: EvaluationContext) -> bool:
    age_days = (ctx.now - ctx.mtime) / SECONDS_PER_DAY
    if predicate.comparison == Comparison.MORE:
        return age_days > predicate.days
    if predicate.comparison == Comparison.LESS:
        return age_days < predicate.days
    return math.floor(age_days) == predicate.days


def _matches_size(predicate: SizePredicate, ctx: EvaluationContext) -> bool:
    target = predicate.target_bytes
    if predicate.comparison == Comparison.MORE:
        return ctx.size > target
    if predicate.comparison == Comparison.LESS:
        return ctx.size < target
    # Exact block counts round the file size up to whole blocks
    if predicate.unit == SizeUnit.BLOCKS:
        return math.ceil(ctx.size / SizeUnit.BLOCKS.multiplier) == predicate.value
    return ctx.size == target


def evaluate(expression: Expression, ctx: EvaluationContext) -> bool:
    """
    Evaluate an expression tree against one entry.

    Args:
        expression: Expression node to evaluate
        ctx: Attributes of the entry being tested

    Returns:
        True if the entry satisfies the expression
    """
    if isinstance(expression, NamePredicate):
        return match_glob(ctx.name, expression.pattern, expression.ignore_case)
    if isinstance(expression, PathPredicate):
        return match_glob(ctx.relative_path, expression.pattern, expression.ignore_case)
    if isinstance(expression, TypePredicate):
        if expression.file_type == FileType.FILE:
            return ctx.is_file
        return ctx.is_directory
    if isinstance(expression, EmptyPredicate):
        return ctx.is_empty
    if isinstance(expression, MtimePredicate):
        return _matches_mtime(expression, ctx)
    if isinstance(expression, NewerPredicate):
        reference_time = ctx.reference_times.get(expression.reference_path)
        if reference_time is None:
            return False
        return ctx.mtime > reference_time
    if isinstance(expression, SizePredicate):
        return _matches_size(expression, ctx)
    if isinstance(expression, NotExpression):
        return not evaluate(expression.inner, ctx)
    if isinstance(expression, AndExpression):
        left = evaluate(expression.left, ctx)
        right = evaluate(expression.right, ctx)
        return left and right
    if isinstance(expression, OrExpression):
        left = evaluate(expression.left, ctx)
        right = evaluate(expression.right, ctx)
        return left or right
    raise TypeError(f"Unknown expression node: {type(expression).__name__}")


def uses_empty_predicate(expression: Optional[Expression]) -> bool:
    """Check whether any node of the tree is ``-empty``."""
    return any(isinstance(node, EmptyPredicate) for node in iter_expression(expression))


def resolve_reference_times(expression: Optional[Expression], fs: FileSystem, cwd: str) -> Dict[str, float]:
    """
    Resolve every ``-newer`` reference file to its modification time.

    References are keyed by the path string as given on the command line.
    A reference that cannot be stat'ed is left out of the mapping.

    Args:
        expression: Expression tree to scan
        fs: File system to query
        cwd: Working directory used to resolve relative references

    Returns:
        Mapping of reference path string to modification time
    """
    reference_times: Dict[str, float] = {}
    for node in iter_expression(expression):
        if not isinstance(node, NewerPredicate) or node.reference_path in reference_times:
            continue
        full_path = fs.resolve_path(cwd, node.reference_path)
        try:
            reference_times[node.reference_path] = fs.stat(full_path).mtime
        except OSError as e:
            logger.debug(f"Cannot stat -newer reference {node.reference_path}: {e}")
    return reference_times
