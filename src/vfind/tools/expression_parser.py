"""
Argument parsing for vfind.

Two passes read the same argument vector:

1. ``discover_search_options`` finds the search path and the
   ``-maxdepth``/``-mindepth`` bounds.
2. ``parse_expression`` scans predicate, operator and negation tokens plus
   actions, then builds the expression tree with NOT binding tighter than AND
   (implicit or explicit), and AND binding tighter than OR.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from ..models.actions import Action, DeleteAction, ExecAction, Print0Action, PrintAction
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
)
from ..models.search import FindInvocation, TraversalConfig
from .errors import FindParseError


logger = logging.getLogger(__name__)

# Flags whose following argument is a value, not a path or token
PREDICATES_WITH_ARGS = frozenset([
    '-name', '-iname', '-path', '-ipath', '-type',
    '-maxdepth', '-mindepth', '-mtime', '-newer', '-size',
])

DEPTH_OPTIONS = ('-maxdepth', '-mindepth')

EXEC_TERMINATORS = (';', '+')

_LEADING_INT = re.compile(r'\s*([+-]?[0-9]+)')
_SIZE_BODY = re.compile(r'([0-9]+)([ckMGb])?')


class _Negation:
    """Standalone ``-not``/``!`` marker."""

    def __repr__(self) -> str:
        return "NOT"


class _Operator:
    """Explicit ``-a`` or ``-o`` marker."""

    def __init__(self, op: str):
        self.op = op

    def __repr__(self) -> str:
        return self.op.upper()


_Token = Union[Expression, _Negation, _Operator]


@dataclass
class ParsedExpression:
    """Result of the token scan: the expression tree and the registered actions."""
    expression: Optional[Expression] = None
    actions: List[Action] = field(default_factory=list)


def parse_int_prefix(text: str) -> Optional[int]:
    """
    Parse the leading integer of ``text``, ignoring anything after it.

    Returns:
        The integer, or None if ``text`` does not start with one
    """
    match = _LEADING_INT.match(text)
    if not match:
        return None
    return int(match.group(1))


def _split_sign(text: str) -> Tuple[Comparison, str]:
    if text.startswith('+'):
        return Comparison.MORE, text[1:]
    if text.startswith('-'):
        return Comparison.LESS, text[1:]
    return Comparison.EXACT, text


def _parse_mtime(text: str) -> Optional[MtimePredicate]:
    comparison, body = _split_sign(text)
    days = parse_int_prefix(body)
    if days is None:
        logger.debug(f"Dropping -mtime with non-numeric argument '{text}'")
        return None
    return MtimePredicate(days=days, comparison=comparison)


def _parse_size(text: str) -> Optional[SizePredicate]:
    comparison, body = _split_sign(text)
    match = _SIZE_BODY.fullmatch(body)
    if not match:
        logger.debug(f"Dropping -size with malformed argument '{text}'")
        return None
    unit = SizeUnit(match.group(2) or 'b')
    return SizePredicate(value=int(match.group(1)), unit=unit, comparison=comparison)


def _parse_type(text: str) -> TypePredicate:
    try:
        return TypePredicate(file_type=FileType(text))
    except ValueError:
        raise FindParseError(f"Unknown argument to -type: {text}", token=text)


def discover_search_options(args: Sequence[str]) -> TraversalConfig:
    """
    Find the search path and depth bounds in an argument vector.

    The last bare argument that is not a predicate value, an ``-exec``
    fragment, an ``-exec`` terminator or ``!`` becomes the search path.

    Args:
        args: Full argument vector

    Returns:
        TraversalConfig for the invocation
    """
    search_path = '.'
    max_depth: Optional[int] = None
    min_depth: Optional[int] = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '-maxdepth' and i + 1 < len(args):
            i += 1
            max_depth = parse_int_prefix(args[i])
        elif arg == '-mindepth' and i + 1 < len(args):
            i += 1
            min_depth = parse_int_prefix(args[i])
        elif arg == '-exec':
            i += 1
            while i < len(args) and args[i] not in EXEC_TERMINATORS:
                i += 1
        elif arg in PREDICATES_WITH_ARGS:
            i += 1
        elif not arg.startswith('-') and arg not in EXEC_TERMINATORS and arg != '!':
            search_path = arg
        i += 1

    return TraversalConfig(search_path=search_path, max_depth=max_depth, min_depth=min_depth)


def tokenize(args: Sequence[str], start_index: int = 0) -> Tuple[List[_Token], List[Action]]:
    """
    Scan arguments into expression tokens and actions.

    Args:
        args: Full argument vector
        start_index: Index of the first argument to scan

    Returns:
        Tuple of (tokens, actions)

    Raises:
        FindParseError: On an unknown flag, a missing predicate value, a bad
            ``-type`` argument or an unterminated ``-exec``
    """
    tokens: List[_Token] = []
    actions: List[Action] = []

    i = start_index
    while i < len(args):
        arg = args[i]

        if arg in DEPTH_OPTIONS and i + 1 >= len(args):
            logger.debug(f"Ignoring {arg} without a value")
        elif arg in PREDICATES_WITH_ARGS:
            if i + 1 >= len(args):
                raise FindParseError(f"missing argument to `{arg}'", token=arg)
            i += 1
            value = args[i]
            predicate: Optional[Expression] = None
            if arg == '-name':
                predicate = NamePredicate(pattern=value)
            elif arg == '-iname':
                predicate = NamePredicate(pattern=value, ignore_case=True)
            elif arg == '-path':
                predicate = PathPredicate(pattern=value)
            elif arg == '-ipath':
                predicate = PathPredicate(pattern=value, ignore_case=True)
            elif arg == '-type':
                predicate = _parse_type(value)
            elif arg == '-mtime':
                predicate = _parse_mtime(value)
            elif arg == '-newer':
                predicate = NewerPredicate(reference_path=value)
            elif arg == '-size':
                predicate = _parse_size(value)
            # -maxdepth/-mindepth belong to discover_search_options
            if predicate is not None:
                tokens.append(predicate)
        elif arg == '-empty':
            tokens.append(EmptyPredicate())
        elif arg in ('-not', '!'):
            tokens.append(_Negation())
        elif arg in ('-o', '-or'):
            tokens.append(_Operator('or'))
        elif arg in ('-a', '-and'):
            tokens.append(_Operator('and'))
        elif arg == '-exec':
            command: List[str] = []
            i += 1
            while i < len(args) and args[i] not in EXEC_TERMINATORS:
                command.append(args[i])
                i += 1
            if i >= len(args):
                raise FindParseError("missing argument to `-exec'", token=arg)
            actions.append(ExecAction(command=command, batch=args[i] == '+'))
        elif arg == '-print':
            actions.append(PrintAction())
        elif arg == '-print0':
            actions.append(Print0Action())
        elif arg == '-delete':
            actions.append(DeleteAction())
        elif arg.startswith('-'):
            raise FindParseError(f"unknown predicate '{arg}'", token=arg)
        elif tokens:
            break
        i += 1

    return tokens, actions


def build_expression(tokens: Sequence[_Token]) -> Optional[Expression]:
    """
    Build an expression tree from scanned tokens.

    Args:
        tokens: Predicates, negation markers and operator markers in order

    Returns:
        Root of the tree, or None if no predicate survives
    """
    # A negation binds to the predicate right after it and is dropped otherwise
    folded: List[Union[Expression, _Operator]] = []
    j = 0
    while j < len(tokens):
        token = tokens[j]
        if isinstance(token, _Negation):
            following = tokens[j + 1] if j + 1 < len(tokens) else None
            if following is not None and not isinstance(following, (_Negation, _Operator)):
                folded.append(NotExpression(inner=following))
                j += 1
        else:
            folded.append(token)
        j += 1

    or_groups: List[List[Expression]] = [[]]
    for token in folded:
        if isinstance(token, _Operator):
            if token.op == 'or':
                or_groups.append([])
        else:
            or_groups[-1].append(token)

    and_results: List[Expression] = []
    for group in or_groups:
        if not group:
            continue
        result = group[0]
        for right in group[1:]:
            result = AndExpression(left=result, right=right)
        and_results.append(result)

    if not and_results:
        return None

    expression = and_results[0]
    for right in and_results[1:]:
        expression = OrExpression(left=expression, right=right)
    return expression


def parse_expression(args: Sequence[str], start_index: int = 0) -> ParsedExpression:
    """
    Scan an argument vector and build its expression tree and action list.

    Raises:
        FindParseError: If the arguments cannot be parsed
    """
    tokens, actions = tokenize(args, start_index)
    return ParsedExpression(expression=build_expression(tokens), actions=actions)


def parse_find_arguments(args: Sequence[str]) -> FindInvocation:
    """
    Parse a complete find argument vector.

    Args:
        args: Arguments after the command name

    Returns:
        FindInvocation with expression, actions and traversal bounds

    Raises:
        FindParseError: If the arguments cannot be parsed
    """
    traversal = discover_search_options(args)
    parsed = parse_expression(args, 0)
    invocation = FindInvocation(
        expression=parsed.expression,
        actions=parsed.actions,
        traversal=traversal,
    )
    logger.debug(f"Parsed find invocation: {invocation}")
    return invocation
