"""
Data models for vfind.

This module contains all the core data structures used throughout the system.
"""

from .actions import Action, DeleteAction, ExecAction, Print0Action, PrintAction
from .config import FindConfig
from .expression import Expression, iter_expression
from .search import EvaluationContext, ExecResult, FindInvocation, TraversalConfig

__all__ = [
    'Action',
    'DeleteAction',
    'ExecAction',
    'Print0Action',
    'PrintAction',
    'FindConfig',
    'Expression',
    'iter_expression',
    'EvaluationContext',
    'ExecResult',
    'FindInvocation',
    'TraversalConfig',
]
