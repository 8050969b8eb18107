"""
Shell-style glob matching for vfind.

Patterns are translated to anchored regular expressions by a single left to
right scan:

- ``*`` matches any sequence, including the empty one
- ``?`` matches exactly one character
- ``[...]`` is copied verbatim up to the first ``]``; a ``]`` cannot be escaped
  inside a class
- regex metacharacters are escaped, everything else is literal
"""

import re
import logging
from functools import lru_cache
from typing import Optional


logger = logging.getLogger(__name__)

_REGEX_SPECIALS = frozenset('.+^${}()|\\')


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob pattern to an anchored regex pattern string.

    Args:
        pattern: Shell-style wildcard pattern

    Returns:
        Regex source matching the whole string
    """
    parts = ['^']
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == '*':
            parts.append('.*')
        elif c == '?':
            parts.append('.')
        elif c == '[':
            end = pattern.find(']', i + 1)
            if end == -1:
                end = len(pattern) - 1
            parts.append(pattern[i:end + 1])
            i = end
        elif c in _REGEX_SPECIALS:
            parts.append('\\' + c)
        else:
            parts.append(c)
        i += 1
    parts.append('$')
    return ''.join(parts)


@lru_cache(maxsize=256)
def compile_glob(pattern: str, ignore_case: bool = False) -> Optional["re.Pattern[str]"]:
    """
    Compile a glob pattern, caching the result.

    Returns:
        Compiled regex, or None if the translated pattern is not a valid regex
        (for example an inverted range such as ``[z-a]``)
    """
    flags = re.DOTALL | (re.IGNORECASE if ignore_case else 0)
    try:
        return re.compile(glob_to_regex(pattern), flags)
    except re.error as e:
        logger.debug(f"Glob pattern '{pattern}' does not translate to a valid regex: {e}")
        return None


def match_glob(name: str, pattern: str, ignore_case: bool = False) -> bool:
    """
    Check whether ``name`` matches ``pattern`` as a whole.

    Args:
        name: Basename or path to test
        pattern: Shell-style wildcard pattern
        ignore_case: Match case-insensitively

    Returns:
        True if the entire string matches
    """
    compiled = compile_glob(pattern, ignore_case)
    if compiled is None:
        return False
    return compiled.fullmatch(name) is not None
