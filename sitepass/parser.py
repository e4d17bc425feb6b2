"""
sitepass - Filter Directive Parser

A site list declares filters in comment lines:

    # @replace <from> <to>
    # @skip <char>
    # @substring <start> [<length>]
    # @digit | # @uppercase | # @lowercase

parse_filter() turns one such line into a Filter. Anything it does not
understand (plain comments, unknown kinds, wrong argument counts) yields
None so the caller can skip the line; it never raises.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from .filters import (
    DigitMap,
    Filter,
    Lowercase,
    Replace,
    Skip,
    Substring,
    Uppercase,
)

logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = "@"

# Plain ASCII decimal, optionally signed. int() alone would also accept
# underscores and non-ASCII digits.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str, default: int) -> int:
    if _INT_RE.fullmatch(text):
        return int(text)
    return default


# =============================================================================
# Builders (one per filter kind)
# =============================================================================

def _build_replace(args: List[str]) -> Optional[Filter]:
    if len(args) != 2:
        return None
    return Replace(args[0], args[1])


def _build_skip(args: List[str]) -> Optional[Filter]:
    if len(args) != 1 or not args[0]:
        return None
    return Skip(args[0][0])


def _build_substring(args: List[str]) -> Optional[Filter]:
    if not 1 <= len(args) <= 2:
        return None
    start = _parse_int(args[0], 0)
    length = _parse_int(args[1], -1) if len(args) == 2 else -1
    return Substring(start, length)


def _no_args(factory: Callable[[], Filter]) -> Callable[[List[str]], Optional[Filter]]:
    """Builder for a filter that takes no arguments; extras are tolerated."""
    def build(args: List[str]) -> Optional[Filter]:
        if args:
            logger.warning("Ignoring extra filter arguments: %s", " ".join(args))
        return factory()
    return build


FILTER_BUILDERS: Dict[str, Callable[[List[str]], Optional[Filter]]] = {
    "replace": _build_replace,
    "skip": _build_skip,
    "substring": _build_substring,
    "digit": _no_args(DigitMap),
    "uppercase": _no_args(Uppercase),
    "lowercase": _no_args(Lowercase),
}

FILTER_KINDS = tuple(FILTER_BUILDERS)


# =============================================================================
# Parsing
# =============================================================================

def parse_filter(line: str) -> Optional[Filter]:
    """
    Parse one `#` directive line.

    Args:
        line: Trimmed configuration line starting with '#'

    Returns:
        The Filter it declares, or None if the line is not a valid directive
    """
    fields = line.split()
    if len(fields) < 2 or not fields[1].startswith(DIRECTIVE_PREFIX):
        logger.debug("Not a filter directive: %r", line)
        return None

    kind = fields[1][len(DIRECTIVE_PREFIX):]
    builder = FILTER_BUILDERS.get(kind)
    if builder is None:
        logger.debug("Unknown filter kind %r in %r (known: %s)", kind, line, ", ".join(FILTER_KINDS))
        return None

    flt = builder(fields[2:])
    if flt is None:
        logger.debug("Wrong arguments for @%s in %r", kind, line)
    return flt
