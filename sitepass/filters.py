"""
sitepass - Filter Engine

Filters reshape the 32-character working string into a password that meets
a site's policy (length limits, digits only, no symbols, ...). Every filter
is an immutable value; applying it is a pure str -> str function.

The set of filter kinds is closed:

    Replace(old, new)         replace every occurrence of old with new
    Skip(char)                drop every occurrence of one character
    Substring(start, length)  keep length characters from start (-1: to end)
    DigitMap()                letters -> digits, drop u-z and + /
    Uppercase() / Lowercase() ASCII case folding

apply_filter() is the single place that knows how to run each kind.
"""

import string
from dataclasses import dataclass
from typing import Iterable, Union


# =============================================================================
# Errors
# =============================================================================

class FilterError(Exception):
    """A filter could not be applied to the given text."""


class FilterRangeError(FilterError, IndexError):
    """Substring start lies outside the text it is applied to."""


# =============================================================================
# Filter Kinds
# =============================================================================

@dataclass(frozen=True)
class Replace:
    old: str
    new: str

    def __post_init__(self):
        # str.replace("") would insert `new` between every character
        if not self.old:
            raise ValueError("Replace needs a non-empty string to search for")


@dataclass(frozen=True)
class Skip:
    char: str

    def __post_init__(self):
        if len(self.char) != 1:
            raise ValueError(f"Skip needs exactly one character, got {self.char!r}")


@dataclass(frozen=True)
class Substring:
    """
    Keep `length` characters starting at `start`.

    A negative length means "to the end of the text". A length running past
    the end is clipped. A start below zero or beyond the end of the text is
    an error at apply time, since the text length is only known then.
    """
    start: int
    length: int = -1


@dataclass(frozen=True)
class DigitMap:
    pass


@dataclass(frozen=True)
class Uppercase:
    pass


@dataclass(frozen=True)
class Lowercase:
    pass


Filter = Union[Replace, Skip, Substring, DigitMap, Uppercase, Lowercase]


# =============================================================================
# Translation Tables
# =============================================================================

def _digit_table() -> dict:
    """a-t and A-T map onto 0-9 twice over; u-z, U-Z, '+' and '/' are dropped."""
    table = {}
    for i, (lower, upper) in enumerate(zip(string.ascii_lowercase, string.ascii_uppercase)):
        digit = str(i % 10) if i < 20 else None
        table[ord(lower)] = digit
        table[ord(upper)] = digit
    table[ord("+")] = None
    table[ord("/")] = None
    return table


DIGIT_TABLE = _digit_table()
UPPER_TABLE = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
LOWER_TABLE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


# =============================================================================
# Application
# =============================================================================

def substring(text: str, start: int, length: int = -1) -> str:
    """
    Cut a window out of text.

    Args:
        text: Input string
        start: Index of the first kept character (0 <= start <= len(text))
        length: Number of characters to keep; negative keeps the rest

    Returns:
        The window, shorter than `length` if the text ends first

    Raises:
        FilterRangeError: If start is negative or past the end of text
    """
    if start < 0 or start > len(text):
        raise FilterRangeError(
            f"substring start {start} is outside a {len(text)}-character string"
        )
    if length < 0:
        return text[start:]
    return text[start:min(start + length, len(text))]


def apply_filter(flt: Filter, text: str) -> str:
    """
    Run one filter over text.

    Raises:
        FilterRangeError: For a Substring whose start does not fit the text
        TypeError: If flt is not one of the known filter kinds
    """
    if isinstance(flt, Replace):
        return text.replace(flt.old, flt.new)
    if isinstance(flt, Skip):
        return text.replace(flt.char, "")
    if isinstance(flt, Substring):
        return substring(text, flt.start, flt.length)
    if isinstance(flt, DigitMap):
        return text.translate(DIGIT_TABLE)
    if isinstance(flt, Uppercase):
        return text.translate(UPPER_TABLE)
    if isinstance(flt, Lowercase):
        return text.translate(LOWER_TABLE)
    raise TypeError(f"not a filter: {flt!r}")


def apply_chain(filters: Iterable[Filter], text: str) -> str:
    """Apply filters in order, each one fed the previous one's output."""
    for flt in filters:
        text = apply_filter(flt, text)
    return text
