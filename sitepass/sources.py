"""
sitepass - Input Files

Reads the two files the tool needs: the site list and the master password
file. Failures are raised as SourceError so the command line can report them
and exit; nothing in the derivation code touches the filesystem.
"""

import logging
import os
import stat
from typing import List

from .config import OWNER_ONLY_MASK
from .registry import Site, build_registry

logger = logging.getLogger(__name__)


class SourceError(Exception):
    """An input file could not be read."""


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Cannot read {path}: {e}") from e


def read_site_lines(path: str) -> List[str]:
    """Raw lines of a site list (split on '\\n', not yet trimmed)."""
    return _read_text(path).split("\n")


def load_sites(path: str) -> List[Site]:
    """
    Load and parse a site list file.

    Raises:
        SourceError: If the file cannot be read
    """
    return build_registry(read_site_lines(path))


def is_accessible_only_by_owner(path: str) -> bool:
    """
    True if neither group nor others have any permission on path.

    Raises:
        SourceError: If the file cannot be stat'ed
    """
    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        raise SourceError(f"Cannot stat {path}: {e}") from e
    return stat.S_IMODE(mode) & OWNER_ONLY_MASK == 0


def load_master_password(path: str) -> str:
    """
    Read the master password file.

    A file readable by group or others only triggers a warning; the password
    is still loaded.

    Returns:
        File content with surrounding whitespace (trailing newline) removed

    Raises:
        SourceError: If the file cannot be read
    """
    if not is_accessible_only_by_owner(path):
        logger.warning("%s should be accessible only by the owner.", path)
    return _read_text(path).strip()
