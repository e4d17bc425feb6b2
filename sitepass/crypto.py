"""
sitepass - Password Derivation

All hashing lives in this one file.

Derivation:
    1. "<site>:<master password>" -> UTF-8 bytes
    2. bytes -> SHA-512 (64 bytes)
    3. digest -> standard base64 with padding (88 characters)
    4. keep the first 32 characters (the "working string")
    5. working string -> site's filter chain -> password

Nothing here is random or stored: the same site name, master password and
filters always give the same password, so passwords never need saving.
"""

import base64
from typing import Iterable

from cryptography.hazmat.primitives import hashes

from .config import NAME_SEPARATOR, WORKING_LENGTH
from .filters import Filter, apply_chain


def digest(data: bytes) -> bytes:
    """SHA-512 of data (64 bytes)."""
    h = hashes.Hash(hashes.SHA512())
    h.update(data)
    return h.finalize()


def derive_working_string(site_name: str, master_password: str) -> str:
    """
    Derive the unfiltered password base for a site.

    Args:
        site_name: Site identifier exactly as declared in the site list
        master_password: The user's master password

    Returns:
        First 32 characters of base64(SHA-512("site:master"))
    """
    message = f"{site_name}{NAME_SEPARATOR}{master_password}".encode("utf-8")
    encoded = base64.b64encode(digest(message)).decode("ascii")
    return encoded[:WORKING_LENGTH]


def derive_password(site_name: str, master_password: str, filters: Iterable[Filter] = ()) -> str:
    """
    Derive the final password for a site.

    Args:
        site_name: Site identifier
        master_password: The user's master password
        filters: Filter chain, applied in order to the working string

    Returns:
        Password string (32 characters unless a filter changes the length)

    Raises:
        FilterRangeError: If a Substring filter's start does not fit
    """
    return apply_chain(filters, derive_working_string(site_name, master_password))
