"""
sitepass - Deterministic Per-Site Password Generator

Derives every site password from one master password, so no site password
is ever stored: the same inputs regenerate the same password on demand.

How a password is made:
- "<site>:<master>" is hashed with SHA-512
- the digest is base64-encoded and cut to 32 characters
- the site's filter chain (replace, skip, substring, digit, case) reshapes it

Components:
- config.py: constants and logging setup
- filters.py: the filter kinds and how each is applied
- parser.py: "# @kind args" directive lines -> filters
- crypto.py: hashing and derivation (one file!)
- registry.py: site list lines -> ordered sites with their filter chains
- sources.py: reading the site list and master password files
- cli.py: command-line interface (uses built-in argparse)

Usage:
    sitepass sites.txt ~/.sitepass-master
    python -m sitepass sites.txt ~/.sitepass-master --site github.com
"""

__version__ = "0.3.0"
__author__ = "sitepass Team"

from .crypto import derive_password, derive_working_string
from .filters import (
    DigitMap,
    FilterError,
    FilterRangeError,
    Lowercase,
    Replace,
    Skip,
    Substring,
    Uppercase,
    apply_chain,
    apply_filter,
)
from .parser import parse_filter
from .registry import Site, build_registry
