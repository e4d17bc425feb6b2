"""
sitepass - Configuration Module

Constants shared by every other module plus the logger setup used by the
command line. Nothing from the rest of the package is imported here, so this
file sits at the bottom of the dependency graph.
"""

import logging
import sys


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "sitepass"

# Characters of the base64 digest kept as the working string.
# SHA-512 -> 64 bytes -> 88 base64 characters, so 32 always fits.
WORKING_LENGTH = 32

# Joins site name and master password before hashing.
NAME_SEPARATOR = ":"

# Group/other permission bits that must be clear on the master password file.
OWNER_ONLY_MASK = 0o077

LOG_FORMAT = "%(levelname)s: %(message)s"


# =============================================================================
# Logging
# =============================================================================

def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger to write to stderr.

    Library modules only call logging.getLogger(__name__); handlers are
    installed here, once, by the command line. Calling this again only
    adjusts the level.

    Args:
        verbose: Log DEBUG messages too (default: WARNING and above)

    Returns:
        The "sitepass" logger
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
