"""
sitepass - Site Registry

A site list is plain text:

    # @digit
    # @substring 0 8
    bank.example.com
    other-bank.example.com

    github.com

Filter directives apply to every site declared after them until the next
blank line, which clears the chain. Above, both banks get [DigitMap,
Substring(0, 8)] and github.com gets no filters.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .crypto import derive_password
from .filters import Filter
from .parser import parse_filter

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class Site:
    name: str
    filters: Tuple[Filter, ...] = ()

    def password(self, master_password: str) -> str:
        """Derive this site's password (see crypto.derive_password)."""
        return derive_password(self.name, master_password, self.filters)


def build_registry(lines: Iterable[str]) -> List[Site]:
    """
    Build the ordered list of sites from raw site-list lines.

    Args:
        lines: Untrimmed lines, newline characters already split off

    Returns:
        Sites in declaration order, each holding its own copy of the filter
        chain that was active when it was declared
    """
    sites = []
    pending = []

    for raw in lines:
        line = raw.strip()
        if not line:
            pending = []
        elif line.startswith(COMMENT_PREFIX):
            flt = parse_filter(line)
            if flt is not None:
                pending.append(flt)
        else:
            sites.append(Site(line, tuple(pending)))

    logger.debug("Loaded %d site(s)", len(sites))
    return sites


def longest_name(sites: Iterable[Site]) -> int:
    """Length of the longest site name, 0 for no sites."""
    return max((len(site.name) for site in sites), default=0)
