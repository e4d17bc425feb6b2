"""
sitepass - Command-Line Interface (uses built-in argparse)

Usage:
    sitepass SITES_FILE MASTER_PASS_FILE
    sitepass SITES_FILE MASTER_PASS_FILE --site github.com --site example.com

Prints one aligned line per site:

    example.com: 3q2+7wXh...
    github.com:  Zk0a9PfL...
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, Tuple

from . import __version__
from .config import APP_NAME, NAME_SEPARATOR, setup_logging
from .filters import FilterError
from .registry import Site, longest_name
from .sources import SourceError, load_master_password, load_sites

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Derive per-site passwords from a single master password.",
    )
    parser.add_argument("sites_file", metavar="SITES_FILE",
                        help="site list (site names and # @filter directives)")
    parser.add_argument("master_file", metavar="MASTER_PASS_FILE",
                        help="file holding the master password (mode 600)")
    parser.add_argument("--site", action="append", dest="sites", metavar="NAME",
                        help="only print this site (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug messages to stderr")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def select_sites(sites: List[Site], names: Optional[List[str]]) -> Tuple[List[Site], List[str]]:
    """
    Narrow sites down to the requested names, keeping declaration order.

    Returns:
        (selected sites, requested names that matched no site)
    """
    if not names:
        return sites, []
    wanted = set(names)
    selected = [site for site in sites if site.name in wanted]
    found = {site.name for site in selected}
    missing = [name for name in names if name not in found]
    return selected, missing


def format_line(name: str, password: str, width: int) -> str:
    """`name:` padded so passwords line up one column past the longest name."""
    padding = " " * (width - len(name) + 1)
    return f"{name}{NAME_SEPARATOR}{padding}{password}"


def render_passwords(sites: Iterable[Site], master_password: str) -> Tuple[List[str], List[str]]:
    """
    Derive and format every site's password.

    A site whose filter chain fails is left out and reported instead, so
    one bad directive does not hide the other passwords. Passwords line up
    on the names that are actually printed.

    Returns:
        (output lines, names of sites that failed)
    """
    derived = []
    failed = []

    for site in sites:
        try:
            derived.append((site, site.password(master_password)))
        except FilterError as e:
            logger.error("%s: %s", site.name, e)
            failed.append(site.name)

    width = longest_name(site for site, _ in derived)
    lines = [format_line(site.name, password, width) for site, password in derived]
    return lines, failed


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        sites = load_sites(args.sites_file)
        master_password = load_master_password(args.master_file)
    except SourceError as e:
        logger.error("%s", e)
        return 1

    sites, missing = select_sites(sites, args.sites)
    for name in missing:
        logger.error("No such site: %s", name)

    lines, failed = render_passwords(sites, master_password)
    for line in lines:
        print(line)

    return 1 if missing or failed else 0


if __name__ == "__main__":
    sys.exit(main())
