"""
sitepass - Guided Walkthrough (single run, no user input)

Run: python demo.py

Walks through what `sitepass SITES_FILE MASTER_PASS_FILE` does and explains
each step:
 - Writing a site list with filter directives
 - How blank lines scope filters
 - The working string (SHA-512 + base64, 32 characters)
 - Each filter reshaping the working string
 - The aligned output the command line prints
 - Cleanup
"""

import os
import tempfile
from textwrap import indent

from sitepass import cli, crypto
from sitepass.filters import apply_filter
from sitepass.sources import load_master_password, load_sites


LINE = "=" * 70

SITE_LIST = """\
# @replace + -
# @skip /
github.com
gitlab.com

# @digit
# @substring 0 6
bank.example.com

# @lowercase
# @substring 4 12
forum.example.org
"""

MASTER_PASSWORD = "CorrectHorseBatteryStaple!"


def step(title: str, code_path: str):
    print(f"\n{LINE}\n{title}  (code: {code_path})\n{LINE}")


def explain(title: str, body: str):
    print(f"\n[Behind the scenes] {title}")
    print(indent(body.strip(), "  "))


def main():
    workdir = tempfile.mkdtemp(prefix="sitepass-demo-")
    sites_path = os.path.join(workdir, "sites.txt")
    master_path = os.path.join(workdir, "master.txt")

    try:
        step("1) Write the site list and master password", "sources.py")
        with open(sites_path, "w", encoding="utf-8") as fh:
            fh.write(SITE_LIST)
        with open(master_path, "w", encoding="utf-8") as fh:
            fh.write(MASTER_PASSWORD + "\n")
        os.chmod(master_path, 0o600)
        print(indent(SITE_LIST, "  | "))
        explain("Master password file", """
The master password lives in its own file, readable only by you (mode 600).
A looser mode only produces a warning; the password is still used.
""")

        step("2) Parse the site list", "registry.build_registry / parser.parse_filter")
        sites = load_sites(sites_path)
        master = load_master_password(master_path)
        for site in sites:
            chain = ", ".join(repr(f) for f in site.filters) or "(no filters)"
            print(f"  {site.name:<20} {chain}")
        explain("Filter scope", """
'# @kind args' lines collect into a pending chain. Every site line takes a
copy of that chain. A blank line empties it, so each block of sites can
have its own password policy.
""")

        step("3) Working string", "crypto.derive_working_string")
        for site in sites:
            print(f"  {site.name:<20} {crypto.derive_working_string(site.name, master)}")
        explain("SHA-512 + base64", """
"<site>:<master>" is hashed with SHA-512 (64 bytes), base64 encoded
(88 characters) and cut to the first 32 characters.
Same inputs, same output: nothing is random and nothing is stored.
""")

        step("4) Filters, one at a time", "filters.apply_filter")
        for site in sites:
            text = crypto.derive_working_string(site.name, master)
            print(f"\n  {site.name}")
            print(f"    start               {text}")
            for flt in site.filters:
                text = apply_filter(flt, text)
                print(f"    {type(flt).__name__:<20}{text}")

        step("5) What the command line prints", "cli.render_passwords")
        lines, failed = cli.render_passwords(sites, master)
        for line in lines:
            print(f"  {line}")
        if failed:
            print(f"  failed: {', '.join(failed)}")
        explain("Alignment", """
Passwords start one column after the longest site name, so the output
reads as a table.
""")

    finally:
        step("6) Cleanup", "demo.py")
        for path in (sites_path, master_path):
            if os.path.exists(path):
                os.unlink(path)
        os.rmdir(workdir)
        print("  Removed temporary files.")


if __name__ == "__main__":
    main()
