"""
sitepass - Self-Tests

Run with: python test_simple.py   (or: pytest)

Covers the derivation pipeline end to end:
- Working string = base64(SHA-512("site:master"))[:32]
- Each filter kind, including substring bounds
- Directive parsing, including lines that must be ignored
- Filter scoping in the site list (blank lines reset the chain)
"""

import base64
import hashlib

from sitepass import crypto
from sitepass.filters import (
    DigitMap,
    FilterRangeError,
    Lowercase,
    Replace,
    Skip,
    Substring,
    Uppercase,
    apply_chain,
    apply_filter,
)
from sitepass.parser import FILTER_KINDS, parse_filter
from sitepass.registry import Site, build_registry, longest_name


def reference_base(site: str, master: str) -> str:
    """Working string computed independently with hashlib."""
    raw = hashlib.sha512(f"{site}:{master}".encode("utf-8")).digest()
    return base64.b64encode(raw).decode("ascii")[:32]


def test_derivation():
    """Test the unfiltered working string."""
    print("Testing Derivation...")

    # Same inputs -> same password
    pw1 = crypto.derive_password("github.com", "secret")
    pw2 = crypto.derive_password("github.com", "secret", [])
    assert pw1 == pw2, "Derivation should be deterministic"
    assert len(pw1) == 32, "Working string should be 32 characters"
    print("  [OK] Derivation is deterministic")

    assert crypto.derive_working_string("x", "y") == reference_base("x", "y")
    assert crypto.derive_password("x", "y") == reference_base("x", "y")
    print("  [OK] Working string matches base64(SHA-512)")

    # Separator is part of the hashed message
    assert crypto.derive_working_string("a:b", "c") == crypto.derive_working_string("a", "b:c")
    assert crypto.derive_working_string("a", "b") != crypto.derive_working_string("b", "a")

    # Non-ASCII input is hashed as UTF-8
    assert crypto.derive_working_string("例え.jp", "pässwörd") == reference_base("例え.jp", "pässwörd")
    print("  [OK] Site and master are joined with ':' and UTF-8 encoded")

    assert crypto.digest(b"abc") == hashlib.sha512(b"abc").digest()


def test_replace_and_skip():
    """Test Replace and Skip filters."""
    print("Testing Replace / Skip...")

    for text in ["", "a", "aaa", "banana", reference_base("x", "y")]:
        assert apply_filter(Replace("a", "a"), text) == text, "Identity replace must not change text"

    assert apply_filter(Replace("an", "AN"), "banana") == "bANANa"
    assert apply_filter(Replace("aa", "b"), "aaa") == "ba", "Replacement is non-overlapping"
    assert apply_filter(Replace("+", "-"), "a+b+c") == "a-b-c"
    print("  [OK] Replace works")

    assert apply_filter(Skip("/"), "a/b//c") == "abc"
    assert apply_filter(Skip("é"), "éaé") == "a", "Skip works on characters, not bytes"
    assert apply_filter(Skip("z"), "abc") == "abc"
    print("  [OK] Skip works")

    # Degenerate constructions are refused
    for bad in [lambda: Replace("", "x"), lambda: Skip(""), lambda: Skip("ab")]:
        try:
            bad()
            assert False, "Should reject degenerate filter"
        except ValueError:
            pass
    print("  [OK] Empty replace / multi-char skip rejected")


def test_substring():
    """Test Substring bounds."""
    print("Testing Substring...")

    text = "0123456789"
    assert apply_filter(Substring(0), text) == text, "No length keeps whole string"
    assert apply_filter(Substring(5, 3), text) == "567"
    assert apply_filter(Substring(0, 8), text) == "01234567"
    assert apply_filter(Substring(3), text) == "3456789"
    assert apply_filter(Substring(3, -7), text) == "3456789", "Negative length means to the end"
    print("  [OK] Windows inside the string")

    assert apply_filter(Substring(8, 5), text) == "89", "Length past the end is clipped"
    assert apply_filter(Substring(0, 100), text) == text
    assert apply_filter(Substring(10), text) == "", "Start at the end gives empty string"
    assert apply_filter(Substring(4, 0), text) == ""
    print("  [OK] Windows clipped at the end")

    for start in [-1, 11, 40]:
        try:
            apply_filter(Substring(start, 2), text)
            assert False, "Should reject out-of-range start"
        except FilterRangeError as e:
            assert str(start) in str(e)
    print("  [OK] Out-of-range start rejected")


def test_digit_and_case():
    """Test DigitMap and case filters."""
    print("Testing DigitMap / case...")

    assert apply_filter(DigitMap(), "abcdefghij") == "0123456789"
    assert apply_filter(DigitMap(), "klmnopqrst") == "0123456789"
    assert apply_filter(DigitMap(), "ABCDEFGHIJKLMNOPQRST") == "01234567890123456789"
    assert apply_filter(DigitMap(), "uvwxyzUVWXYZ+/") == ""
    assert apply_filter(DigitMap(), "09=") == "09=", "Digits and padding pass through"
    assert apply_filter(DigitMap(), "aK+u/9") == "009"

    password = crypto.derive_password("x", "y", [DigitMap()])
    assert password.isdigit() or password == ""
    print("  [OK] DigitMap works")

    assert apply_filter(Uppercase(), "abC+/9") == "ABC+/9"
    assert apply_filter(Lowercase(), "ABc+/9") == "abc+/9"
    assert apply_filter(Uppercase(), "éa") == "éA", "Only ASCII letters are folded"
    assert apply_filter(Lowercase(), "ÉA") == "Éa"
    print("  [OK] Case folding works")


def test_chain_order():
    """Test filters run in declaration order."""
    print("Testing Filter Chains...")

    assert apply_chain([], "abc") == "abc"
    assert apply_chain([Uppercase(), Replace("A", "x")], "abc") == "xBC"
    assert apply_chain([Replace("A", "x"), Uppercase()], "abc") == "ABC"
    assert apply_chain([Substring(0, 2), Uppercase()], "abcd") == "AB"
    print("  [OK] Chains apply in order")

    try:
        apply_filter("uppercase", "abc")
        assert False, "Should reject unknown filter objects"
    except TypeError:
        print("  [OK] Unknown filter objects rejected")


def test_parse_filter():
    """Test directive parsing."""
    print("Testing Filter Parser...")

    assert parse_filter("# @replace a b") == Replace("a", "b")
    assert parse_filter("#\t@replace  + -") == Replace("+", "-")
    assert parse_filter("# @skip /") == Skip("/")
    assert parse_filter("# @skip xyz") == Skip("x"), "Skip keeps the first character"
    assert parse_filter("# @substring 2") == Substring(2, -1)
    assert parse_filter("# @substring 5 3") == Substring(5, 3)
    assert parse_filter("# @substring x 3") == Substring(0, 3), "Bad start falls back to 0"
    assert parse_filter("# @substring 1 y") == Substring(1, -1), "Bad length falls back to -1"
    assert parse_filter("# @substring +4 -2") == Substring(4, -2)
    assert parse_filter("# @substring 1_0") == Substring(0, -1)
    assert parse_filter("# @digit") == DigitMap()
    assert parse_filter("# @uppercase") == Uppercase()
    assert parse_filter("# @lowercase") == Lowercase()
    print("  [OK] Valid directives parsed")

    assert parse_filter("# @digit extra args") == DigitMap(), "Extra args are ignored"
    print("  [OK] Extra args on zero-argument filters tolerated")

    samples = {
        "replace": "a b",
        "skip": "/",
        "substring": "0 8",
        "digit": "",
        "uppercase": "",
        "lowercase": "",
    }
    assert FILTER_KINDS == tuple(samples)
    for kind in FILTER_KINDS:
        assert parse_filter(f"# @{kind} {samples[kind]}") is not None, f"@{kind} should parse"
    print("  [OK] Every known kind parses")

    rejected = [
        "# @replace onlyonearg",
        "# @replace a b c",
        "# @skip",
        "# @substring",
        "# @substring 1 2 3",
        "# notafilter",
        "# @unknown",
        "# @",
        "#",
        "#@digit",
    ]
    for line in rejected:
        assert parse_filter(line) is None, f"Should reject {line!r}"
    print("  [OK] Malformed directives rejected")


def test_registry():
    """Test filter scoping in site lists."""
    print("Testing Site Registry...")

    sites = build_registry(["# @uppercase", "site-a", "", "site-b"])
    assert [s.name for s in sites] == ["site-a", "site-b"]
    assert sites[0].filters == (Uppercase(),)
    assert sites[1].filters == (), "Blank line resets the chain"
    print("  [OK] Blank line resets filters")

    lines = [
        "  # @digit  ",
        "# just a comment",
        "# @replace onlyonearg",
        " bank-one ",
        "# @substring 0 8",
        "bank-two",
        "   ",
        "\r",
        "plain",
    ]
    sites = build_registry(lines)
    assert [s.name for s in sites] == ["bank-one", "bank-two", "plain"]
    assert sites[0].filters == (DigitMap(),), "Later filters must not leak into earlier sites"
    assert sites[1].filters == (DigitMap(), Substring(0, 8))
    assert sites[2].filters == ()
    print("  [OK] Each site keeps its own chain")

    assert build_registry([]) == []
    assert build_registry(["", "# @digit", ""]) == []
    assert longest_name(sites) == len("bank-one")
    assert longest_name([]) == 0
    print("  [OK] Empty lists handled")


def test_end_to_end():
    """Test a site list through to the final password."""
    print("Testing End to End...")

    sites = build_registry(["# @substring 0 8", "example.com"])
    password = sites[0].password("hunter2")
    assert len(password) == 8
    assert password == reference_base("example.com", "hunter2")[:8]
    assert password == sites[0].password("hunter2")
    print("  [OK] example.com -> 8 characters")

    site = Site("shop", (Replace("+", "x"), Skip("/"), Lowercase()))
    expected = reference_base("shop", "pw").replace("+", "x").replace("/", "").lower()
    assert site.password("pw") == expected
    print("  [OK] Multi-filter chain")

    try:
        Site("short", (Substring(0, 4), Substring(10))).password("pw")
        assert False, "Out-of-range substring should fail the derivation"
    except FilterRangeError:
        print("  [OK] Out-of-range substring fails the site")


def run_all_tests():
    """Run all tests."""
    print("=" * 70)
    print("sitepass - Test Suite")
    print("=" * 70)
    print()

    tests = [
        test_derivation,
        test_replace_and_skip,
        test_substring,
        test_digit_and_case,
        test_chain_order,
        test_parse_filter,
        test_registry,
        test_end_to_end,
    ]

    failed = []

    for test in tests:
        try:
            test()
            print()
        except Exception as e:
            print(f"  [FAIL] TEST FAILED: {e}")
            failed.append((test.__name__, e))
            print()

    print("=" * 70)
    if not failed:
        print("[OK] ALL TESTS PASSED!")
    else:
        print(f"[FAIL] {len(failed)} TESTS FAILED:")
        for name, error in failed:
            print(f"  - {name}: {error}")
    print("=" * 70)

    return len(failed) == 0


if __name__ == "__main__":
    import sys
    success = run_all_tests()
    sys.exit(0 if success else 1)
