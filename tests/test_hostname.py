"""
Unit tests for hostname pattern compilation.
"""

import re

import pytest

from vhost.exceptions import InvalidArgumentError
from vhost.hostname import (
    Hostname,
    HostnamePattern,
    compile_hostname,
    hostname_spec,
    is_end_anchored,
    strict_end_anchored,
)


class TestHostnameSpec:
    """Test coercion of user supplied hostnames."""

    def test_string_becomes_literal(self):
        assert hostname_spec("example.com") == Hostname("example.com")

    def test_compiled_pattern_keeps_source_only(self):
        spec = hostname_spec(re.compile(r"(\w+)\.example\.com", re.MULTILINE))
        assert spec == HostnamePattern(r"(\w+)\.example\.com")

    def test_existing_spec_is_returned(self):
        spec = HostnamePattern("foo")
        assert hostname_spec(spec) is spec

    def test_bytes_pattern_rejected(self):
        with pytest.raises(InvalidArgumentError):
            hostname_spec(re.compile(b"foo"))

    def test_empty_literal_is_falsy(self):
        assert not Hostname("")
        assert Hostname("a")
        assert HostnamePattern("")


class TestLiteralCompilation:
    """Test compiling literal hostnames."""

    def test_literal_is_escaped_and_anchored(self):
        regexp = compile_hostname("example.com")
        assert regexp.pattern == r"^example\.com$"

    def test_only_ignorecase_flag(self):
        regexp = compile_hostname("example.com")
        assert regexp.flags & ~re.UNICODE == re.IGNORECASE

    def test_wildcard_becomes_capture_group(self):
        regexp = compile_hostname("*.example.com")
        assert regexp.pattern == r"^([^.]+)\.example\.com$"

    def test_metacharacters_match_literally(self):
        regexp = compile_hostname("a+b(c)|d[e]$f^g{1}=h!i/j\\k?l")
        assert regexp.match("a+b(c)|d[e]$f^g{1}=h!i/j\\k?l")
        assert not regexp.match("aab(c)|d[e]$f^g{1}=h!i/j\\k?l")

    def test_dot_is_not_a_wildcard(self):
        regexp = compile_hostname("example.com")
        assert not regexp.match("exampleXcom")

    @pytest.mark.parametrize("hostname", ["example.com", "EXAMPLE.COM", "Example.Com"])
    def test_literal_matches_any_case_without_captures(self, hostname):
        match = compile_hostname("example.com").match(hostname)
        assert match is not None
        assert match.groups() == ()

    def test_case_insensitive(self):
        assert compile_hostname("Foo.com").match("foo.COM")

    @pytest.mark.parametrize("hostname", ["xfoo", "foox", "xfoox"])
    def test_anchored(self, hostname):
        assert compile_hostname("foo").match(hostname) is None

    def test_captures_follow_wildcards(self):
        match = compile_hostname("*.*.example.com").match("api.eu.example.com")
        assert match.groups() == ("api", "eu")

    def test_wildcard_does_not_span_labels(self):
        regexp = compile_hostname("*.example.com")
        assert regexp.match("a.b.example.com") is None
        assert regexp.match(".example.com") is None


class TestPatternCompilation:
    """Test compiling pattern hostnames."""

    def test_pattern_source_used_verbatim(self):
        regexp = compile_hostname(HostnamePattern(r"(\w+)\.example\.com"))
        assert regexp.pattern == r"^(\w+)\.example\.com$"
        assert regexp.match("tenant.example.com").group(1) == "tenant"

    def test_compiled_pattern_input(self):
        regexp = compile_hostname(re.compile(r"(?:www\.)?example\.com"))
        assert regexp.match("www.EXAMPLE.com")
        assert regexp.match("example.com")

    def test_existing_anchors_not_duplicated(self):
        regexp = compile_hostname(HostnamePattern(r"^example\.com$"))
        assert regexp.pattern == r"^example\.com$"

    def test_start_and_end_anchors_checked_separately(self):
        assert compile_hostname(HostnamePattern("^foo")).pattern == "^foo$"
        assert compile_hostname(HostnamePattern("foo$")).pattern == "^foo$"

    def test_escaped_dollar_is_not_an_anchor(self):
        regexp = compile_hostname(HostnamePattern(r"foo\$"))
        assert regexp.pattern == r"^foo\$$"
        assert regexp.match("foo$")
        assert not regexp.match("foo$bar")

    def test_escaped_backslash_before_dollar_is_an_anchor(self):
        regexp = compile_hostname(HostnamePattern(r"foo\\$"))
        assert regexp.pattern == r"^foo\\$"
        assert regexp.match("foo\\")

    def test_invalid_pattern(self):
        with pytest.raises(InvalidArgumentError):
            compile_hostname(HostnamePattern("(unclosed"))


class TestEndAnchorDetection:
    """Test detection of a trailing unescaped dollar."""

    @pytest.mark.parametrize(
        "source, anchored",
        [
            ("$", True),
            ("foo$", True),
            (r"foo\$", False),
            (r"foo\\$", True),
            (r"foo\\\$", False),
            (r"foo\\\\$", True),
            ("foo", False),
            ("foo$\n", False),
        ],
    )
    def test_is_end_anchored(self, source, anchored):
        assert is_end_anchored(source) is anchored


class TestStrictEndAnchored:
    """Test the end-of-string variant used for newline-terminated hosts."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("^foo$", r"^foo\Z"),
            (r"^foo\$$", r"^foo\$\Z"),
            (r"^foo\\$", r"^foo\\\Z"),
            ("^a$|^b$", r"^a\Z|^b\Z"),
            ("^[$]$", r"^[$]\Z"),
            ("^[]$]$", r"^[]$]\Z"),
            ("^[^]$]$", r"^[^]$]\Z"),
        ],
    )
    def test_dollar_rewritten_outside_classes(self, source, expected):
        regexp = strict_end_anchored(re.compile(source, re.IGNORECASE))
        assert regexp.pattern == expected
        assert regexp.flags & re.IGNORECASE

    def test_variant_is_reused(self):
        regexp = compile_hostname("example.com")
        assert strict_end_anchored(regexp) is strict_end_anchored(regexp)

    def test_newline_rejected(self):
        regexp = strict_end_anchored(compile_hostname("*.example.com"))
        assert regexp.search("api.example.com\n") is None
        assert regexp.search("api.example.com").group(1) == "api"
