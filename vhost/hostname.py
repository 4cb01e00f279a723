"""
Hostname patterns for vhost.

A hostname is given either as a literal string, where every ``*`` is a
wildcard for one label, or as a regular expression source that is used
verbatim. Both compile to a single anchored, case-insensitive pattern.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from re import Pattern
from typing import Union

from .exceptions import InvalidArgumentError

ASTERISK_REGEXP = re.compile(r"\*")
ASTERISK_REPLACE = "([^.]+)"
END_ANCHORED_REGEXP = re.compile(r"(?:^|[^\\])(?:\\\\)*\$\Z")
ESCAPE_REGEXP = re.compile(r"([.+?^=!:${}()|\[\]/\\])")
ESCAPE_REPLACE = r"\\\1"


@dataclass(frozen=True)
class Hostname:
    """Literal hostname such as ``"*.example.com"``."""

    value: str

    def __bool__(self) -> bool:
        return bool(self.value)

    def to_source(self) -> str:
        # escape first so the wildcard groups are not escaped themselves
        source = ESCAPE_REGEXP.sub(ESCAPE_REPLACE, self.value)
        return ASTERISK_REGEXP.sub(ASTERISK_REPLACE, source)


@dataclass(frozen=True)
class HostnamePattern:
    """
    Regular expression source, trusted as-is.

    The caller is responsible for escaping; only the anchors are forced.
    """

    source: str

    @classmethod
    def from_regex(cls, pattern: Pattern) -> "HostnamePattern":
        """Take the source of an already compiled pattern, dropping its flags."""
        source = pattern.pattern
        if isinstance(source, bytes):
            raise InvalidArgumentError("hostname", "must be a str pattern, not bytes")
        return cls(source)

    def to_source(self) -> str:
        return self.source


HostnameSpec = Union[Hostname, HostnamePattern]


def hostname_spec(value: Union[str, Pattern, Hostname, HostnamePattern]) -> HostnameSpec:
    """
    Coerce a user supplied hostname into a HostnameSpec.

    Args:
        value: Literal string, compiled ``re.Pattern`` or an existing spec

    Returns:
        Hostname for strings, HostnamePattern for compiled patterns
    """
    if isinstance(value, (Hostname, HostnamePattern)):
        return value
    if isinstance(value, re.Pattern):
        return HostnamePattern.from_regex(value)
    return Hostname(str(value))


def is_end_anchored(source: str) -> bool:
    """True when ``source`` already ends with an unescaped ``$``."""
    return END_ANCHORED_REGEXP.search(source) is not None


def compile_hostname(value: Union[str, Pattern, Hostname, HostnamePattern]) -> Pattern:
    """
    Compile a hostname into an anchored, case-insensitive pattern.

    Args:
        value: Hostname spec (see ``hostname_spec``)

    Returns:
        Compiled pattern whose source starts with ``^`` and ends with ``$``

    Raises:
        InvalidArgumentError: If the resulting source is not a valid regex
    """
    source = hostname_spec(value).to_source()

    # force leading anchor matching
    if not source.startswith("^"):
        source = "^" + source

    # force trailing anchor matching
    if not is_end_anchored(source):
        source += "$"

    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise InvalidArgumentError("hostname", f"is not a valid pattern: {e}") from e


def _end_of_string_anchors(source: str) -> str:
    """Rewrite each unescaped ``$`` outside a character class as ``\\Z``."""
    out = []
    i = 0
    in_class = False
    while i < len(source):
        char = source[i]
        if char == "\\":
            out.append(source[i:i + 2])
            i += 2
            continue
        i += 1
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            out.append(char)
            # a leading ^ or ] does not close the class
            if source[i:i + 1] == "^":
                out.append("^")
                i += 1
            if source[i:i + 1] == "]":
                out.append("]")
                i += 1
            continue
        elif char == "$":
            out.append(r"\Z")
            continue
        out.append(char)
    return "".join(out)


@lru_cache(maxsize=None)
def strict_end_anchored(regexp: Pattern) -> Pattern:
    """
    Variant of ``regexp`` whose ``$`` only matches at the very end.

    Python's ``$`` also matches before a final newline; hostnames ending
    in ``\\n`` are tested against this variant instead.
    """
    return re.compile(_end_of_string_anchors(regexp.pattern), regexp.flags)
