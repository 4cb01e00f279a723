"""
Per-request host matching.

Extracts the hostname from the ``Host`` header of a request and runs the
compiled hostname pattern against it.
"""

from dataclasses import dataclass
from re import Pattern
from typing import Any, Iterator, Optional, Tuple

from .hostname import strict_end_anchored


@dataclass(frozen=True)
class VHostData:
    """
    Match data attached to a request as ``request.vhost``.

    Captures are indexed from 0 in wildcard order; a group that did not
    take part in the match is ``None``.
    """

    host: str
    hostname: str
    groups: Tuple[Optional[str], ...] = ()

    @property
    def length(self) -> int:
        """Number of capture groups."""
        return len(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __getitem__(self, index: int) -> Optional[str]:
        return self.groups[index]

    def __iter__(self) -> Iterator[Optional[str]]:
        return iter(self.groups)


def hostname_of(request: Any) -> Optional[str]:
    """
    Get the hostname of a request, without any port.

    IPv6 literals keep their brackets: ``[::1]:3000`` gives ``[::1]``.

    Args:
        request: Object exposing a ``headers`` mapping with lowercase names

    Returns:
        The hostname, or None when there is no usable host header
    """
    host = request.headers.get("host")

    if not host:
        return None

    offset = host.find("]") + 1 if host[0] == "[" else 0
    index = host.find(":", offset)

    return host[:index] if index != -1 else host


def vhost_of(request: Any, regexp: Pattern) -> Optional[VHostData]:
    """
    Get the vhost data of the request for ``regexp``.

    Never raises; a missing host header or a host that does not match
    both give None.
    """
    hostname = hostname_of(request)

    if not hostname:
        return None

    if hostname.endswith("\n"):
        regexp = strict_end_anchored(regexp)

    # search, not match: only the leading ^ anchors, so "^foo|bar$"
    # also accepts "xbar"
    match = regexp.search(hostname)

    if not match:
        return None

    return VHostData(
        host=request.headers.get("host"),
        hostname=hostname,
        groups=match.groups(),
    )
