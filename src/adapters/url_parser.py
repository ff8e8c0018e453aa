"""Full URL parsing on top of `httpx.URL`.

httpx signals malformed URLs with a single `httpx.InvalidURL` exception; the
sub-kind is recovered from its message. httpx is also more lenient than the
URL standard about hosts: it percent-encodes spaces, accepts an unclosed
IPv6 bracket as a port separator and leaves the port range to the connection
layer. The authority is therefore checked here first, so that every
structural problem is caught before any network activity.
"""

from __future__ import annotations

import httpx

from core.domain.errors import UrlParseFailure
from core.domain.models import UrlErrorKind

_MAX_PORT = 65535

_MESSAGE_PREFIXES: tuple[tuple[str, UrlErrorKind], ...] = (
    ("invalid port", UrlErrorKind.INVALID_PORT),
    ("invalid ipv4 address", UrlErrorKind.INVALID_IPV4),
    ("invalid ipv6 address", UrlErrorKind.INVALID_IPV6),
)

# Forbidden host code points (URL standard), minus ":" and the brackets,
# which delimit the port and IPv6 literals.
_FORBIDDEN_HOST_CHARS = frozenset(" #%/<>?@\\^|\x7f") | frozenset(chr(c) for c in range(0x20))

_AUTHORITY_END = "/?#"


def classify_invalid_url(message: str) -> UrlErrorKind:
    """Map an `httpx.InvalidURL` message to a `UrlErrorKind`."""

    lowered = message.strip().lower()
    for prefix, kind in _MESSAGE_PREFIXES:
        if lowered.startswith(prefix):
            return kind
    return UrlErrorKind.OTHER


def split_authority(raw: str) -> tuple[str, str, str]:
    """Split `scheme://authority/rest` into its three parts.

    Extra slashes after `scheme://` are skipped, as http(s) URLs allow.
    """

    scheme, _, rest = raw.partition("://")
    rest = rest.lstrip("/")
    end = len(rest)
    for delimiter in _AUTHORITY_END:
        index = rest.find(delimiter)
        if index != -1:
            end = min(end, index)
    return scheme, rest[:end], rest[end:]


def _check_host(raw: str, authority: str) -> None:
    hostport = authority.rpartition("@")[2]
    if hostport.startswith("["):
        closing = hostport.find("]")
        if closing == -1:
            raise UrlParseFailure(UrlErrorKind.INVALID_IPV6, f"Unclosed IPv6 address: {raw!r}")
        host = hostport[: closing + 1]
    else:
        host = hostport.partition(":")[0]

    if not host:
        raise UrlParseFailure(UrlErrorKind.OTHER, f"Empty host: {raw!r}")
    bad = sorted({ch for ch in host if ch in _FORBIDDEN_HOST_CHARS})
    if bad:
        raise UrlParseFailure(UrlErrorKind.OTHER, f"Invalid host code point {bad[0]!r} in {raw!r}")


def parse_target_url(raw: str) -> httpx.URL:
    """Parse `raw` into an absolute `httpx.URL`.

    `raw` is expected to start with `http://` or `https://`.

    Raises:
    - `UrlParseFailure` with the classified sub-kind.
    """

    scheme, authority, rest = split_authority(raw)
    _check_host(raw, authority)

    try:
        url = httpx.URL(f"{scheme}://{authority}{rest}")
    except httpx.InvalidURL as exc:
        raise UrlParseFailure(classify_invalid_url(str(exc)), str(exc)) from exc

    if not url.host:
        raise UrlParseFailure(UrlErrorKind.OTHER, f"Empty host: {raw!r}")
    if url.is_relative_url:
        raise UrlParseFailure(UrlErrorKind.RELATIVE_WITHOUT_BASE, f"Relative URL: {raw!r}")

    # httpx keeps any integer port; reject what a socket cannot use.
    port = url.port
    if port is not None and not 0 <= port <= _MAX_PORT:
        raise UrlParseFailure(UrlErrorKind.INVALID_PORT, f"Invalid port: {port!r}")
    return url
