"""Placeholder-safe URL parsing.

Server URLs declared in OpenAPI documents frequently carry template
variables such as ``https://api-{env}.example.com/{tenant}/v1``. Standard
parsers (``urllib.parse``, ``httpx.URL``) percent-encode or reject the
braces, so URLs are split by hand:

1. A URL starting with ``/`` is relative: the whole string is the path.
2. Otherwise an optional ``scheme://`` prefix is stripped and the rest is
   split on the first ``/``. Everything before it is the host (a trailing
   ``:<digits>`` port is split off), everything from it onward is the path.

Query strings, fragments, credentials and IPv6 literals are not handled;
such input yields a best-effort split rather than an error.
"""

import logging
import re

from apigee_builder.strategies.url.models import ParsedUrl, TemplateVariable

logger = logging.getLogger(__name__)

TEMPLATE_VAR_REGEX = re.compile(r"\{([^}]+)\}")

_SCHEME_REGEX = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://")
_PORT_REGEX = re.compile(r":(\d+)$")


def _split_url(url: str) -> tuple[str | None, str, str]:
    """Split a URL into ``(scheme, host_with_port, path)`` without decoding.

    The path is ``""`` when the URL has no ``/`` after the host.
    """
    if url.startswith("/"):
        return None, "", url

    scheme_match = _SCHEME_REGEX.match(url)
    scheme = scheme_match.group(1).lower() if scheme_match else None
    rest = url[scheme_match.end():] if scheme_match else url

    path_start = rest.find("/")
    if path_start >= 0:
        return scheme, rest[:path_start], rest[path_start:]
    return scheme, rest, ""


def _split_port(host: str) -> tuple[str, int | None]:
    """Strip a trailing numeric ``:port`` from a host."""
    port_match = _PORT_REGEX.search(host)
    if port_match:
        return host[: port_match.start()], int(port_match.group(1))
    return host, None


def _scan(component: str, context: str) -> list[TemplateVariable]:
    return [
        TemplateVariable(
            original_name=match.group(1),
            position=match.start(),
            context=context,
            full_match=match.group(0),
        )
        for match in TEMPLATE_VAR_REGEX.finditer(component)
    ]


def detect_template_variables(url: str) -> list[TemplateVariable]:
    """Detect all ``{var}`` placeholders in a URL.

    Args:
        url: Raw server URL.

    Returns:
        Host occurrences followed by path occurrences, each in offset order.
        Offsets are relative to the component they were found in.
    """
    _, host, path = _split_url(url)
    host, _ = _split_port(host)
    return _scan(host, "host") + _scan(path, "path")


def parse_url(url: str, default_protocol: str = "https") -> ParsedUrl:
    """Decompose a URL into protocol, host, port and path.

    Args:
        url: Raw server URL, absolute or relative.
        default_protocol: Protocol used when the URL has no scheme.

    Returns:
        ParsedUrl with template variables split by component. The path
        defaults to ``/`` when the URL has none.
    """
    scheme, host_part, path = _split_url(url)
    host, port = _split_port(host_part)
    variables = detect_template_variables(url)

    parsed = ParsedUrl(
        protocol=scheme or default_protocol,
        host=host,
        port=port,
        path=path or "/",
        host_variables=[v for v in variables if v.context == "host"],
        path_variables=[v for v in variables if v.context == "path"],
    )
    logger.debug(f"Parsed URL {url!r}: host={parsed.host!r}, path={parsed.path!r}")
    return parsed
