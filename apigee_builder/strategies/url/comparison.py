"""Cross-environment URL comparison."""

import logging

from apigee_builder.strategies.url.models import UrlComparisonResult, UrlWithEnv
from apigee_builder.strategies.url.parsing import parse_url

logger = logging.getLogger(__name__)


def find_common_prefix(strings: list[str]) -> str:
    """Return the longest prefix shared by every string."""
    if not strings:
        return ""
    if len(strings) == 1:
        return strings[0]

    first = strings[0]
    min_len = min(len(s) for s in strings)
    for i in range(min_len):
        if any(s[i] != first[i] for s in strings):
            return first[:i]
    return first[:min_len]


def find_common_suffix(strings: list[str]) -> str:
    """Return the longest suffix shared by every string.

    A single string has no suffix to compare against and yields ``""``.
    """
    if len(strings) < 2:
        return ""
    return find_common_prefix([s[::-1] for s in strings])[::-1]


def _align_path_prefix(prefix: str) -> str:
    # The varying fragment starts at a "/" so it captures whole segments.
    cut = prefix.rfind("/")
    return prefix[:cut] if cut >= 0 else ""


def _align_path_suffix(suffix: str) -> str:
    cut = suffix.find("/")
    return suffix[cut:] if cut >= 0 else ""


def compare_urls(urls: list[UrlWithEnv]) -> UrlComparisonResult:
    """Compare several environment URLs and locate their differences.

    Hosts are compared as a whole: when they differ, every environment keeps
    its full host. Paths are reduced to a common prefix and suffix aligned
    on ``/`` boundaries, and each environment records the fragment between
    them (e.g. ``/dev/v1`` and ``/prod/v1`` share suffix ``/v1`` and differ
    by ``/dev`` and ``/prod``).

    Args:
        urls: URLs tagged with their environment. A later URL for the same
            environment overwrites an earlier one.

    Returns:
        UrlComparisonResult describing host and path differences.
    """
    if not urls:
        return UrlComparisonResult()

    parsed = [(u.environment, parse_url(u.url)) for u in urls]
    hosts = [p.host for _, p in parsed]
    paths = [p.path for _, p in parsed]

    has_host_differences = len(set(hosts)) > 1
    has_path_differences = len(set(paths)) > 1

    common_host_prefix = common_host_suffix = ""
    host_differences: dict[str, str] = {}
    if has_host_differences:
        common_host_prefix = find_common_prefix(hosts)
        common_host_suffix = find_common_suffix(hosts)
        for env, p in parsed:
            host_differences[env] = p.host

    common_path_prefix = common_path_suffix = ""
    path_differences: dict[str, str] = {}
    if has_path_differences:
        common_path_prefix = _align_path_prefix(find_common_prefix(paths))
        common_path_suffix = _align_path_suffix(find_common_suffix(paths))
        shortest = min(len(p) for p in paths)
        while len(common_path_prefix) + len(common_path_suffix) > shortest:
            common_path_suffix = _align_path_suffix(common_path_suffix[1:])
        for env, p in parsed:
            start = len(common_path_prefix)
            end = max(start, len(p.path) - len(common_path_suffix))
            path_differences[env] = p.path[start:end]

    logger.debug(
        f"Compared {len(urls)} URLs: host_differences={has_host_differences}, "
        f"path_differences={has_path_differences}"
    )

    return UrlComparisonResult(
        has_host_differences=has_host_differences,
        has_path_differences=has_path_differences,
        common_host_prefix=common_host_prefix,
        common_host_suffix=common_host_suffix,
        common_path_prefix=common_path_prefix,
        common_path_suffix=common_path_suffix,
        host_differences=host_differences,
        path_differences=path_differences,
    )
