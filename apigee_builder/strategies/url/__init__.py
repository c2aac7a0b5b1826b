"""URL variabilization strategies.

Implements placeholder-safe URL parsing, cross-environment comparison and
KVM-backed URL templating.
"""

from apigee_builder.strategies.url.comparison import (
    compare_urls,
    find_common_prefix,
    find_common_suffix,
)
from apigee_builder.strategies.url.environments import (
    ENVIRONMENT_PATTERNS,
    backfill_environment_hosts,
    backfill_environment_values,
    detect_environment,
)
from apigee_builder.strategies.url.models import (
    BackendInfoEntry,
    ParsedUrl,
    ServerDescriptor,
    TemplateVariable,
    UrlComparisonResult,
    UrlWithEnv,
    VariabilizationResult,
)
from apigee_builder.strategies.url.parsing import detect_template_variables, parse_url
from apigee_builder.strategies.url.variabilizer import UrlVariabilizer

__all__ = [
    "ENVIRONMENT_PATTERNS",
    "BackendInfoEntry",
    "ParsedUrl",
    "ServerDescriptor",
    "TemplateVariable",
    "UrlComparisonResult",
    "UrlVariabilizer",
    "UrlWithEnv",
    "VariabilizationResult",
    "backfill_environment_hosts",
    "backfill_environment_values",
    "compare_urls",
    "detect_environment",
    "detect_template_variables",
    "find_common_prefix",
    "find_common_suffix",
    "parse_url",
]
