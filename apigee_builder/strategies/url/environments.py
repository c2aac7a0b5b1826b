"""Environment detection and value back-filling.

Non-production environments usually share backend configuration while
production is distinct, so missing environments are filled from one
"prod" and one "non-prod" representative.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from apigee_builder.core.config import DEFAULT_ENVIRONMENTS
from apigee_builder.strategies.url.models import ServerDescriptor
from apigee_builder.strategies.url.parsing import parse_url

logger = logging.getLogger(__name__)

# Evaluated in order; the first environment with a matching keyword wins.
ENVIRONMENT_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("dev1", ("dev", "development", "sandbox")),
    ("uat1", ("uat", "test", "qa")),
    ("staging", ("stag", "preprod", "pre-prod")),
    ("prod1", ("prod", "production", "live")),
)

DEFAULT_ENVIRONMENT = "dev1"


def is_prod_environment(environment: str) -> bool:
    """Return True for production-like environment ids."""
    return "prod" in environment.lower()


def detect_environment(
    url: str,
    description: str | None = None,
    patterns: Sequence[tuple[str, Iterable[str]]] = ENVIRONMENT_PATTERNS,
) -> str | None:
    """Classify a server by keyword matching on its URL and description.

    Args:
        url: Server URL.
        description: Optional server description.
        patterns: Ordered ``(environment_id, keywords)`` pairs.

    Returns:
        The first environment whose keyword occurs in the text, or None.
    """
    text = f"{url} {description or ''}".lower()
    for environment, keywords in patterns:
        if any(keyword.lower() in text for keyword in keywords):
            return environment
    return None


def resolve_environment(
    server: ServerDescriptor,
    patterns: Sequence[tuple[str, Iterable[str]]] = ENVIRONMENT_PATTERNS,
    default: str = DEFAULT_ENVIRONMENT,
) -> str:
    """Return the server's explicit environment, else the detected one."""
    if server.environment:
        return server.environment
    return detect_environment(server.url, server.description, patterns) or default


def empty_environment_values(
    environments: Sequence[str] = DEFAULT_ENVIRONMENTS,
) -> dict[str, str]:
    """Return a map with an empty value for every environment."""
    return {env: "" for env in environments}


def backfill_environment_values(
    values: Mapping[str, str],
    environments: Sequence[str] = DEFAULT_ENVIRONMENTS,
) -> dict[str, str]:
    """Fill environments absent from ``values`` from representatives.

    The prod representative is the value of the last prod-like environment
    present (``prod1`` first). The non-prod representative is the first
    non-empty value of a non-prod environment. Missing prod-like slots get
    the prod representative, other missing slots the non-prod one. A slot
    stays empty when its representative is empty. Declared values are kept
    as is, including empty ones: an empty path fragment is a real value.

    Args:
        values: Partial environment -> value map.
        environments: Environments that must be present in the result.

    Returns:
        A new map containing every key of ``values`` and ``environments``.
    """
    prod_value = values.get("prod1", "")
    non_prod_value = ""
    for env, value in values.items():
        if is_prod_environment(env):
            prod_value = value
        elif not non_prod_value and value:
            non_prod_value = value

    filled = dict(values)
    for env in environments:
        if env not in filled:
            filled[env] = prod_value if is_prod_environment(env) else non_prod_value
    return filled


def backfill_environment_hosts(
    hosts: Mapping[str, str],
    servers: Sequence[ServerDescriptor],
    environments: Sequence[str] = DEFAULT_ENVIRONMENTS,
    patterns: Sequence[tuple[str, Iterable[str]]] = ENVIRONMENT_PATTERNS,
) -> dict[str, str]:
    """Fill missing environment hosts from the declared servers.

    Unlike :func:`backfill_environment_values`, each representative falls
    back to the other one, so a single declared server is replicated to
    every environment.

    Args:
        hosts: Partial environment -> host map.
        servers: Servers the hosts were derived from.
        environments: Environments that must be present in the result.
        patterns: Keyword table used for servers without an explicit tag.

    Returns:
        A new map containing every key of ``hosts`` and ``environments``.
    """
    prod_host = hosts.get("prod1", "")
    non_prod_host = ""
    for server in servers:
        env = resolve_environment(server, patterns)
        host = parse_url(server.url).host
        if is_prod_environment(env):
            prod_host = host
        elif not non_prod_host:
            non_prod_host = host

    filled = dict(hosts)
    for env in environments:
        if not filled.get(env):
            if is_prod_environment(env):
                filled[env] = prod_host or non_prod_host
            else:
                filled[env] = non_prod_host or prod_host

    missing = [env for env in environments if not hosts.get(env)]
    if missing:
        logger.debug(f"Back-filled hosts for environments: {missing}")
    return filled
