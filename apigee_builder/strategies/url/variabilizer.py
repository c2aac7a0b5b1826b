"""URL variabilizer strategy.

Turns the backend servers declared for each environment into one target
URL template plus the backend-info KVM entries that resolve it:

- Case 1: explicit ``{placeholders}`` in host or path become KVM entries
  whose values are left empty for the user to fill in.
- Case 2: servers that differ across environments. Differing hosts are
  kept per environment; a differing path segment becomes one
  ``path_segment`` entry with per-environment values.
- Case 3: nothing varies and the first server is used as is.

Cases 1 and 2 may combine.
"""

import logging
import re
from collections.abc import Iterable, Sequence

from apigee_builder.core.config import Settings, get_settings
from apigee_builder.interfaces.variabilizer import BaseUrlVariabilizer
from apigee_builder.strategies.url.comparison import compare_urls
from apigee_builder.strategies.url.environments import (
    ENVIRONMENT_PATTERNS,
    backfill_environment_hosts,
    backfill_environment_values,
    empty_environment_values,
    resolve_environment,
)
from apigee_builder.strategies.url.models import (
    BackendInfoEntry,
    ServerDescriptor,
    UrlWithEnv,
    VariabilizationResult,
)
from apigee_builder.strategies.url.parsing import parse_url

logger = logging.getLogger(__name__)

PATH_SEGMENT_NAME = "path_segment"


class UrlVariabilizer(BaseUrlVariabilizer):
    """Default URL variabilizer.

    Attributes:
        environments: Supported environment ids, in order.
        patterns: Ordered ``(environment_id, keywords)`` table used to
            classify servers without an explicit environment.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        patterns: Sequence[tuple[str, Iterable[str]]] = ENVIRONMENT_PATTERNS,
    ) -> None:
        """Initialize the variabilizer.

        Args:
            settings: Application settings. If None, uses global settings.
            patterns: Environment keyword table.
        """
        self._settings = settings or get_settings()
        self._environments = tuple(self._settings.environments)
        self._patterns = tuple(patterns)

    @property
    def environments(self) -> tuple[str, ...]:
        """Return the supported environment ids, in order."""
        return self._environments

    @property
    def patterns(self) -> tuple[tuple[str, Iterable[str]], ...]:
        """Return the environment keyword table."""
        return self._patterns

    def variabilize(
        self, servers: Sequence[ServerDescriptor], starting_index: int = 1
    ) -> VariabilizationResult:
        """Variabilize backend server URLs.

        Args:
            servers: Declared servers. The first one carries the template
                for Case 1 rewrites.
            starting_index: First KVM index to allocate.

        Returns:
            VariabilizationResult with contiguous KVM indices starting at
            ``starting_index``: host variables, then path variables, then
            the path segment entry.

        Raises:
            ValueError: If ``starting_index`` is lower than 1.
        """
        if starting_index < 1:
            raise ValueError(f"starting_index must be >= 1, got {starting_index}")

        if not servers:
            return VariabilizationResult()

        logger.info(f"Variabilizing {len(servers)} server URL(s) from index {starting_index}")

        next_index = starting_index
        kvm_entries: list[BackendInfoEntry] = []
        hosts_per_environment: dict[str, str] = {}
        variabilized_host: str | None = None
        variabilized_path = "/"
        has_variabilization = False

        parsed = [parse_url(s.url, self._settings.default_protocol) for s in servers]
        first = parsed[0]

        # dict preserves first-appearance order
        host_names = {v.original_name: None for p in parsed for v in p.host_variables}
        path_names = {v.original_name: None for p in parsed for v in p.path_variables}
        has_template_variables = bool(host_names or path_names)

        # Case 1: explicit template variables
        if has_template_variables:
            has_variabilization = True

            host = first.host
            for name in host_names:
                kvm_entries.append(self._template_entry(next_index, name, "host"))
                host = self._replace_with_reference(host, name, next_index)
                next_index += 1
            if host_names:
                variabilized_host = host
                hosts_per_environment = {env: host for env in self._environments}

            path = first.path
            for name in path_names:
                kvm_entries.append(self._template_entry(next_index, name, "path"))
                path = self._replace_with_reference(path, name, next_index)
                next_index += 1
            variabilized_path = path or "/"

        # Case 2: differences across environments
        if len(servers) > 1:
            environments = [resolve_environment(s, self._patterns) for s in servers]
            comparison = compare_urls(
                [UrlWithEnv(url=s.url, environment=env) for s, env in zip(servers, environments)]
            )

            if comparison.has_host_differences:
                has_variabilization = True
                for env, p in zip(environments, parsed):
                    hosts_per_environment[env] = p.host
                hosts_per_environment = backfill_environment_hosts(
                    hosts_per_environment, servers, self._environments, self._patterns
                )
                if not comparison.has_path_differences and not path_names:
                    variabilized_path = first.path or "/"

            if comparison.has_path_differences and not path_names:
                has_variabilization = True
                values = backfill_environment_values(
                    comparison.path_differences, self._environments
                )
                kvm_entries.append(
                    BackendInfoEntry(
                        kvm_index=next_index,
                        variable_name=self._settings.variable_name(next_index),
                        original_name=PATH_SEGMENT_NAME,
                        description="Environment-specific path segment",
                        values=values,
                        is_auto_detected=True,
                    )
                )
                variabilized_path = (
                    f"{comparison.common_path_prefix}"
                    f"{self._settings.kvm_reference(next_index)}"
                    f"{comparison.common_path_suffix}"
                )
                next_index += 1

        # Case 3: nothing varies
        if not has_variabilization:
            variabilized_path = first.path or "/"

        # Path-only templates leave the hosts unresolved as well
        if not hosts_per_environment:
            for server, p in zip(servers, parsed):
                hosts_per_environment[resolve_environment(server, self._patterns)] = p.host
            hosts_per_environment = backfill_environment_hosts(
                hosts_per_environment, servers, self._environments, self._patterns
            )

        logger.info(
            f"Variabilization complete: has_variabilization={has_variabilization}, "
            f"kvm_entries={len(kvm_entries)}, path={variabilized_path!r}"
        )

        return VariabilizationResult(
            variabilized_host=variabilized_host,
            variabilized_path=variabilized_path,
            kvm_entries=kvm_entries,
            hosts_per_environment=hosts_per_environment,
            has_variabilization=has_variabilization,
        )

    def _template_entry(self, kvm_index: int, name: str, context: str) -> BackendInfoEntry:
        return BackendInfoEntry(
            kvm_index=kvm_index,
            variable_name=self._settings.variable_name(kvm_index),
            original_name=name,
            description=f"{name} (from URL template in {context})",
            values=empty_environment_values(self._environments),
            is_auto_detected=False,
        )

    def _replace_with_reference(self, text: str, name: str, kvm_index: int) -> str:
        pattern = re.compile(r"\{" + re.escape(name) + r"\}")
        reference = self._settings.kvm_reference(kvm_index)
        return pattern.sub(lambda _: reference, text)
