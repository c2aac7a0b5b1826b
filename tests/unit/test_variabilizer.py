"""Unit tests for the URL variabilizer strategy.

Tests cover:
- Explicit {placeholder} templates in host and path
- Environment differences in host and path
- Combined cases and KVM index allocation
- Robustness against malformed input
"""

import pytest
from pydantic import ValidationError

from apigee_builder.core.config import Settings
from apigee_builder.strategies.url import (
    ServerDescriptor,
    UrlVariabilizer,
    VariabilizationResult,
)

ALL_ENVS = {"dev1", "uat1", "staging", "prod1"}


# =============================================================================
# Template Variable Tests
# =============================================================================


class TestTemplateVariables:
    """Test suite for servers with explicit {placeholders}."""

    def test_host_placeholder(self, variabilizer):
        """Test that a host placeholder becomes an empty KVM entry."""
        result = variabilizer.variabilize(
            [ServerDescriptor(url="https://api-{env}.example.com/v1")]
        )

        assert result.has_variabilization is True
        assert result.variabilized_host == "api-{private.backend_info_1}.example.com"
        assert result.variabilized_path == "/v1"
        assert len(result.kvm_entries) == 1

        entry = result.kvm_entries[0]
        assert entry.kvm_index == 1
        assert entry.variable_name == "backend_info_1"
        assert entry.original_name == "env"
        assert entry.description == "env (from URL template in host)"
        assert entry.values == {env: "" for env in ALL_ENVS}
        assert entry.is_auto_detected is False

        assert result.hosts_per_environment == {
            env: "api-{private.backend_info_1}.example.com" for env in ALL_ENVS
        }

    def test_host_then_path_order(self, variabilizer):
        """Test that host entries come before path entries."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(
                    url="https://gis-platform-{env}.generix.biz/{customer}/invoice-processing"
                )
            ]
        )

        assert [(e.kvm_index, e.original_name) for e in result.kvm_entries] == [
            (1, "env"),
            (2, "customer"),
        ]
        assert result.variabilized_host == "gis-platform-{private.backend_info_1}.generix.biz"
        assert result.variabilized_path == "/{private.backend_info_2}/invoice-processing"
        assert result.kvm_entries[1].description == "customer (from URL template in path)"

    def test_path_only_placeholder_keeps_host_unset(self, variabilizer):
        """Test that path-only templates leave variabilized_host as None."""
        result = variabilizer.variabilize(
            [ServerDescriptor(url="https://api.example.com/{tenant}/orders")]
        )

        assert result.variabilized_host is None
        assert result.variabilized_path == "/{private.backend_info_1}/orders"
        assert result.hosts_per_environment == {env: "api.example.com" for env in ALL_ENVS}

    def test_shared_host_placeholder(self, variabilizer):
        """Test two servers differing only by a shared host placeholder."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api-{env}.example.com/v1", environment="dev1"),
                ServerDescriptor(url="https://api-{env}.example.com/v1", environment="prod1"),
            ]
        )

        assert len(result.kvm_entries) == 1
        assert result.kvm_entries[0].original_name == "env"
        assert "{private.backend_info_1}" in result.variabilized_host
        assert set(result.kvm_entries[0].values.values()) == {""}

    def test_repeated_placeholder_is_one_entry(self, variabilizer):
        """Test that a placeholder repeated across servers yields one entry."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api.example.com/{tenant}/v1", environment="dev1"),
                ServerDescriptor(url="https://api.example.com/{tenant}/v1", environment="prod1"),
            ]
        )

        assert [e.original_name for e in result.kvm_entries] == ["tenant"]

    def test_starting_index(self, variabilizer):
        """Test that indices are allocated from starting_index."""
        result = variabilizer.variabilize(
            [ServerDescriptor(url="https://{host}/{base}")], starting_index=5
        )

        assert [e.kvm_index for e in result.kvm_entries] == [5, 6]
        assert [e.variable_name for e in result.kvm_entries] == ["backend_info_5", "backend_info_6"]
        assert result.variabilized_host == "{private.backend_info_5}"
        assert result.variabilized_path == "/{private.backend_info_6}"

    def test_custom_reference_scope(self, tmp_path):
        """Test that the KVM reference honours the configured scope and prefix."""
        settings = Settings(
            _env_file=None,
            log_dir=tmp_path,
            kvm_reference_scope="shared",
            backend_info_prefix="target",
        )
        result = UrlVariabilizer(settings=settings).variabilize(
            [ServerDescriptor(url="https://{host}/v1")]
        )

        assert result.variabilized_host == "{shared.target_1}"
        assert result.kvm_entries[0].variable_name == "target_1"


# =============================================================================
# Environment Difference Tests
# =============================================================================


class TestEnvironmentDifferences:
    """Test suite for servers that differ across environments."""

    def test_path_segment_between_environments(self, variabilizer):
        """Test that a differing path segment becomes one auto-detected entry."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api.example.com/dev/v1", environment="dev1"),
                ServerDescriptor(url="https://api.example.com/prod/v1", environment="prod1"),
            ]
        )

        assert result.has_variabilization is True
        assert result.variabilized_host is None
        assert result.variabilized_path == "{private.backend_info_1}/v1"
        assert len(result.kvm_entries) == 1

        entry = result.kvm_entries[0]
        assert entry.original_name == "path_segment"
        assert entry.description == "Environment-specific path segment"
        assert entry.is_auto_detected is True
        assert entry.values == {
            "dev1": "/dev",
            "uat1": "/dev",
            "staging": "/dev",
            "prod1": "/prod",
        }

    def test_environment_without_segment_keeps_its_path(self, variabilizer):
        """Test that a declared empty fragment is not back-filled."""
        servers = [
            ServerDescriptor(url="https://api.example.com/dev/v1", environment="dev1"),
            ServerDescriptor(url="https://api.example.com/v1", environment="uat1"),
            ServerDescriptor(url="https://api.example.com/prod/v1", environment="prod1"),
        ]

        result = variabilizer.variabilize(servers)

        values = result.kvm_entries[0].values
        assert values == {"dev1": "/dev", "uat1": "", "staging": "/dev", "prod1": "/prod"}
        reference = "{private.backend_info_1}"
        for server in servers:
            rebuilt = result.variabilized_path.replace(reference, values[server.environment])
            assert rebuilt == server.url.removeprefix("https://api.example.com")

    def test_path_segment_under_shared_prefix(self, variabilizer):
        """Test that the shared base path stays outside the reference."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api.example.com/api/dev/v1", environment="dev1"),
                ServerDescriptor(url="https://api.example.com/api/prod/v1", environment="prod1"),
            ]
        )

        assert result.variabilized_path == "/api{private.backend_info_1}/v1"

    def test_host_differences(self, variabilizer):
        """Test that differing hosts are resolved per environment without entries."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://dev.api.example.com/v1", environment="dev1"),
                ServerDescriptor(url="https://api.example.com/v1", environment="prod1"),
            ]
        )

        assert result.has_variabilization is True
        assert result.kvm_entries == []
        assert result.variabilized_host is None
        assert result.variabilized_path == "/v1"
        assert result.hosts_per_environment == {
            "dev1": "dev.api.example.com",
            "uat1": "dev.api.example.com",
            "staging": "dev.api.example.com",
            "prod1": "api.example.com",
        }

    def test_environment_detected_from_url(self, variabilizer):
        """Test that untagged servers are classified by keyword."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api-dev.example.com/v1"),
                ServerDescriptor(url="https://api.example.com/v1", description="Production"),
            ]
        )

        assert result.hosts_per_environment["dev1"] == "api-dev.example.com"
        assert result.hosts_per_environment["prod1"] == "api.example.com"

    def test_host_placeholder_with_path_segment(self, variabilizer):
        """Test that template entries precede the path segment entry."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://{host}/dev/v1", environment="dev1"),
                ServerDescriptor(url="https://{host}/prod/v1", environment="prod1"),
            ]
        )

        assert [(e.kvm_index, e.original_name) for e in result.kvm_entries] == [
            (1, "host"),
            (2, "path_segment"),
        ]
        assert result.variabilized_host == "{private.backend_info_1}"
        assert result.variabilized_path == "{private.backend_info_2}/v1"

    def test_path_placeholder_suppresses_path_segment(self, variabilizer):
        """Test that no path segment entry is added next to path placeholders."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api.example.com/{tenant}/dev", environment="dev1"),
                ServerDescriptor(url="https://api.example.com/{tenant}/prod", environment="prod1"),
            ]
        )

        assert [e.original_name for e in result.kvm_entries] == ["tenant"]
        assert result.variabilized_path == "/{private.backend_info_1}/dev"


# =============================================================================
# No Variation Tests
# =============================================================================


class TestNoVariation:
    """Test suite for servers that need no variabilization."""

    def test_single_plain_server(self, variabilizer):
        """Test that a plain server is used as is."""
        result = variabilizer.variabilize([ServerDescriptor(url="https://api.example.com/v1")])

        assert result.has_variabilization is False
        assert result.kvm_entries == []
        assert result.variabilized_host is None
        assert result.variabilized_path == "/v1"
        assert result.hosts_per_environment == {env: "api.example.com" for env in ALL_ENVS}

    def test_identical_servers(self, variabilizer):
        """Test that identical servers in two environments need nothing."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://api.example.com", environment="dev1"),
                ServerDescriptor(url="https://api.example.com", environment="prod1"),
            ]
        )

        assert result.has_variabilization is False
        assert result.variabilized_path == "/"

    def test_no_servers(self, variabilizer):
        """Test that an empty server list yields the empty result."""
        assert variabilizer.variabilize([]) == VariabilizationResult()


# =============================================================================
# Robustness Tests
# =============================================================================


class TestRobustness:
    """Test suite for malformed input and result immutability."""

    @pytest.mark.parametrize(
        "url",
        ["", "::::", "not a url", "{unclosed/path", "https://", "/relative/{x}"],
    )
    def test_malformed_urls_do_not_raise(self, variabilizer, url):
        """Test that malformed URLs still produce a result."""
        result = variabilizer.variabilize([ServerDescriptor(url=url)])

        assert result.variabilized_path.startswith("/") or result.variabilized_path.startswith("{")

    def test_indices_are_contiguous(self, variabilizer):
        """Test that allocated indices have no gaps."""
        result = variabilizer.variabilize(
            [
                ServerDescriptor(url="https://{a}.{b}.example.com/{c}/dev", environment="dev1"),
                ServerDescriptor(url="https://{a}.{b}.example.com/{c}/prod", environment="prod1"),
            ],
            starting_index=3,
        )

        indices = [e.kvm_index for e in result.kvm_entries]
        assert indices == list(range(3, 3 + len(indices)))

    @pytest.mark.parametrize("starting_index", [0, -3])
    def test_non_positive_starting_index(self, variabilizer, starting_index):
        """Test that indices below 1 are rejected up front."""
        with pytest.raises(ValueError, match="starting_index"):
            variabilizer.variabilize(
                [ServerDescriptor(url="https://{host}/v1")], starting_index
            )

    def test_result_is_frozen(self, variabilizer):
        """Test that results cannot be mutated."""
        result = variabilizer.variabilize([ServerDescriptor(url="https://api.example.com")])

        with pytest.raises(ValidationError):
            result.variabilized_path = "/other"

    def test_environments_from_settings(self, tmp_path):
        """Test that the variabilizer uses the configured environments."""
        settings = Settings(_env_file=None, log_dir=tmp_path, environments=["dev", "prod"])
        variabilizer = UrlVariabilizer(settings=settings)

        result = variabilizer.variabilize([ServerDescriptor(url="https://{host}")])

        assert variabilizer.environments == ("dev", "prod")
        assert result.kvm_entries[0].values == {"dev": "", "prod": ""}
