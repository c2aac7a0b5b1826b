"""Unit tests for placeholder-safe URL parsing and comparison."""

from apigee_builder.strategies.url import (
    UrlWithEnv,
    compare_urls,
    detect_template_variables,
    find_common_prefix,
    find_common_suffix,
    parse_url,
)


# =============================================================================
# Template Variable Detection Tests
# =============================================================================


class TestDetectTemplateVariables:
    """Test suite for detect_template_variables."""

    def test_host_and_path_variables(self):
        """Test that host and path placeholders are tagged with their component."""
        variables = detect_template_variables("https://api-{env}.example.com:443/{tenant}/v1")

        assert [(v.original_name, v.context, v.position) for v in variables] == [
            ("env", "host", 4),
            ("tenant", "path", 1),
        ]
        assert variables[0].full_match == "{env}"

    def test_relative_url_has_only_path_variables(self):
        """Test that a leading slash makes the whole URL a path."""
        variables = detect_template_variables("/{customer}/orders/{id}")

        assert [v.context for v in variables] == ["path", "path"]
        assert [v.original_name for v in variables] == ["customer", "id"]
        assert variables[1].position == 19

    def test_url_without_placeholders(self):
        """Test that a plain URL yields no variables."""
        assert detect_template_variables("https://api.example.com/v1") == []

    def test_url_without_scheme(self):
        """Test detection on a scheme-less host."""
        variables = detect_template_variables("{region}.example.com")

        assert len(variables) == 1
        assert variables[0].context == "host"
        assert variables[0].position == 0


# =============================================================================
# URL Parsing Tests
# =============================================================================


class TestParseUrl:
    """Test suite for parse_url."""

    def test_full_url_with_port(self):
        """Test scheme, host, port and path extraction."""
        parsed = parse_url("http://api.example.com:8443/v1/orders")

        assert parsed.protocol == "http"
        assert parsed.host == "api.example.com"
        assert parsed.port == 8443
        assert parsed.path == "/v1/orders"

    def test_defaults_without_scheme_or_path(self):
        """Test that protocol defaults to https and path to '/'."""
        parsed = parse_url("api.example.com")

        assert parsed.protocol == "https"
        assert parsed.host == "api.example.com"
        assert parsed.port is None
        assert parsed.path == "/"

    def test_port_without_path(self):
        """Test port extraction when the URL has no path."""
        parsed = parse_url("http://localhost:8080")

        assert parsed.host == "localhost"
        assert parsed.port == 8080
        assert parsed.path == "/"

    def test_relative_url(self):
        """Test that relative URLs have an empty host."""
        parsed = parse_url("/api/v1")

        assert parsed.host == ""
        assert parsed.path == "/api/v1"
        assert parsed.protocol == "https"

    def test_placeholders_are_not_encoded(self):
        """Test that braces survive parsing untouched."""
        parsed = parse_url("https://gis-platform-{env}.generix.biz/{customer}/invoice-processing")

        assert parsed.host == "gis-platform-{env}.generix.biz"
        assert parsed.path == "/{customer}/invoice-processing"
        assert [v.original_name for v in parsed.host_variables] == ["env"]
        assert [v.original_name for v in parsed.path_variables] == ["customer"]

    def test_custom_default_protocol(self):
        """Test the default_protocol override."""
        assert parse_url("api.example.com/v1", default_protocol="http").protocol == "http"

    def test_malformed_input_does_not_raise(self):
        """Test that garbage input still produces a parse."""
        for url in ["", "::::", "not a url", "{unclosed/path", "https://"]:
            parsed = parse_url(url)
            assert parsed.path.startswith("/")


# =============================================================================
# String Comparator Tests
# =============================================================================


class TestCommonPrefixSuffix:
    """Test suite for find_common_prefix / find_common_suffix."""

    def test_common_prefix(self):
        """Test the longest shared prefix."""
        assert find_common_prefix(["abcxyz", "abcqrs"]) == "abc"

    def test_common_suffix(self):
        """Test the longest shared suffix."""
        assert find_common_suffix(["abcxyz", "qrsxyz"]) == "xyz"

    def test_single_element(self):
        """Test that a single string is its own prefix and has no suffix."""
        assert find_common_prefix(["abc"]) == "abc"
        assert find_common_suffix(["abc"]) == ""

    def test_empty_list(self):
        """Test that an empty list yields empty strings."""
        assert find_common_prefix([]) == ""
        assert find_common_suffix([]) == ""

    def test_prefix_bounded_by_shortest(self):
        """Test that a string fully contained as prefix is returned whole."""
        assert find_common_prefix(["abc", "abcd", "abcde"]) == "abc"

    def test_nothing_in_common(self):
        """Test strings sharing nothing."""
        assert find_common_prefix(["abc", "xyz"]) == ""
        assert find_common_suffix(["abc", "xyz"]) == ""


# =============================================================================
# Multi-URL Comparator Tests
# =============================================================================


class TestCompareUrls:
    """Test suite for compare_urls."""

    def test_host_differences_keep_full_hosts(self):
        """Test that differing hosts are recorded verbatim per environment."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://dev.api.example.com/v1", environment="dev1"),
                UrlWithEnv(url="https://api.example.com/v1", environment="prod1"),
            ]
        )

        assert result.has_host_differences is True
        assert result.has_path_differences is False
        assert result.host_differences == {
            "dev1": "dev.api.example.com",
            "prod1": "api.example.com",
        }
        assert result.common_host_suffix == "api.example.com"
        assert result.path_differences == {}

    def test_path_differences_extract_segment(self):
        """Test that the varying path segment is isolated."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://api.example.com/dev/v1", environment="dev1"),
                UrlWithEnv(url="https://api.example.com/prod/v1", environment="prod1"),
            ]
        )

        assert result.has_host_differences is False
        assert result.has_path_differences is True
        assert result.common_path_prefix == ""
        assert result.common_path_suffix == "/v1"
        assert result.path_differences == {"dev1": "/dev", "prod1": "/prod"}

    def test_path_differences_with_shared_prefix(self):
        """Test segment extraction below a shared base path."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://api.example.com/api/dev/v1", environment="dev1"),
                UrlWithEnv(url="https://api.example.com/api/prod/v1", environment="prod1"),
            ]
        )

        assert result.common_path_prefix == "/api"
        assert result.common_path_suffix == "/v1"
        assert result.path_differences == {"dev1": "/dev", "prod1": "/prod"}

    def test_segment_missing_in_one_environment(self):
        """Test that an environment without the segment gets an empty fragment."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://api.example.com/dev/v1", environment="dev1"),
                UrlWithEnv(url="https://api.example.com/v1", environment="prod1"),
            ]
        )

        assert result.common_path_suffix == "/v1"
        assert result.path_differences == {"dev1": "/dev", "prod1": ""}

    def test_overlapping_prefix_and_suffix(self):
        """Test that prefix and suffix never overlap on the shortest path."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://h/a/b", environment="dev1"),
                UrlWithEnv(url="https://h/a/b/a/b", environment="prod1"),
            ]
        )

        for env, path in [("dev1", "/a/b"), ("prod1", "/a/b/a/b")]:
            rebuilt = (
                result.common_path_prefix
                + result.path_differences[env]
                + result.common_path_suffix
            )
            assert rebuilt == path

    def test_identical_urls(self):
        """Test that identical URLs report no differences."""
        result = compare_urls(
            [
                UrlWithEnv(url="https://api.example.com/v1", environment="dev1"),
                UrlWithEnv(url="https://api.example.com/v1", environment="prod1"),
            ]
        )

        assert result.has_host_differences is False
        assert result.has_path_differences is False
        assert result.host_differences == {}

    def test_empty_input(self):
        """Test that no URLs yields an empty comparison."""
        result = compare_urls([])

        assert result.has_host_differences is False
        assert result.has_path_differences is False
