# =============================================================================
# Unit Tests: Locator Utils
# =============================================================================

import pytest

from netsync.uri_utils import last_path_segment, network_uri, parse_locator_path


# =============================================================================
# Test: parse_locator_path
# =============================================================================

class TestParseLocatorPath:
    """Tests for parse_locator_path function."""

    def test_http_locator(self):
        assert parse_locator_path("http://public.ndexbio.org/rest/network/abc") == "/rest/network/abc"

    def test_query_and_fragment_excluded(self):
        assert parse_locator_path("http://host/network/abc?format=json#top") == "/network/abc"

    def test_relative_locator(self):
        assert parse_locator_path("network/abc") == "network/abc"

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            parse_locator_path("")

    def test_non_string_rejected(self):
        with pytest.raises(ValueError, match="must be a string"):
            parse_locator_path(None)

    @pytest.mark.parametrize(
        "locator",
        [
            "http://host/network/abc def",
            "http://host/network/<abc>",
            "http://host/network/{abc}",
        ],
    )
    def test_illegal_characters_rejected(self, locator):
        with pytest.raises(ValueError, match="illegal characters"):
            parse_locator_path(locator)


# =============================================================================
# Test: last_path_segment
# =============================================================================

class TestLastPathSegment:
    """Tests for last_path_segment function."""

    def test_uuid_segment(self):
        assert last_path_segment("http://public.ndexbio.org/network/abc-123-def") == "abc-123-def"

    def test_trailing_slash_ignored(self):
        assert last_path_segment("http://public.ndexbio.org/network/abc-123-def/") == "abc-123-def"

    def test_query_string_ignored(self):
        assert last_path_segment("http://host/v2/network/abc?accesskey=1") == "abc"

    def test_missing_path_fails(self):
        with pytest.raises(ValueError, match="has no path segment"):
            last_path_segment("http://public.ndexbio.org")

    def test_root_path_fails(self):
        with pytest.raises(ValueError, match="has no path segment"):
            last_path_segment("http://public.ndexbio.org/")

    def test_failure_is_deterministic(self):
        for _ in range(3):
            with pytest.raises(ValueError):
                last_path_segment("http://public.ndexbio.org")


# =============================================================================
# Test: network_uri
# =============================================================================

class TestNetworkUri:
    """Tests for network_uri function."""

    def test_builds_locator(self):
        assert network_uri("http://host/rest", "abc") == "http://host/rest/network/abc"

    def test_trailing_slash_in_base_route(self):
        assert network_uri("http://host/rest/", "abc") == "http://host/rest/network/abc"

    def test_round_trip_with_last_path_segment(self):
        assert last_path_segment(network_uri("http://host/rest", "abc-123")) == "abc-123"
