# =============================================================================
# Locator Utilities
# =============================================================================
# Shared helpers for parsing record locators (network URIs) found in
# provenance properties and network summaries.
# =============================================================================

"""
Locator utilities for provenance parsing.

This module provides functions for:
- Validating that a provenance value is a well-formed locator
- Isolating the final path segment of a locator (the record identifier)
- Building canonical network locators from a server base route
"""

import re
from urllib.parse import urlsplit

__all__ = [
    "parse_locator_path",
    "last_path_segment",
    "network_uri",
]

# Characters RFC 3986 never allows unescaped anywhere in a URI
_ILLEGAL_URI_CHARS = re.compile(r"[\s<>\"{}|\\^`]")


def parse_locator_path(locator: str) -> str:
    """
    Return the path component of a locator.

    Args:
        locator: URI string (e.g., "http://www.ndexbio.org/v2/network/abc-123")

    Returns:
        Path component (e.g., "/v2/network/abc-123")

    Raises:
        ValueError: If the locator is not a string, is empty, or contains
            characters that are illegal in a URI

    Examples:
        >>> parse_locator_path("http://public.ndexbio.org/network/abc-123")
        '/network/abc-123'
        >>> parse_locator_path("urn:uuid")
        'uuid'
    """
    if not isinstance(locator, str):
        raise ValueError(f"Locator must be a string, got {type(locator).__name__}")

    if not locator:
        raise ValueError("Locator cannot be empty")

    if _ILLEGAL_URI_CHARS.search(locator):
        raise ValueError(f"Invalid locator '{locator}': contains illegal characters")

    # urlsplit raises ValueError for malformed netlocs (e.g. unbalanced IPv6 brackets)
    return urlsplit(locator).path


def last_path_segment(locator: str) -> str:
    """
    Isolate the final non-empty path segment of a locator.

    Trailing slashes are ignored, so "…/abc-123/" and "…/abc-123" both
    yield "abc-123". Query strings and fragments are never part of the result.

    Args:
        locator: URI string

    Returns:
        Final path segment

    Raises:
        ValueError: If the locator is malformed or has no path segment

    Examples:
        >>> last_path_segment("http://public.ndexbio.org/network/abc-123-def")
        'abc-123-def'
        >>> last_path_segment("http://public.ndexbio.org")
        Traceback (most recent call last):
        ...
        ValueError: Locator 'http://public.ndexbio.org' has no path segment
    """
    path = parse_locator_path(locator)
    segments = [segment for segment in path.split("/") if segment]

    if not segments:
        raise ValueError(f"Locator '{locator}' has no path segment")

    return segments[-1]


def network_uri(base_route: str, network_id: str) -> str:
    """
    Build the canonical locator of a network on a server.

    Args:
        base_route: Server base URL (e.g., "http://public.ndexbio.org/rest")
        network_id: Network external id

    Returns:
        Locator such as "http://public.ndexbio.org/rest/network/<id>"

    Examples:
        >>> network_uri("http://public.ndexbio.org/rest/", "abc-123")
        'http://public.ndexbio.org/rest/network/abc-123'
    """
    return f"{base_route.rstrip('/')}/network/{network_id}"
