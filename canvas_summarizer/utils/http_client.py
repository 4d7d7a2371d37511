"""
Standardized HTTP Client Utilities

Provides a consistent interface for outbound HTTP requests.
Uses `requests` for synchronous calls with standardized error handling:
transport failures are converted into the project's ClientError family.
Responses are returned whatever their status; callers decide what counts
as success.

Usage:
    from canvas_summarizer.utils.http_client import http_post

    response = http_post(
        "https://hooks.example.com/doc",
        json={"title": "hello"},
        timeout=15,
        follow_redirects=False,
    )
"""

from typing import Any

import requests

from canvas_summarizer.configs.constants import get_timeout
from canvas_summarizer.exceptions import HTTPConnectionError, HTTPRequestError, HTTPTimeoutError

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = get_timeout("http_default", 10)


def http_post(
    url: str,
    json: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
) -> requests.Response:
    """
    Make a POST request with standardized error handling.

    Args:
        url: Request URL
        json: JSON body (will set Content-Type automatically)
        headers: Optional headers dict
        timeout: Request timeout in seconds
        follow_redirects: Follow 3xx responses. Following a redirect turns
            the POST into a body-less GET, so callers that must keep the
            body pass False and inspect the 3xx response themselves.

    Returns:
        requests.Response object, including 4xx/5xx responses

    Raises:
        HTTPConnectionError: Connection failed
        HTTPTimeoutError: Request timed out
        HTTPRequestError: The request could not be sent
    """
    try:
        return requests.post(
            url,
            json=json,
            headers=headers,
            timeout=timeout,
            allow_redirects=follow_redirects,
        )
    except requests.exceptions.ConnectionError as e:
        raise HTTPConnectionError(f"Connection failed: {url}") from e
    except requests.exceptions.Timeout as e:
        raise HTTPTimeoutError(f"Request timed out after {timeout}s: {url}") from e
    except requests.exceptions.RequestException as e:
        raise HTTPRequestError(f"Request failed: {e}") from e
