# octoloom/types.py
"""Core type definitions and data structures for octoloom.

This module defines common types used throughout the library, such as
the structure holding one outgoing request and type aliases for request hooks.
"""

from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field


class RequestData(BaseModel):
    """Encapsulates data for a single HTTP request to the GitHub API."""

    method: str
    url: str
    params: Mapping[str, Any] | None = None
    json_data: Any | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def build_request(self, client: httpx.AsyncClient) -> httpx.Request:
        """Builds an httpx.Request through `client`, applying its timeout and default headers."""
        return client.build_request(
            method=self.method,
            url=self.url,
            params=self.params,
            json=self.json_data,
            headers=self.headers,
        )


PreRequestHook = Callable[[str, str, dict[str, Any] | None, httpx.Headers], None]
"""Type alias for a pre-request hook.

Pre-request hooks are called before an HTTP request is sent. They can modify
query parameters or headers in place, or perform side effects like logging.

Args:
    method (str): The HTTP method of the request (e.g., "GET", "POST").
    url (str): The full URL of the request.
    params (dict[str, Any] | None): A mutable dictionary of query parameters.
    headers (httpx.Headers): A mutable `httpx.Headers` object.
"""

PostRequestHook = Callable[[httpx.Response, Any], None]
"""Type alias for a post-request hook.

Post-request hooks are called after a successful response has been parsed.

Args:
    response (httpx.Response): The raw `httpx.Response` object.
    api_response (ApiResponse): The parsed response wrapper returned to the caller.
"""
