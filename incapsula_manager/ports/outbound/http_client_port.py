"""HTTP Client Port - Interface for authenticated calls to Incapsula."""
from typing import Any, Mapping, Protocol

import httpx


class HTTPClientPort(Protocol):
    """
    Port interface for the HTTP transport.

    Implementations attach the API credentials and an operation tag to
    every request. They raise TransportError when a call cannot be
    completed; the response status is never checked here, callers decide
    what a status means for their endpoint.
    """

    base_url: str
    base_url_api: str

    def post_form_with_headers(
        self, url: str, values: Mapping[str, str], operation: str
    ) -> httpx.Response:
        """
        POST a form-encoded body.

        Args:
            url: Full endpoint URL
            values: Form fields
            operation: Operation tag sent along with the request

        Returns:
            The HTTP response
        """
        ...

    def get_with_headers(
        self, url: str, params: Mapping[str, str], operation: str
    ) -> httpx.Response:
        """GET with query parameters."""
        ...

    def do_json_request_with_headers(
        self,
        method: str,
        url: str,
        data: Any,
        operation: str,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request with an optional JSON body."""
        ...
