"""Httpx HTTP Client Adapter - Implementation of HTTPClientPort using httpx."""
from types import TracebackType
from typing import Any, Mapping

import httpx

from incapsula_manager.config import IncapsulaConfig
from incapsula_manager.domain.exceptions import TransportError
from incapsula_manager.ports.outbound import LoggerPort

OPERATION_HEADER = "x-tf-operation"


class HttpxIncapsulaClient:
    """
    Implementation of HTTPClientPort using httpx.

    Every request carries the API id/key headers and the name of the
    operation that issued it.
    """

    def __init__(
        self,
        config: IncapsulaConfig,
        logger: LoggerPort,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Credentials and base URLs
            logger: Logger for operation logging
            client: Optional pre-built httpx client (uses a new one if not provided)
        """
        self._config = config
        self._logger = logger
        self._client = client or httpx.Client(timeout=config.timeout)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def base_url_api(self) -> str:
        return self._config.base_url_api

    def _headers(self, operation: str) -> dict[str, str]:
        return {
            "x-API-Id": self._config.api_id,
            "x-API-Key": self._config.api_key,
            OPERATION_HEADER: operation,
        }

    def post_form_with_headers(
        self, url: str, values: Mapping[str, str], operation: str
    ) -> httpx.Response:
        """POST a form-encoded body."""
        return self._send("POST", url, operation, data=dict(values))

    def get_with_headers(
        self, url: str, params: Mapping[str, str], operation: str
    ) -> httpx.Response:
        """GET with query parameters."""
        return self._send("GET", url, operation, params=dict(params))

    def do_json_request_with_headers(
        self,
        method: str,
        url: str,
        data: Any,
        operation: str,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request with an optional JSON body."""
        kwargs: dict[str, Any] = {"params": dict(params or {})}
        if data is not None:
            kwargs["json"] = data
        return self._send(method, url, operation, **kwargs)

    def _send(self, method: str, url: str, operation: str, **kwargs: Any) -> httpx.Response:
        self._logger.debug(f"{method} {url}", operation=operation)
        try:
            response = self._client.request(method, url, headers=self._headers(operation), **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        self._logger.debug(
            f"{method} {url} returned {response.status_code}",
            operation=operation,
        )
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpxIncapsulaClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
