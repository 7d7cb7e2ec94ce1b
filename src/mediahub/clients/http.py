"""Shared HTTP plumbing for media server clients."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, ClassVar

import httpx
from pydantic import TypeAdapter, ValidationError

from mediahub.config import BackendConfig
from mediahub.exceptions import DecodeError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

# Upstream bodies are truncated to this many characters in error messages
_BODY_PREVIEW = 200

JSON_OBJECT: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


class MediaServerHTTPClient:
    """Authenticated request/response wrapper for one media server.

    Performs exactly one HTTP call per request: no retries, no caching.
    Subclasses set how the static credential is sent.
    """

    server_name: ClassVar[str] = "media server"

    def __init__(
        self,
        config: BackendConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Base URL, credential and timeout of the server.
            http_client: Optional httpx client. Creates one if not provided.
        """
        self._base_url = config.base_url.rstrip("/")
        self._headers = {
            **self._auth_headers(config.token),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self._owns_http = http_client is None
        # Direct connection: proxy environment variables are ignored
        self._http = http_client or httpx.Client(
            timeout=config.timeout, trust_env=False
        )

    @property
    def base_url(self) -> str:
        """Server base URL without trailing slash."""
        return self._base_url

    def _auth_headers(self, token: str) -> dict[str, str]:
        """Headers carrying the static credential."""
        raise NotImplementedError

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> bytes:
        """Perform one authenticated request and return the raw body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL, starting with "/".
            params: Optional query parameters.
            json: Optional JSON request body.

        Returns:
            Response body of a 2xx response.

        Raises:
            UpstreamError: If the server answered with a non-2xx status.
            TransportError: If no response was received.
        """
        url = f"{self._base_url}{path}"
        logger.debug("%s %s %s", self.server_name, method, path)
        try:
            response = self._http.request(
                method, url, params=params, json=json, headers=self._headers
            )
        except httpx.HTTPError as e:
            logger.warning(
                "%s request %s %s failed: %s", self.server_name, method, path, e
            )
            raise TransportError(
                f"{self.server_name} request {method} {path} failed: {e}"
            ) from e

        if not response.is_success:
            preview = response.text[:_BODY_PREVIEW]
            raise UpstreamError(
                f"{self.server_name} request {method} {path} failed with status "
                f"{response.status_code}: {preview}",
                http_status=response.status_code,
                body=response.content,
            )
        return response.content

    def get_json[T](
        self,
        path: str,
        schema: TypeAdapter[T],
        *,
        params: dict[str, Any] | None = None,
    ) -> T:
        """GET a path and decode the JSON body with ``schema``.

        Raises:
            DecodeError: If the body does not match the schema.
            TransportError: If the request failed.
        """
        data = self.request("GET", path, params=params)
        try:
            return schema.validate_json(data)
        except ValidationError as e:
            raise DecodeError(
                f"Unexpected {self.server_name} response from {path}: "
                f"{e.error_count()} validation error(s)"
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> MediaServerHTTPClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
