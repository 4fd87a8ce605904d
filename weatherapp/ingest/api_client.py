"""Async HTTP transport for the forecast backend.

Every call returns a ``Result``: transport, status and JSON decoding failures
come back as ``Failure`` values and are never raised.
"""

import logging
import time
from typing import Any

import httpx

from weatherapp.config.schema import ApiConfig
from weatherapp.ingest.classifier import kind_for_status
from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.result import Failure, Result, Success

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


class ApiClient:
    def __init__(self, config: ApiConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self.enable_logging = config.enable_logging
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_ms / 1000,
            headers=DEFAULT_HEADERS,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Result[Any]:
        """GET ``path`` relative to the base URL and decode the JSON body."""
        started = time.monotonic()
        try:
            resp = await self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            self._log_request(path, None, started)
            return Failure(ErrorInfo(ErrorKind.NETWORK, f"Request timed out: {e}"))
        except httpx.RequestError as e:
            self._log_request(path, None, started)
            return Failure(ErrorInfo(ErrorKind.NETWORK, f"Could not connect: {e}"))

        self._log_request(path, resp.status_code, started)

        if not resp.is_success:
            return Failure(
                ErrorInfo(
                    kind_for_status(resp.status_code),
                    _error_message(resp),
                    status_code=resp.status_code,
                )
            )

        if not resp.content:
            return Success(None)
        try:
            return Success(resp.json())
        except ValueError as e:
            return Failure(
                ErrorInfo(
                    ErrorKind.PARSING,
                    f"Response from {path} is not valid JSON: {e}",
                    status_code=resp.status_code,
                )
            )

    def _log_request(self, path: str, status: int | None, started: float) -> None:
        # Bodies are never logged
        if not self.enable_logging:
            return
        logger.info(
            "method=GET path=%s status=%s latency_ms=%.1f",
            path, status if status is not None else "-",
            (time.monotonic() - started) * 1000,
        )


def _error_message(resp: httpx.Response) -> str:
    """Pull a message out of a JSON error body, falling back to the status."""
    fallback = f"HTTP {resp.status_code}"
    try:
        data = resp.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if isinstance(message, str) and message:
            return message
    return fallback
