"""Shared httpx plumbing for upstream API clients."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from intake.config import ApiConfig
from intake.logic.errors import ExternalServiceError

logger = logging.getLogger(__name__)


class ApiClient:
    """Authenticated JSON client for one upstream API.

    Every call opens its own AsyncClient; `transport` lets tests swap in an
    `httpx.MockTransport`.
    """

    source = "upstream"

    def __init__(self, config: ApiConfig, token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._token = token
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.url,
            timeout=self._config.timeout_seconds,
            headers={"Authorization": f"Bearer {self._token}", "Accept": "application/json"},
            transport=self._transport,
        )

    async def request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error("upstream_timeout source=%s path=%s", self.source, path)
            raise ExternalServiceError(504, {"detail": str(e)}, source=self.source) from e
        except httpx.RequestError as e:
            logger.error("upstream_unreachable source=%s path=%s error=%s", self.source, path, e)
            raise ExternalServiceError(503, {"detail": str(e)}, source=self.source) from e

        if response.status_code >= 400:
            try:
                data = response.json() if response.content else {}
            except ValueError:
                data = {"detail": response.text}
            logger.info(
                "upstream_error source=%s method=%s path=%s status=%s",
                self.source,
                method,
                path,
                response.status_code,
            )
            raise ExternalServiceError(response.status_code, data, source=self.source)

        if not response.content:
            return None
        return response.json()


__all__ = ["ApiClient"]
