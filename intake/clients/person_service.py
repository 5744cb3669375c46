"""Person API client: OASys RoSH answers and RoSH risk summaries."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from intake.clients.api_client import ApiClient
from intake.config import ApiConfig


class PersonApi(ApiClient):
    source = "person-api"


class PersonService:
    """Looks up OASys data for a person by CRN.

    A missing OASys record surfaces as `ExternalServiceError` with status 404.
    """

    def __init__(self, config: ApiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport

    def _api(self, token: str) -> PersonApi:
        return PersonApi(self._config, token, transport=self._transport)

    async def get_oasys_rosh(self, token: str, crn: str) -> Dict[str, Any]:
        return await self._api(token).request("GET", f"/people/{crn}/oasys/rosh")

    async def get_rosh_risks(self, token: str, crn: str) -> Dict[str, Any]:
        return await self._api(token).request("GET", f"/people/{crn}/risks")


class DataServices:
    """Services handed to page `initialize` hooks."""

    def __init__(self, person_service: Any):
        self.person_service = person_service


__all__ = ["PersonApi", "PersonService", "DataServices"]
