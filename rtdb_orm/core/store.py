from __future__ import annotations
import logging
import httpx
from dataclasses import dataclass
from typing import Any
from rtdb_orm.core.config import settings

log = logging.getLogger(__name__)

@dataclass
class StoreClient:
    base_url: str
    timeout: float = settings.request_timeout
    transport: httpx.AsyncBaseTransport | None = None

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def get_json(self, path: str) -> Any:
        url = self._url(path)
        log.debug("GET %s", url)
        async with self._client() as client:
            r = await client.get(url, headers=self._headers())
            r.raise_for_status()
            return r.json()

    async def put_json(self, path: str, body: Any) -> Any:
        url = self._url(path)
        log.debug("PUT %s", url)
        async with self._client() as client:
            r = await client.put(url, headers=self._headers(), json=body)
            r.raise_for_status()
            return r.json()

    async def patch_json(self, path: str, body: Any) -> Any:
        url = self._url(path)
        log.debug("PATCH %s", url)
        async with self._client() as client:
            r = await client.patch(url, headers=self._headers(), json=body)
            r.raise_for_status()
            return r.json()

    async def delete(self, path: str) -> None:
        url = self._url(path)
        log.debug("DELETE %s", url)
        async with self._client() as client:
            r = await client.delete(url, headers=self._headers())
            r.raise_for_status()

# NOTE: Authenticated databases need an auth query parameter; not supported yet.
