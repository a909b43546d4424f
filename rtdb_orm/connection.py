from __future__ import annotations
import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set, Type

import httpx

from rtdb_orm.core.config import settings
from rtdb_orm.core.store import StoreClient
from rtdb_orm.core.write_mode import WriteMode
from rtdb_orm.dao.data_access import DataAccessObject
from rtdb_orm.dao.id_provider import DefaultIdProvider, IdProvider
from rtdb_orm.dao.registry import DataAccessObjectRegistry
from rtdb_orm.records.record import Record

log = logging.getLogger(__name__)

_active: Optional["ORM"] = None


def get_active_orm() -> "ORM":
    if _active is None:
        raise RuntimeError("No active ORM connection; create one with ORM(url)")
    return _active


def set_active_orm(orm: Optional["ORM"]) -> None:
    global _active
    _active = orm


class ORM:
    """Connection to one store.

    Owns the transport, the type registry and the write policy. Creating a
    connection makes it the one the ``Record`` class shortcuts talk to, unless
    ``activate=False``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        write_mode: Optional[WriteMode] = None,
        timeout: Optional[float] = None,
        id_pool_path: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        id_provider_factory: Optional[Callable[["ORM"], IdProvider]] = None,
        activate: bool = True,
    ):
        url = url or settings.database_url
        if not url:
            raise ValueError("No database URL given and RTDB_DATABASE_URL is not set")
        self.url = url.rstrip("/")
        self.write_mode = WriteMode(write_mode or settings.write_mode)
        self.id_pool_path = (id_pool_path or settings.id_pool_path).strip("/")
        self.store = StoreClient(
            base_url=self.url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )
        self.registry = DataAccessObjectRegistry(self)
        self._id_provider_factory = id_provider_factory or DefaultIdProvider
        self._pending: Set[asyncio.Task] = set()
        self._failures: List[BaseException] = []
        self._closed = False
        if activate:
            set_active_orm(self)

    def dao(self, record_type: Type[Record]) -> DataAccessObject:
        self._ensure_open()
        return self.registry.resolve(record_type)

    def get_id_provider(self) -> IdProvider:
        return self._id_provider_factory(self)

    async def write(self, request: Awaitable[Any], collection: str, op: str) -> None:
        """Run a store write according to the connection's write mode."""
        if self._closed and asyncio.iscoroutine(request):
            request.close()
        self._ensure_open()
        extra = {"collection": collection, "op": op}
        if self.write_mode == WriteMode.CONFIRM:
            await request
            return

        task = asyncio.ensure_future(request)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._write_done(t, extra))
        log.debug("Scheduled best-effort write", extra=extra)

    def _write_done(self, task: asyncio.Task, extra: dict) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.warning("Best-effort write failed: %s", exc, extra=extra)
            self._failures.append(exc)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def flush(self) -> None:
        """Wait for scheduled best-effort writes; re-raise the first failure."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        if self._failures:
            failures, self._failures = self._failures, []
            raise failures[0]

    async def aclose(self) -> None:
        try:
            await self.flush()
        finally:
            self._closed = True
            if _active is self:
                set_active_orm(None)

    async def __aenter__(self) -> "ORM":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("ORM connection is closed")
