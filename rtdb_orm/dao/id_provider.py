from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rtdb_orm.connection import ORM

log = logging.getLogger(__name__)

@dataclass
class IdPool:
    uuid: int

class IdProvider:
    async def next(self) -> int:
        raise NotImplementedError

class DefaultIdProvider(IdProvider):
    """Hands out ids from the shared counter document of a connection.

    Read-increment-write with no compare-and-swap: two callers racing on the
    same store can be given the same id.
    """

    def __init__(self, orm: "ORM"):
        self.orm = orm

    def _path(self) -> str:
        return f"{self.orm.id_pool_path}.json"

    async def next(self) -> int:
        id_pool = await self.get_id_pool()
        if id_pool is None:
            id_pool = await self.reset_id_pool()
        else:
            id_pool.uuid += 1
            await self.update_id_pool(id_pool)
        return id_pool.uuid

    async def get_id_pool(self) -> Optional[IdPool]:
        data = await self.orm.store.get_json(self._path())
        if data is None:
            return None
        if not isinstance(data, dict) or "uuid" not in data:
            raise ValueError(f"Unexpected id pool document: {data!r}")
        return IdPool(uuid=int(data["uuid"]))

    async def update_id_pool(self, id_pool: IdPool) -> None:
        await self.orm.store.put_json(self._path(), {"uuid": id_pool.uuid})

    async def reset_id_pool(self) -> IdPool:
        id_pool = IdPool(uuid=1)
        log.info("Initializing id pool", extra={"collection": self.orm.id_pool_path, "op": "reset_id_pool"})
        await self.orm.write(
            self.orm.store.patch_json(self._path(), {"uuid": id_pool.uuid}),
            collection=self.orm.id_pool_path,
            op="reset_id_pool",
        )
        return id_pool
