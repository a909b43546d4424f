"""Per-type data access object.

A ``DataAccessObject`` owns one collection document of the store and a local,
ordered cache of the records it holds. Every read replaces the cache with the
store's current content; every write pushes the whole cache back, overwriting
the remote collection.

No locking: two overlapping ``save`` calls on the same collection can
interleave and the last full push wins.
"""
from __future__ import annotations

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar, TYPE_CHECKING

from rtdb_orm.records.meta import RecordMeta, build_record_meta
from rtdb_orm.records.record import Record

if TYPE_CHECKING:
    from rtdb_orm.connection import ORM

log = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def resolve_collection_path(record_type: type) -> str:
    """Collection path segment for a record type.

    An explicit ``collection_path`` wins, minus any leading ``/``; otherwise
    the class name lower-cased.
    """
    override = getattr(record_type, "collection_path", None)
    if override:
        return override.lstrip("/")
    return record_type.__name__.lower()


class DataAccessObject(Generic[R]):
    def __init__(self, record_type: Type[R], orm: "ORM", meta: Optional[RecordMeta] = None):
        self.record_type = record_type
        self.orm = orm
        self.meta = meta if meta is not None else build_record_meta(record_type)
        self._path: Optional[str] = None
        self._records: List[R] = []

    @property
    def path(self) -> str:
        if self._path is None:
            self._path = resolve_collection_path(self.record_type)
        return self._path

    def _document_path(self) -> str:
        return f"{self.path}.json"

    def _extra(self, op: str) -> dict:
        return {"collection": self.path, "op": op}

    @property
    def cached(self) -> List[R]:
        """Records from the last full read, plus any local writes since."""
        return list(self._records)

    async def contains(self, record: R) -> bool:
        return await self.find_by_id(record.id) is not None

    async def count(self) -> int:
        return len(await self.find_all())

    async def delete(self, record: R) -> R:
        records = await self.find_all()
        index = next((i for i, r in enumerate(records) if r.id == record.id), None)
        if index is None:
            log.debug("Nothing to delete for id %s", record.id, extra=self._extra("delete"))
            return record

        to_be_deleted = self._records.pop(index)
        await self._sync("delete")
        to_be_deleted.mark_persisted(False)
        record.mark_persisted(False)
        log.info("Deleted record %s", record.id, extra=self._extra("delete"))
        return record

    async def delete_all(self) -> None:
        await self.orm.store.delete(self._document_path())
        for r in self._records:
            r.mark_persisted(False)
        self._records = []
        log.info("Deleted collection", extra=self._extra("delete_all"))

    async def find_all(self) -> List[R]:
        data = await self.orm.store.get_json(self._document_path())
        self._records = [self.record_type.from_document(row) for row in _rows(data)]
        log.debug("Loaded %d records", len(self._records), extra=self._extra("find_all"))
        return list(self._records)

    async def find_by_id(self, id: int) -> Optional[R]:
        records = await self.find_all()
        return next((r for r in records if r.id == id), None)

    async def first(self) -> Optional[R]:
        records = await self.find_all()
        return records[0] if records else None

    async def is_empty(self) -> bool:
        return await self.count() == 0

    async def is_not_empty(self) -> bool:
        return not await self.is_empty()

    async def last(self) -> Optional[R]:
        records = await self.find_all()
        return records[-1] if records else None

    async def save(self, record: R) -> R:
        if record.is_persisted():
            index = self._cached_index(record)
            if index is not None:
                return await self._update(record, index)
            # deleted since it was loaded
            record.mark_persisted(False)

        await self.find_all()
        record.id = await self.orm.get_id_provider().next()
        self._records.append(record)
        await self._sync("save")
        record.mark_persisted()
        log.info("Created record %s", record.id, extra=self._extra("save"))
        return record

    def _cached_index(self, record: R) -> Optional[int]:
        for index, cached in enumerate(self._records):
            if cached is record:
                return index
        for index, cached in enumerate(self._records):
            if cached.id == record.id:
                return index
        return None

    async def _update(self, record: R, index: int) -> R:
        self._records[index] = record
        await self._sync("update")
        return record

    async def _sync(self, op: str) -> None:
        body = [r.to_document() for r in self._records]
        await self.orm.write(
            self.orm.store.put_json(self._document_path(), body),
            collection=self.path,
            op=op,
        )


def _rows(data: Any) -> List[Any]:
    # An array PUT comes back as a list, possibly with null holes; keyed
    # children come back as an object.
    if data is None:
        return []
    if isinstance(data, dict):
        values = data.values()
    elif isinstance(data, list):
        values = data
    else:
        raise ValueError(f"Unexpected collection document: {data!r}")
    return [row for row in values if row is not None]
