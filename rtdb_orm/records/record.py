"""Base model for persisted records.

Subclasses declare their fields as ordinary pydantic fields. The collection a
record type lives in is its class name lower-cased, unless the class sets
``collection_path``.

Every data access operation is also reachable from the class itself and runs
against the active connection::

    class Animal(Record):
        name: str

    ORM("https://example.firebaseio.com")
    elephant = await Animal.save(Animal(name="Elephant"))
    await Animal.find_by_id(elephant.id)
"""
from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr


class Record(BaseModel):
    model_config = ConfigDict(extra="allow")

    collection_path: ClassVar[Optional[str]] = None

    id: int = 0

    _persisted: bool = PrivateAttr(default=False)

    def is_persisted(self) -> bool:
        return self._persisted

    def mark_persisted(self, persisted: bool = True) -> None:
        self._persisted = persisted

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_document(cls, row: Dict[str, Any]) -> "Record":
        record = cls.model_validate(row)
        record.mark_persisted()
        return record

    @classmethod
    def dao(cls):
        from rtdb_orm.connection import get_active_orm
        return get_active_orm().dao(cls)

    @classmethod
    def meta(cls):
        return cls.dao().meta

    @classmethod
    async def contains(cls, record: "Record") -> bool:
        return await cls.dao().contains(record)

    @classmethod
    async def count(cls) -> int:
        return await cls.dao().count()

    @classmethod
    async def delete(cls, record: "Record") -> "Record":
        return await cls.dao().delete(record)

    @classmethod
    async def delete_all(cls) -> None:
        await cls.dao().delete_all()

    @classmethod
    async def find_all(cls) -> List["Record"]:
        return await cls.dao().find_all()

    @classmethod
    async def find_by_id(cls, id: int) -> Optional["Record"]:
        return await cls.dao().find_by_id(id)

    @classmethod
    async def first(cls) -> Optional["Record"]:
        return await cls.dao().first()

    @classmethod
    async def is_empty(cls) -> bool:
        return await cls.dao().is_empty()

    @classmethod
    async def is_not_empty(cls) -> bool:
        return await cls.dao().is_not_empty()

    @classmethod
    async def last(cls) -> Optional["Record"]:
        return await cls.dao().last()

    @classmethod
    async def save(cls, record: "Record") -> "Record":
        return await cls.dao().save(record)
