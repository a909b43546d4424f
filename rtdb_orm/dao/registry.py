from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Type, TYPE_CHECKING
from rtdb_orm.dao.data_access import DataAccessObject
from rtdb_orm.records.meta import build_record_meta
from rtdb_orm.records.record import Record

if TYPE_CHECKING:
    from rtdb_orm.connection import ORM


def type_key(record_type: type) -> str:
    return f"{record_type.__module__}.{record_type.__qualname__}"


@dataclass
class DataAccessObjectRegistry:
    orm: "ORM"
    mapping: Dict[type, DataAccessObject] = field(default_factory=dict)

    def resolve(self, record_type: Type[Record]) -> DataAccessObject:
        if not isinstance(record_type, type) or not issubclass(record_type, Record):
            raise TypeError(f"{record_type!r} is not a Record type")
        dao = self.mapping.get(record_type)
        if dao is None:
            dao = DataAccessObject(record_type, self.orm, meta=build_record_meta(record_type))
            self.mapping[record_type] = dao
        return dao

    fetch = resolve

    def registered(self) -> List[str]:
        return [type_key(t) for t in self.mapping]

    def __contains__(self, record_type: type) -> bool:
        return record_type in self.mapping
