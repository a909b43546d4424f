"""Async ORM over a Firebase-style realtime database REST interface."""
from rtdb_orm.connection import ORM, get_active_orm, set_active_orm
from rtdb_orm.core.write_mode import WriteMode
from rtdb_orm.dao.data_access import DataAccessObject
from rtdb_orm.dao.id_provider import DefaultIdProvider, IdProvider
from rtdb_orm.records.meta import FieldSpec, RecordMeta
from rtdb_orm.records.record import Record

__all__ = [
    "ORM",
    "Record",
    "DataAccessObject",
    "IdProvider",
    "DefaultIdProvider",
    "FieldSpec",
    "RecordMeta",
    "WriteMode",
    "get_active_orm",
    "set_active_orm",
]
