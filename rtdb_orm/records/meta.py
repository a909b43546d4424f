"""Static field descriptors for record types."""
import typing
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class FieldSpec:
    """One declared field of a record type."""
    name: str
    kind: str  # "number", "string", "boolean", "object", "array" or "any"


@dataclass
class RecordMeta:
    """Field descriptors of a record type, built once at registration."""
    record_type: Type[Any]
    props: List[FieldSpec] = field(default_factory=list)

    def field_names(self) -> List[str]:
        return [p.name for p in self.props]

    def kind_of(self, name: str) -> Optional[str]:
        for p in self.props:
            if p.name == name:
                return p.kind
        return None


_KIND_BY_TYPE: Dict[Any, str] = {
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    dict: "object",
    list: "array",
    tuple: "array",
    set: "array",
    frozenset: "array",
}


def annotation_kind(annotation: Any) -> str:
    """Map a type annotation to the JSON kind it serializes to."""
    origin = typing.get_origin(annotation)
    if origin is not None:
        if origin in _KIND_BY_TYPE:
            return _KIND_BY_TYPE[origin]
        # Optional[X] / X | None
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return annotation_kind(args[0])
        return "any"

    if annotation in _KIND_BY_TYPE:
        return _KIND_BY_TYPE[annotation]
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return "object"
    return "any"


def build_record_meta(record_type: Type[BaseModel]) -> RecordMeta:
    props = [
        FieldSpec(name=name, kind=annotation_kind(info.annotation))
        for name, info in record_type.model_fields.items()
    ]
    return RecordMeta(record_type=record_type, props=props)
