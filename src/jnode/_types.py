"""Core data types: JSON type tags, paths, rows and nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Segment = str | int
Path = tuple[Segment, ...]


class JsonType(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"

    @property
    def is_container(self) -> bool:
        return self in (JsonType.OBJECT, JsonType.ARRAY)

    @classmethod
    def of(cls, value: object) -> JsonType:
        """Return the tag of a parsed JSON value."""
        if value is None:
            return cls.NULL
        # bool is a subclass of int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, dict):
            return cls.OBJECT
        if isinstance(value, list):
            return cls.ARRAY
        raise TypeError(f"not a JSON value: {type(value).__name__}")


@dataclass(frozen=True)
class Row:
    """One displayed fact about a node."""

    key: str | None
    type: JsonType
    value: object = None  # scalars only
    children_count: int | None = None  # containers only

    @property
    def is_scalar(self) -> bool:
        return not self.type.is_container


@dataclass(frozen=True)
class Node:
    """Selectable unit of a document, addressed by its path."""

    path: Path
    rows: tuple[Row, ...] = ()
