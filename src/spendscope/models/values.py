"""Tagged column values produced by coercion.

Every cell read from a resource table becomes exactly one of these.
Use ``match`` on the class to handle each kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Number:
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class Boolean:
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class String:
    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class Null:
    def to_python(self) -> None:
        return None


Value = Union[Number, Boolean, String, Null]

# Column name -> coerced value
Record = dict[str, Value]


def record_to_python(record: Record) -> dict[str, float | bool | str | None]:
    """Unwrap a record into plain JSON-compatible values."""
    return {name: value.to_python() for name, value in record.items()}
