"""
Relational Core Value/Type Domain
=================================
Defines the two supported data types (STRING, INTEGER) and the tagged
scalar `Value` that rows are made of.

A Value carries its own type tag, so schema checking is a plain tag
comparison (`type_matches`) with no implicit coercion: the integer 1 never
matches STRING and the text "1" never matches INTEGER.

Ordering:
  Values are totally ordered by variant first (STRING < INTEGER), then by
  payload. This is the order keyed storage enumerates rows in.
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Union


class DataType(Enum):
    """Supported attribute types."""
    STRING = "STRING"
    INTEGER = "INTEGER"


# ─── Constants ──────────────────────────────────────────────────────────────

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Variant rank used for cross-type ordering
_TYPE_RANK: dict[DataType, int] = {
    DataType.STRING: 0,
    DataType.INTEGER: 1,
}


@total_ordering
@dataclass(frozen=True, repr=False)
class Value:
    """
    Tagged scalar: either STRING(text) or INTEGER(int64).
    Immutable, hashable, totally ordered.
    """
    dtype: DataType
    payload: Union[str, int]

    def __post_init__(self):
        if self.dtype == DataType.STRING:
            if not isinstance(self.payload, str):
                raise TypeError(f"STRING value needs str payload, "
                                f"got {type(self.payload).__name__}")
        elif self.dtype == DataType.INTEGER:
            if not isinstance(self.payload, int) or isinstance(self.payload, bool):
                raise TypeError(f"INTEGER value needs int payload, "
                                f"got {type(self.payload).__name__}")
            if not INT64_MIN <= self.payload <= INT64_MAX:
                raise ValueError(f"Integer {self.payload} out of 64-bit range")
        else:
            raise TypeError(f"Unknown data type: {self.dtype!r}")

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(DataType.STRING, text)

    @classmethod
    def integer(cls, number: int) -> "Value":
        return cls(DataType.INTEGER, number)

    def _sort_key(self) -> tuple:
        return (_TYPE_RANK[self.dtype], self.payload)

    def __lt__(self, other: "Value") -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __repr__(self) -> str:
        if self.dtype == DataType.STRING:
            return f"Str({self.payload!r})"
        return f"Int({self.payload})"


# ─── Validation ─────────────────────────────────────────────────────────────

def type_matches(dtype: DataType, value: Any) -> bool:
    """Return True if `value` is a Value whose variant is `dtype`."""
    return isinstance(value, Value) and value.dtype == dtype


def validate(value: Any, dtype: DataType) -> bool:
    """
    Check if a value is compatible with the given DataType.
    Same check as type_matches, argument order as in the schema layer.
    """
    return type_matches(dtype, value)


# ─── Conversion ─────────────────────────────────────────────────────────────

def value_of(obj: Any) -> Value:
    """
    Wrap a native Python str/int as a Value.
    Values pass through unchanged. Raises TypeError for anything else
    (bool included, it is not an INTEGER).
    """
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, str):
        return Value.string(obj)
    if isinstance(obj, int) and not isinstance(obj, bool):
        return Value.integer(obj)
    raise TypeError(f"Cannot convert {obj!r} to a Value")


def row_of(*items: Any) -> tuple[Value, ...]:
    """Build a row tuple from native scalars or Values."""
    return tuple(value_of(i) for i in items)


def type_from_string(type_str: str) -> DataType:
    """Convert a string like 'INTEGER' (or 'INT', 'STR') to a DataType."""
    normalized = type_str.strip().upper()
    aliases = {"INT": "INTEGER", "STR": "STRING"}
    normalized = aliases.get(normalized, normalized)
    try:
        return DataType(normalized)
    except ValueError:
        raise ValueError(f"Unknown data type: {type_str!r}. "
                         f"Valid types: {[t.value for t in DataType]}")
