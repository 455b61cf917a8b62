"""
Relational Core Tuple Storage
=============================
Two interchangeable in-memory row stores behind one capability set:

  insert    add a row
  contains  membership test
  tuples    enumerate rows in storage order
  items     enumerate (storage key, row) pairs

KeyedStore:
  Ordered map from the primary-key Value to its row. Enumeration is
  key-sorted. insert() overwrites unconditionally; rejecting a duplicate
  key is the owning Relation's job and happens before insert() is called.

SurrogateStore:
  Ordered map from a 0-based counter to a row. Every insert takes the
  current counter value and bumps it, so identifiers are never reused.
  Never rejects and never checks duplicates. contains() tests a whole row
  by structural equality.

The store kind is picked once per relation by make_store().
"""

import bisect
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional

from storage.types import Value

Row = tuple[Value, ...]


class TupleStore(ABC):
    """Base class for row storage."""

    @abstractmethod
    def insert(self, *args) -> None:
        """Write a row."""

    @abstractmethod
    def contains(self, probe: Any) -> bool:
        """Membership test (key for keyed storage, row for surrogate)."""

    @abstractmethod
    def items(self) -> Iterator[tuple[Any, Row]]:
        """Yield (storage key, row) in storage order."""

    def tuples(self) -> Iterator[Row]:
        """Yield all rows in storage order."""
        for _, row in self.items():
            yield row

    @abstractmethod
    def __len__(self) -> int: ...

    @property
    @abstractmethod
    def is_keyed(self) -> bool: ...


class KeyedStore(TupleStore):
    """Rows indexed by primary-key value, enumerated in key order."""

    def __init__(self):
        self._rows: dict[Value, Row] = {}
        self._keys: list[Value] = []  # sorted

    @property
    def is_keyed(self) -> bool:
        return True

    def insert(self, key: Value, row: Row) -> None:
        if not isinstance(key, Value):
            raise TypeError(f"Keyed insert needs a Value key, got {key!r}")
        if key not in self._rows:
            bisect.insort(self._keys, key)
        self._rows[key] = row

    def contains(self, key: Value) -> bool:
        return key in self._rows

    def get(self, key: Value) -> Optional[Row]:
        return self._rows.get(key)

    def items(self) -> Iterator[tuple[Value, Row]]:
        for key in self._keys:
            yield key, self._rows[key]

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self):
        return f"KeyedStore(rows={len(self)})"


class SurrogateStore(TupleStore):
    """Rows under auto-assigned sequential identifiers, in insertion order."""

    def __init__(self):
        self._next_id: int = 0
        self._rows: dict[int, Row] = {}

    @property
    def is_keyed(self) -> bool:
        return False

    @property
    def next_id(self) -> int:
        """Identifier the next insert will receive."""
        return self._next_id

    def insert(self, row: Row) -> int:
        """Store the row and return the identifier it was given."""
        if isinstance(row, Value):
            raise TypeError("Surrogate insert takes a row, not a key")
        rid = self._next_id
        self._rows[rid] = row
        self._next_id += 1
        return rid

    def contains(self, row: Row) -> bool:
        probe = tuple(row)
        return any(stored == probe for stored in self._rows.values())

    def items(self) -> Iterator[tuple[int, Row]]:
        yield from self._rows.items()

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self):
        return f"SurrogateStore(rows={len(self)}, next_id={self._next_id})"


def make_store(has_primary_key: bool) -> TupleStore:
    """Pick the storage representation for a relation."""
    return KeyedStore() if has_primary_key else SurrogateStore()
