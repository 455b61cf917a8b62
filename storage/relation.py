"""
Relational Core Relation
========================
A named, schema-typed collection of rows with an optional primary key.

Insert protocol:
  insert_row(row)    validate → (keyed) reject existing key → insert
  insert_rows(rows)  two-phase: validate the whole batch, then commit.
                     Any failed check returns False before the first write,
                     so a rejected batch never leaves a partial state.

Storage kind follows primary-key presence and is fixed at construction:
  primary_key given  → KeyedStore, no two rows share a key value
  primary_key None   → SurrogateStore, duplicate rows allowed

Rows are stored as tuples of Values. Callers may pass lists; a tuple copy
is taken on insert, so the relation never aliases caller data.

Concurrency: none. One writer per relation; callers serialize access.
"""

import logging
from typing import Iterable, Optional, Sequence

from storage.schema import Attribute, Schema
from storage.tuple_store import KeyedStore, Row, TupleStore, make_store
from storage.types import Value

logger = logging.getLogger(__name__)


class Relation:
    """
    In-memory relation.

    Provides:
    - insert_row(): single insert, returns bool
    - insert_rows(): atomic batch insert, returns bool
    - tuples(): all rows in storage order
    - items(): (storage key, row) pairs
    - get_row(): keyed lookup
    """

    def __init__(self, name: str, schema: Schema, primary_key: Optional[int] = None):
        if primary_key is not None and (
                not isinstance(primary_key, int) or isinstance(primary_key, bool)
                or not 0 <= primary_key < schema.column_count):
            raise ValueError(f"Invalid primary key position {primary_key!r} for schema "
                             f"of {schema.column_count} attributes")
        self._name = name
        self._schema = schema
        self._primary_key = primary_key
        self._storage: TupleStore = make_store(primary_key is not None)

    # ─── Properties ─────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def primary_key(self) -> Optional[int]:
        return self._primary_key

    @property
    def has_primary_key(self) -> bool:
        return self._primary_key is not None

    @property
    def primary_key_attribute(self) -> Optional[Attribute]:
        if self._primary_key is None:
            return None
        return self._schema.attributes[self._primary_key]

    @property
    def storage(self) -> TupleStore:
        return self._storage

    @property
    def row_count(self) -> int:
        return len(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __repr__(self):
        return (f"Relation(name={self._name!r}, pk={self._primary_key}, "
                f"attributes={self._schema.attribute_names()}, rows={self.row_count})")

    # ─── Insert ─────────────────────────────────────────────────────

    def _key_of(self, row: Row) -> Value:
        return row[self._primary_key]

    def insert_row(self, row: Sequence[Value]) -> bool:
        """
        Insert one row. False (relation unchanged) on schema mismatch or,
        for keyed relations, when the key value is already present.
        """
        row = tuple(row)
        if not self._schema.validate_row(row):
            logger.debug("%s: row %r does not match schema", self._name, row)
            return False

        if self._primary_key is None:
            self._storage.insert(row)
            return True

        key = self._key_of(row)
        if self._storage.contains(key):
            logger.debug("%s: key %r already present", self._name, key)
            return False
        self._storage.insert(key, row)
        return True

    def insert_rows(self, rows: Iterable[Sequence[Value]]) -> bool:
        """
        Insert a batch atomically: either every row is inserted or none.

        Keyed relations reject the batch if two of its rows share a key or
        any key already exists. Surrogate relations accept duplicates.
        """
        batch = [tuple(r) for r in rows]

        # Phase 1: validate
        if not all(self._schema.validate_row(r) for r in batch):
            logger.warning("%s: rows are not valid, not inserting batch of %d",
                           self._name, len(batch))
            return False

        if self._primary_key is not None:
            keys = [self._key_of(r) for r in batch]
            if len(set(keys)) != len(keys):
                logger.warning("%s: repeated primary key values in batch, not inserting",
                               self._name)
                return False
            if any(self._storage.contains(k) for k in keys):
                logger.warning("%s: some keys in batch already exist, not inserting",
                               self._name)
                return False

        # Phase 2: commit
        if self._primary_key is None:
            for row in batch:
                self._storage.insert(row)
        else:
            for row in batch:
                self._storage.insert(self._key_of(row), row)
        return True

    # ─── Read ───────────────────────────────────────────────────────

    def tuples(self) -> list[Row]:
        """All rows, in storage order (key-sorted or insertion order)."""
        return list(self._storage.tuples())

    def items(self) -> list[tuple[object, Row]]:
        """(storage key, row) pairs: key Values, or surrogate ids from 0."""
        return list(self._storage.items())

    def get_row(self, key: Value) -> Optional[Row]:
        """Row at a primary-key value. Always None for surrogate relations."""
        if not isinstance(self._storage, KeyedStore):
            return None
        return self._storage.get(key)
