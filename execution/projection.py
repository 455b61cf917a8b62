"""
Relational Core Projection
==========================
project(attributes, relation) derives a new relation holding only the
requested attributes of each source row.

Rules:
  - Every requested attribute must be in the source schema (name + type).
    Any unknown attribute → None, which is different from an empty result.
  - Empty attribute list is select-all: same schema, same key status.
  - Projected rows are deduplicated by full-row equality, keeping the first
    occurrence. Dropping columns can make distinct rows equal.
  - Key propagation: if the source key attribute is kept, the derived
    relation is keyed on its new position. Otherwise the derived relation
    has no key and rows get fresh surrogate ids 0, 1, 2, ... in
    enumeration order.

The source is only read. The result shares no storage with it.
"""

import logging
from typing import Optional, Sequence

from storage.relation import Relation
from storage.schema import Attribute
from storage.tuple_store import Row
from execution.context import DEFAULT_CONTEXT, ExecutionContext

logger = logging.getLogger(__name__)


def _distinct(rows: list[Row]) -> list[Row]:
    """Drop repeated rows, first occurrence wins."""
    return list(dict.fromkeys(rows))


def _build(name: str, schema, primary_key: Optional[int], rows: list[Row]) -> Relation:
    derived = Relation(name, schema, primary_key=primary_key)
    # Rows are distinct and, when keyed, their key values come from a
    # keyed source column, so the batch cannot collide.
    if not derived.insert_rows(rows):
        raise RuntimeError(f"Derived relation {name!r} rejected its own rows")
    logger.debug("derived relation %r: %d rows, pk=%s", name, len(rows), primary_key)
    return derived


def select_all(relation: Relation, ctx: ExecutionContext = DEFAULT_CONTEXT) -> Relation:
    """Copy of `relation` with duplicate rows removed."""
    logger.debug("Projection on %r: select *, returning all tuples", relation.name)
    rows = _distinct(relation.tuples())
    return _build(ctx.derived_name, relation.schema.project(relation.schema.attributes),
                  relation.primary_key, rows)


def project(attributes: Sequence[Attribute], relation: Relation,
            ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
    """
    Project `relation` onto `attributes` (in that order).
    Returns None if any attribute is not in the source schema.
    """
    ctx = ctx or DEFAULT_CONTEXT
    attributes = list(attributes)
    if not attributes:
        return select_all(relation, ctx)

    schema = relation.schema
    missing = [a for a in attributes if not schema.contains(a)]
    if missing:
        logger.warning("Projection on %r: selected attributes %s don't exist",
                       relation.name, [a.name for a in missing])
        return None

    logger.debug("Projection on %r: select %s", relation.name,
                 [a.name for a in attributes])

    # The key attribute always reads the key column, even when the schema
    # holds an identical attribute at an earlier position.
    key_attr = relation.primary_key_attribute
    positions = [relation.primary_key if a == key_attr else schema.attribute_index(a)
                 for a in attributes]
    projected = [tuple(row[i] for i in positions) for row in relation.tuples()]
    rows = _distinct(projected)

    primary_key = None
    if key_attr is not None and key_attr in attributes:
        primary_key = attributes.index(key_attr)
    else:
        logger.debug("Projection on %r: key not retained, using surrogate ids",
                     relation.name)

    return _build(ctx.derived_name, schema.project(attributes), primary_key, rows)
