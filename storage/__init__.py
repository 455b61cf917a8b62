"""
Relational Core Storage
=======================
Public API for the storage layer.

Usage:
    from storage import DataType, Value, Attribute, Schema, Relation
"""

from storage.types import (
    DataType, Value, INT64_MIN, INT64_MAX,
    type_matches, validate, value_of, row_of, type_from_string,
)
from storage.schema import Attribute, Schema, validate_row
from storage.tuple_store import Row, TupleStore, KeyedStore, SurrogateStore, make_store
from storage.relation import Relation

__all__ = [
    "DataType", "Value", "INT64_MIN", "INT64_MAX",
    "type_matches", "validate", "value_of", "row_of", "type_from_string",
    "Attribute", "Schema", "validate_row",
    "Row", "TupleStore", "KeyedStore", "SurrogateStore", "make_store",
    "Relation",
]
