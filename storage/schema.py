"""
Relational Core Schema Definition
=================================
An ordered list of typed attributes. Attribute order is the row shape:
the value at row position i is checked against the attribute at schema
position i.

Attribute identity is (name, type). Two attributes with the same name but
different types are different attributes; lookups never match by name alone.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from storage.types import DataType, type_matches, type_from_string


@dataclass(frozen=True)
class Attribute:
    """A single named, typed attribute."""
    name: str
    data_type: DataType

    @classmethod
    def of(cls, name: str, type_name: str) -> "Attribute":
        """Build an attribute from a type name such as 'INTEGER'."""
        return cls(name, type_from_string(type_name))


@dataclass
class Schema:
    """
    Relation schema — an ordered list of attributes.
    Provides row validation and attribute lookup.
    """
    attributes: list[Attribute] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.attributes)

    def attribute_names(self) -> list[str]:
        return [a.name for a in self.attributes]

    def contains(self, attribute: Attribute) -> bool:
        return attribute in self.attributes

    def attribute_index(self, attribute: Attribute) -> int:
        """Zero-based position of an attribute. Raises KeyError if absent."""
        for i, attr in enumerate(self.attributes):
            if attr == attribute:
                return i
        raise KeyError(f"Attribute {attribute.name!r} ({attribute.data_type.value}) "
                       f"not in schema. Available: {self.attribute_names()}")

    def validate_row(self, row: Sequence[Any]) -> bool:
        """
        True iff the row has one value per attribute and every value's
        variant matches its attribute's type.
        """
        if len(row) != self.column_count:
            return False
        return all(type_matches(attr.data_type, val)
                   for attr, val in zip(self.attributes, row))

    def project(self, attributes: Iterable[Attribute]) -> "Schema":
        """Schema made of the given attributes, in the given order."""
        return Schema(attributes=list(attributes))


def validate_row(schema: Schema, row: Sequence[Any]) -> bool:
    """Module-level form of Schema.validate_row."""
    return schema.validate_row(row)
