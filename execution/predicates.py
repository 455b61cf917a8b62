"""
Relational Core Selection Predicates
====================================
Data model for selection conditions: `attribute <op> value`, optionally
chained to a further predicate by AND / OR.

Predicates can be built and inspected, but evaluation is not supported:
validate() reports False for every predicate and Selection evaluates to
no result. No matching semantics are defined here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from storage.schema import Attribute
from storage.types import Value


class Comparison(Enum):
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "="
    NE = "!="


class Connective(Enum):
    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Condition:
    """A single comparison of an attribute against a constant."""
    attribute: Attribute
    op: Comparison
    value: Value


@dataclass(frozen=True)
class SelectionPredicate:
    """
    A condition plus an optional (connective, rest) continuation.
    `condition` None is the empty predicate.
    """
    condition: Optional[Condition] = None
    rest: Optional[tuple[Connective, "SelectionPredicate"]] = None

    @property
    def is_empty(self) -> bool:
        return self.condition is None

    def conditions(self) -> list[Condition]:
        """Conditions in chain order."""
        out: list[Condition] = []
        node: Optional[SelectionPredicate] = self
        while node is not None and node.condition is not None:
            out.append(node.condition)
            node = node.rest[1] if node.rest else None
        return out

    def validate(self) -> bool:
        """Predicate checking is unsupported; always False."""
        return False
