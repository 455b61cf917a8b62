"""
Relational Core Operators
=========================
Operator tree nodes and evaluation dispatch.

  Operator ─┬─ unary:  Selection(predicate, relation)
            │          Projection(attributes, relation)
            └─ binary: BinaryOperator (no variants yet)

evaluate() routes to the concrete handler and returns a new derived
Relation, or None when the operation produces no result. Selection and
binary operators always produce no result.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

from storage.relation import Relation
from storage.schema import Attribute
from execution.context import ExecutionContext
from execution.predicates import SelectionPredicate
from execution.projection import project

logger = logging.getLogger(__name__)


@dataclass
class UnaryOperator(ABC):
    """Base class for single-input operators."""

    @abstractmethod
    def evaluate(self, ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
        """Evaluate to a derived relation, or None for no result."""


@dataclass
class Selection(UnaryOperator):
    """Filter rows by predicate. Unsupported: evaluates to None."""
    predicate: SelectionPredicate
    relation: Relation

    def evaluate(self, ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
        logger.warning("Selection on %r: predicate evaluation is not supported",
                       self.relation.name)
        return None


@dataclass
class Projection(UnaryOperator):
    """Project a relation onto an ordered attribute list (empty = all)."""
    attributes: List[Attribute]
    relation: Relation

    def evaluate(self, ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
        return project(self.attributes, self.relation, ctx)


@dataclass
class BinaryOperator:
    """Two-input operators (joins, unions). None are defined yet."""
    def evaluate(self, ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
        logger.warning("Binary operators are not supported")
        return None


@dataclass
class Operator:
    """Root of an operator tree."""
    op: Union[UnaryOperator, BinaryOperator]

    @property
    def is_unary(self) -> bool:
        return isinstance(self.op, UnaryOperator)

    def evaluate(self, ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
        if isinstance(self.op, (UnaryOperator, BinaryOperator)):
            return self.op.evaluate(ctx)
        raise TypeError(f"Not an operator: {self.op!r}")


def evaluate(op: Union[Operator, UnaryOperator, BinaryOperator],
             ctx: Optional[ExecutionContext] = None) -> Optional[Relation]:
    """Evaluate an operator or a bare unary/binary node."""
    if not isinstance(op, Operator):
        op = Operator(op)
    return op.evaluate(ctx)
