"""
Relational Core Execution
=========================
Operators over relations.

Usage:
    from execution import Operator, Projection, project
"""

from execution.context import ExecutionContext, DERIVED_RELATION_NAME
from execution.predicates import Comparison, Connective, Condition, SelectionPredicate
from execution.projection import project, select_all
from execution.operators import (
    UnaryOperator, Selection, Projection, BinaryOperator, Operator, evaluate,
)

__all__ = [
    "ExecutionContext", "DERIVED_RELATION_NAME",
    "Comparison", "Connective", "Condition", "SelectionPredicate",
    "project", "select_all",
    "UnaryOperator", "Selection", "Projection", "BinaryOperator", "Operator", "evaluate",
]
