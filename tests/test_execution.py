"""
Execution Layer Tests
=====================
  ✔ select-all projection
  ✔ attribute projection with key propagation and surrogate ids
  ✔ duplicate elimination
  ✔ unknown attributes yield no result
  ✔ operator dispatch, selection and binary stubs
"""

import logging

import pytest

from storage import Attribute, DataType, Relation, Schema, Value, row_of
from storage.tuple_store import KeyedStore, SurrogateStore
from execution import (
    BinaryOperator, Comparison, Condition, Connective, ExecutionContext,
    Operator, Projection, Selection, SelectionPredicate, UnaryOperator, evaluate,
    project,
)

KEY = Attribute("key", DataType.INTEGER)
VALUE = Attribute("value", DataType.STRING)


def make_relation(rows, primary_key=0):
    relation = Relation("test", Schema(attributes=[KEY, VALUE]), primary_key=primary_key)
    assert relation.insert_rows([row_of(*r) for r in rows])
    return relation


@pytest.fixture
def relation():
    return make_relation([(1, "foo"), (2, "bar"), (3, "baz")])


def values(relation):
    return {row[0].payload for row in relation.tuples()}


# ═══════════════════════════════════════════════════════════════════════════
# 1. Projection
# ═══════════════════════════════════════════════════════════════════════════

class TestSelectAll:

    def test_returns_all_rows(self, relation):
        result = project([], relation)
        assert result is not None
        assert set(result.tuples()) == {row_of(1, "foo"), row_of(2, "bar"), row_of(3, "baz")}

    def test_keeps_schema_and_key(self, relation):
        result = project([], relation)
        assert result.name == "derived"
        assert result.schema == relation.schema
        assert result.primary_key == 0
        assert isinstance(result.storage, KeyedStore)

    def test_unkeyed_source_dedups_and_renumbers(self):
        source = make_relation([(1, "a"), (1, "a"), (2, "b")], primary_key=None)
        result = project([], source)
        assert result.primary_key is None
        assert list(result.items()) == [(0, row_of(1, "a")), (1, row_of(2, "b"))]

    def test_idempotent(self, relation):
        once = project([], relation)
        twice = project([], once)
        assert set(once.tuples()) == set(twice.tuples()) == set(relation.tuples())

    def test_result_is_independent(self, relation):
        result = project([], relation)
        assert result.storage is not relation.storage
        assert result.schema is not relation.schema
        assert result.insert_row(row_of(4, "qux"))
        assert relation.row_count == 3

    def test_empty_source(self):
        result = project([], make_relation([]))
        assert result is not None and result.row_count == 0


class TestAttributeProjection:

    def test_single_non_key_attribute(self, relation):
        result = project([VALUE], relation)
        assert result.primary_key is None
        assert isinstance(result.storage, SurrogateStore)
        assert [k for k, _ in result.items()] == [0, 1, 2]
        assert values(result) == {"foo", "bar", "baz"}

    def test_deduplicates(self):
        source = make_relation([(1, "foo"), (2, "bar"), (3, "baz"), (4, "foo")])
        result = project([VALUE], source)
        assert result.row_count == 3
        assert values(result) == {"foo", "bar", "baz"}

    def test_surrogate_follows_enumeration_order(self):
        source = make_relation([(3, "c"), (1, "a"), (2, "b")])
        result = project([VALUE], source)
        assert list(result.items()) == [
            (0, row_of("a")), (1, row_of("b")), (2, row_of("c")),
        ]

    def test_key_retained_moves_position(self, relation):
        result = project([VALUE, KEY], relation)
        assert result.primary_key == 1
        assert result.primary_key_attribute == KEY
        assert result.schema.attribute_names() == ["value", "key"]
        assert result.get_row(Value.integer(2)) == row_of("bar", 2)

    def test_key_only(self, relation):
        result = project([KEY], relation)
        assert result.primary_key == 0
        assert [r[0].payload for r in result.tuples()] == [1, 2, 3]

    def test_unkeyed_source_stays_unkeyed(self):
        source = make_relation([(1, "a"), (2, "b")], primary_key=None)
        result = project([KEY], source)
        assert result.primary_key is None

    def test_unknown_attribute(self, relation):
        assert project([Attribute("missing", DataType.STRING)], relation) is None

    def test_name_match_with_wrong_type_is_unknown(self, relation):
        assert project([VALUE, Attribute("key", DataType.STRING)], relation) is None

    def test_unknown_attribute_is_logged(self, relation, caplog):
        with caplog.at_level(logging.WARNING, logger="execution.projection"):
            project([Attribute("missing", DataType.STRING)], relation)
        assert "missing" in caplog.text

    def test_source_untouched(self, relation):
        before = list(relation.items())
        project([VALUE], relation)
        assert list(relation.items()) == before

    def test_repeated_attribute_repeats_column(self, relation):
        result = project([KEY, VALUE, KEY], relation)
        assert result.schema.column_count == 3
        assert result.primary_key == 0
        assert result.tuples()[0] == row_of(1, "foo", 1)

    def test_key_read_from_key_column_with_identical_attribute(self):
        a = Attribute("a", DataType.INTEGER)
        b = Attribute("b", DataType.STRING)
        source = Relation("twin", Schema(attributes=[a, a, b]), primary_key=1)
        assert source.insert_rows([row_of(1, 10, "x"), row_of(1, 11, "y")])
        result = project([a, b], source)
        assert result is not None
        assert result.primary_key == 0
        assert result.tuples() == [row_of(10, "x"), row_of(11, "y")]

    def test_context_name(self, relation):
        result = project([VALUE], relation, ExecutionContext(derived_name="names"))
        assert result.name == "names"


# ═══════════════════════════════════════════════════════════════════════════
# 2. Operators
# ═══════════════════════════════════════════════════════════════════════════

class TestOperators:

    def test_projection_dispatch(self, relation):
        op = Operator(Projection([VALUE], relation))
        result = op.evaluate()
        assert values(result) == {"foo", "bar", "baz"}

    def test_select_all_dispatch(self, relation):
        result = Operator(Projection([], relation)).evaluate()
        assert set(result.tuples()) == set(relation.tuples())

    def test_selection_has_no_result(self, relation):
        predicate = SelectionPredicate(Condition(KEY, Comparison.GT, Value.integer(1)))
        assert Operator(Selection(predicate, relation)).evaluate() is None
        assert Operator(Selection(SelectionPredicate(), relation)).evaluate() is None

    def test_binary_has_no_result(self):
        assert Operator(BinaryOperator()).evaluate() is None

    def test_evaluate_wraps_bare_nodes(self, relation):
        assert evaluate(Projection([KEY], relation)).primary_key == 0
        assert Operator(Projection([KEY], relation)).is_unary

    def test_unary_base_is_abstract(self):
        with pytest.raises(TypeError):
            UnaryOperator()

    def test_context_is_frozen(self):
        with pytest.raises(AttributeError):
            ExecutionContext().derived_name = "other"

    def test_non_operator_rejected(self):
        with pytest.raises(TypeError):
            Operator("not an operator").evaluate()


class TestPredicates:

    def test_chain_conditions(self):
        tail = SelectionPredicate(Condition(VALUE, Comparison.EQ, Value.string("foo")))
        head = SelectionPredicate(
            Condition(KEY, Comparison.LE, Value.integer(3)), (Connective.AND, tail))
        assert [c.op for c in head.conditions()] == [Comparison.LE, Comparison.EQ]

    def test_validate_unsupported(self):
        assert SelectionPredicate().is_empty
        assert SelectionPredicate().validate() is False
        assert SelectionPredicate(Condition(KEY, Comparison.NE, Value.integer(0))).validate() is False
