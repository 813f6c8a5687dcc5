import pytest
from pyrsistent import pvector

from expropt.expr import ANY_NUMBER, NumericConstant, BinaryAddition, MalformedTransformError
from expropt.rewrites import Transform, zero_on_left, zero_on_right
from expropt.subst import (
    SubstPattern,
    apply_transform_at,
    flatten_exprs,
    flatten_identifiers,
)


def c(value, id=""):
    return NumericConstant(value, id)


def add(left, right, id=""):
    return BinaryAddition(left, right, id)


def test_flatten_exprs_post_order():
    left = add(c(1), c(2))
    e = add(left, c(3))
    nodes = flatten_exprs(e)
    assert len(nodes) == 5
    assert [n.value for n in (nodes[0], nodes[1], nodes[3])] == [1, 2, 3]
    assert nodes[2] is left
    assert nodes[4] is e


def test_flatten_identifiers_post_order():
    assert flatten_identifiers(zero_on_left.input_pattern) == pvector(["", "right", ""])
    assert flatten_identifiers(zero_on_right.input_pattern) == pvector(["left", "", ""])
    e = add(add(c(ANY_NUMBER, "a"), c(ANY_NUMBER, "b"), "ab"), c(ANY_NUMBER, "c"), "abc")
    assert list(flatten_identifiers(e)) == ["a", "b", "ab", "c", "abc"]


def test_apply_zero_on_left():
    position = add(c(0), c(42))
    assert apply_transform_at(zero_on_left, position) == c(42)


def test_apply_zero_on_right():
    position = add(c(42), c(0))
    assert apply_transform_at(zero_on_right, position) == c(42)


def test_result_is_fresh():
    position = add(c(0), c(42))
    before = position.clone()
    result = apply_transform_at(zero_on_left, position)
    assert result is not position.right
    assert result.id == ""
    assert position == before
    assert zero_on_left.output_pattern == c(ANY_NUMBER, "right")


def test_output_with_structure_and_literals():
    swap = Transform(
        "swap operands",
        add(c(ANY_NUMBER, "a"), c(ANY_NUMBER, "b")),
        add(c(ANY_NUMBER, "b"), add(c(ANY_NUMBER, "a"), c(0))),
    )
    assert apply_transform_at(swap, add(c(1), c(2))) == add(c(2), add(c(1), c(0)))


def test_concrete_output():
    zero_sum = Transform("sum of zeros", add(c(0), c(0)), c(0))
    assert apply_transform_at(zero_sum, add(c(0), c(0))) == c(0)


def test_first_occurrence_wins():
    # Wildcards with a repeated identifier bind independently; substitution uses the first.
    dup = Transform(
        "repeated identifier",
        add(c(ANY_NUMBER, "x"), c(ANY_NUMBER, "x")),
        c(ANY_NUMBER, "x"),
    )
    assert apply_transform_at(dup, add(c(3), c(4))) == c(3)


def test_first_occurrence_concrete():
    # The identifier also names a wildcard, but its first occurrence is the concrete 0.
    t = Transform("zero named x", add(c(0, "x"), c(ANY_NUMBER, "x")), c(ANY_NUMBER, "x"))
    assert apply_transform_at(t, add(c(0), c(7))) == c(0)


def test_first_occurrence_addition():
    t = Transform(
        "sum named x",
        add(add(c(0), c(0), "x"), c(ANY_NUMBER, "x")),
        c(ANY_NUMBER, "x"),
    )
    with pytest.raises(MalformedTransformError):
        apply_transform_at(t, add(add(c(0), c(0)), c(7)))


def test_shape_mismatch():
    with pytest.raises(MalformedTransformError):
        apply_transform_at(zero_on_left, c(5))
    with pytest.raises(MalformedTransformError):
        apply_transform_at(zero_on_left, add(c(0), add(c(1), c(2))))


def test_unbound_identifier():
    expressions = flatten_exprs(add(c(0), c(1)))
    identifiers = flatten_identifiers(zero_on_left.input_pattern)
    with pytest.raises(MalformedTransformError):
        SubstPattern.visit(c(ANY_NUMBER, "left"), expressions, identifiers)


def test_identifier_bound_to_addition():
    expressions = flatten_exprs(add(c(1), c(2)))
    identifiers = pvector(["a", "b", "sum"])
    with pytest.raises(MalformedTransformError):
        SubstPattern.visit(c(ANY_NUMBER, "sum"), expressions, identifiers)
