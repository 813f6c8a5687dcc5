import pytest

from expropt.expr import NumericConstant, BinaryAddition
from expropt.path import (
    Path,
    ExprWithPath,
    replace_subtree,
    serialize_path,
)
from expropt import path


def c(value):
    return NumericConstant(value)


def add(left, right):
    return BinaryAddition(left, right)


e = add(add(c(1), c(2)), add(c(3), add(c(4), c(5))))


def test_path():
    assert ExprWithPath.from_expr(e, [path.add_right, path.add_left]).expr == c(3)
    ewp = ExprWithPath.from_expr(e)
    assert ewp.right.right.left.expr == c(4)
    assert ewp.right.right.left.path == (path.add_right, path.add_right, path.add_left)
    assert ewp.right.right.left.root is e


def test_children():
    assert ExprWithPath.from_expr(e).children() == [
        ExprWithPath.from_expr(e, [path.add_left]),
        ExprWithPath.from_expr(e, [path.add_right]),
    ]
    assert ExprWithPath.from_expr(e, [path.add_left, path.add_left]).children() == []


def test_step_into_constant():
    with pytest.raises(AssertionError):
        ExprWithPath.from_expr(c(1)).left


def test_replace_subtree():
    replaced = replace_subtree(e, (path.add_right, path.add_right), c(9))
    assert replaced == add(add(c(1), c(2)), add(c(3), c(9)))
    assert replaced.left is not e.left
    assert e == add(add(c(1), c(2)), add(c(3), add(c(4), c(5))))
    assert replace_subtree(e, (), c(0)) == c(0)


@pytest.mark.parametrize(
    "p, res",
    [
        ((), []),
        ((path.add_left, path.add_right), ["BinaryAddition.left", "BinaryAddition.right"]),
        ((path.add_right,), ["BinaryAddition.right"]),
    ],
)
def test_serialize_path(p: Path, res):
    assert serialize_path(p) == res
