from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple

from expropt.expr import Expr, ExprType, BinaryAddition


class PathElement(Enum):
    """ One step down from a BinaryAddition into one of its operands """

    LEFT = "left"
    RIGHT = "right"

    def __str__(self):
        return "BinaryAddition." + self.value

    def get(self, e: Expr) -> Expr:
        assert e.type == ExprType.BINARY_ADDITION
        return getattr(e, self.value)


add_left = PathElement.LEFT
add_right = PathElement.RIGHT

Path = Tuple[PathElement, ...]


class ExprWithPath(NamedTuple):
    """ A subtree together with the root it belongs to and the way down to it """

    root: Expr
    path: Path
    expr: Expr

    @property
    def left(self) -> "ExprWithPath":
        return self.get(add_left)

    @property
    def right(self) -> "ExprWithPath":
        return self.get(add_right)

    @property
    def id(self):
        return self.expr.id

    def get(self, pe: PathElement) -> "ExprWithPath":
        return ExprWithPath(self.root, self.path + (pe,), pe.get(self.expr))

    def children(self) -> List["ExprWithPath"]:
        if self.expr.type == ExprType.BINARY_ADDITION:
            return [self.left, self.right]
        return []

    @classmethod
    def from_expr(cls, root: Expr, path: Sequence[PathElement] = ()) -> "ExprWithPath":
        ewp = cls(root, (), root)
        for pe in path:
            ewp = ewp.get(pe)
        return ewp


def replace_subtree(root: Expr, path: Path, new_subtree: Expr) -> Expr:
    """ Returns a copy of <root> with the subtree at <path> replaced by <new_subtree>.
        Nodes off the path are cloned, so the result shares nothing with <root>. """
    if len(path) == 0:
        return new_subtree
    pe, rest = path[0], path[1:]
    assert root.type == ExprType.BINARY_ADDITION
    if pe is add_left:
        return BinaryAddition(replace_subtree(root.left, rest, new_subtree), root.right.clone(), root.id)
    return BinaryAddition(root.left.clone(), replace_subtree(root.right, rest, new_subtree), root.id)


def serialize_path(path: Path) -> List[str]:
    """ A printable form of <path>, as used in log messages """
    return [str(pe) for pe in path]
