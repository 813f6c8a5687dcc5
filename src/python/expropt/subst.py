"""
subst: building the replacement for a matched subtree from a transform's output pattern.

The input pattern and the matched subtree are flattened by the same post-order traversal.
Since the matched subtree already matched the input pattern, the two have the same shape,
so the i'th identifier of the flattened pattern names the i'th node of the flattened subtree.
Wildcards in the output pattern are resolved through this positional correspondence.
"""

from pyrsistent import pvector
from pyrsistent.typing import PVector

from expropt.expr import (
    Expr,
    Identifier,
    NumericConstant,
    BinaryAddition,
    ExprType,
    MalformedTransformError,
)
from expropt.utils import singleton
from expropt.visitors import ExprVisitor, ExprTransformer


class _PostOrderFlattener(ExprVisitor):
    def __init__(self, item_of_node):
        super().__init__()
        self._item_of_node = item_of_node

    def flatten(self, root: Expr) -> PVector:
        return self.visit(root, pvector())

    def visit_const(self, c: NumericConstant, acc: PVector) -> PVector:
        return acc.append(self._item_of_node(c))

    def visit_add(self, a: BinaryAddition, acc: PVector) -> PVector:
        # Children before parent, left before right. Both flattenings must use this same order.
        acc = self.visit(a.left, acc)
        acc = self.visit(a.right, acc)
        return acc.append(self._item_of_node(a))


_expr_flattener = _PostOrderFlattener(lambda e: e)
_identifier_flattener = _PostOrderFlattener(lambda e: e.id)


def flatten_exprs(root: Expr) -> PVector[Expr]:
    """ All nodes of <root>, in post-order. """
    return _expr_flattener.flatten(root)


def flatten_identifiers(root: Expr) -> PVector[Identifier]:
    """ The identifiers of all nodes of <root>, in post-order. """
    return _identifier_flattener.flatten(root)


@singleton
class SubstPattern(ExprTransformer):
    """ Instantiates an output pattern: concrete constants are copied, and each ANY_NUMBER leaf
        takes the value of the node its identifier names in the flattened matched subtree.
        Every node of the result is freshly constructed.
    """

    def visit_const(
        self,
        c: NumericConstant,
        expressions: PVector[Expr],
        identifiers: PVector[Identifier],
    ) -> Expr:
        if not c.is_wildcard:
            return NumericConstant(c.value)
        if c.id not in identifiers:
            raise MalformedTransformError(
                f"Output pattern refers to identifier {c.id!r}, which is not in the input pattern {list(identifiers)}"
            )
        # The first node bearing the identifier wins.
        bound = expressions[identifiers.index(c.id)]
        if bound.type != ExprType.NUMERIC_CONSTANT:
            raise MalformedTransformError(
                f"Identifier {c.id!r} names a {bound.type.name} node, not a constant"
            )
        return NumericConstant(bound.value)

    def visit_add(
        self,
        a: BinaryAddition,
        expressions: PVector[Expr],
        identifiers: PVector[Identifier],
    ) -> Expr:
        return BinaryAddition(
            self.visit(a.left, expressions, identifiers),
            self.visit(a.right, expressions, identifiers),
        )


def apply_transform_at(transform, position: Expr) -> Expr:
    """
    Build the replacement for <position>, a subtree already known to match
    <transform.input_pattern>, by instantiating <transform.output_pattern>.
    Neither <position> nor the transform is modified.
    """
    expressions = flatten_exprs(position)
    identifiers = flatten_identifiers(transform.input_pattern)
    if len(expressions) != len(identifiers):
        raise MalformedTransformError(
            f"Transform {transform.name!r} applied to {position}, which does not have the shape of its input pattern"
        )
    return SubstPattern.visit(transform.output_pattern, expressions, identifiers)
