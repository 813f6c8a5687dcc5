from dataclasses import dataclass
import logging
from typing import Dict, Iterator, List

from expropt.expr import (
    ANY_NUMBER,
    Expr,
    ExprType,
    NumericConstant,
    BinaryAddition,
    MalformedTransformError,
)
from expropt.match import match
from expropt.path import ExprWithPath, replace_subtree, serialize_path
from expropt.subst import apply_transform_at, flatten_exprs
from expropt.utils import singleton
from expropt.visitors import ExprTransformer

logger = logging.getLogger(__name__)

# A Transform is a rule for rewriting an expression, written as a pair of patterns:
#   wherever the input_pattern matches, the subtree is replaced by the output_pattern,
#   with each ANY_NUMBER of the output taking the value bound to its identifier in the input.
# Each place within an expression where a Transform applies is a "Match",
#   and each Match corresponds to exactly one rewrite: its apply_rewrite() produces the new expression.


def _check_output_identifiers(name: str, input_pattern: Expr, output_pattern: Expr):
    # Every output wildcard needs a wildcard of the same identifier somewhere in the input.
    bound = {
        node.id
        for node in flatten_exprs(input_pattern)
        if node.type == ExprType.NUMERIC_CONSTANT and node.is_wildcard
    }
    for node in flatten_exprs(output_pattern):
        if node.type != ExprType.NUMERIC_CONSTANT or not node.is_wildcard:
            continue
        if node.id not in bound:
            raise MalformedTransformError(
                f"Transform {name!r}: output wildcard {node.id!r} is not bound to a wildcard of the input pattern"
            )


@dataclass(frozen=True, eq=False)
class Transform:
    """ An immutable rewrite rule. The name is a label for humans; several Transforms may share one. """

    name: str
    input_pattern: Expr
    output_pattern: Expr

    def __post_init__(self):
        if not (isinstance(self.input_pattern, Expr) and isinstance(self.output_pattern, Expr)):
            raise ValueError(f"Transform {self.name!r} needs two expression trees as patterns")
        _check_output_identifiers(self.name, self.input_pattern, self.output_pattern)
        # Take private copies, so the caller cannot modify the patterns afterwards.
        object.__setattr__(self, "input_pattern", self.input_pattern.clone())
        object.__setattr__(self, "output_pattern", self.output_pattern.clone())

    def __str__(self):
        return f"{self.name}: {self.input_pattern} => {self.output_pattern}"


###############################################################################
# Finding and applying rewrites


@dataclass(frozen=True)
class Match:
    transform: Transform
    ewp: ExprWithPath

    @property
    def path(self):
        return self.ewp.path

    def apply_rewrite(self) -> Expr:
        """ Returns a new root in which only the matched subtree has been rewritten. """
        return replace_subtree(
            self.ewp.root, self.ewp.path, apply_transform_at(self.transform, self.ewp.expr)
        )


def find_all_matches(t: Transform, root: Expr) -> Iterator[Match]:
    """ Every position within <root> where <t> applies, in pre-order. Matches may be nested. """

    def traverse(ewp: ExprWithPath) -> Iterator[Match]:
        if match(t.input_pattern, ewp.expr):
            yield Match(t, ewp)
        for ch in ewp.children():
            yield from traverse(ch)

    yield from traverse(ExprWithPath.from_expr(root))


@singleton
class _ApplyTransform(ExprTransformer):
    def visit_add(self, a: ExprWithPath, t: Transform) -> Expr:
        if match(t.input_pattern, a.expr):
            logger.debug("%s: rewriting at %s", t.name, serialize_path(a.path))
            # Do not look below the rewritten subtree.
            return apply_transform_at(t, a.expr)
        # No match on current root, recursively consider left and right subtrees
        return super().visit_add(a, t)


def apply_transform(t: Transform, root: Expr) -> Expr:
    """
    Apply <t> to <root> in a single top-down pass. At each addition, if the input pattern matches,
    the whole subtree is replaced; otherwise the left and right subtrees are each considered.
    Constants are copied unchanged. Returns a new tree; <root> is not modified.
    """
    return _ApplyTransform.visit(ExprWithPath.from_expr(root), t)


###############################################################################
# Shipped transforms


def _binary_addition_with_zero_on_left() -> Transform:
    """ 0 + x -> x, e.g. (add 0 1) -> 1 """
    return Transform(
        "Left-wise Binary Addition with Zero",
        BinaryAddition(NumericConstant(0), NumericConstant(ANY_NUMBER, "right")),
        NumericConstant(ANY_NUMBER, "right"),
    )


def _binary_addition_with_zero_on_right() -> Transform:
    """ x + 0 -> x, e.g. (add 1 0) -> 1 """
    return Transform(
        "Right-wise Binary Addition with Zero",
        BinaryAddition(NumericConstant(ANY_NUMBER, "left"), NumericConstant(0)),
        NumericConstant(ANY_NUMBER, "left"),
    )


zero_on_left = _binary_addition_with_zero_on_left()
zero_on_right = _binary_addition_with_zero_on_right()

DEFAULT_TRANSFORMS: List[Transform] = [zero_on_left, zero_on_right]
""" The transforms applied by the default Optimizer, in order """

_transform_dict: Dict[str, Transform] = {t.name: t for t in DEFAULT_TRANSFORMS}


def transform(name: str) -> Transform:
    """Lookup method for the shipped `Transform`s."""
    return _transform_dict[name]
