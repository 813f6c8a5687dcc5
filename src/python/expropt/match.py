"""
match: structural matching of a pattern tree against a query tree.
"""

from expropt.expr import Expr, NumericConstant, BinaryAddition
from expropt.utils import singleton
from expropt.visitors import ExprVisitor


@singleton
class _Matcher(ExprVisitor):
    """ Visits the pattern, carrying along the corresponding node of the query. """

    def visit(self, pattern: Expr, query: Expr) -> bool:
        if pattern.type != query.type:
            return False
        return super().visit(pattern, query)

    def visit_add(self, pattern: BinaryAddition, query: BinaryAddition) -> bool:
        # Both sides are required; there is no commutative matching, so (add 0 x) does not match (add x 0).
        return self.visit(pattern.left, query.left) and self.visit(
            pattern.right, query.right
        )

    def visit_const(self, pattern: NumericConstant, query: NumericConstant) -> bool:
        if pattern.is_wildcard or query.is_wildcard:
            # AnyNumber matches a concrete value, or another AnyNumber
            return True
        return pattern.value == query.value


def match(pattern: Expr, query: Expr) -> bool:
    """
    Match a pattern tree against a query tree.

    Each ANY_NUMBER leaf of the pattern matches independently by position: two wildcards
    with the same identifier are not required to match equal values.
    Identifiers play no part in matching.
    """
    return _Matcher.visit(pattern, query)

