"""
eval: Simple expression evaluator.
"""

from expropt.expr import Expr


def eval_expr(root: Expr) -> int:
    """
    Evaluate an expression.
    Raises InvalidEvaluationError if root is a pattern (contains ANY_NUMBER).
    """
    return root.evaluate()
