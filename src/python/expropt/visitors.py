from typing import Union

from expropt.expr import Expr, ExprType, NumericConstant, BinaryAddition

from expropt.path import ExprWithPath


class ExprVisitor:
    """ Superclass for functions that act upon particular kinds of Expr.
        Like singledispatch, but dispatches on Expr.type and allows a hierarchy of Visitor
         subclasses to inherit/override behaviour for specific node kinds.
        The default implementation of visit does a recursive traversal of each sub-Expr,
         but does nothing and returns None; subclasses can override for node kinds of interest.

        If called to visit an ExprWithPath, calls the visit_foo method for the appropriate kind
        *of the ExprWithPath's subtree*, passing the ExprWithPath as first argument.
    """

    def __init__(self):
        self._dispatch_table = {
            ExprType.NUMERIC_CONSTANT: self.visit_const,
            ExprType.BINARY_ADDITION: self.visit_add,
        }

    def visit(self, e: Union[Expr, ExprWithPath], *args, **kwargs):
        type_ = (e.expr if isinstance(e, ExprWithPath) else e).type
        handler = self._dispatch_table.get(type_)
        if handler is None:
            raise AssertionError(f"Unhandled expression type {type_}")
        return handler(e, *args, **kwargs)

    def visit_const(self, c: Union[NumericConstant, ExprWithPath], *args, **kwargs) -> None:
        """ Overridable method that is called to handle a NumericConstant being passed to visit """

    def visit_add(self, a: Union[BinaryAddition, ExprWithPath], *args, **kwargs) -> None:
        """ Overridable method that is called to handle a BinaryAddition being passed to visit """
        self.visit(a.left, *args, **kwargs)
        self.visit(a.right, *args, **kwargs)


class ExprTransformer(ExprVisitor):
    """ Superclass for functions that transform Expressions by recursive traversal.
        The default "transformation" is a deep copy, but each case first recursively visits the sub-Expr's within the Expr,
        allowing overriding of specific cases. The result never shares nodes with the input.
    """

    def visit_const(self, c: Union[NumericConstant, ExprWithPath], *args, **kwargs) -> Expr:
        return (c.expr if isinstance(c, ExprWithPath) else c).clone()

    def visit_add(self, a: Union[BinaryAddition, ExprWithPath], *args, **kwargs) -> Expr:
        return BinaryAddition(
            self.visit(a.left, *args, **kwargs),
            self.visit(a.right, *args, **kwargs),
            a.id,
        )
