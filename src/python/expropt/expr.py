"""
Expr: lightweight classes implementing the optimizer's expression trees
"""

from enum import Enum
from typing import Union

import numpy as np
import sexpdata

from expropt.utils import KRecord, UINT_MAX, wrapping_add

#####################################################################
#
# The expression language has just two kinds of node, each with a
# backing class defined below.  In lisp-like syntax, with named
# fields below:
#
# NumericConstant: unsigned integer, or the AnyNumber wildcard
# (add 1 (any right))
#      ^ ^^^^^^^^^^^
#      value (concrete)  value (wildcard, bound to identifier "right")
#
# BinaryAddition: sum of two owned subexpressions
# (add  (add 0 1)  2)
#       ^^^^^^^^^  ^
#       left       right
#
# Every node carries an Identifier. Concrete trees use the empty identifier;
# patterns (the two halves of a Transform) name the nodes they bind.

Identifier = str

NULL_ID: Identifier = ""
""" The identifier carried by every non-pattern node """


class ExproptError(Exception):
    pass


class InvalidEvaluationError(ExproptError):
    """ A pattern (a tree still containing AnyNumber) was evaluated instead of substituted. """


class MalformedTransformError(ExproptError):
    """ A Transform's output pattern cannot be resolved against its input pattern. """


class ExprType(Enum):
    NUMERIC_CONSTANT = "numeric_constant"
    BINARY_ADDITION = "binary_addition"


class AnyNumber:
    """ Placeholder value meaning "any number". All instances are interchangeable. """

    __slots__ = ()

    def __eq__(self, that):
        return isinstance(that, AnyNumber)

    def __hash__(self):
        return hash(AnyNumber)

    def __repr__(self):
        return "ANY_NUMBER"


ANY_NUMBER = AnyNumber()

# The value slot of a NumericConstant
Numeric = Union[int, AnyNumber]


class Expr(KRecord):
    '''Base class for Expression tree nodes. Not directly instantiable.'''

    id: Identifier

    def __init__(self, type_: ExprType, id: Identifier, **fields):
        # This assertion prevents Expr itself from being instantiated.
        assert fields.keys() == type(self).__annotations__.keys()
        if not isinstance(id, str):
            raise ValueError(f"Identifier must be a string, got {id!r}")
        self._type = type_
        self.id = id
        super().__init__(**fields)

    @property
    def type(self) -> ExprType:
        """ The discriminant used in place of isinstance checks when traversing """
        return self._type

    def evaluate(self) -> int:
        raise ValueError("Must be overridden for every Expr subclass")

    def clone(self) -> "Expr":
        raise ValueError("Must be overridden for every Expr subclass")

    def __eq__(self, that):
        return super().__eq__(that) and self.id == that.id

    __hash__ = None

    def __str__(self):
        return to_sexp(self)

    def __repr__(self):
        return f"<{type(self).__name__} {to_sexp(self)}>"


class NumericConstant(Expr):
    '''NumericConstant(value, id).
    Examples:
    ```
    (add 3      (any right))
         ^      ^^^^^^^^^^^
         value  value=ANY_NUMBER, id="right"
    ```
    '''
    value: Numeric

    def __init__(self, value: Numeric, id: Identifier = NULL_ID):
        if not isinstance(value, AnyNumber):
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"NumericConstant needs an unsigned integer or ANY_NUMBER, got {value!r}")
            value = int(value)
            if not 0 <= value <= UINT_MAX:
                raise ValueError(f"NumericConstant value {value} out of range [0, {UINT_MAX}]")
        super().__init__(ExprType.NUMERIC_CONSTANT, id, value=value)

    @property
    def is_wildcard(self) -> bool:
        return isinstance(self.value, AnyNumber)

    def evaluate(self) -> int:
        if self.is_wildcard:
            raise InvalidEvaluationError(
                f"Logic error to evaluate numeric expression with AnyNumber (identifier {self.id!r})"
            )
        return self.value

    def clone(self) -> "NumericConstant":
        return NumericConstant(self.value, self.id)


class BinaryAddition(Expr):
    '''BinaryAddition(left, right, id).
    Example:
    ```
    (add  1     (add 2 3))
          ^     ^^^^^^^^^
          left  right
    ```
    Evaluation wraps around at 2**64.
    '''
    left: Expr
    right: Expr

    def __init__(self, left: Expr, right: Expr, id: Identifier = NULL_ID):
        assert isinstance(left, Expr) and isinstance(right, Expr)
        assert left is not right, "Subtrees may not be shared"
        super().__init__(ExprType.BINARY_ADDITION, id, left=left, right=right)

    def evaluate(self) -> int:
        return wrapping_add(self.left.evaluate(), self.right.evaluate())

    def clone(self) -> "BinaryAddition":
        return BinaryAddition(self.left.clone(), self.right.clone(), self.id)


#####################################################################
# S-expression rendering, used for str().
#   concrete constant         5
#   identified constant       (const 5 x)
#   wildcard                  (any x)
#   addition                  (add l r), or (add l r x) when identified

_add = sexpdata.Symbol("add")
_any = sexpdata.Symbol("any")
_const = sexpdata.Symbol("const")


def _to_sexp_data(e: Expr):
    if e.type == ExprType.NUMERIC_CONSTANT:
        if e.is_wildcard:
            return [_any, sexpdata.Symbol(e.id)] if e.id else [_any]
        return [_const, e.value, sexpdata.Symbol(e.id)] if e.id else e.value
    if e.type == ExprType.BINARY_ADDITION:
        se = [_add, _to_sexp_data(e.left), _to_sexp_data(e.right)]
        return se + [sexpdata.Symbol(e.id)] if e.id else se
    raise AssertionError(f"Unhandled expression type {e.type}")


def to_sexp(e: Expr) -> str:
    return sexpdata.dumps(_to_sexp_data(e))
