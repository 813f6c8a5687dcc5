# Pretty printer for expression trees, as s-expressions.
# Uses the Wadler constructors from PrettyPrinter
# http://homepages.inf.ed.ac.uk/wadler/papers/prettier/prettier.pdf

from prettyprinter import register_pretty

# Wadler constructors
from prettyprinter.doc import (
    annotate,   # annotations affect syntax coloring
    concat,
    group,      # make what's in here a single line if enough space
    hang,
    LINE,       # Space or Newline
)

from prettyprinter.prettyprinter import (
    Token,
    LPAREN, RPAREN,
    pretty_dispatch
)

from prettyprinter.utils import intersperse

# Local imports
from expropt.expr import Expr, ExprType
from expropt.rewrites import Transform

# These are primarily to enable syntax highlighting --
# it would otherwise be fine to just use the string/doc "s"
def pp_reserved(s):
    return annotate(Token.NAME_BUILTIN, s)

def pp_variable(s):
    return annotate(Token.NAME_VARIABLE, s)

def pp_string(v):
    r = repr(v) # single quotes
    r = '"' + r[1:-1] + '"'
    return r

def parens(hangindent, *docs):
    return group(hang(hangindent, concat([
        LPAREN,
        *docs,
        RPAREN
    ])))

def parens_interline(hangindent, *docs):
    return parens(hangindent, *intersperse(LINE, docs))

# Declare pretty printer for our Expressions.
# The layout matches str(), i.e. expropt.expr.to_sexp, when it fits on one line.
@register_pretty(Expr)
def pretty_Expr(ex, ctx):
    pp = lambda v: pretty_dispatch(v, ctx)
    tail = [pp_variable(ex.id)] if ex.id else []

    if ex.type == ExprType.NUMERIC_CONSTANT:
        if ex.is_wildcard:
            return parens(1, *intersperse(' ', [pp_reserved("any"), *tail]))
        if ex.id:
            return parens(1, pp_reserved("const"), ' ', str(ex.value), ' ', *tail)
        return str(ex.value)

    if ex.type == ExprType.BINARY_ADDITION:
        return parens_interline(2, pp_reserved("add"), pp(ex.left), pp(ex.right), *tail)

    raise AssertionError(f"Unhandled expression type {ex.type}")


@register_pretty(Transform)
def pretty_Transform(t, ctx):
    pp = lambda v: pretty_dispatch(v, ctx)
    return parens_interline(2,
                pp_reserved("transform"),
                pp_string(t.name),
                pp(t.input_pattern),
                pp(t.output_pattern))
