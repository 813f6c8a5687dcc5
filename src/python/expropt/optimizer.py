"""
optimizer: Simple, tree-style expression optimizer.
"""

import logging
from typing import Iterable, Optional

from pyrsistent import pvector

from expropt.expr import Expr
from expropt.match import match as _match
from expropt.rewrites import DEFAULT_TRANSFORMS, Transform, apply_transform

logger = logging.getLogger(__name__)


class Optimizer:
    """
    Applies an ordered list of transforms to an expression tree.

    Each transform is applied exactly once, in a single top-down pass, to the result of the
    previous transform. There is no iteration to a fixed point: a rewrite that exposes a new
    match for an earlier transform is not revisited.
    """

    def __init__(self, transforms: Optional[Iterable[Transform]] = None):
        transforms = DEFAULT_TRANSFORMS if transforms is None else transforms
        self._transforms = pvector(transforms)
        for t in self._transforms:
            if not isinstance(t, Transform):
                raise ValueError(f"Expected a Transform, got {t!r}")

    @property
    def transforms(self):
        return self._transforms

    def optimize(self, root: Expr) -> Expr:
        """
        Optimize an expression tree.
        Returns a new tree; root is never modified.
        """
        current = root
        for t in self._transforms:
            logger.debug("Applying transform %s", t.name)
            current = apply_transform(t, current)
        if current is root:
            # Only reachable with no transforms configured
            current = root.clone()
        return current

    @staticmethod
    def match(pattern: Expr, query: Expr) -> bool:
        """ True if <query> has the shape of <pattern>; see expropt.match.match """
        return _match(pattern, query)


_default_optimizer = Optimizer()


def optimize(root: Expr) -> Expr:
    """ Optimize <root> with the shipped transforms. """
    return _default_optimizer.optimize(root)
