r"""@package symdiff.exprs.evaluators

Callable evaluator objects for numexpr.NumericExpression trees.

An evaluator is a snapshot of an expression which can be called like a
function and which also evaluates derivatives of any order. Derivative trees
are built symbolically on first request and cached, so repeatedly evaluating
e.g. the second derivative at many points only builds the tree once.

@b Examples

```
    f = Sin(Power(Variable(), 2.0))
    ev = f.evaluator()
    ev(0.5)             # value of sin(x^2) at x = 0.5
    ev.diff(0.5, 2)     # second derivative at x = 0.5
    df = ev.function(1) # plain callable for the first derivative
```
"""

import logging

from .numexpr import NotDifferentiableError


__all__ = [
    "ExpressionEvaluator",
]


logger = logging.getLogger(__name__)


class ExpressionEvaluator(object):
    r"""Evaluator for an expression and its derivatives.

    Users usually create evaluators via
    numexpr.NumericExpression.evaluator().
    """
    def __init__(self, expr):
        r"""Create an evaluator for an expression.

        @param expr
            The expression object for which this evaluator is created.
        """
        ## Cached derivative expressions, the n'th element being the n'th
        ## derivative.
        self._derivs = [expr]
        ## Derivative order which failed to build (if any).
        self._failed_order = None

    @property
    def expr(self):
        r"""The expression this evaluator was created for."""
        return self._derivs[0]

    def derivative_expression(self, n=1):
        r"""Return the expression tree of the n'th derivative.

        Raises:
            NotDifferentiableError: If the n'th derivative cannot be built.
        """
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %r." % n)
        if self._failed_order is not None and n >= self._failed_order:
            raise NotDifferentiableError
        while len(self._derivs) <= n:
            order = len(self._derivs)
            try:
                self._derivs.append(self._derivs[-1].differentiate())
            except NotDifferentiableError:
                self._failed_order = order
                logger.debug("Derivative of order %d not available for %s",
                             order, self.expr)
                raise
        return self._derivs[n]

    def is_zero_function(self, n=0):
        r"""Return whether the n'th derivative of this evaluator is identically zero."""
        return self.derivative_expression(n).is_zero_expression()

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        return self._derivs[0].evaluate(x)

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        return self.derivative_expression(n).evaluate(x)

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        expr = self.derivative_expression(n)
        return lambda x: expr.evaluate(x)
