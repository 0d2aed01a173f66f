r"""@package symdiff.exprs.numexpr

Base of the NumericExpression system.

The idea is to have a notion of a numeric expression which is 'self aware'
and can produce its exact derivative as another expression. Composite
expressions are built out of more basic ones and every node implements the
same four operations:

    * evaluate() computes the value at a point `x`
    * differentiate() returns a new expression tree for the derivative
    * constant_fold() collapses a tree not containing the variable
    * render() produces a fully parenthesized formula

Each of these is a structural recursion: a composite node calls the same
(protected) operation on its sub-expressions and combines the results.
Expressions are immutable, so the produced trees may reuse sub-trees of the
source expression.

As a simple example, let's build \f$ f(x) = e^{2 x^5} \f$ and evaluate its
derivative:

~~~.py
f = Exp(Multiply(Constant(2.0), Power(Variable(), 5.0)))
df = f.differentiate()
print(df)
# (exp((2) * ((x)^5))) * (((0) * ((x)^5)) + ((2) * ((5) * (((x)^4) * (1)))))
print(df.evaluate(2.0))
~~~

The same tree can be written with the operator shortcuts, which never
simplify anything:

~~~.py
x = Variable()
f = Exp(2 * x**5)
~~~

New unary functions are created with unary_function() by supplying the
numeric rule and the factor appearing in the chain rule. See
symdiff.exprs.elementary for examples.
"""

from abc import ABCMeta, abstractmethod
import logging

import numpy as np
import sympy as sp

from .common import _apply, _to_result, is_real_number


__all__ = [
    "NumericExpression",
    "UnaryFunctionExpression",
    "ExpressionError",
    "NotDifferentiableError",
    "NotConstantError",
    "UNARY_FUNCTIONS",
    "unary_function",
]


logger = logging.getLogger(__name__)


## Symbol representing the free variable in SymPy conversions.
X = sp.Symbol('x')

## Registry of all classes created via unary_function(), keyed by name.
UNARY_FUNCTIONS = dict()


class ExpressionError(Exception):
    """Base class for structural failures of expression operations."""
    pass


class NotDifferentiableError(ExpressionError):
    """Raised when a tree contains a node without a derivative rule."""
    pass


class NotConstantError(ExpressionError):
    """Raised when constant folding reaches the variable."""
    pass


class NumericExpression(metaclass=ABCMeta):
    """Parent class for numeric expressions.

    Expressions are immutable trees. Sub-expressions are given as keyword
    arguments to the init function and stored in order, so that complete
    expression hierarchies can be walked through using traverse_tree() or
    print_tree().

    The methods a child has to override are:
        * _evaluate() computing the value at `x` (float or `ndarray`)
        * _differentiate() building the derivative expression
        * _fold() returning the folded float value
        * _expr_str() returning the rendered formula
        * _to_sympy() building the equivalent SymPy expression
    """
    # Make numpy scalars defer to the reflected operators below.
    __array_ufunc__ = None

    def __init__(self, name=None, **sub_exprs):
        r"""Base class init for numeric expressions.

        Args:
            name: (string, optional)
                Name for the expression. Can be useful to label expressions in
                a more complex expression tree to indicate their role/meaning.
                By default, the current class name is used as name.
            **sub_exprs:
                Sub-expressions owned by this node. Plain numbers are
                converted to `Constant` objects.
        """
        self.__name = name if name else self.__class__.__name__
        self.__sub_expressions = dict(
            (k, self.__ensure_expr(e)) for k, e in sub_exprs.items()
        )

    @property
    def name(self):
        r"""Name given to this instance of the expression."""
        return self.__name

    @property
    def nice_name(self):
        r"""More descriptive name, which may be overridden by sub classes."""
        return self.__name

    def sub_expressions(self):
        r"""List of the direct sub-expressions in their defined order."""
        return list(self.__sub_expressions.values())

    def _sub_expr(self, key):
        return self.__sub_expressions[key]

    def traverse_tree(self, include_root=False, parents=None):
        r"""Generator that walks through a complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its key under which
        it is stored in its parent, and the node itself.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, expr in root_expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode
        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, expr in self.__sub_expressions.items():
            yield parents, name, expr
            for node in expr.traverse_tree(include_root=False,
                                           parents=parents):
                yield node

    def print_tree(self, root_name='root', nice_names=True):
        r"""Print the whole expression tree.

        Each expression's key under which it is stored as sub expression will
        be shown as well as its actual name and the class name.
        """
        def _p(expr, name, parents=()):
            n = expr.nice_name if nice_names else expr.name
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, n, type(expr).__name__
            ))
        _p(self, root_name)
        for parents, name, expr in self.traverse_tree():
            _p(expr, name, parents)

    def depth(self):
        r"""Number of nodes on the longest path from this node to a leaf."""
        return 1 + max([e.depth() for e in self.sub_expressions()], default=0)

    def evaluate(self, x):
        r"""Evaluate the expression at `x`.

        Evaluation never raises for numeric domain problems. Invalid
        operations like `log(-1)` result in `NaN` or infinite values.

        Args:
            x: Point to evaluate at. May also be an array-like, in which case
                the expression is evaluated element-wise and an `ndarray` is
                returned.
        """
        x = _to_result(x)
        value = self._evaluate(x)
        if isinstance(x, np.ndarray):
            return np.broadcast_to(np.asarray(value, dtype=float), x.shape).copy()
        return float(value)

    def differentiate(self, n=1):
        r"""Return the expression representing the n'th derivative.

        Raises:
            NotDifferentiableError: If any node reached while building the
                derivative has no derivative rule.
        """
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %r." % n)
        expr = self
        for _ in range(n):
            expr = expr._differentiate()
        return expr

    def constant_fold(self):
        r"""Collapse the complete tree into a single `Constant`.

        Raises:
            NotConstantError: If the value depends on the variable.
        """
        from .basics import Constant
        return Constant(self._fold())

    def is_constant(self):
        r"""Return whether constant_fold() succeeds for this expression."""
        try:
            self._fold()
        except NotConstantError:
            return False
        return True

    def is_zero_expression(self):
        r"""Return whether this expression folds to exactly zero."""
        try:
            return self._fold() == 0
        except NotConstantError:
            return False

    def render(self):
        r"""Return the fully parenthesized formula as a string."""
        return self._expr_str()

    def to_sympy(self):
        r"""Convert the expression to a SymPy expression in the symbol `x`."""
        return self._to_sympy()

    def evaluator(self):
        r"""Create a callable evaluator for this expression.

        See evaluators.ExpressionEvaluator for details.
        """
        from .evaluators import ExpressionEvaluator
        return ExpressionEvaluator(self)

    @abstractmethod
    def _evaluate(self, x):
        r"""Compute the value at `x` (which is a float or an `ndarray`)."""
        pass

    @abstractmethod
    def _differentiate(self):
        r"""Build and return the derivative expression."""
        pass

    @abstractmethod
    def _fold(self):
        r"""Return the constant value as float or raise NotConstantError."""
        pass

    @abstractmethod
    def _expr_str(self):
        r"""String representing the expression.

        Sub-expressions should be rendered using their `render` method, e.g.

            def _expr_str(self):
                return "exp(%s)" % self.e.render()
        """
        pass

    @abstractmethod
    def _to_sympy(self):
        pass

    def _key(self):
        r"""Tuple of payload values compared by `==` (besides children)."""
        return ()

    def __eq__(self, other):
        if not isinstance(other, NumericExpression):
            return NotImplemented
        return (type(self) is type(other)
                and self._key() == other._key()
                and self.sub_expressions() == other.sub_expressions())

    def __hash__(self):
        return hash((type(self).__name__, self._key(),
                     tuple(self.sub_expressions())))

    def __repr__(self):
        r"""Return a string representing the whole expression tree."""
        return "<%s(%s)>" % (self.__class__.__name__, self.render())

    def __str__(self):
        return self.render()

    def __add__(self, other):
        from .basics import Add
        return Add(self, other)

    def __radd__(self, other):
        from .basics import Add
        return Add(other, self)

    def __sub__(self, other):
        from .basics import Subtract
        return Subtract(self, other)

    def __rsub__(self, other):
        from .basics import Subtract
        return Subtract(other, self)

    def __mul__(self, other):
        from .basics import Multiply
        return Multiply(self, other)

    def __rmul__(self, other):
        from .basics import Multiply
        return Multiply(other, self)

    def __neg__(self):
        from .basics import Negate
        return Negate(self)

    def __pow__(self, exponent):
        from .basics import Power
        if not is_real_number(exponent):
            return NotImplemented
        return Power(self, exponent)

    def __ensure_expr(self, expr):
        """Ensure an object is an expression, converting it if necessary.

        If `expr` is a real number, it is converted to a `Constant`.
        """
        if isinstance(expr, NumericExpression):
            return expr
        if not is_real_number(expr):
            raise TypeError("Cannot use %r as sub-expression." % (expr,))
        from .basics import Constant
        return Constant(expr)


class _UnaryExpression(NumericExpression):
    r"""Base class for expressions with exactly one sub-expression `e`."""

    def __init__(self, expr, name=None):
        super(_UnaryExpression, self).__init__(name=name, e=expr)

    @property
    def e(self):
        r"""The sub-expression."""
        return self._sub_expr('e')


class _BinaryExpression(NumericExpression):
    r"""Base class for `e1 <op> e2` expressions.

    Child classes set `_op` to the rendered operator and `_rule` to the numpy
    function combining the values of both sides.
    """
    _op = None
    _rule = None

    def __init__(self, expr1, expr2, name=None):
        super(_BinaryExpression, self).__init__(name=name, e1=expr1, e2=expr2)

    @property
    def e1(self):
        r"""Left sub-expression."""
        return self._sub_expr('e1')

    @property
    def e2(self):
        r"""Right sub-expression."""
        return self._sub_expr('e2')

    @property
    def operands(self):
        r"""Tuple `(e1, e2)`."""
        return self.e1, self.e2

    def _evaluate(self, x):
        return _apply(self._rule, self.e1._evaluate(x), self.e2._evaluate(x))

    def _fold(self):
        return _apply(self._rule, self.e1._fold(), self.e2._fold())

    def _expr_str(self):
        return "(%s) %s (%s)" % (self.e1.render(), self._op, self.e2.render())


class UnaryFunctionExpression(_UnaryExpression):
    r"""Base class of unary functions created via unary_function().

    The class attributes are filled in by the factory:
        * `_forward` numeric rule applied to the value of `e`
        * `_derivative` callable returning the chain rule factor for `e`
          (or `None` if the function cannot be differentiated)
        * `_symbol` name used when rendering
        * `_sympy_func` converter used by to_sympy()
    """
    _forward = None
    _derivative = None
    _symbol = None
    _sympy_func = None

    def __init__(self, expr, name=None):
        super(UnaryFunctionExpression, self).__init__(
            expr, name=name if name else self._symbol
        )

    @classmethod
    def is_differentiable(cls):
        r"""Whether this kind of function has a derivative rule."""
        return cls._derivative is not None

    def _evaluate(self, x):
        return _apply(self._forward, self.e._evaluate(x))

    def _fold(self):
        return _apply(self._forward, self.e._fold())

    def _differentiate(self):
        if self._derivative is None:
            logger.debug("No derivative rule for %s in %s",
                         type(self).__name__, self)
            raise NotDifferentiableError
        from .basics import Multiply
        de = self.e._differentiate()
        return Multiply(self._derivative(self.e), de)

    def _expr_str(self):
        return "%s(%s)" % (self._symbol, self.e.render())

    def _to_sympy(self):
        if self._sympy_func is None:
            raise NotImplementedError(
                "No SymPy conversion for %s." % type(self).__name__
            )
        return self._sympy_func(self.e.to_sympy())


def unary_function(name, forward, derivative=None, symbol=None,
                   sympy_func=None, doc=None, module=None):
    r"""Create a new unary function expression class.

    The returned class evaluates, constant-folds, differentiates and renders
    itself based on the rules given here. The derivative of `F(e)` is built
    as `Multiply(derivative(e), e.differentiate())`.

    @b Examples

    ```
        Cube = unary_function(
            'Cube', lambda v: v**3,
            derivative=lambda e: Multiply(Constant(3.0), Power(e, 2.0)),
            module=__name__,
        )
    ```

    Args:
        name: Class name of the new expression. Must be unique among all
            unary functions. Defining it again from the same `module` (e.g.
            when the module is reloaded) replaces the registered class.
        forward: Callable computing the function value from the value of the
            sub-expression. Should accept floats and numpy arrays.
        derivative: Callable mapping the sub-expression to the expression of
            the outer derivative (e.g. the `Cos` class for `Sin`). If `None`,
            differentiating the expression raises a NotDifferentiableError.
        symbol: Name to render the function with. Default is the lower case
            `name`.
        sympy_func: Optional callable converting the SymPy version of the
            sub-expression to the SymPy version of this function.
        doc: Docstring of the created class.
        module: Module name the class should report, usually `__name__` of
            the module the class is stored in. Needed for pickling.
    """
    module = module if module else __name__
    existing = UNARY_FUNCTIONS.get(name)
    if existing is not None and existing.__module__ != module:
        raise ValueError("Unary function %r already defined in %s."
                         % (name, existing.__module__))
    if not callable(forward):
        raise TypeError("`forward` argument must be callable.")
    if derivative is not None and not callable(derivative):
        raise TypeError("`derivative` argument must be callable or None.")
    namespace = dict(
        __doc__=doc if doc else "Unary function %s(e)." % name,
        __module__=module,
        _forward=staticmethod(forward),
        _derivative=None if derivative is None else staticmethod(derivative),
        _symbol=symbol if symbol else name.lower(),
        _sympy_func=None if sympy_func is None else staticmethod(sympy_func),
    )
    cls = type(name, (UnaryFunctionExpression,), namespace)
    UNARY_FUNCTIONS[name] = cls
    return cls
