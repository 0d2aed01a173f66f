r"""@package symdiff.exprs.basics

Collection of basic numexpr.NumericExpression subclasses.

These are the leaves (Constant and Variable) and the arithmetic combinators
out of which all other expressions are composed.
"""

import logging

import numpy as np
import sympy as sp

from .common import _apply, _payload_key, format_number, is_real_number
from .numexpr import NumericExpression, _UnaryExpression, _BinaryExpression
from .numexpr import NotConstantError, X


__all__ = [
    "Constant",
    "Variable",
    "Add",
    "Subtract",
    "Multiply",
    "Negate",
    "Power",
]


logger = logging.getLogger(__name__)


class Constant(NumericExpression):
    r"""Represent an expression that is a constant.

    Represents an expression of the form \f$ f(x) = c = \mathrm{const} \f$.

    The value of the constant can be accessed through the `value` property.
    """

    def __init__(self, value=0.0, name='const'):
        r"""Init function.

        Args:
            value:  The constant value.
            name:   Name of the expression (e.g. for print_tree()).
        """
        if not is_real_number(value):
            raise TypeError("Constant value must be a real number, got %r."
                            % (value,))
        super(Constant, self).__init__(name=name)
        self.__value = float(value)

    @property
    def value(self):
        r"""The constant value this expression represents."""
        return self.__value

    @property
    def nice_name(self):
        return "%s (%s)" % (self.name, format_number(self.__value))

    def _key(self):
        return (_payload_key(self.__value),)

    def _evaluate(self, x):
        return self.__value

    def _differentiate(self):
        return Constant(0.0)

    def _fold(self):
        return self.__value

    def constant_fold(self):
        return self

    def _expr_str(self):
        return format_number(self.__value)

    def _to_sympy(self):
        return _sp_number(self.__value)


class Variable(NumericExpression):
    r"""The free variable \f$ x \f$ of all expressions."""
    def __init__(self, name='x'):
        super(Variable, self).__init__(name=name)

    def _evaluate(self, x):
        return x

    def _differentiate(self):
        return Constant(1.0)

    def _fold(self):
        raise NotConstantError

    def _expr_str(self):
        return "x"

    def _to_sympy(self):
        return X


class Add(_BinaryExpression):
    r"""Sum of two expressions, \f$ f(x) = g(x) + h(x) \f$."""
    _op = "+"
    _rule = np.add

    def __init__(self, expr1, expr2, name='add'):
        super(Add, self).__init__(expr1, expr2, name=name)

    def _differentiate(self):
        return Add(self.e1._differentiate(), self.e2._differentiate())

    def _to_sympy(self):
        return self.e1.to_sympy() + self.e2.to_sympy()


class Subtract(_BinaryExpression):
    r"""Difference of two expressions, \f$ f(x) = g(x) - h(x) \f$."""
    _op = "-"
    _rule = np.subtract

    def __init__(self, expr1, expr2, name='sub'):
        super(Subtract, self).__init__(expr1, expr2, name=name)

    def _differentiate(self):
        return Subtract(self.e1._differentiate(), self.e2._differentiate())

    def _to_sympy(self):
        return self.e1.to_sympy() - self.e2.to_sympy()


class Multiply(_BinaryExpression):
    r"""Multiply two expressions, \f$ f(x) = g(x) h(x) \f$.

    The derivative is built using the product rule. Constant folding
    succeeds if either factor folds to zero, even if the other one depends
    on the variable.
    """
    _op = "*"
    _rule = np.multiply

    def __init__(self, expr1, expr2, name='mult'):
        super(Multiply, self).__init__(expr1, expr2, name=name)

    def _differentiate(self):
        e1, e2 = self.e1, self.e2
        return Add(
            Multiply(e1._differentiate(), e2),
            Multiply(e1, e2._differentiate()),
        )

    def _fold(self):
        values = []
        for e in self.operands:
            try:
                value = e._fold()
            except NotConstantError:
                value = None
            if value is not None and value == 0:
                return 0.0
            values.append(value)
        if None in values:
            raise NotConstantError
        return _apply(self._rule, *values)

    def _to_sympy(self):
        return self.e1.to_sympy() * self.e2.to_sympy()


class Negate(_UnaryExpression):
    r"""Negative of an expression, \f$ f(x) = -g(x) \f$."""
    def __init__(self, expr, name='neg'):
        super(Negate, self).__init__(expr, name=name)

    def _evaluate(self, x):
        return _apply(np.negative, self.e._evaluate(x))

    def _differentiate(self):
        return Negate(self.e._differentiate())

    def _fold(self):
        return _apply(np.negative, self.e._fold())

    def _expr_str(self):
        return "-(%s)" % self.e.render()

    def _to_sympy(self):
        return -self.e.to_sympy()


class Power(_UnaryExpression):
    r"""Expression raised to a constant real power, \f$ f(x) = g(x)^k \f$.

    Negative bases with non-integral exponents evaluate to `NaN`.
    """
    def __init__(self, expr, exponent, name='pow'):
        r"""Init function.

        Args:
            expr:   The base expression.
            exponent: Real number to raise `expr` to.
            name:   Name of the expression (e.g. for print_tree()).
        """
        if not is_real_number(exponent):
            raise TypeError("Exponent must be a real number, got %r."
                            % (exponent,))
        super(Power, self).__init__(expr, name=name)
        self.__exponent = float(exponent)

    @property
    def exponent(self):
        r"""The (constant) exponent."""
        return self.__exponent

    @property
    def nice_name(self):
        return "%s (%s)" % (self.name, format_number(self.__exponent))

    def _key(self):
        return (_payload_key(self.__exponent),)

    def _evaluate(self, x):
        return _apply(np.power, self.e._evaluate(x), self.__exponent)

    def _differentiate(self):
        de = self.e._differentiate()
        k = self.__exponent
        if k == 0:
            logger.debug("Zero exponent in %s, derivative is 0", self)
            return Constant(0.0)
        return Multiply(Constant(k), Multiply(Power(self.e, k - 1.0), de))

    def _fold(self):
        return _apply(np.power, self.e._fold(), self.__exponent)

    def _expr_str(self):
        return "(%s)^%s" % (self.e.render(), format_number(self.__exponent))

    def _to_sympy(self):
        return self.e.to_sympy() ** _sp_number(self.__exponent)


def _sp_number(value):
    r"""Convert a float to SymPy, keeping integral values as integers."""
    if np.isfinite(value) and value == int(value):
        return sp.Integer(int(value))
    return sp.Float(value)
