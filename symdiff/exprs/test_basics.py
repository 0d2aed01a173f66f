#!/usr/bin/env python3
r"""@package symdiff.exprs.test_basics

Tests for the leaf and arithmetic expressions.
"""

import unittest
import sys
import logging

import numpy as np

from testutils import ExprTestCase
from .basics import Constant, Variable, Add, Subtract, Multiply, Negate, Power
from .elementary import Exp, Sin
from .activations import Step
from .numexpr import NotConstantError, NotDifferentiableError


class TestLeaves(ExprTestCase):
    def test_constant(self):
        for c in (0.0, -3.5, 16.0, 1e300):
            expr = Constant(c)
            for x in (-2.0, 0.0, 6.0):
                self.assertEqual(expr.evaluate(x), c)
            self.assertEqual(expr.differentiate(), Constant(0.0))
            self.assertEqual(expr.differentiate().evaluate(3.0), 0.0)
        self.assertIsType(Constant(2).value, float)

    def test_variable(self):
        x = Variable()
        for t in (-2.5, 0.0, 1.0, 6.0):
            self.assertEqual(x.evaluate(t), t)
        dx = x.differentiate()
        self.assertEqual(dx, Constant(1.0))
        for t in (-2.5, 0.0, 1.0, 6.0):
            self.assertEqual(dx.evaluate(t), 1.0)

    def test_evaluate_returns_float(self):
        self.assertIsType(Variable().evaluate(2), float)
        self.assertIsType(Add(Variable(), 1).evaluate(np.float64(2)), float)

    def test_invalid_values(self):
        with self.assertRaises(TypeError):
            Constant("1")
        with self.assertRaises(TypeError):
            Constant(1j)
        with self.assertRaises(TypeError):
            Constant(True)
        with self.assertRaises(TypeError):
            Add(Variable(), "a")
        with self.assertRaises(TypeError):
            Power(Variable(), Variable())


class TestArithmetic(ExprTestCase):
    def test_add(self):
        expr = Add(Constant(16.0), Constant(4.0))
        self.assertEqual(expr.evaluate(6.0), 20.0)
        self.assertEqual(expr.differentiate().evaluate(6.0), 0.0)
        self.assertShape(expr.differentiate(),
                         ('Add', ('Constant',), ('Constant',)))

    def test_subtract(self):
        expr = Subtract(Power(Variable(), 2.0), Variable())
        self.assertEqual(expr.evaluate(3.0), 6.0)
        self.assertEqual(expr.differentiate().evaluate(3.0), 5.0)
        self.assertIsType(expr.differentiate(), Subtract)

    def test_linearity(self):
        f = Power(Variable(), 3.0)
        g = Multiply(Constant(2.0), Sin(Variable()))
        df = f.differentiate()
        dg = g.differentiate()
        d_sum = Add(f, g).differentiate()
        for x in np.linspace(-2, 2, 7):
            self.assertEqual(d_sum.evaluate(x), df.evaluate(x) + dg.evaluate(x))

    def test_product_rule(self):
        f, g = Constant(16.0), Variable()
        expr = Multiply(f, g)
        self.assertEqual(expr.evaluate(4.0), 64.0)
        self.assertEqual(expr.differentiate().evaluate(6.0), 16.0)
        self.assertShape(
            Multiply(Variable(), Exp(Variable())).differentiate(),
            ('Add',
             ('Multiply', ('Constant',), ('Exp', ('Variable',))),
             ('Multiply', ('Variable',),
              ('Multiply', ('Exp', ('Variable',)), ('Constant',)))),
        )

    def test_negate(self):
        expr = Negate(Power(Variable(), 2.0))
        self.assertEqual(expr.evaluate(3.0), -9.0)
        self.assertEqual(expr.differentiate().evaluate(3.0), -6.0)
        self.assertIsType(expr.differentiate(), Negate)

    def test_power_rule(self):
        expr = Power(Variable(), 6.0)
        self.assertEqual(expr.evaluate(2.0), 64.0)
        d_expr = expr.differentiate()
        self.assertEqual(d_expr.evaluate(2.0), 192.0)
        self.assertEqual(
            d_expr,
            Multiply(Constant(6.0),
                     Multiply(Power(Variable(), 5.0), Constant(1.0)))
        )

    def test_power_domain(self):
        self.assertTrue(np.isnan(Power(Variable(), 0.5).evaluate(-4.0)))
        self.assertEqual(Power(Variable(), -1.0).evaluate(0.0), np.inf)
        self.assertEqual(Power(Variable(), 0.5).evaluate(4.0), 2.0)

    def test_power_zero_exponent(self):
        expr = Power(Sin(Variable()), 0.0)
        self.assertEqual(expr.evaluate(1.5), 1.0)
        with self.assertLogs('symdiff.exprs.basics', level=logging.DEBUG):
            self.assertEqual(expr.differentiate(), Constant(0.0))
        with self.assertRaises(NotDifferentiableError):
            Power(Step(Variable()), 0.0).differentiate()

    def test_nested_power(self):
        # d/dx (x^2 + 1)^3 = 6x (x^2 + 1)^2
        expr = Power(Add(Power(Variable(), 2.0), Constant(1.0)), 3.0)
        d_expr = expr.differentiate()
        for x in (-1.0, 0.0, 0.5, 2.0):
            self.assertRelClose(d_expr.evaluate(x), 6*x*(x**2 + 1)**2)

    def test_immutable(self):
        expr = Multiply(Variable(), Sin(Variable()))
        before = expr.render()
        expr.differentiate()
        expr.differentiate(2)
        self.assertEqual(expr.render(), before)
        with self.assertRaises(AttributeError):
            expr.e1 = Constant(1.0)
        with self.assertRaises(AttributeError):
            Constant(1.0).value = 2.0


class TestConstantFold(ExprTestCase):
    def test_fold(self):
        expr = Add(Multiply(Constant(1.0), Constant(2.0)), Constant(3.0))
        folded = expr.constant_fold()
        self.assertIsType(folded, Constant)
        self.assertEqual(folded.value, 5.0)
        self.assertEqual(Subtract(1, 4).constant_fold(), Constant(-3.0))
        self.assertEqual(Negate(Constant(2.0)).constant_fold(), Constant(-2.0))
        self.assertEqual(Power(Constant(2.0), 10.0).constant_fold().value, 1024.0)

    def test_constant_folds_to_itself(self):
        c = Constant(2.5)
        self.assertIs(c.constant_fold(), c)

    def test_variable_does_not_fold(self):
        with self.assertRaises(NotConstantError):
            Variable().constant_fold()
        with self.assertRaises(NotConstantError):
            Negate(Variable()).constant_fold()
        with self.assertRaises(NotConstantError):
            Add(Constant(1.0), Variable()).constant_fold()
        with self.assertRaises(NotConstantError):
            Multiply(Constant(2.0), Variable()).constant_fold()
        with self.assertRaises(NotConstantError):
            Power(Variable(), 0.0).constant_fold()

    def test_multiply_by_zero(self):
        self.assertEqual(Multiply(Constant(0.0), Variable()).constant_fold(),
                         Constant(0.0))
        self.assertEqual(Multiply(Variable(), Constant(-0.0)).constant_fold().value,
                         0.0)
        self.assertEqual(
            Multiply(Subtract(2, 2), Power(Variable(), 2.0)).constant_fold(),
            Constant(0.0)
        )
        # Zero must be the folded value, not just something evaluating to it.
        with self.assertRaises(NotConstantError):
            Multiply(Subtract(Variable(), Variable()), Variable()).constant_fold()

    def test_predicates(self):
        self.assertTrue(Multiply(Constant(0.0), Variable()).is_constant())
        self.assertTrue(Multiply(Constant(0.0), Variable()).is_zero_expression())
        self.assertFalse(Add(Constant(0.0), Variable()).is_constant())
        self.assertFalse(Constant(1.0).is_zero_expression())
        self.assertTrue(Variable().differentiate(2).is_zero_expression())


class TestRender(ExprTestCase):
    def test_numbers(self):
        self.assertEqual(Constant(16.0).render(), "16")
        self.assertEqual(Constant(-1.0).render(), "-1")
        self.assertEqual(Constant(0.25).render(), "0.25")
        self.assertEqual(Constant(-0.0).render(), "-0")
        self.assertEqual(Constant(float('nan')).render(), "NaN")
        self.assertEqual(Constant(float('inf')).render(), "inf")
        self.assertEqual(Constant(-float('inf')).render(), "-inf")

    def test_large_and_small_numbers(self):
        self.assertEqual(Constant(1e300).render(), "1" + "0"*300)
        self.assertEqual(Constant(-2.5e20).render(), "-250000000000000000000")
        self.assertEqual(Constant(0.1).render(), "0.1")
        self.assertEqual(Power(Variable(), 1e-7).render(), "(x)^0.0000001")
        self.assertEqual(Power(Variable(), 1e-7).nice_name, "pow (0.0000001)")

    def test_operators(self):
        x = Variable()
        self.assertEqual(x.render(), "x")
        self.assertEqual(Add(Constant(1.0), x).render(), "(1) + (x)")
        self.assertEqual(Subtract(Constant(1.0), x).render(), "(1) - (x)")
        self.assertEqual(Multiply(Constant(1.5), x).render(), "(1.5) * (x)")
        self.assertEqual(Negate(x).render(), "-(x)")
        self.assertEqual(Power(x, 6.0).render(), "(x)^6")
        self.assertEqual(Power(x, -0.5).render(), "(x)^-0.5")

    def test_no_simplification(self):
        expr = Add(Multiply(Constant(0.0), Variable()),
                   Negate(Negate(Constant(1.0))))
        self.assertEqual(expr.render(), "((0) * (x)) + (-(-(1)))")
        self.assertEqual(
            Power(Variable(), 6.0).differentiate().render(),
            "(6) * (((x)^5) * (1))"
        )


class TestOperators(ExprTestCase):
    def test_building(self):
        x = Variable()
        self.assertEqual(2 * x + 1,
                         Add(Multiply(Constant(2.0), Variable()), Constant(1.0)))
        self.assertEqual(1 - x, Subtract(Constant(1.0), Variable()))
        self.assertEqual(x - x * 3, Subtract(x, Multiply(x, Constant(3.0))))
        self.assertEqual(-x, Negate(x))
        self.assertEqual(x ** 2, Power(x, 2.0))
        self.assertEqual((2 * x ** 5).render(), "(2) * ((x)^5)")
        self.assertEqual(np.float64(2.5) * x, Multiply(Constant(2.5), x))
        with self.assertRaises(TypeError):
            x ** x # pylint: disable=pointless-statement


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
