r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
ExprTestCase, which obeys the global configuration settings in TestSettings.
The latter can be configured by the script invoking the test run.

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import unittest
import time


__all__ = [
    "ExprTestCase",
    "TestSettings",
    "slowtest",
    "shape_of",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


def shape_of(expr):
    r"""Nested tuple of class names describing the structure of a tree.

    For example, `Add(Constant(1), Variable())` has the shape
    `('Add', ('Constant',), ('Variable',))`.
    """
    return (type(expr).__name__,) + tuple(
        shape_of(e) for e in expr.sub_expressions()
    )


class ExprTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Can implement a hook (failureHook()) that is called after a test has
          failed (or errored).
        * Get a few assertions for comparing numbers and expression trees.
    """
    def run(self, result=None):
        self.__result = result
        self.__prevErrors = 0
        self.__prevFailures = 0
        if hasattr(result, 'errors') and hasattr(result, 'failures'):
            self.__prevErrors = len(result.errors)
            self.__prevFailures = len(result.failures)
        self.addCleanup(self.__afterTest)
        return unittest.TestCase.run(self, result)

    def setUp(self):
        self.startTime = time.time()

    def __lastTestOK(self):
        r"""Return whether the current test has not failed so far."""
        result = self.__result
        # Results of other runners (e.g. pytest) do not expose the lists.
        if not (hasattr(result, 'errors') and hasattr(result, 'failures')):
            return True
        return (len(result.errors) <= self.__prevErrors
                and len(result.failures) <= self.__prevFailures)

    def __afterTest(self):
        if not self.__lastTestOK():
            self.failureHook(self.__result)
        elif TestSettings.timing and hasattr(self, 'startTime'):
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def failureHook(self, result):
        r"""Custom function called after a fail/error occurred.

        Subclasses may implement this function to e.g. print the expression
        trees involved in the failed test.
        """
        pass

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertShape(self, expr, shape):
        r"""Assert that an expression tree has the given shape (see shape_of())."""
        self.assertEqual(shape_of(expr), shape)

    def assertRelClose(self, a, b, rel_tol=1e-12, abs_tol=0.0):
        r"""Assert that two numbers agree within a relative/absolute tolerance."""
        if a == b:
            return
        if abs(a-b) > max(rel_tol * max(abs(a), abs(b)), abs_tol):
            raise self.failureException(
                "%r != %r within rel_tol=%r, abs_tol=%r" % (a, b, rel_tol, abs_tol)
            )

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i]:
                continue
            if delta is not None:
                if abs(a[i]-b[i]) > delta:
                    fails.append(i)
            else:
                if round(abs(a[i]-b[i]), places) != 0:
                    fails.append(i)
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}    (difference: {d})".format(i=i, a=a[i], b=b[i], d=(b[i]-a[i]))
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
