r"""@package symdiff.exprs.common

Utils used by multiple modules in symdiff.exprs.
"""

import numbers

import numpy as np


__all__ = [
    "format_number",
    "is_real_number",
]


def is_real_number(value):
    r"""Return whether `value` is a real (non-complex, non-bool) number."""
    if isinstance(value, bool):
        return False
    return isinstance(value, numbers.Real)


def format_number(value):
    r"""Format a float as a numeral for rendering expressions.

    Finite values are printed positionally with the shortest digits that
    round-trip, padded with zeros and without a trailing `.` (e.g. `16`, `-1`,
    `0.5`, `0.0000001`). Non-finite values are printed as `inf`, `-inf` and
    `NaN`.
    """
    value = float(value)
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if np.signbit(value) else "0"
    return np.format_float_positional(value, trim='-')


def _payload_key(value):
    r"""Comparison key of a float payload, with all NaNs being equal."""
    if np.isnan(value):
        return "NaN"
    return value


def _apply(func, *values):
    r"""Apply a numpy rule, keeping IEEE results instead of warnings.

    A zero-dimensional result is converted to a Python `float`, anything
    else is returned as an `ndarray`.
    """
    with np.errstate(all='ignore'):
        result = func(*values)
    return _to_result(result)


def _to_result(value):
    r"""Convert a numpy result to `float` for scalars."""
    result = np.asarray(value, dtype=float)
    if result.ndim == 0:
        return float(result)
    return result
