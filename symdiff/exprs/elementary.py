r"""@package symdiff.exprs.elementary

Elementary transcendental functions of an expression.

All functions here are created using numexpr.unary_function(). Each one
consists of the numeric rule and the outer derivative appearing in the chain
rule, e.g. for \f$ \sin(g(x)) \f$ the derivative is built as
\f$ \cos(g(x)) g'(x) \f$.
"""

import numpy as np
import sympy as sp

from .basics import Negate, Power
from .numexpr import unary_function


__all__ = [
    "Exp",
    "Log",
    "Sin",
    "Cos",
]


Exp = unary_function(
    'Exp', np.exp,
    derivative=lambda e: Exp(e),
    sympy_func=sp.exp,
    doc=r"Exponential function \f$ e^{g(x)} \f$.",
    module=__name__,
)

Log = unary_function(
    'Log', np.log,
    derivative=lambda e: Power(e, -1.0),
    sympy_func=sp.log,
    doc=r"""Natural logarithm \f$ \ln(g(x)) \f$.

    Non-positive values evaluate to `-inf` or `NaN`.
    """,
    module=__name__,
)

Cos = unary_function(
    'Cos', np.cos,
    derivative=lambda e: Negate(Sin(e)),
    sympy_func=sp.cos,
    doc=r"Cosine \f$ \cos(g(x)) \f$.",
    module=__name__,
)

Sin = unary_function(
    'Sin', np.sin,
    derivative=Cos,
    sympy_func=sp.sin,
    doc=r"Sine \f$ \sin(g(x)) \f$.",
    module=__name__,
)
