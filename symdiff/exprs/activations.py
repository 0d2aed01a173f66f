r"""@package symdiff.exprs.activations

Piecewise activation functions `Relu` and `Step`.

The derivative of `Relu` is expressed using `Step`, which itself has no
derivative. Consequently, the first derivative of an expression containing
`Relu` can be built, while the second one raises a
numexpr.NotDifferentiableError.

@b Examples

```
    relu = Relu(Log(Variable()))
    d_relu = relu.differentiate()     # (step(log(x))) * (...)
    d_relu.differentiate()            # raises NotDifferentiableError
```
"""

import numpy as np
import sympy as sp

from .numexpr import unary_function


__all__ = [
    "Relu",
    "Step",
]


def _relu(v):
    return np.where(v >= 0, v, 0.0)


def _step(v):
    return np.where(v >= 0, 1.0, 0.0)


Step = unary_function(
    'Step', _step,
    sympy_func=lambda e: sp.Heaviside(e, 1),
    doc=r"""Unit step, `1` for non-negative arguments and `0` otherwise.

    This function cannot be differentiated.
    """,
    module=__name__,
)

Relu = unary_function(
    'Relu', _relu,
    derivative=Step,
    sympy_func=lambda e: sp.Max(0, e),
    doc=r"Rectified linear unit \f$ \max(0, g(x)) \f$.",
    module=__name__,
)
