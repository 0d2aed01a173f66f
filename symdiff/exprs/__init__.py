r"""@package symdiff.exprs

Expression system for building, evaluating and symbolically differentiating
functions of one real variable.

Every expression is an immutable tree composed of the leaves
basics.Constant and basics.Variable and the combinators in basics,
elementary and activations. Each node knows how to

    * evaluate itself at a point `x` (or element-wise on an array),
    * build a new expression representing its derivative,
    * fold itself into a single constant if it does not depend on `x`,
    * render itself as a fully parenthesized formula.

Differentiation of composite expressions uses the chain, product and power
rules. It fails with a numexpr.NotDifferentiableError if a node without a
derivative rule (like activations.Step) is reached. Constant folding fails
with a numexpr.NotConstantError as soon as the variable is encountered,
unless it is multiplied by something folding to zero.

Further unary functions can be defined with numexpr.unary_function().
"""

from .numexpr import NumericExpression, UnaryFunctionExpression
from .numexpr import ExpressionError, NotDifferentiableError, NotConstantError
from .numexpr import UNARY_FUNCTIONS, unary_function
from .basics import Constant, Variable, Add, Subtract, Multiply, Negate, Power
from .elementary import Exp, Log, Sin, Cos
from .activations import Relu, Step
from .evaluators import ExpressionEvaluator


__all__ = [
    "NumericExpression",
    "UnaryFunctionExpression",
    "ExpressionError",
    "NotDifferentiableError",
    "NotConstantError",
    "UNARY_FUNCTIONS",
    "unary_function",
    "Constant",
    "Variable",
    "Add",
    "Subtract",
    "Multiply",
    "Negate",
    "Power",
    "Exp",
    "Log",
    "Sin",
    "Cos",
    "Relu",
    "Step",
    "ExpressionEvaluator",
]
