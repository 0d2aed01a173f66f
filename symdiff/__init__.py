r"""@package symdiff

Exact symbolic differentiation of expressions in one real variable.

The expressions and all operations on them live in the symdiff.exprs package,
the most common names of which are re-exported here:

~~~.py
from symdiff import Variable, Constant, Exp, Power

x = Variable()
f = Exp(Constant(2.0) * x**5.0)
print(f.differentiate())
~~~
"""

from .exprs import *
