# Core type aliases for minilisp's data model.
# Code and values share one representation: the frozen Expression variants in
# minilisp.types.expression. A value is simply an Expression that evaluation
# has already reduced (int, bool, string or a list of values).
#
# Naming guidance:
# - Token:  a raw lexical fragment produced by the reader.
# - Value:  use in evaluator/runtime code to denote reduced expressions.

from typing import Callable

from minilisp.types.expression import Expression

Token = str
Value = Expression

# Evaluator function type: passed into special form handlers
EvaluatorFn = Callable[..., Value]

__version__ = "0.1.0"
