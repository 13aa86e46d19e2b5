"""Core evaluator for the minilisp interpreter.

Reduces Expression nodes to values by structural dispatch: literals are
returned as-is, variables are resolved through the environment stack, special
forms (if, let, calls) control their own evaluation, and builtins receive
their operands already reduced.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from minilisp import Value
from minilisp.errors import EvalError
from minilisp.evaluation.builtins import BUILTINS
from minilisp.evaluation.special_forms import SPECIAL_FORMS
from minilisp.types.environment import Environment
from minilisp.types.expression import (
    BoolLiteral,
    Car,
    Cdr,
    EmptyType,
    Expression,
    FunctionDef,
    IntLiteral,
    ListLiteral,
    StringLiteral,
    Variable,
)
from minilisp.types.function_table import FunctionTable

logger = logging.getLogger(__name__)


def evaluate(
    expr: Expression,
    env: Environment | None = None,
    functions: FunctionTable | None = None,
) -> Value:
    """Reduce `expr` to an IntLiteral, BoolLiteral, StringLiteral or ListLiteral."""
    if env is None:
        env = Environment()
    if functions is None:
        functions = FunctionTable()

    match expr:
        case IntLiteral() | BoolLiteral() | StringLiteral():
            return expr

        case Variable(name=name):
            bound, defining_env = env.lookup(name)
            return evaluate(bound, defining_env, functions)

        case ListLiteral(elements=elements):
            return ListLiteral(tuple(evaluate_sequence(elements, env, functions)))

        case Car(target=target) | Cdr(target=target):
            return BUILTINS[type(expr)]([evaluate(target, env, functions)])

        case FunctionDef(name=name):
            raise EvalError(f"cannot evaluate function definition: {name}")

        case EmptyType():
            raise EvalError("cannot evaluate empty expression")

    form = SPECIAL_FORMS.get(type(expr))
    if form is not None:
        return form(expr, env, functions, evaluate)

    builtin = BUILTINS.get(type(expr))
    if builtin is not None:
        return builtin(evaluate_sequence(expr.operands, env, functions))

    raise EvalError(f"cannot evaluate {expr!r}")


def evaluate_sequence(
    exprs: Iterable[Expression],
    env: Environment,
    functions: FunctionTable,
) -> list[Value]:
    """Evaluate every expression in order and return all the results."""
    return [evaluate(e, env, functions) for e in exprs]


def run_program(exprs: Sequence[Expression]) -> list[Value]:
    """Evaluate a parsed program.

    Top-level function definitions go into the function table; every other
    top-level expression is evaluated in file order against an empty
    environment.
    """
    definitions = [e for e in exprs if isinstance(e, FunctionDef)]
    body = [e for e in exprs if not isinstance(e, FunctionDef)]
    functions = FunctionTable.from_definitions(definitions)

    results = []
    for expr in body:
        logger.debug("evaluating %r", expr)
        results.append(evaluate(expr, Environment(), functions))
    return results
