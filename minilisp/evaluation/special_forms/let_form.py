from minilisp import EvaluatorFn, Value
from minilisp.errors import EvalError
from minilisp.types.environment import Environment
from minilisp.types.expression import Let
from minilisp.types.function_table import FunctionTable


def let_form(
    expr: Let,
    env: Environment,
    functions: FunctionTable,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    (let ((name expr) ...) body...)
    Bindings are pushed unevaluated and reduced on reference. Every body
    expression is evaluated; the last result is the value of the let.
    """
    if not expr.body:
        raise EvalError("empty let body")

    with env.scope(expr.bindings):
        results = [evaluate_fn(e, env, functions) for e in expr.body]
    return results[-1]
