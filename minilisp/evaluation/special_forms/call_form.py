from minilisp import EvaluatorFn, Value
from minilisp.errors import EvalError
from minilisp.types.environment import Deferred, Environment
from minilisp.types.expression import Call, Let
from minilisp.types.function_table import FunctionTable


def call_form(
    expr: Call,
    env: Environment,
    functions: FunctionTable,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    (name arg...)
    Arguments are bound unevaluated to the parameters as a let, run in a fresh
    environment: a function body sees its parameters and the function table,
    never the caller's locals. Each argument is reduced on reference, in the
    caller's environment.
    """
    fn = functions.lookup(expr.function_name)
    if fn.arity != len(expr.arguments):
        raise EvalError(
            f"arity mismatch: {expr.function_name} takes {fn.arity} "
            f"argument(s), got {len(expr.arguments)}"
        )

    caller_env = env.snapshot()
    bindings = tuple((p, Deferred(arg, caller_env)) for p, arg in zip(fn.parameters, expr.arguments))
    return evaluate_fn(Let(bindings, fn.body), Environment(), functions)
