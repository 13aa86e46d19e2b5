from minilisp import EvaluatorFn, Value
from minilisp.errors import EvalError
from minilisp.types.environment import Environment
from minilisp.types.expression import BoolLiteral, If
from minilisp.types.function_table import FunctionTable


def if_form(
    expr: If,
    env: Environment,
    functions: FunctionTable,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    (if condition then else)
    Only the selected branch is evaluated.
    """
    cond = evaluate_fn(expr.condition, env, functions)
    if not isinstance(cond, BoolLiteral):
        raise EvalError(f"condition must be boolean, got {cond!r}")

    if cond.value:
        return evaluate_fn(expr.then_branch, env, functions)
    return evaluate_fn(expr.else_branch, env, functions)
