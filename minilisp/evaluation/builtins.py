"""Built-in operations for the minilisp evaluator.

Arithmetic, equality and list primitives. Each builtin receives its operands
already reduced to values and returns a value. The evaluator consults
BUILTINS by node type after evaluating the node's operands.
"""
from __future__ import annotations

from functools import reduce
from typing import Callable, Sequence

from minilisp import Value
from minilisp.errors import EvalError
from minilisp.types.expression import (
    Add,
    BoolLiteral,
    Car,
    Cdr,
    Divide,
    Equal,
    FALSE,
    IntLiteral,
    ListLiteral,
    Multiply,
    Subtract,
    TRUE,
)

Builtin = Callable[[Sequence[Value]], Value]


def _integers(name: str, args: Sequence[Value]) -> list[int]:
    """Unwrap IntLiteral operands; anything else is an error."""
    values = []
    for arg in args:
        if not isinstance(arg, IntLiteral):
            raise EvalError(f"{name} requires integer operands, got {arg!r}")
        values.append(arg.value)
    return values


def truncating_divide(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    if b == 0:
        raise EvalError("division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def add(args: Sequence[Value]) -> IntLiteral:
    return IntLiteral(sum(_integers("+", args)))


def multiply(args: Sequence[Value]) -> IntLiteral:
    return IntLiteral(reduce(lambda x, y: x * y, _integers("*", args), 1))


def subtract(args: Sequence[Value]) -> IntLiteral:
    """The first operand seeds the fold, so (- 5) is 5."""
    values = _integers("-", args)
    if not values:
        raise EvalError("- requires at least 1 operand")
    return IntLiteral(reduce(lambda x, y: x - y, values))


def divide(args: Sequence[Value]) -> IntLiteral:
    values = _integers("/", args)
    if not values:
        raise EvalError("/ requires at least 1 operand")
    return IntLiteral(reduce(truncating_divide, values))


def equal(args: Sequence[Value]) -> BoolLiteral:
    """True if every operand structurally equals the first; (=) is true."""
    if not args:
        return TRUE
    first = args[0]
    return TRUE if all(is_equal(first, other) for other in args[1:]) else FALSE


def is_equal(a: Value, b: Value) -> bool:
    """Deep equality for values, element-wise for lists."""
    if isinstance(a, ListLiteral) and isinstance(b, ListLiteral):
        if len(a.elements) != len(b.elements):
            return False
        return all(is_equal(x, y) for x, y in zip(a.elements, b.elements))
    return type(a) is type(b) and a == b


def _list_target(name: str, args: Sequence[Value]) -> ListLiteral:
    (target,) = args
    if not isinstance(target, ListLiteral):
        raise EvalError(f"{name} target must be a list, got {target!r}")
    if not target.elements:
        raise EvalError(f"{name} of empty list")
    return target


def car(args: Sequence[Value]) -> Value:
    return _list_target("car", args).elements[0]


def cdr(args: Sequence[Value]) -> ListLiteral:
    return ListLiteral(_list_target("cdr", args).elements[1:])


BUILTINS: dict[type, Builtin] = {
    Add: add,
    Multiply: multiply,
    Subtract: subtract,
    Divide: divide,
    Equal: equal,
    Car: car,
    Cdr: cdr,
}
