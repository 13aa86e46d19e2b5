"""AST node types for minilisp.

Every node is a frozen dataclass; ordered children are stored as tuples, so a
node is immutable once built and equality is structural. The same types double
as runtime values: evaluation reduces any node to an IntLiteral, BoolLiteral,
StringLiteral, or a ListLiteral of such values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class IntLiteral:
    value: int


@dataclass(frozen=True)
class BoolLiteral:
    value: bool


@dataclass(frozen=True)
class StringLiteral:
    text: str


@dataclass(frozen=True)
class ListLiteral:
    elements: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Car:
    target: Expression


@dataclass(frozen=True)
class Cdr:
    target: Expression


@dataclass(frozen=True)
class Equal:
    operands: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Add:
    operands: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Multiply:
    operands: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Subtract:
    operands: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Divide:
    operands: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class If:
    condition: Expression
    then_branch: Expression
    else_branch: Expression


@dataclass(frozen=True)
class Let:
    bindings: tuple[tuple[str, Expression], ...]
    body: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Call:
    function_name: str
    arguments: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class FunctionDef:
    name: str
    parameters: tuple[str, ...]
    body: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class EmptyType:
    """Result of parsing an exhausted token sequence."""

    def __repr__(self):
        return "Empty"


Empty = EmptyType()


Expression = Union[
    Variable,
    IntLiteral,
    BoolLiteral,
    StringLiteral,
    ListLiteral,
    Car,
    Cdr,
    Equal,
    Add,
    Multiply,
    Subtract,
    Divide,
    If,
    Let,
    Call,
    FunctionDef,
    EmptyType,
]


TRUE = BoolLiteral(True)
FALSE = BoolLiteral(False)
