"""
  minilisp parser

Recursive-descent parser from a token list to Expression nodes.

Every parse step takes a token sequence and returns the parsed node together
with the tokens it did not consume:

    - ( ... )           -> the enclosed group parsed as one expression
    - " ... "           -> StringLiteral (sub-tokens joined by single spaces)
    - = + * - / list    -> variadic node over the remaining tokens
    - car cdr           -> node over exactly one following expression
    - let if defun      -> dedicated builders
    - true false        -> BoolLiteral
    - known function    -> Call over the remaining tokens
    - -?[0-9]+          -> IntLiteral
    - [A-Za-z_-]+       -> Variable
    - no tokens         -> Empty

Known function names come from minilisp.reader.prescan and must be checked
before the integer/variable fallbacks, so a declared function never parses as
a bare variable.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Sequence

from minilisp import Token
from minilisp.errors import ParseError
from minilisp.reader.lexer import tokenize
from minilisp.reader.prescan import is_identifier, scan_function_names
from minilisp.types.expression import (
    Add,
    BoolLiteral,
    Call,
    Car,
    Cdr,
    Divide,
    Empty,
    Equal,
    Expression,
    FunctionDef,
    If,
    IntLiteral,
    Let,
    ListLiteral,
    Multiply,
    StringLiteral,
    Subtract,
    Variable,
)

logger = logging.getLogger(__name__)

INTEGER_RE = re.compile(r"-?[0-9]+")
BOOLEANS = {"true": True, "false": False}

LPAREN, RPAREN, QUOTE = "(", ")", '"'

Tokens = Sequence[Token]
ParseResult = tuple[Expression, list[Token]]


def is_integer(token: Token) -> bool:
    return INTEGER_RE.fullmatch(token) is not None


def match_paren(tokens: Tokens) -> tuple[list[Token], list[Token]]:
    """Split a sequence starting with "(" at its matching ")".

    Returns (group, remaining) where group excludes the enclosing parentheses,
    so that ["(", *group, ")", *remaining] == tokens.
    """
    if not tokens or tokens[0] != LPAREN:
        raise ParseError("expected '('", tokens[0] if tokens else None)
    depth = 0
    for i, tok in enumerate(tokens):
        if tok == LPAREN:
            depth += 1
        elif tok == RPAREN:
            depth -= 1
            if depth == 0:
                return list(tokens[1:i]), list(tokens[i + 1:])
    raise ParseError("parenthesis mismatch")


def match_quote(tokens: Tokens) -> tuple[str, list[Token]]:
    """Collect the tokens between a leading '"' and the next '"'."""
    for i in range(1, len(tokens)):
        if tokens[i] == QUOTE:
            return " ".join(tokens[1:i]), list(tokens[i + 1:])
    raise ParseError("quote mismatch")


class Parser:
    """Parses token sequences given the set of declared function names."""

    def __init__(self, function_names: frozenset[str] = frozenset()):
        self.function_names = frozenset(function_names)
        self.builders: dict[Token, Callable[[Tokens], ParseResult]] = {
            "=": self._variadic(Equal),
            "+": self._variadic(Add),
            "*": self._variadic(Multiply),
            "-": self._variadic(Subtract),
            "/": self._variadic(Divide),
            "list": self._variadic(ListLiteral),
            "car": self._unary(Car),
            "cdr": self._unary(Cdr),
            "let": self.parse_let,
            "if": self.parse_if,
            "defun": self.parse_defun,
        }

    def parse_expression(self, tokens: Tokens) -> ParseResult:
        """Parse one expression from the front of `tokens`."""
        if not tokens:
            return Empty, []

        head, rest = tokens[0], tokens[1:]

        if head == LPAREN:
            group, remaining = match_paren(tokens)
            expr, leftover = self.parse_expression(group)
            if leftover:
                raise ParseError("disjointed expression", " ".join(leftover))
            return expr, remaining

        if head == QUOTE:
            text, remaining = match_quote(tokens)
            return StringLiteral(text), remaining

        builder = self.builders.get(head)
        if builder is not None:
            return builder(rest)

        if head in BOOLEANS:
            return BoolLiteral(BOOLEANS[head]), list(rest)

        if head in self.function_names:
            arguments, remaining = self.parse_expression_sequence(rest)
            return Call(head, tuple(arguments)), remaining

        if is_integer(head):
            return IntLiteral(int(head)), list(rest)

        if is_identifier(head):
            return Variable(head), list(rest)

        raise ParseError("unrecognized input", head)

    def parse_expression_sequence(self, tokens: Tokens) -> tuple[list[Expression], list[Token]]:
        """Parse expressions one after another until the tokens run out."""
        exprs: list[Expression] = []
        remaining = list(tokens)
        while remaining:
            expr, remaining = self.parse_expression(remaining)
            exprs.append(expr)
        return exprs, remaining

    # --- builders ---
    def _variadic(self, node_type) -> Callable[[Tokens], ParseResult]:
        def build(tokens: Tokens) -> ParseResult:
            operands, remaining = self.parse_expression_sequence(tokens)
            return node_type(tuple(operands)), remaining
        return build

    def _unary(self, node_type) -> Callable[[Tokens], ParseResult]:
        def build(tokens: Tokens) -> ParseResult:
            target, remaining = self.parse_expression(tokens)
            return node_type(target), remaining
        return build

    def parse_let(self, tokens: Tokens) -> ParseResult:
        """(let ((name expr) ...) body...)"""
        if not tokens or tokens[0] != LPAREN:
            raise ParseError("invalid binding", tokens[0] if tokens else "let")
        binding_list, body_tokens = match_paren(tokens)

        bindings: list[tuple[str, Expression]] = []
        while binding_list:
            if binding_list[0] != LPAREN:
                raise ParseError("invalid binding", binding_list[0])
            binding, binding_list = match_paren(binding_list)
            bindings.append(self._parse_binding(binding))

        body, remaining = self.parse_expression_sequence(body_tokens)
        return Let(tuple(bindings), tuple(body)), remaining

    def _parse_binding(self, binding: Tokens) -> tuple[str, Expression]:
        if not binding or not is_identifier(binding[0]):
            raise ParseError("invalid variable name", binding[0] if binding else "()")
        name, expr_tokens = binding[0], binding[1:]
        if not expr_tokens:
            raise ParseError("incomplete binding", name)
        expr, leftover = self.parse_expression(expr_tokens)
        if leftover:
            raise ParseError("disjointed expression", " ".join(leftover))
        return name, expr

    def parse_if(self, tokens: Tokens) -> ParseResult:
        """(if condition then else)"""
        exprs, remaining = self.parse_expression_sequence(tokens)
        if len(exprs) != 3:
            raise ParseError("invalid if", f"expected 3 expressions, got {len(exprs)}")
        return If(*exprs), remaining

    def parse_defun(self, tokens: Tokens) -> ParseResult:
        """(defun name (params...) body...)"""
        if not tokens or not is_identifier(tokens[0]):
            raise ParseError("invalid function name", tokens[0] if tokens else "defun")
        name, rest = tokens[0], tokens[1:]
        if not rest or rest[0] != LPAREN:
            raise ParseError("invalid parameter list", name)
        params, body_tokens = match_paren(rest)
        for param in params:
            if not is_identifier(param):
                raise ParseError("invalid parameter name", param)
        if not body_tokens:
            raise ParseError("empty function", name)
        body, remaining = self.parse_expression_sequence(body_tokens)
        return FunctionDef(name, tuple(params), tuple(body)), remaining


def parse_expression(tokens: Tokens, function_names: frozenset[str] = frozenset()) -> ParseResult:
    return Parser(function_names).parse_expression(tokens)


def parse_expression_sequence(
    tokens: Tokens, function_names: frozenset[str] = frozenset()
) -> tuple[list[Expression], list[Token]]:
    return Parser(function_names).parse_expression_sequence(tokens)


def parse_tokens(tokens: Tokens) -> list[Expression]:
    """Prescan `tokens` for function names, then parse every top-level expression."""
    exprs, _ = parse_expression_sequence(tokens, scan_function_names(tokens))
    logger.debug("parsed %d top-level expressions", len(exprs))
    return exprs


def parse(source: str) -> list[Expression]:
    """Tokenize and parse a whole program."""
    return parse_tokens(tokenize(source))
