from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from minilisp import Token, Value
from minilisp.config import Settings, get_settings
from minilisp.debug_utils.pprint import render_tree
from minilisp.evaluation.evaluator import run_program
from minilisp.reader.lexer import join_tokens, tokenize
from minilisp.reader.parser import parse_tokens
from minilisp.types.expression import Expression

logger = logging.getLogger(__name__)


@dataclass
class Program:
    """A source text after reading: its tokens and top-level expressions."""
    tokens: list[Token] = field(default_factory=list)
    expressions: list[Expression] = field(default_factory=list)


class Interpreter:
    """
    Runs minilisp programs: tokenize, prescan, parse, then evaluate.
    Every call to `eval` or `run` is independent; no state carries over.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings: Settings = settings if settings is not None else get_settings()

    def read(self, code: str) -> Program:
        tokens = tokenize(code)
        return Program(tokens, parse_tokens(tokens))

    def eval(self, code: str) -> list[Value]:
        """Evaluate every non-definition top-level expression of `code`."""
        return run_program(self.read(code).expressions)

    def run(self, code: str, out: TextIO | None = None) -> list[Value]:
        """Evaluate `code`, printing the tokens, parse trees and result trees."""
        out = out if out is not None else sys.stdout
        indent, color = self.settings.indent, self.settings.color

        program = self.read(code)
        if self.settings.show_tokens:
            print(join_tokens(program.tokens), file=out)
        if self.settings.show_tree:
            for expr in program.expressions:
                for line in render_tree(expr, indent, color=color):
                    print(line, file=out)

        results = run_program(program.expressions)
        for value in results:
            for line in render_tree(value, indent, color=color):
                print(line, file=out)
        logger.debug("program produced %d results", len(results))
        return results
