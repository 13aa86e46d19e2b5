"""
  minilisp tokenizer

Splits source text into a flat list of string tokens:

    - "(" and ")" are always single tokens
    - '"' is always a single token; string contents are tokenized like code
      and re-joined by the parser
    - any other run of non-whitespace characters is kept verbatim

Whitespace (space, tab, newline, carriage return) is discarded; any other
character, including other Unicode spaces, is part of an atom. There are no
comments and no error conditions: any text produces some token sequence.
"""

from __future__ import annotations

import logging
import re

from minilisp import Token

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"(?P<delimiter>[()\"])"  # ( ) "
    r"|(?P<atom>[^ \t\n\r()\"]+)"  # everything up to whitespace or a delimiter
)


def tokenize(source: str) -> list[Token]:
    """Return the tokens of `source` in order."""
    tokens = [m.group(0) for m in TOKEN_RE.finditer(source)]
    logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens


def join_tokens(tokens: list[Token]) -> str:
    """Flat, space-joined rendering of a token sequence."""
    return " ".join(tokens)
