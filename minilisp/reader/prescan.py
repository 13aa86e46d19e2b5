"""Function-name prescan.

The grammar cannot tell a call `(f x)` from a bare symbol without knowing
which names are functions, so the whole token stream is scanned for `defun`
declarations before parsing starts. Functions may therefore be called before
the form that declares them.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from minilisp import Token

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"[A-Za-z_-]+")

DEFUN = "defun"


def is_identifier(token: Token) -> bool:
    return IDENTIFIER_RE.fullmatch(token) is not None


def scan_function_names(tokens: Sequence[Token]) -> frozenset[str]:
    """Return the set of names declared with `defun` anywhere in `tokens`."""
    names: set[str] = set()
    i = 0
    while i < len(tokens) - 1:
        if tokens[i] == DEFUN and is_identifier(tokens[i + 1]):
            names.add(tokens[i + 1])
            i += 2
        else:
            i += 1
    logger.debug("prescan found functions: %s", sorted(names))
    return frozenset(names)
