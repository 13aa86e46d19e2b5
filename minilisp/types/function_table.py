"""Global table of user-defined functions.

Built once from the top-level `defun` forms before evaluation starts and
read-only afterwards; evaluation threads it through every call explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from minilisp.errors import EvalError
from minilisp.types.expression import Expression, FunctionDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionDefinition:
    parameters: tuple[str, ...]
    body: tuple[Expression, ...]

    @property
    def arity(self) -> int:
        return len(self.parameters)


class FunctionTable(Mapping[str, FunctionDefinition]):
    """Read-only mapping from function name to its definition."""

    __slots__ = ("_functions",)

    def __init__(self, functions: Mapping[str, FunctionDefinition] | None = None):
        self._functions = MappingProxyType(dict(functions or {}))

    @classmethod
    def from_definitions(cls, definitions: Iterable[FunctionDef]) -> FunctionTable:
        """Build the table; a later definition of the same name replaces an earlier one."""
        functions: dict[str, FunctionDefinition] = {}
        for fdef in definitions:
            if fdef.name in functions:
                logger.warning("function %s redefined; using the later definition", fdef.name)
            functions[fdef.name] = FunctionDefinition(fdef.parameters, fdef.body)
        logger.debug("function table built: %s", sorted(functions))
        return cls(functions)

    def lookup(self, name: str) -> FunctionDefinition:
        try:
            return self._functions[name]
        except KeyError:
            raise EvalError(f"unknown function call: {name}") from None

    def __getitem__(self, name: str) -> FunctionDefinition:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:
        return f"<FunctionTable {sorted(self._functions)}>"
