"""Runtime environment for minilisp.

The Environment is a stack of scopes, innermost first. Each scope holds the
(unevaluated) expressions bound by one `let` or function call, in binding
order. Scopes are pushed and popped through the `scope()` context manager so
that every exit path, including an error unwinding through it, restores the
stack.

A `let` binding is reduced in the scopes outside the one that bound it. A
function argument is reduced in the caller's environment instead, so call
scopes hold Deferred entries that carry a snapshot of that environment.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterable, Iterator, Sequence, Union

from minilisp.errors import EvalError
from minilisp.types.expression import Expression


class Deferred:
    """An unevaluated argument paired with the environment it must be reduced in."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: Expression, env: Environment):
        self.expr: Expression = expr
        self.env: Environment = env

    def __repr__(self) -> str:
        return f"Deferred({self.expr!r})"


Binding = Union[Expression, Deferred]
Scope = tuple[tuple[str, Binding], ...]


class Environment:
    """Ordered stack of scopes mapping names to bound expressions."""

    __slots__ = ("scopes",)

    def __init__(self, scopes: Iterable[Scope] = ()):
        # scopes[0] is the innermost scope
        self.scopes: list[Scope] = list(scopes)

    @classmethod
    def with_scope(cls, bindings: Sequence[tuple[str, Binding]]) -> Environment:
        """A fresh stack holding a single scope."""
        return cls([tuple(bindings)])

    def snapshot(self) -> Environment:
        """A copy of the current stack, unaffected by later pushes and pops."""
        return Environment(self.scopes)

    def push(self, bindings: Sequence[tuple[str, Binding]]) -> None:
        self.scopes.insert(0, tuple(bindings))

    def pop(self) -> Scope:
        if not self.scopes:
            raise EvalError("cannot pop from an empty environment")
        return self.scopes.pop(0)

    @contextmanager
    def scope(self, bindings: Sequence[tuple[str, Binding]]) -> Iterator[Environment]:
        """Push `bindings` as the innermost scope for the duration of the block."""
        self.push(bindings)
        try:
            yield self
        finally:
            self.pop()

    def find(self, name: str) -> tuple[Binding, int] | None:
        """Return the binding for `name` and the depth of the scope holding it.

        Within one scope the first binding in order wins.
        """
        for depth, scope in enumerate(self.scopes):
            for bound_name, bound in scope:
                if bound_name == name:
                    return bound, depth
        return None

    def lookup(self, name: str) -> tuple[Expression, Environment]:
        """Look up `name`, returning its expression and the environment to reduce it in.

        For a deferred argument that is the caller's environment; otherwise it
        holds only the scopes outside the one that bound `name`.
        Raises EvalError if the name is unbound.
        """
        found = self.find(name)
        if found is None:
            raise EvalError(f"unknown reference: {name}")
        bound, depth = found
        if isinstance(bound, Deferred):
            return bound.expr, bound.env
        return bound, Environment(self.scopes[depth + 1:])

    def __len__(self) -> int:
        return len(self.scopes)

    def _write_scope(self, scope: Scope, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in scope))
        buffer.write("}")

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment: ")
            for i, scope in enumerate(self.scopes):
                if i:
                    buffer.write(" -> ")
                self._write_scope(scope, buffer)
            buffer.write(">")
            return buffer.getvalue()
