from __future__ import annotations

from minilisp.config import DEFAULT_INDENT
from minilisp.types.expression import (
    Add,
    BoolLiteral,
    Call,
    Car,
    Cdr,
    Divide,
    EmptyType,
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

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_LITERAL = "\033[92m"
COLOR_VARIABLE = "\033[94m"
COLOR_SPECIAL_FORM = "\033[90m"
COLOR_CALL = "\033[95m"

# Source keyword for each variadic node type
KEYWORDS = {
    Equal: "=",
    Add: "+",
    Multiply: "*",
    Subtract: "-",
    Divide: "/",
    ListLiteral: "list",
    Car: "car",
    Cdr: "cdr",
}


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


# ----------------- Node labels -----------------
def label(expr: Expression) -> str:
    """One-line label naming the node's variant and key fields."""
    match expr:
        case IntLiteral(value=v):
            return f"Int({v})"
        case BoolLiteral(value=v):
            return f"Bool({_bool_text(v)})"
        case StringLiteral(text=t):
            return f'String("{t}")'
        case Variable(name=n):
            return f"Variable({n})"
        case ListLiteral():
            return "List"
        case Call(function_name=n):
            return f"Call({n})"
        case FunctionDef(name=n, parameters=ps):
            return f"FunctionDef({n}, params=[{', '.join(ps)}])"
        case EmptyType():
            return "Empty"
    return type(expr).__name__


def colorize(expr: Expression, text: str) -> str:
    if isinstance(expr, (IntLiteral, BoolLiteral, StringLiteral)):
        return f"{COLOR_LITERAL}{text}{RESET}"
    if isinstance(expr, Variable):
        return f"{COLOR_VARIABLE}{text}{RESET}"
    if isinstance(expr, (Call, FunctionDef)):
        return f"{COLOR_CALL}{text}{RESET}"
    return f"{COLOR_SPECIAL_FORM}{text}{RESET}"


def children(expr: Expression) -> list[Expression]:
    match expr:
        case ListLiteral(elements=es):
            return list(es)
        case Car(target=t) | Cdr(target=t):
            return [t]
        case (
            Equal(operands=ops)
            | Add(operands=ops)
            | Multiply(operands=ops)
            | Subtract(operands=ops)
            | Divide(operands=ops)
        ):
            return list(ops)
        case If(condition=c, then_branch=t, else_branch=e):
            return [c, t, e]
        case Call(arguments=args):
            return list(args)
        case FunctionDef(body=body):
            return list(body)
    return []


# ----------------- Tree printer -----------------
def render_tree(
    expr: Expression,
    indent: str = DEFAULT_INDENT,
    depth: int = 0,
    color: bool = False,
) -> list[str]:
    """Render `expr` as one line per node, children one indent level deeper."""
    pad = indent * depth
    text = label(expr)
    lines = [pad + (colorize(expr, text) if color else text)]

    if isinstance(expr, Let):
        # bindings first, each labelled with its name, then the body
        for name, bound in expr.bindings:
            binding = f"Binding({name})"
            lines.append(indent * (depth + 1) + (f"{COLOR_VARIABLE}{binding}{RESET}" if color else binding))
            lines.extend(render_tree(bound, indent, depth + 2, color))
        for e in expr.body:
            lines.extend(render_tree(e, indent, depth + 1, color))
        return lines

    for child in children(expr):
        lines.extend(render_tree(child, indent, depth + 1, color))
    return lines


def pprint_expr(expr: Expression, indent: str = DEFAULT_INDENT, color: bool = False) -> str:
    return "\n".join(render_tree(expr, indent, 0, color))


# ----------------- Unparser -----------------
def to_source(expr: Expression) -> str:
    """Render `expr` back to source text that parses to an equal tree."""
    match expr:
        case IntLiteral(value=v):
            return str(v)
        case BoolLiteral(value=v):
            return _bool_text(v)
        case StringLiteral(text=t):
            return f'" {t} "' if t else '" "'
        case Variable(name=n):
            return n
        case If(condition=c, then_branch=t, else_branch=e):
            return f"(if {to_source(c)} {to_source(t)} {to_source(e)})"
        case Let(bindings=bindings, body=body):
            bound = " ".join(f"({n} {to_source(e)})" for n, e in bindings)
            return _form("let", [f"({bound})"] + [to_source(e) for e in body])
        case Call(function_name=n, arguments=args):
            return _form(n, [to_source(a) for a in args])
        case FunctionDef(name=n, parameters=ps, body=body):
            return _form("defun", [n, f"({' '.join(ps)})"] + [to_source(e) for e in body])
        case EmptyType():
            return "()"
    keyword = KEYWORDS[type(expr)]
    return _form(keyword, [to_source(c) for c in children(expr)])


def _form(head: str, parts: list[str]) -> str:
    return "(" + " ".join([head] + parts) + ")"
