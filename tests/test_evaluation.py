import pytest
from hypothesis import given, strategies as st

from minilisp.errors import EvalError
from minilisp.evaluation.evaluator import evaluate, evaluate_sequence, run_program
from minilisp.reader.parser import parse
from minilisp.types.environment import Environment
from minilisp.types.expression import (
    FALSE,
    TRUE,
    BoolLiteral,
    Empty,
    Equal,
    FunctionDef,
    IntLiteral,
    ListLiteral,
    StringLiteral,
    Variable,
)

# -----------------------------------------------------
# Strategies
# -----------------------------------------------------

value_strat = st.recursive(
    st.one_of(
        st.integers(min_value=-1000, max_value=1000).map(IntLiteral),
        st.booleans().map(BoolLiteral),
        st.text(alphabet="abc xyz", max_size=8).map(StringLiteral),
    ),
    lambda inner: st.lists(inner, max_size=4).map(lambda xs: ListLiteral(tuple(xs))),
    max_leaves=12,
)

# -----------------------------------------------------
# Tests
# -----------------------------------------------------


def test_self_evaluating_literals(env, functions):
    assert evaluate(IntLiteral(1), env, functions) == IntLiteral(1)
    assert evaluate(TRUE, env, functions) == TRUE
    assert evaluate(StringLiteral("hi"), env, functions) == StringLiteral("hi")


def test_unknown_variable(env, functions):
    with pytest.raises(EvalError, match="unknown reference: q"):
        evaluate(Variable("q"), env, functions)


def test_variable_lookup_reduces_bound_expression(functions):
    env = Environment.with_scope([("x", parse("(+ 1 2)")[0])])
    assert evaluate(Variable("x"), env, functions) == IntLiteral(3)


def test_evaluate_sequence_keeps_every_result(env, functions):
    exprs = parse("1 (+ 1 1) true")
    assert evaluate_sequence(exprs, env, functions) == [IntLiteral(1), IntLiteral(2), TRUE]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(list)", ListLiteral(())),
        ("(list 1 (+ 1 1))", ListLiteral((IntLiteral(1), IntLiteral(2)))),
        ("(car (list 1 2 3))", IntLiteral(1)),
        ("(cdr (list 1 2 3))", ListLiteral((IntLiteral(2), IntLiteral(3)))),
        ("(cdr (list 1))", ListLiteral(())),
        ("(car (cdr (list 1 (list 2) 3)))", ListLiteral((IntLiteral(2),))),
    ]
)
def test_lists(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,message",
    [
        ("(car (list))", "car of empty list"),
        ("(cdr (list))", "cdr of empty list"),
        ("(car 1)", "car target must be a list"),
        ('(cdr "abc")', "cdr target must be a list"),
    ]
)
def test_list_errors(run, source, message):
    with pytest.raises(EvalError, match=message):
        run(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(= 1 1 1)", TRUE),
        ("(= 1 1 2)", FALSE),
        ("(= 1 true)", FALSE),
        ("(= true true)", TRUE),
        ('(= "a b" "a   b")', TRUE),
        ("(= (list 1 (list 2)) (list 1 (list 2)))", TRUE),
        ("(= (list 1 2) (list 1))", FALSE),
        ("(= 3 (+ 1 2))", TRUE),
        ("(=)", TRUE),
    ]
)
def test_equal(run, source, expected):
    assert run(source) == expected


@given(value_strat)
def test_equal_is_reflexive(value):
    assert evaluate(Equal((value,)), Environment()) == TRUE
    assert evaluate(Equal((value, value)), Environment()) == TRUE


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if (= 1 1) 10 20)", IntLiteral(10)),
        ("(if false 10 20)", IntLiteral(20)),
        ("(if true 1 (car (list)))", IntLiteral(1)),
        ("(if false (/ 1 0) 2)", IntLiteral(2)),
    ]
)
def test_if(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize("source", ["(if 1 2 3)", "(if (list) 2 3)", '(if "true" 1 2)'])
def test_if_requires_boolean_condition(run, source):
    with pytest.raises(EvalError, match="condition must be boolean"):
        run(source)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(let ((x 5) (y 3)) (+ x y))", 8),
        ("(let ((x 1) (x 2)) x)", 1),
        ("(let ((x 5)) (let ((x (+ x 1))) x))", 6),
        ("(let ((x 5)) (let ((y 2)) (* x y)))", 10),
        ("(let ((x (car (list)))) 5)", 5),
        ("(let ((x 1)) x 2 3)", 3),
        ("(let () 7)", 7),
    ]
)
def test_let(run, source, expected):
    assert run(source) == IntLiteral(expected)


def test_let_evaluates_every_body_expression(run):
    with pytest.raises(EvalError, match="empty list"):
        run("(let ((x 1)) (car (list)) x)")


def test_let_bindings_do_not_see_siblings(run):
    with pytest.raises(EvalError, match="unknown reference: x"):
        run("(let ((x 1) (y x)) y)")


def test_let_with_empty_body(env, functions):
    with pytest.raises(EvalError, match="empty let body"):
        evaluate(parse("(let ((x 1)))")[0], env, functions)


def test_let_scope_is_popped(env, functions):
    evaluate(parse("(let ((x 1)) x)")[0], env, functions)
    assert len(env) == 0
    with pytest.raises(EvalError):
        evaluate(parse("(let ((x 1)) (car x))")[0], env, functions)
    assert len(env) == 0


def test_unreducible_nodes(env, functions):
    with pytest.raises(EvalError, match="empty expression"):
        evaluate(Empty, env, functions)
    with pytest.raises(EvalError, match="function definition"):
        evaluate(FunctionDef("f", ("x",), (Variable("x"),)), env, functions)


def test_run_program_skips_definitions():
    exprs = parse("1 (defun f (x) x) (f 2) true")
    assert run_program(exprs) == [IntLiteral(1), IntLiteral(2), TRUE]


def test_end_to_end_addition(interp):
    program = interp.read("(+ 1 2 3)")
    assert program.tokens == ["(", "+", "1", "2", "3", ")"]
    assert interp.eval("(+ 1 2 3)") == [IntLiteral(6)]
