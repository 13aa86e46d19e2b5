import logging

import pytest

from minilisp.errors import EvalError
from minilisp.evaluation.evaluator import evaluate
from minilisp.types.environment import Environment
from minilisp.types.expression import Call, FunctionDef, IntLiteral, Variable
from minilisp.types.function_table import FunctionDefinition, FunctionTable


@pytest.fixture
def identity_table():
    return FunctionTable.from_definitions([FunctionDef("id", ("x",), (Variable("x"),))])


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(defun square (n) (* n n)) (square 4)", 16),
        ("(square 3) (defun square (n) (* n n))", 9),
        ("(defun add (a b) (+ a b)) (add (add 1 2) 3)", 6),
        ("(defun five () 5) (five)", 5),
        ("(defun fact (n) (if (= n 0) 1 (* n (fact (- n 1))))) (fact 5)", 120),
        ("(defun last (a) 1 2 a) (last 3)", 3),
        ("(defun sq (n) (* n n)) (let ((x 3)) (sq (+ x 1)))", 16),
        (
            "(defun len (xs) (if (= xs (list)) 0 (+ 1 (len (cdr xs))))) (len (list 1 2 3))",
            3,
        ),
    ]
)
def test_function_calls(interp, source, expected):
    assert interp.eval(source)[-1] == IntLiteral(expected)


def test_arity_mismatch(interp):
    with pytest.raises(EvalError, match="arity mismatch"):
        interp.eval("(defun square (n) (* n n)) (square 1 2)")


def test_function_body_does_not_see_caller_locals(interp):
    with pytest.raises(EvalError, match="unknown reference: y"):
        interp.eval("(defun f () y) (let ((y 1)) (f))")


def test_nested_defun_is_not_registered(interp):
    with pytest.raises(EvalError, match="function definition"):
        interp.eval("(let ((x 1)) (defun g (a) a))")


def test_unknown_function_call(functions):
    with pytest.raises(EvalError, match="unknown function call: nope"):
        evaluate(Call("nope", ()), Environment(), functions)


def test_call_resolves_arguments_in_caller_env(identity_table):
    env = Environment.with_scope([("y", IntLiteral(7))])
    assert evaluate(Call("id", (Variable("y"),)), env, identity_table) == IntLiteral(7)
    assert len(env) == 1


def test_function_table_lookup(identity_table):
    fn = identity_table.lookup("id")
    assert fn == FunctionDefinition(("x",), (Variable("x"),))
    assert fn.arity == 1
    assert list(identity_table) == ["id"]
    assert "id" in identity_table


def test_function_table_is_read_only(identity_table):
    with pytest.raises(TypeError):
        identity_table["other"] = FunctionDefinition((), ())


def test_redefinition_keeps_last_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="minilisp"):
        table = FunctionTable.from_definitions([
            FunctionDef("f", (), (IntLiteral(1),)),
            FunctionDef("f", (), (IntLiteral(2),)),
        ])
    assert table.lookup("f").body == (IntLiteral(2),)
    assert "redefined" in caplog.text


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(defun k (x) 1) (k (car (list)))", 1),
        ("(defun pick (c a b) (if c a b)) (pick true 1 (/ 1 0))", 1),
        ("(defun pick (c a b) (if c a b)) (let ((z 4)) (pick false (car z) (+ z 1)))", 5),
    ]
)
def test_unused_arguments_are_never_evaluated(interp, source, expected):
    assert interp.eval(source) == [IntLiteral(expected)]


def test_deferred_argument_keeps_caller_scope(identity_table):
    env = Environment()
    with env.scope([("y", IntLiteral(7))]):
        call = Call("id", (Variable("y"),))
        assert evaluate(call, env, identity_table) == IntLiteral(7)
    assert len(env) == 0
