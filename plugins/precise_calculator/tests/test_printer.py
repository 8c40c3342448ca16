from decimal import Decimal

import pytest

from plugins.precise_calculator.core import (
    Add,
    Apply,
    Constant,
    DecimalValue,
    Div,
    Evaluator,
    Mul,
    Neg,
    Precedence,
    Sub,
    Symbol,
    precedence_of,
    print_expr,
)

a, b, c = Symbol("a"), Symbol("b"), Symbol("c")


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        (Mul(Add(a, b), c), "(a+b)*c"),
        (Add(Mul(a, b), c), "a*b+c"),
        (Add(a, Mul(b, c)), "a+b*c"),
        (Sub(Sub(a, b), c), "a-b-c"),
        (Sub(a, Sub(b, c)), "a-(b-c)"),
        (Sub(a, Add(b, c)), "a-(b+c)"),
        (Div(a, Mul(b, c)), "a/(b*c)"),
        (Div(Div(a, b), c), "a/b/c"),
        (Mul(a, Div(b, c)), "a*b/c"),
        (Neg(Add(a, b)), "-(a+b)"),
        (Neg(Mul(a, b)), "-(a*b)"),
        (Mul(Neg(a), b), "-a*b"),
        (Add(a, Neg(b)), "a+-b"),
        (Neg(Neg(a)), "--a"),
    ],
)
def test_minimal_parentheses(expr, expected):
    assert print_expr(expr) == expected


def test_function_application_is_quoted():
    assert print_expr(Apply(Symbol("sin"), (Add(a, Constant.exact(1)),))) == '"sin"(a+1)'
    assert print_expr(Apply(Symbol("f"), (Constant.exact(1), Constant.exact(2)))) == '"f"(1,2)'
    assert print_expr(Mul(Apply(Symbol("g"), ()), a)) == '"g"()*a'


def test_fractions_and_negative_numbers_keep_their_meaning():
    assert print_expr(Div(a, Constant.exact(1, 2))) == "a/(1/2)"
    assert print_expr(Mul(Constant.exact(1, 2), a)) == "1/2*a"
    assert print_expr(Neg(Constant.exact(5, 6))) == "-(5/6)"
    assert print_expr(Div(Constant.exact(1), Constant.exact(-3))) == "1/-3"
    assert print_expr(Neg(Constant.exact(-3))) == "--3"


def test_decimal_constants_use_display_digits():
    value = Constant(DecimalValue(Decimal("0.000012345")))
    assert print_expr(value) == "1.2345000e-5"
    assert print_expr(Mul(value, a), round_digits=3) == "1.23e-5*a"


@pytest.mark.parametrize(
    "source",
    ["1/2+1/3", "-(3+4)", "7/3-2/9*3", "(1-2)/(3-5)", "-1/3/5", "2*-3", "10/4-1/(3-4)"],
)
def test_printed_results_parse_back_to_the_same_value(source):
    evaluator = Evaluator()
    first = evaluator.evaluate(evaluator.parse(source))
    second = evaluator.evaluate(evaluator.parse(evaluator.render(first)))
    assert second == first


def test_leaves_are_never_wrapped():
    two = Constant.exact(2)
    assert print_expr(Add(Symbol("x"), two)) == "x+2"
    assert print_expr(Neg(Symbol("x"))) == "-x"
    assert print_expr(Div(two, Constant(DecimalValue(Decimal("1.5"))))) == "2/1.5000000"
    assert print_expr(Apply(Symbol("sin"), (Symbol("x"),))) == '"sin"(x)'
    assert print_expr(Symbol("x")) == "x"


@pytest.mark.parametrize(
    "source",
    ["x*(1+y)", "-(a+b)*c", "a-(b-c)", "a/(b*c)", "a/-b", "x+y*z", "(x-1)/(y+2)", "--x"],
)
def test_partially_reduced_expressions_parse_back_to_themselves(source):
    evaluator = Evaluator()
    reduced = evaluator.evaluate(evaluator.parse(source))
    assert evaluator.parse(evaluator.render(reduced)) == reduced


def test_reduced_constants_inside_symbolic_results():
    evaluator = Evaluator()
    reduced = evaluator.evaluate(evaluator.parse("x*(1/2+1/3) - (2-5)"))
    assert evaluator.render(reduced) == "x*5/6--3"


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        (Symbol("x"), Precedence.ATOM),
        (Constant.exact(7), Precedence.ATOM),
        (Constant(DecimalValue(Decimal("-0.0"))), Precedence.ATOM),
        (Constant.exact(1, 2), Precedence.PRODUCT),
        (Constant.exact(-7), Precedence.NEG),
        (Constant(DecimalValue(Decimal("-2.5"))), Precedence.NEG),
        (Apply(Symbol("f"), ()), Precedence.FUNCTION_OR_FACTORIAL),
    ],
)
def test_leaf_ranks(expr, expected):
    assert precedence_of(expr) == expected
