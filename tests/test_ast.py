import pytest

from stencilkit.ast import (
    WS,
    Array,
    Expr,
    FunctionCall,
    Ident,
    In,
    LogicExpr,
    LogicOperator,
    MathExpr,
    MathOperator,
    StringConcat,
)


@pytest.mark.parametrize(
    "operator, symbol",
    [
        (MathOperator.ADD, "+"),
        (MathOperator.SUB, "-"),
        (MathOperator.MUL, "*"),
        (MathOperator.DIV, "/"),
        (MathOperator.MODULO, "%"),
    ],
)
def test_math_operator_display(operator, symbol):
    assert str(operator) == symbol


@pytest.mark.parametrize(
    "operator, symbol",
    [
        (LogicOperator.GT, ">"),
        (LogicOperator.GTE, ">="),
        (LogicOperator.LT, "<"),
        (LogicOperator.LTE, "<="),
        (LogicOperator.EQ, "=="),
        (LogicOperator.NOT_EQ, "!="),
        (LogicOperator.AND, "and"),
        (LogicOperator.OR, "or"),
    ],
)
def test_logic_operator_display(operator, symbol):
    assert str(operator) == symbol


def test_string_concat_to_template_string():
    concat = StringConcat(["hello", Ident("name"), 1])
    assert concat.to_template_string() == "'hello' ~ name ~ unknown"


def test_string_concat_single_value_has_no_separator():
    assert StringConcat([Ident("a")]).to_template_string() == "a"


def test_empty_string_concat():
    assert StringConcat([]).to_template_string() == ""


def test_expr_defaults():
    expr = Expr(Ident("x"))
    assert expr.negated is False
    assert expr.filters == []


def test_new_negated():
    expr = Expr.new_negated(True)
    assert expr.negated is True
    assert expr.val is True
    assert expr.filters == []


def test_with_filters_copies_list():
    filters = [FunctionCall("upper")]
    expr = Expr.with_filters(Ident("x"), filters)
    filters.append(FunctionCall("safe"))
    assert [f.name for f in expr.filters] == ["upper"]
    assert expr.negated is False


def test_has_default_filter_only_when_first():
    assert Expr.with_filters(Ident("x"), [FunctionCall("default"), FunctionCall("upper")]).has_default_filter()
    assert not Expr.with_filters(Ident("x"), [FunctionCall("upper"), FunctionCall("default")]).has_default_filter()
    assert not Expr(Ident("x")).has_default_filter()


def test_is_marked_safe_only_when_last():
    assert Expr.with_filters(Ident("x"), [FunctionCall("upper"), FunctionCall("safe")]).is_marked_safe()
    assert not Expr.with_filters(Ident("x"), [FunctionCall("safe"), FunctionCall("upper")]).is_marked_safe()
    assert not Expr(Ident("x")).is_marked_safe()


def test_structural_equality():
    left = Expr(MathExpr(Expr(1), Expr(Ident("a")), MathOperator.ADD))
    right = Expr(MathExpr(Expr(1), Expr(Ident("a")), MathOperator.ADD))
    assert left == right
    other = Expr(MathExpr(Expr(1), Expr(Ident("a")), MathOperator.SUB))
    assert not left == other


def test_nested_expressions_compare_equal():
    lhs = Expr(LogicExpr(Expr(Ident("a")), Expr(2), LogicOperator.GT))
    contained = In(Expr("b"), Expr(Array([Expr("b"), Expr("c")])), negated=True)
    assert Expr(contained) == Expr(In(Expr("b"), Expr(Array([Expr("b"), Expr("c")])), negated=True))
    assert lhs.val.operator is LogicOperator.GT


def test_ws_defaults_and_equality():
    assert WS() == WS(left=False, right=False)
    assert WS(left=True) == WS(True, False)
    assert not WS(left=True) == WS(right=True)