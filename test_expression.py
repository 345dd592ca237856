import pytest

from expression import Addition, Expression, Number, Subtraction, eval_expr, fold_expr, pretty_expr_ascii, simplify


one, two, three = Number(1), Number(2), Number(3)


@pytest.mark.parametrize('expr, expected', (
    (Number(5), 5),
    (Addition(Number(12), Number(34)), 46),
    (Subtraction(Number(100), Number(1)), 99),
    (Subtraction(one, Subtraction(two, three)), 2),
    (Subtraction(Subtraction(one, two), three), -4),
    (Addition(one, Subtraction(two, Addition(three, three))), -3),
))
def test_eval_expr(expr, expected) -> None:
    assert eval_expr(expr) == expected


def test_pretty_expr_ascii() -> None:
    assert pretty_expr_ascii(Number(7)) == '7'
    assert pretty_expr_ascii(Subtraction(one, Subtraction(two, three))) == '(1 - (2 - 3))'
    assert pretty_expr_ascii(Addition(Subtraction(one, two), three)) == '((1 - 2) + 3)'


@pytest.mark.parametrize('expr, expected', (
    (Addition(Number(0), one), one),
    (Addition(one, Number(0)), one),
    (Subtraction(one, Number(0)), one),
    (Subtraction(Number(0), one), Subtraction(Number(0), one)),
    (Addition(Number(0), Addition(Number(0), Subtraction(two, Number(0)))), two),
    # the inner subtraction only becomes an identity once its right side is simplified
    (Subtraction(three, Addition(Number(0), Number(0))), three),
    (Addition(one, two), Addition(one, two)),
))
def test_simplify(expr, expected) -> None:
    simplified = simplify(expr)
    assert simplified == expected
    assert eval_expr(simplified) == eval_expr(expr)


def deep_sum(n: int) -> Expression:
    """ 1 + (1 + (... + 1)) with n operands, built without recursion """
    expr: Expression = Number(1)
    for _ in range(n - 1):
        expr = Addition(Number(1), expr)
    return expr


def test_deep_expressions() -> None:
    n = 20000
    expr = deep_sum(n)
    assert eval_expr(expr) == n
    assert pretty_expr_ascii(expr).count('+') == n - 1

    with_zeros: Expression = Number(0)
    for _ in range(n):
        with_zeros = Subtraction(Addition(Number(0), with_zeros), Number(0))
    assert simplify(with_zeros) == Number(0)
    assert eval_expr(simplify(Addition(expr, with_zeros))) == n


def test_fold_expr() -> None:
    expr = Subtraction(one, Addition(two, three))
    assert fold_expr(expr, lambda v: 1, lambda l, r: l + r, lambda l, r: l + r) == 3
    assert fold_expr(expr, lambda v: [v], lambda l, r: l + r, lambda l, r: r + l) == [2, 3, 1]
