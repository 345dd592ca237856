"""
Parser for sums and differences of natural numbers, built with parser_combinator.py.

    expression  := addition | subtraction | digits
    addition    := digits "+" expression
    subtraction := digits "-" expression
    digits      := [0-9]+

The recursive call to expression sits on the right of the operator, so the
grammar is right associative: 1-2-3 parses as 1-(2-3) and evaluates to 2, not
to -4 as in usual arithmetic. This is kept on purpose, changing it would change
the value of existing inputs. No whitespace is allowed anywhere.

parse_expression accepts the same language as the grammar above but reads it
as digits (op digits)* with many, and folds the operands from the right into
the same tree. Following the recursion literally costs a few python frames per
operator and long sums would hit the recursion limit.
"""
import typing as tp

import parser_combinator as pc
from expression import Addition, Expression, Number, Subtraction, eval_expr


operators: dict[str, tp.Callable[[Expression, Expression], Expression]] = {
    '+': Addition,
    '-': Subtraction,
}


class ExpressionSyntaxError(ValueError):
    def __init__(self, text: str, error: pc.ParseError) -> None:
        super().__init__(
            f"input {text!r} did not match the expression grammar: {error.msg}")
        self.text = text
        self.error = error


def parse_digits() -> pc.Parser[str]:
    return pc.regex(r"[0-9]+")


def parse_number() -> pc.Parser[Expression]:
    return pc.pmap(parse_digits(), lambda ds: Number(int(ds)))


def parse_operator() -> pc.Parser[str]:
    return pc.choice([pc.string(op) for op in operators])


def parse_addition() -> pc.Parser[Expression]:
    return pc.lift(
        lambda left, _, right: Addition(left, right),
        parse_number(),
        pc.string("+"),
        parse_expression(),
    )


def parse_subtraction() -> pc.Parser[Expression]:
    return pc.lift(
        lambda left, _, right: Subtraction(left, right),
        parse_number(),
        pc.string("-"),
        parse_expression(),
    )


def fold_right(first: Expression, rest: list[tp.Tuple[str, Expression]]) -> Expression:
    """ 1, [(-, 2), (-, 3)] becomes 1 - (2 - 3) """
    operands = [first] + [operand for (_, operand) in rest]
    expr = operands[-1]
    for i in reversed(range(len(rest))):
        (op, _) = rest[i]
        expr = operators[op](operands[i], expr)
    return expr


def parse_expression() -> pc.Parser[Expression]:
    return pc.lift(
        fold_right,
        parse_number(),
        pc.many(pc.compose(parse_operator(), parse_number())),
    )


def evaluate(text: str) -> int:
    """ parses the whole of text as an expression and evaluates it, raises ExpressionSyntaxError otherwise """
    maybeExpr = pc.parse_all(parse_expression(), text)
    if isinstance(maybeExpr, pc.ParseError):
        raise ExpressionSyntaxError(text, maybeExpr)
    (expr, _) = maybeExpr
    return eval_expr(expr)
