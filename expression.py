from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeAlias, TypeVar
from typing_extensions import assert_never


@dataclass(frozen=True)
class Number:
    value: int


@dataclass(frozen=True)
class Addition:
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Subtraction:
    left: Expression
    right: Expression


Expression: TypeAlias = Number | Addition | Subtraction

R = TypeVar('R')


def fold_expr(expr: Expression,
              number: Callable[[int], R],
              addition: Callable[[R, R], R],
              subtraction: Callable[[R, R], R]) -> R:
    """ bottom up fold over the tree

    uses an explicit stack rather than recursion, parsed expressions get as deep
    as their number of operators and would exhaust the python stack otherwise.
    """
    results: list[R] = []
    todo: list[tuple[Expression, bool]] = [(expr, False)]
    while todo:
        node, children_done = todo.pop()
        if isinstance(node, Number):
            results.append(number(node.value))
        elif not children_done:
            todo.append((node, True))
            todo.append((node.right, False))
            todo.append((node.left, False))
        else:
            right = results.pop()
            left = results.pop()
            if isinstance(node, Addition):
                results.append(addition(left, right))
            elif isinstance(node, Subtraction):
                results.append(subtraction(left, right))
            else:
                assert_never(node)
    assert len(results) == 1
    return results[0]


def eval_expr(expr: Expression) -> int:
    return fold_expr(expr,
                     lambda value: value,
                     lambda left, right: left + right,
                     lambda left, right: left - right)


def pretty_expr_ascii(expr: Expression) -> str:
    """ fully parenthesised, so that the shape of the tree is visible: (1 - (2 - 3)) """
    return fold_expr(expr,
                     str,
                     lambda left, right: f'({left} + {right})',
                     lambda left, right: f'({left} - {right})')


def is_zero(expr: Expression) -> bool:
    return isinstance(expr, Number) and expr.value == 0


def simplify(expr: Expression) -> Expression:
    """ drops additions and subtractions of 0

    children are simplified before their parent, so a single pass reaches the
    point where nothing changes anymore. The value of the expression is left
    untouched. Note that 0 - e is *not* e.
    """
    def addition(left: Expression, right: Expression) -> Expression:
        if is_zero(left):
            return right
        if is_zero(right):
            return left
        return Addition(left, right)

    def subtraction(left: Expression, right: Expression) -> Expression:
        if is_zero(right):
            return left
        return Subtraction(left, right)

    return fold_expr(expr, Number, addition, subtraction)
