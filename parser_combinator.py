"""
A small parser combinator library.

A parser is a value wrapping a pure function from the input string to a
ParseResult: either a Success holding the parsed value and the unconsumed
remainder, or a ParseError. Failures are plain values, they are never raised.

Combinators close over existing parsers and return new ones, nothing is ever
mutated. Every combinator that fails reports the failure against the input it
was given, so that an alternative tried afterwards starts from a clean slate.
"""
from __future__ import annotations

import re
import typing as tp
from dataclasses import dataclass
from typing_extensions import NamedTuple


T = tp.TypeVar('T')
K = tp.TypeVar('K')
V = tp.TypeVar('V')
S = tp.TypeVar('S')


class Success(NamedTuple, tp.Generic[T]):
    value: T
    remainder: str
    """ the unconsumed suffix of the input """


@dataclass(frozen=True)
class ParseError:
    """ not a tuple on purpose, a failure can't be unpacked as (value, remainder) """
    msg: str
    remainder: str
    """ the input the failing parser was applied to, nothing is consumed on failure """


ParseResult: tp.TypeAlias = Success[T] | ParseError


def is_success(result: ParseResult[T]) -> bool:
    return isinstance(result, Success)


def is_failure(result: ParseResult[T]) -> bool:
    return isinstance(result, ParseError)


def map_result(result: ParseResult[T], f: tp.Callable[[T], K]) -> ParseResult[K]:
    if isinstance(result, ParseError):
        return result
    (val, s) = result
    return Success(f(val), s)


def _fail_at(err: ParseError, s: str) -> ParseError:
    """ re-anchors a failure coming from a nested parser on the input of the enclosing one """
    if err.remainder == s:
        return err
    return ParseError(err.msg, s)


def _show(s: str) -> str:
    if len(s) == 0:
        return "EOF"
    return repr(s[:10] + "..." if len(s) > 10 else s)


@dataclass(frozen=True)
class Parser(tp.Generic[T]):
    fn: tp.Callable[[str], ParseResult[T]]

    def __call__(self, s: str) -> ParseResult[T]:
        return self.fn(s)

    def map(self, f: tp.Callable[[T], K]) -> Parser[K]:
        return pmap(self, f)

    def and_then(self, other: Parser[K]) -> Parser[tp.Tuple[T, K]]:
        return compose(self, other)

    def or_else(self, other: Parser[K]) -> Parser[T | K]:
        return choice([self, other])

    def many(self) -> Parser[list[T]]:
        return many(self)

    def ap(self: Parser[tp.Callable[[K], V]], value: Parser[K]) -> Parser[V]:
        return ap(self, value)

    def __add__(self, other: Parser[K]) -> Parser[tp.Tuple[T, K]]:
        return compose(self, other)

    def __or__(self, other: Parser[K]) -> Parser[T | K]:
        return choice([self, other])


def parse(p: Parser[T], s: str) -> ParseResult[T]:
    return p(s)


def parse_all(p: Parser[T], s: str) -> ParseResult[T]:
    """ like parse, but the whole input has to be consumed """
    maybeVal = p(s)
    if isinstance(maybeVal, ParseError):
        return maybeVal
    (val, rest) = maybeVal
    if len(rest) != 0:
        return ParseError(f"unexpected input, stopped at remainder {rest!r}", s)
    return Success(val, rest)


def pmap(p: Parser[T], f: tp.Callable[[T], K]) -> Parser[K]:
    def fn(s: str) -> ParseResult[K]:
        maybeVal = p(s)
        if isinstance(maybeVal, ParseError):
            return maybeVal
        (val, s) = maybeVal
        newVal = f(val)
        return Success(newVal, s)
    return Parser(fn)


def pure(value: T) -> Parser[T]:
    """ always succeeds with value, consuming nothing """
    def fn(s: str) -> ParseResult[T]:
        return Success(value, s)
    return Parser(fn)


def lazy(thunk: tp.Callable[[], Parser[T]]) -> Parser[T]:
    """ defers building a parser until it is first applied, needed for recursive grammars """
    cache: list[Parser[T]] = []

    def fn(s: str) -> ParseResult[T]:
        if not cache:
            cache.append(thunk())
        return cache[0](s)
    return Parser(fn)


def char(c: str) -> Parser[str]:
    if len(c) != 1:
        raise ValueError(f"char expects a single character, got {c!r}")

    def fn(s: str) -> ParseResult[str]:
        if len(s) < 1:
            return ParseError(f"expected {c} but received EOF", s)
        elif s[0] != c:
            return ParseError(f"expected {c} but received {s[0]}", s)
        return Success(s[0], s[1:])
    return Parser(fn)


def digit() -> Parser[int]:
    def fn(s: str) -> ParseResult[int]:
        if len(s) < 1:
            return ParseError("expected digit but got EOF", s)
        if not s[0].isdigit():
            return ParseError(f"expected digit but got {s[0]}", s)
        return Success(int(s[0]), s[1:])
    return Parser(fn)


def string(expected: str) -> Parser[str]:
    def fn(inp: str) -> ParseResult[str]:
        if not inp.startswith(expected):
            return ParseError(f"expected {expected} but got {_show(inp)}", inp)
        return Success(expected, inp[len(expected):])
    return Parser(fn)


def regex(pattern: str | re.Pattern[str]) -> Parser[str]:
    """ matches pattern anchored at the start of the input, producing the matched text """
    compiled = re.compile(pattern)

    def fn(s: str) -> ParseResult[str]:
        m = compiled.match(s)
        if m is None:
            return ParseError(f"expected pattern {compiled.pattern} but got {_show(s)}", s)
        matched = m.group()
        return Success(matched, s[len(matched):])
    return Parser(fn)


def end_of_input() -> Parser[None]:
    def fn(s: str) -> ParseResult[None]:
        if len(s) != 0:
            return ParseError(f"expected EOF but got {_show(s)}", s)
        return Success(None, s)
    return Parser(fn)


def compose(p1: Parser[T], p2: Parser[K]) -> Parser[tp.Tuple[T, K]]:
    def fn(s: str) -> ParseResult[tp.Tuple[T, K]]:
        maybeVal1 = p1(s)
        if isinstance(maybeVal1, ParseError):
            return _fail_at(maybeVal1, s)
        (t, rest) = maybeVal1

        maybeVal2 = p2(rest)
        if isinstance(maybeVal2, ParseError):
            return _fail_at(maybeVal2, s)

        (k, rest) = maybeVal2
        return Success((t, k), rest)
    return Parser(fn)


def choice(ps: tp.Sequence[Parser[T]]) -> Parser[T]:
    """ ordered choice, the first alternative that succeeds wins. If they all fail the first error is reported """
    if len(ps) == 0:
        raise ValueError("choice needs at least one alternative")

    def fn(s: str) -> ParseResult[T]:
        firstError: None | ParseError = None
        for p in ps:
            maybeVal = p(s)
            if not isinstance(maybeVal, ParseError):
                return maybeVal
            if firstError is None:
                firstError = maybeVal
        # reaching here implies this is always true
        assert firstError is not None
        return _fail_at(firstError, s)
    return Parser(fn)


def ap(pf: Parser[tp.Callable[[T], K]], pv: Parser[T]) -> Parser[K]:
    """ runs pf, then pv on what's left, and applies the function to the value """
    def fn(s: str) -> ParseResult[K]:
        maybeF = pf(s)
        if isinstance(maybeF, ParseError):
            return _fail_at(maybeF, s)
        (f, rest) = maybeF

        maybeVal = pv(rest)
        if isinstance(maybeVal, ParseError):
            return _fail_at(maybeVal, s)
        (val, rest) = maybeVal
        return Success(f(val), rest)
    return Parser(fn)


def lift(f: tp.Callable[..., K], *ps: Parser[tp.Any]) -> Parser[K]:
    """ runs every parser in ps in order and combines their values with f

    lift(f, a, b) behaves like ap(ap(pmap(a, curried_f), b)) without having to curry f
    """
    def fn(s: str) -> ParseResult[K]:
        args: list[tp.Any] = []
        rest = s
        for p in ps:
            maybeVal = p(rest)
            if isinstance(maybeVal, ParseError):
                return _fail_at(maybeVal, s)
            (val, rest) = maybeVal
            args.append(val)
        return Success(f(*args), rest)
    return Parser(fn)


def between(lhs: Parser[K], p: Parser[V], rhs: Parser[T]) -> Parser[V]:
    """consumes lhs, parses p and then consumes rhs, only the value of p is kept"""
    return lift(lambda _l, val, _r: val, lhs, p, rhs)


def many(p: Parser[T]) -> Parser[list[T]]:
    """consumes p repeatedly until an error occurs, the string will be processed up until the last successful parse

    never fails. A success of p that consumes nothing ends the repetition, it would match forever otherwise.
    """
    def fn(s: str) -> ParseResult[list[T]]:
        res: list[T] = []
        while True:
            maybeVal = p(s)
            if isinstance(maybeVal, ParseError):
                return Success(res, s)
            (val, rest) = maybeVal
            res.append(val)
            if len(rest) == len(s):
                return Success(res, rest)
            s = rest
    return Parser(fn)


def many1(p: Parser[T]) -> Parser[list[T]]:
    def fn(s: str) -> ParseResult[list[T]]:
        maybePs = many(p)(s)
        assert not isinstance(maybePs, ParseError)
        (ps, rest) = maybePs
        if len(ps) == 0:
            first = p(s)
            reason = first.msg if isinstance(first, ParseError) else "no match"
            return ParseError(f"parser expected at least one element: {reason}", s)
        return Success(ps, rest)
    return Parser(fn)


def sep_by(p: Parser[V], sep: Parser[S]) -> Parser[list[V]]:
    """ zero or more p separated by sep, a trailing separator is left unconsumed

    For example [1,2,3] could be parsed with between(char('['), sep_by(integer(), char(',')), char(']'))
    """
    def fn(s: str) -> ParseResult[list[V]]:
        res: list[V] = []
        maybeVal = p(s)
        if isinstance(maybeVal, ParseError):
            return Success(res, s)
        (val, s) = maybeVal
        res.append(val)
        while True:
            maybeNext = compose(sep, p)(s)
            if isinstance(maybeNext, ParseError):
                return Success(res, s)
            ((_, val), s) = maybeNext
            res.append(val)
    return Parser(fn)


def integer() -> Parser[int]:
    def to_int(ds: list[int]) -> int:
        summed = 0
        for power, curr_digit in enumerate(reversed(ds)):
            summed += curr_digit*(10**power)
        return summed
    return pmap(many1(digit()), to_int)
