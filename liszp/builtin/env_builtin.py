"""Built-in functions for the Liszp runtime environment.

This module defines the primitive procedures the standard library is built
from: pair construction and access, predicates, equality, arithmetic,
comparison, boolean logic, evaluation, and the two abort primitives `panic`
and `error`. Every builtin receives the caller's environment and the list of
already-evaluated arguments.
"""
from __future__ import annotations

import math
from typing import Callable

from liszp import LispValue
from liszp.printer import to_string
from liszp.types.environment import Environment
from liszp.types.errors import LiszpArityError, LiszpPanic, LiszpTypeError, LiszpUserError
from liszp.types.nil import Nil
from liszp.types.pair import Pair, from_iterable
from liszp.types.symbol import Symbol
from liszp.evaluation.evaluator import evaluate
from liszp.evaluation.quasiquote import quasiquote_rec


def _expect_args(name: str, expr: list[LispValue], count: int) -> None:
    if len(expr) != count:
        plural = "argument" if count == 1 else "arguments"
        raise LiszpArityError(f"function '{name}' takes exactly {count} {plural}, received {len(expr)}")


def _is_number(x: LispValue) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality: pairs element-wise, atoms by type and value."""
    while isinstance(a, Pair) and isinstance(b, Pair):
        if a is b:
            return True
        if not is_equal(a.car, b.car):
            return False
        a, b = a.cdr, b.cdr
    if type(a) is not type(b):
        return False
    return a == b


# -------------------------------
# Pairs
# -------------------------------
def cons(env: Environment, expr: list[LispValue]) -> Pair:
    """Create a new pair (head . tail)."""
    _expect_args("cons", expr, 2)
    return Pair(expr[0], expr[1])


def car(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the head of a pair; anything else is a type error."""
    _expect_args("car", expr, 1)
    xs = expr[0]
    if not isinstance(xs, Pair):
        raise LiszpTypeError(f"function 'car' expected to receive cons pair, got {to_string(xs, True)}")
    return xs.car


def cdr(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the tail of a pair; anything else is a type error."""
    _expect_args("cdr", expr, 1)
    xs = expr[0]
    if not isinstance(xs, Pair):
        raise LiszpTypeError(f"function 'cdr' expected to receive cons pair, got {to_string(xs, True)}")
    return xs.cdr


def list_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """Construct a list from the provided arguments."""
    return from_iterable(expr)


# -------------------------------
# Predicates and equality
# -------------------------------
def _predicate(name: str, test: Callable[[LispValue], bool]):
    def check(env: Environment, expr: list[LispValue]) -> bool:
        _expect_args(name, expr, 1)
        return test(expr[0])
    check.__name__ = name
    check.__doc__ = f"({name} x): type predicate."
    return check


is_cons = _predicate("cons?", lambda x: isinstance(x, Pair))
is_nil = _predicate("nil?", lambda x: x is Nil)
is_bool = _predicate("bool?", lambda x: isinstance(x, bool))
is_int = _predicate("int?", lambda x: isinstance(x, int) and not isinstance(x, bool))
is_float = _predicate("float?", lambda x: isinstance(x, float))
is_str = _predicate("str?", lambda x: isinstance(x, str))
is_name = _predicate("name?", lambda x: isinstance(x, Symbol))


def equals(env: Environment, expr: list[LispValue]) -> bool:
    """(equals? x y): structural equality of any two values."""
    _expect_args("equals?", expr, 2)
    return is_equal(expr[0], expr[1])


# -------------------------------
# Evaluation and aborts
# -------------------------------
def eval_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(eval form): evaluate a form in the caller's environment."""
    _expect_args("eval", expr, 1)
    return evaluate(expr[0], env)


def quasiquote_rec_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(quasiquote-rec template): rebuild a template, evaluating unquotes in the caller's environment."""
    _expect_args("quasiquote-rec", expr, 1)
    return quasiquote_rec(expr[0], env, evaluate)


def panic(env: Environment, expr: list[LispValue]) -> LispValue:
    """(panic msg): abort evaluation with an unrecoverable failure."""
    _expect_args("panic", expr, 1)
    raise LiszpPanic(to_string(expr[0]))


def error(env: Environment, expr: list[LispValue]) -> LispValue:
    """(error msg): abort evaluation with a domain error."""
    _expect_args("error", expr, 1)
    raise LiszpUserError(to_string(expr[0]))


def print_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(print x): write x without a newline and return it."""
    _expect_args("print", expr, 1)
    print(to_string(expr[0]), end="", flush=True)
    return expr[0]


def println_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    """(println x): write x followed by a newline and return it."""
    _expect_args("println", expr, 1)
    print(to_string(expr[0]))
    return expr[0]


# -------------------------------
# Arithmetic
# -------------------------------
def _numbers(op: str, expr: list[LispValue]) -> list[LispValue]:
    if not expr:
        raise LiszpArityError(f"'{op}' expression takes at least 1 argument")
    for x in expr:
        if not _is_number(x):
            raise LiszpTypeError(f"'{op}' expression takes numeric arguments, got {to_string(x, True)}")
    return expr


def _int_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments."""
    return sum(_numbers("+", expr))


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    nums = _numbers("-", expr)
    if len(nums) == 1:
        return -nums[0]
    result = nums[0]
    for x in nums[1:]:
        result -= x
    return result


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the product of all arguments."""
    return math.prod(_numbers("*", expr))


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right. Integers divide exactly, truncating toward zero."""
    nums = _numbers("/", expr)
    result = nums[0]
    for x in nums[1:]:
        if x == 0:
            raise LiszpUserError("division by zero")
        if isinstance(result, int) and isinstance(x, int):
            result = _int_div(result, x)
        else:
            result = result / x
    return result


def mod(env: Environment, expr: list[LispValue]) -> LispValue:
    """(% n d): remainder with the sign of the dividend. Mixed int/float operands are rejected."""
    _expect_args("%", expr, 2)
    n, d = _numbers("%", expr)
    if isinstance(n, int) != isinstance(d, int):
        raise LiszpTypeError("cannot take the modulo of mixed integer and float arguments")
    if d == 0:
        raise LiszpUserError("modulo by zero")
    if isinstance(n, int):
        return n - d * _int_div(n, d)
    return math.fmod(n, d)


# -------------------------------
# Comparison
# -------------------------------
def _comparison(op: str, test: Callable[[LispValue, LispValue], bool]):
    def compare(env: Environment, expr: list[LispValue]) -> bool:
        if len(expr) != 2:
            raise LiszpArityError(f"{op} expressions take exactly 2 values")
        x, y = expr
        if not (_is_number(x) and _is_number(y)):
            raise LiszpTypeError(f"{op} expressions take two numeric values")
        return test(x, y)
    compare.__name__ = op
    return compare


lt = _comparison("<", lambda a, b: a < b)
gt = _comparison(">", lambda a, b: a > b)
lte = _comparison("<=", lambda a, b: a <= b)
gte = _comparison(">=", lambda a, b: a >= b)
num_eq = _comparison("==", lambda a, b: a == b)
num_ne = _comparison("!=", lambda a, b: a != b)


# -------------------------------
# Boolean logic
# -------------------------------
def _booleans(op: str, expr: list[LispValue], count: int) -> list[bool]:
    if len(expr) != count:
        plural = "argument" if count == 1 else "arguments"
        raise LiszpArityError(f"{op} expressions take exactly {count} {plural}")
    for x in expr:
        if not isinstance(x, bool):
            raise LiszpTypeError(f"{op} expressions take boolean arguments")
    return expr


def logical_not(env: Environment, expr: list[LispValue]) -> bool:
    (x,) = _booleans("not", expr, 1)
    return not x


def logical_and(env: Environment, expr: list[LispValue]) -> bool:
    x, y = _booleans("and", expr, 2)
    return x and y


def logical_or(env: Environment, expr: list[LispValue]) -> bool:
    x, y = _booleans("or", expr, 2)
    return x or y


def logical_xor(env: Environment, expr: list[LispValue]) -> bool:
    x, y = _booleans("xor", expr, 2)
    return x != y


def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update(
        {
            Symbol("cons"): cons,
            Symbol("car"): car,
            Symbol("cdr"): cdr,
            Symbol("list"): list_builtin,
            Symbol("cons?"): is_cons,
            Symbol("nil?"): is_nil,
            Symbol("bool?"): is_bool,
            Symbol("int?"): is_int,
            Symbol("float?"): is_float,
            Symbol("str?"): is_str,
            Symbol("name?"): is_name,
            Symbol("equals?"): equals,
            Symbol("eval"): eval_builtin,
            Symbol("quasiquote-rec"): quasiquote_rec_builtin,
            Symbol("panic"): panic,
            Symbol("error"): error,
            Symbol("print"): print_builtin,
            Symbol("println"): println_builtin,
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("%"): mod,
            Symbol("<"): lt,
            Symbol(">"): gt,
            Symbol("<="): lte,
            Symbol(">="): gte,
            Symbol("=="): num_eq,
            Symbol("!="): num_ne,
            Symbol("not"): logical_not,
            Symbol("and"): logical_and,
            Symbol("or"): logical_or,
            Symbol("xor"): logical_xor,
        }
    )
