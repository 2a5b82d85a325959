import pytest
from hypothesis import given, strategies as st

from liszp.evaluation.evaluator import evaluate
from liszp.printer import to_string
from liszp.reader.parser import read
from liszp.types.errors import LiszpArityError, LiszpPanic, LiszpUserError
from liszp.types.lambda_fn import Lambda
from liszp.types.macro_fn import Macro
from liszp.types.nil import Nil
from liszp.types.pair import Pair, from_iterable, lisp_list, to_list
from liszp.types.symbol import Symbol


def form(source):
    return read(source)[0]


@pytest.mark.parametrize("name", ["quasiquote", "unquote", "defun", "let", "cond"])
def test_std_macros_are_bound(std_interp, name):
    assert isinstance(std_interp.env.lookup(Symbol(name)), Macro)


@pytest.mark.parametrize(
    "name", ["map", "filter", "foldr", "len", "max", "range", "partition"]
)
def test_std_functions_are_bound(std_interp, name):
    fn = std_interp.env.lookup(Symbol(name))
    assert isinstance(fn, Lambda)
    assert fn.name == name


# -------------------------------
# defun
# -------------------------------
def test_defun(interp):
    assert interp.eval("(defun inc (x) (+ x 1))") is Nil
    assert interp.eval("(inc 4)") == 5
    interp.eval("(defun add (a b) (+ a b))")
    assert interp.eval("(add 2 3)") == 5
    interp.eval("(defun sum-all (@ xs) (foldr + 0 xs))")
    assert interp.eval("(sum-all 1 2 3)") == 6


def test_defun_expansion(std_interp):
    assert std_interp.eval("(macroexpand-1 '(defun inc (x) (+ x 1)))") == form(
        "(def inc (lambda (x) (+ x 1)))"
    )


def test_defun_arity(std_interp):
    with pytest.raises(LiszpArityError):
        std_interp.eval("(defun f (x))")


# -------------------------------
# let
# -------------------------------
def test_let(std_interp):
    assert std_interp.eval("(let ([x 1] [y 2]) (+ x y))") == 3
    assert std_interp.eval("(let ((x 1)) x)") == 1
    assert std_interp.eval("(let () 5)") == 5


def test_let_is_sequential(std_interp):
    assert std_interp.eval("(let ([x 1] [y (+ x 1)]) (* y 10))") == 20


def test_let_shadows_without_touching_globals(interp):
    interp.eval("(def x 10)")
    assert interp.eval("(let ([x 1]) x)") == 1
    assert interp.eval("x") == 10


# -------------------------------
# cond
# -------------------------------
def test_cond(std_interp):
    assert std_interp.eval("(cond true 1)") == 1
    assert std_interp.eval("(cond false 1 true 2)") == 2
    assert std_interp.eval("(cond (> 1 2) 'a (< 1 2) 'b true 'c)") == Symbol("b")


def test_cond_evaluates_lazily(std_interp):
    assert std_interp.eval("(cond true 1 (car 5) 2)") == 1
    assert std_interp.eval("(cond false (car 5) true 2)") == 2


def test_cond_without_matching_branch(std_interp):
    with pytest.raises(LiszpUserError, match="no branch satisfied"):
        std_interp.eval("(cond false 1)")
    with pytest.raises(LiszpUserError, match="no branch satisfied"):
        std_interp.eval("(cond)")


@pytest.mark.parametrize("source", ["(cond true)", "(cond true 1 false)"])
def test_cond_with_odd_case_list(std_interp, source):
    with pytest.raises(LiszpPanic, match="even number"):
        std_interp.eval(source)


def test_cond_odd_case_list_fails_at_expansion(std_interp):
    with pytest.raises(LiszpPanic):
        std_interp.eval("(macroexpand-1 '(cond true 1 false))")


def test_cond_expansion(std_interp):
    assert std_interp.eval("(macroexpand-1 '(cond a 1 b 2))") == form("(if a 1 (cond b 2))")


# -------------------------------
# list functions
# -------------------------------
def test_map(std_interp):
    assert std_interp.eval("(map '(1 2 3) (lambda x (+ x 1)))") == lisp_list(2, 3, 4)
    assert std_interp.eval("(map nil (lambda x x))") is Nil


def test_filter(std_interp):
    assert std_interp.eval("(filter '(1 2 3 4) (lambda x (> x 2)))") == lisp_list(3, 4)
    assert std_interp.eval("(filter '(1 2) (lambda x false))") is Nil


def test_foldr(std_interp):
    assert std_interp.eval("(foldr cons '() '(1 2 3))") == lisp_list(1, 2, 3)
    assert std_interp.eval("(foldr + 0 '(1 2 3 4))") == 10
    # right fold: 1 - (2 - (3 - 0))
    assert std_interp.eval("(foldr - 0 '(1 2 3))") == 2


def test_len(std_interp):
    assert std_interp.eval("(len '(1 2 3))") == 3
    assert std_interp.eval("(len nil)") == 0


def test_max(std_interp):
    assert std_interp.eval("(max '(3 9 2))") == 9
    assert std_interp.eval("(max '(1.5 -2))") == 1.5
    assert std_interp.eval("(max '(4))") == 4


def test_max_of_empty_list(std_interp):
    with pytest.raises(LiszpUserError, match="empty list"):
        std_interp.eval("(max nil)")


def test_range(std_interp):
    assert std_interp.eval("(range 0 5 1)") == lisp_list(0, 1, 2, 3, 4)
    assert std_interp.eval("(range 0 5 2)") == lisp_list(0, 2, 4)
    assert std_interp.eval("(range 5 0 -2)") == lisp_list(5, 3, 1)
    assert std_interp.eval("(range 3 3 1)") is Nil
    assert std_interp.eval("(range 5 0 1)") is Nil


def test_range_with_zero_step(std_interp):
    with pytest.raises(LiszpUserError):
        std_interp.eval("(range 0 5 0)")


def test_partition(std_interp):
    result = std_interp.eval("(partition (lambda x (> x 2)) '(1 2 3 4))")
    assert result == Pair(lisp_list(3, 4), lisp_list(1, 2))
    assert to_string(result) == "((3 4) 1 2)"


@pytest.mark.parametrize(
    "source",
    [
        "(map 5 (lambda x x))",
        "(filter 5 (lambda x true))",
        "(foldr + 0 5)",
        "(len 5)",
        "(len '(1 . 2))",
        "(max 5)",
        "(partition (lambda x true) 5)",
    ],
)
def test_list_functions_reject_non_lists(std_interp, source):
    with pytest.raises(LiszpPanic):
        std_interp.eval(source)


def test_len_error_message(std_interp):
    with pytest.raises(LiszpPanic) as excinfo:
        std_interp.eval("(len 5)")
    assert str(excinfo.value) == "len: expected a list"


def test_moderately_long_lists(std_interp):
    assert std_interp.eval("(len (range 0 100 1))") == 100
    assert std_interp.eval("(foldr + 0 (range 0 100 1))") == 4950
    assert std_interp.eval("(len (range 0 400 1))") == 400


# -------------------------------
# Properties against Python
# -------------------------------
ints = st.lists(st.integers(min_value=-50, max_value=50), max_size=15)


def call(interp, name, *args):
    return evaluate(lisp_list(Symbol(name), *args), interp.env)


def quoted(xs):
    return lisp_list(Symbol("quote"), from_iterable(xs))


def double():
    return form("(lambda x (* x 2))")


def positive():
    return form("(lambda x (> x 0))")


@given(ints)
def test_list_functions_agree_with_python(std_interp, xs):
    assert call(std_interp, "len", quoted(xs)) == len(xs)
    assert to_list(call(std_interp, "map", quoted(xs), double())) == [x * 2 for x in xs]
    assert to_list(call(std_interp, "filter", quoted(xs), positive())) == [x for x in xs if x > 0]

    parts = call(std_interp, "partition", positive(), quoted(xs))
    assert to_list(parts.car) == [x for x in xs if x > 0]
    assert to_list(parts.cdr) == [x for x in xs if not x > 0]

    if xs:
        assert call(std_interp, "max", quoted(xs)) == max(xs)


@given(
    st.integers(min_value=-20, max_value=20),
    st.integers(min_value=-20, max_value=20),
    st.integers(min_value=-5, max_value=5).filter(lambda n: n != 0),
)
def test_range_agrees_with_python(std_interp, start, stop, step):
    assert to_list(call(std_interp, "range", start, stop, step)) == list(range(start, stop, step))
