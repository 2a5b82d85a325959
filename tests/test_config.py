import logging
import sys

import pytest

from liszp import config
from liszp.interpreter import Interpreter


def test_default_prelude_root_holds_std():
    root = config.get_prelude_root()
    assert (root / "std.lisp").is_file()


def test_prelude_path_from_environment(monkeypatch, tmp_path):
    (tmp_path / "std.lisp").write_text("(def answer 42)", encoding="utf-8")
    monkeypatch.setenv("LISZP_PRELUDE_PATH", str(tmp_path))
    assert config.get_prelude_root() == tmp_path
    itp = Interpreter()
    assert itp.eval("answer") == 42


def test_prelude_path_may_name_a_file(monkeypatch, tmp_path):
    std = tmp_path / "std.lisp"
    std.write_text("", encoding="utf-8")
    monkeypatch.setenv("LISZP_PRELUDE_PATH", str(std))
    assert config.get_prelude_root() == tmp_path


def test_missing_prelude(monkeypatch, tmp_path):
    monkeypatch.setenv("LISZP_PRELUDE_PATH", str(tmp_path))
    with pytest.raises(FileNotFoundError):
        Interpreter()
    # an explicit prelude does not touch the path
    assert Interpreter(prelude="(def y 1)").eval("y") == 1


def test_recursion_limit(monkeypatch):
    monkeypatch.delenv("LISZP_RECURSION_LIMIT", raising=False)
    assert config.get_recursion_limit() == 10_000
    monkeypatch.setenv("LISZP_RECURSION_LIMIT", "20000")
    assert config.get_recursion_limit() == 20_000


def test_interpreter_raises_recursion_limit(monkeypatch):
    monkeypatch.delenv("LISZP_RECURSION_LIMIT", raising=False)
    Interpreter(prelude=None)
    assert sys.getrecursionlimit() >= config.get_recursion_limit()


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_recursion_limit(monkeypatch, raw):
    monkeypatch.setenv("LISZP_RECURSION_LIMIT", raw)
    with pytest.raises(ValueError):
        config.get_recursion_limit()


@pytest.mark.parametrize(
    "raw,level",
    [(None, logging.WARNING), ("debug", logging.DEBUG), ("INFO", logging.INFO), ("15", 15)],
)
def test_log_level(monkeypatch, raw, level):
    if raw is None:
        monkeypatch.delenv("LISZP_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("LISZP_LOG_LEVEL", raw)
    assert config.get_log_level() == level


def test_bad_log_level(monkeypatch):
    monkeypatch.setenv("LISZP_LOG_LEVEL", "loud")
    with pytest.raises(ValueError):
        config.get_log_level()


def test_prelude_loading_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="liszp")
    Interpreter()
    assert "loading prelude" in caplog.text
    assert "std.lisp" in caplog.text
