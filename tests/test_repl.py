import io

import pytest

from liszp.__main__ import main, run_file
from liszp.repl import CONTINUATION_PROMPT, PROMPT, bracket_depth, has_open_string, run_repl
from liszp.types.errors import LiszpSyntaxError


def _session(interp, lines):
    """Run the REPL over `lines`; returns (stdout, stderr, prompts shown)."""
    remaining = iter(lines)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError

    out, err = io.StringIO(), io.StringIO()
    run_repl(interp, input_fn=fake_input, out=out, err=err)
    return out.getvalue(), err.getvalue(), prompts


@pytest.mark.parametrize(
    "source,depth",
    [("", 0), ("(a (b", 2), ("(a [b] {c})", 0), ("(a))", -1), ('("(" ")")', 0), ("(a # )\n", 1)],
)
def test_bracket_depth(source, depth):
    assert bracket_depth(source) == depth


def test_prints_results(interp):
    out, err, _ = _session(interp, ["(+ 1 2)", "'(a \"b\")", "exit"])
    assert "3\n" in out
    assert '(a "b")\n' in out
    assert err == ""


def test_nil_results_are_not_printed(interp):
    out, _, _ = _session(interp, ["(def x 1)", "x", "exit"])
    lines = out.splitlines()
    assert lines[1:] == ["1"]


def test_multi_line_input(interp):
    out, _, prompts = _session(interp, ["(+ 1", "   2)", "exit"])
    assert "3\n" in out
    assert prompts[:3] == [PROMPT, CONTINUATION_PROMPT, PROMPT]


def test_errors_are_reported_and_session_continues(interp):
    out, err, _ = _session(interp, ["(car 5)", "(+ 1 1)", "exit"])
    assert err.startswith("Liszp: function 'car'")
    assert "2\n" in out


def test_too_many_closing_brackets(interp):
    _, err, _ = _session(interp, ["1)", "exit"])
    assert "more closing brackets" in err


def test_definitions_persist_between_inputs(interp):
    out, _, _ = _session(interp, ["(defun sq (x) (* x x))", "(sq 7)", "exit"])
    assert "49\n" in out


def test_end_of_input_quits(interp):
    out, _, prompts = _session(interp, [])
    assert prompts == [PROMPT]
    assert out.endswith("\n")


def test_unterminated_string_is_a_syntax_error():
    with pytest.raises(LiszpSyntaxError):
        bracket_depth('"open')


def test_run_file(tmp_path, capsys):
    src = tmp_path / "prog.lzp"
    src.write_text("(defun double (x) (* x 2))\n(println (map '(1 2) double))\n", encoding="utf-8")
    assert run_file(str(src)) == 0
    assert capsys.readouterr().out == "(2 4)\n"


def test_run_file_reports_errors(tmp_path, capsys):
    src = tmp_path / "bad.lzp"
    src.write_text("(println 1)\n(max nil)\n(println 2)\n", encoding="utf-8")
    assert run_file(str(src)) == 1
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert captured.err.startswith("Liszp: max: cannot take the maximum")


def test_run_missing_file(tmp_path, capsys):
    assert run_file(str(tmp_path / "missing.lzp")) == 1
    assert "file not found" in capsys.readouterr().err


def test_main_accepts_at_most_one_file(capsys):
    assert main(["a.lzp", "b.lzp"]) == 2
    assert "at most one file" in capsys.readouterr().err


def test_main_runs_file(tmp_path, capsys):
    src = tmp_path / "ok.lzp"
    src.write_text("(println (len '(1 2 3)))", encoding="utf-8")
    assert main([str(src)]) == 0
    assert capsys.readouterr().out == "3\n"


@pytest.mark.parametrize(
    "source,open_",
    [('"open', True), ('"closed"', False), ('"a\\"', True), ('"a\\\\"', False), ('# "\n1', False), ('("#', True)],
)
def test_has_open_string(source, open_):
    assert has_open_string(source) is open_


def test_string_spanning_lines_continues(interp):
    _, err, prompts = _session(interp, ['(def s "a', 'b")', "exit"])
    assert err == ""
    assert prompts == [PROMPT, CONTINUATION_PROMPT, PROMPT]
    assert interp.eval("s") == "a\nb"
