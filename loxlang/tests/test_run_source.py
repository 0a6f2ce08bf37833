"""
Tests for the package-level run_source entry point.
"""
import pytest

import loxlang
from loxlang.exceptions import ParseError, ResolveError, ScanError


def test_run_source_runs_program(capsys):
    """
    run_source chains all stages and returns the interpreter.
    """
    interpreter = loxlang.run_source('var a = "hi"; print a;', "<test>")
    assert isinstance(interpreter, loxlang.Interpreter)
    assert interpreter.globals.get("a") == "hi"
    assert capsys.readouterr().out == "hi\n"


def test_run_source_reuses_interpreter(capsys):
    """
    Globals persist when the same interpreter is passed again.
    """
    interpreter = loxlang.run_source("var count = 1;")
    loxlang.run_source("count = count + 1; print count;", interpreter=interpreter)
    loxlang.run_source("fun show() { print count; } show();", interpreter=interpreter)
    assert capsys.readouterr().out == "2\n2\n"


@pytest.mark.parametrize("source, error", [
    ('print "open;', ScanError),
    ("print 1", ParseError),
    ("return 1;", ResolveError),
])
def test_static_errors_prevent_execution(capsys, source, error):
    """
    Scan, parse and resolve errors stop the program before anything runs.
    """
    with pytest.raises(error):
        loxlang.run_source('print "before";\n' + source)
    assert capsys.readouterr().out == ""
