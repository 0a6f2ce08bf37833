"""
Tests for arithmetic, comparison, equality and logical operators in Lox.
"""
from decimal import Decimal

import pytest

from loxlang.exceptions import LoxRuntimeError

from loxlang.tests.utils import output_lines, run_source


def test_decimal_arithmetic_is_exact(capsys):
    """
    Numbers are decimals, so 0.1 + 0.2 is exactly 0.3.
    """
    run_source("print 0.1 + 0.2 == 0.3;\nprint 0.1 + 0.2;")
    assert output_lines(capsys) == ['true', '0.3']


def test_number_printing(capsys):
    """
    Whole numbers print without a fractional part.
    """
    run_source(
        "print 1 + 2;\n"
        "print 10 / 4;\n"
        "print 6 / 2;\n"
        "print 2 * 3.5;\n"
        "print -4 - 1;\n"
    )
    assert output_lines(capsys) == ['3', '2.5', '3', '7.0', '-5']


def test_precedence_and_grouping(capsys):
    """
    Multiplication binds tighter than addition; grouping overrides it.
    """
    run_source("print 1 + 2 * 3;\nprint (1 + 2) * 3;\nprint 10 - 4 - 3;")
    assert output_lines(capsys) == ['7', '9', '3']


def test_numbers_are_decimals():
    """
    Values stored in the environment are Decimal instances.
    """
    interpreter = run_source("var x = 1.5 * 2;")
    value = interpreter.globals.get("x")
    assert isinstance(value, Decimal)
    assert value == Decimal("3")


def test_string_concatenation(capsys):
    """
    `+` joins two strings.
    """
    run_source('var a = "foo"; print a + "bar";')
    assert output_lines(capsys) == ['foobar']


@pytest.mark.parametrize("source", [
    'print "a" + 1;',
    'print 1 + "a";',
    'print "a" - "b";',
    'print nil * 2;',
    'print true < 1;',
])
def test_binary_type_mismatch(source):
    """
    Operators outside their domain raise a runtime error.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source(source)
    assert "Unsupported types for binary operation" in str(excinfo.value)


def test_division_by_zero():
    """
    Dividing by zero is a runtime error.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source("print 1 / 0;")
    assert "Division by zero." in str(excinfo.value)


def test_unary_minus_needs_number():
    """
    Negating a non-number fails.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source('print -"a";')
    assert "Operand must be a number for unary '-'" in str(excinfo.value)


def test_comparisons(capsys):
    """
    Ordering operators yield booleans.
    """
    run_source(
        "print 1 < 2;\n"
        "print 2 <= 2;\n"
        "print 3 > 4;\n"
        "print 4 >= 5;\n"
    )
    assert output_lines(capsys) == ['true', 'true', 'false', 'false']


def test_equality_rules(capsys):
    """
    Equality never crosses kinds and nil equals only nil.
    """
    run_source(
        "print nil == nil;\n"
        "print nil == false;\n"
        "print true == 1;\n"
        'print "1" == 1;\n'
        'print "a" == "a";\n'
        "print 1 == 1.0;\n"
        "print 1 != 2;\n"
    )
    assert output_lines(capsys) == ['true', 'false', 'false', 'false', 'true', 'true', 'true']


def test_truthiness(capsys):
    """
    Only nil and false are falsy.
    """
    run_source(
        "print !nil;\n"
        "print !false;\n"
        "print !0;\n"
        'print !"";\n'
        "print !!true;\n"
    )
    assert output_lines(capsys) == ['true', 'true', 'false', 'false', 'true']


def test_logical_operators_return_operands(capsys):
    """
    `and` and `or` return one of their operands rather than a boolean.
    """
    run_source(
        'print nil or "default";\n'
        'print "first" or "second";\n'
        "print nil and 1;\n"
        "print 1 and 2;\n"
    )
    assert output_lines(capsys) == ['default', 'first', 'nil', '2']


def test_logical_operators_short_circuit(capsys):
    """
    The right operand is not evaluated when the left decides the result.
    """
    run_source(
        "var calls = 0;\n"
        "fun touch() { calls = calls + 1; return true; }\n"
        "print true or touch();\n"
        "print false and touch();\n"
        "print calls;\n"
    )
    assert output_lines(capsys) == ['true', 'false', '0']


def test_runtime_error_keeps_earlier_output(capsys):
    """
    Output printed before a runtime error stays; nothing after it runs.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source('print "one";\nprint 1 + nil;\nprint "two";')
    assert "on line 2 in <test>" in str(excinfo.value)
    assert output_lines(capsys) == ['one']


def test_negative_zero_prints_as_zero(capsys):
    """
    A zero result never prints with a sign.
    """
    run_source("print -0;\nprint 0 * -1;\nprint -0.0;\nprint 1 - 1;")
    assert output_lines(capsys) == ['0', '0', '0.0', '0']
