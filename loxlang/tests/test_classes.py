"""
Tests for classes, instances and inheritance in Lox.
"""
import pytest

from loxlang.exceptions import LoxRuntimeError
from loxlang.runtime import LoxClass, LoxInstance

from loxlang.tests.utils import output_lines, run_source


def test_super_call_chains_methods(capsys):
    """
    `super.method()` runs the superclass implementation bound to the same instance.
    """
    run_source(
        "class A { greet() { return \"A\"; } }\n"
        "class B < A { greet() { return super.greet() + \"B\"; } }\n"
        "print B().greet();\n"
    )
    assert output_lines(capsys) == ['AB']


def test_initializer_returns_instance(capsys):
    """
    Calling a class runs `init` and yields the instance.
    """
    interpreter = run_source(
        "class Box {\n"
        "  init(v) { this.v = v; }\n"
        "}\n"
        "var b = Box(10);\n"
        "print b.v;\n"
    )
    assert output_lines(capsys) == ['10']
    box = interpreter.globals.get("b")
    assert isinstance(box, LoxInstance)
    assert isinstance(box.klass, LoxClass)


def test_init_called_directly_returns_this(capsys):
    """
    Calling `init` on an instance re-runs it and still returns the instance.
    """
    run_source(
        "class Box {\n"
        "  init() { this.n = 1; return; }\n"
        "}\n"
        "var b = Box();\n"
        "b.n = 5;\n"
        "var again = b.init();\n"
        "print again == b;\n"
        "print b.n;\n"
    )
    assert output_lines(capsys) == ['true', '1']


def test_instances_are_shared_by_reference(capsys):
    """
    A field written through one alias is visible through the other.
    """
    run_source(
        "class Point {}\n"
        "var p = Point();\n"
        "var q = p;\n"
        "q.x = 3;\n"
        "print p.x;\n"
        "print p == q;\n"
        "print Point() == Point();\n"
    )
    assert output_lines(capsys) == ['3', 'true', 'false']


def test_bound_method_remembers_instance(capsys):
    """
    A method pulled off an instance keeps its `this`.
    """
    run_source(
        "class Person {\n"
        "  init(name) { this.name = name; }\n"
        "  sayName() { print this.name; }\n"
        "}\n"
        "var jane = Person(\"Jane\");\n"
        "var method = jane.sayName;\n"
        "var bill = Person(\"Bill\");\n"
        "bill.sayName = method;\n"
        "bill.sayName();\n"
    )
    assert output_lines(capsys) == ['Jane']


def test_fields_shadow_methods(capsys):
    """
    Field lookup happens before method lookup.
    """
    run_source(
        "class A { m() { return \"method\"; } }\n"
        "var a = A();\n"
        "print a.m();\n"
        "fun f() { return \"field\"; }\n"
        "a.m = f;\n"
        "print a.m();\n"
    )
    assert output_lines(capsys) == ['method', 'field']


def test_method_inherited_through_chain(capsys):
    """
    Methods are looked up along the whole superclass chain.
    """
    run_source(
        "class A { hello() { return \"hello from A\"; } }\n"
        "class B < A {}\n"
        "class C < B {}\n"
        "print C().hello();\n"
    )
    assert output_lines(capsys) == ['hello from A']


def test_super_inside_closure_in_method(capsys):
    """
    `super` still resolves from a function nested in a method.
    """
    run_source(
        "class A { name() { return \"A\"; } }\n"
        "class B < A {\n"
        "  name() {\n"
        "    fun inner() { return super.name(); }\n"
        "    return inner() + \"B\";\n"
        "  }\n"
        "}\n"
        "print B().name();\n"
    )
    assert output_lines(capsys) == ['AB']


def test_inherited_initializer(capsys):
    """
    A subclass without `init` uses the superclass initializer and its arity.
    """
    run_source(
        "class A { init(x) { this.x = x; } }\n"
        "class B < A {}\n"
        "print B(7).x;\n"
    )
    assert output_lines(capsys) == ['7']


def test_class_and_instance_printing(capsys):
    """
    Classes and instances print as <class Name> and <instance Name>.
    """
    run_source(
        "class A { m() {} }\n"
        "print A;\n"
        "print A();\n"
        "print A().m;\n"
    )
    assert output_lines(capsys) == ['<class A>', '<instance A>', '<fn m>']


def test_class_can_refer_to_itself(capsys):
    """
    Methods may name their own class.
    """
    run_source(
        "class Node {\n"
        "  make() { return Node(); }\n"
        "}\n"
        "print Node().make();\n"
    )
    assert output_lines(capsys) == ['<instance Node>']


def test_undefined_property():
    """
    Reading a missing property is a runtime error.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source("class A {} var a = A(); print a.missing;")
    assert "Undefined property 'missing'." in str(excinfo.value)


def test_property_on_non_instance():
    """
    Only instances have properties or fields.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source('var s = "text"; print s.length;')
    assert "Only instances have properties." in str(excinfo.value)

    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source("var n = 1; n.x = 2;")
    assert "Only instances have fields." in str(excinfo.value)


def test_superclass_must_be_class(capsys):
    """
    Inheriting from a non-class value fails at run time.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source(
            'print "before";\n'
            'var NotAClass = "nope";\n'
            "class A < NotAClass {}\n"
        )
    assert "Superclass must be a class." in str(excinfo.value)
    assert "on line 3" in str(excinfo.value)
    assert output_lines(capsys) == ['before']


def test_wrong_initializer_arity():
    """
    Class calls are checked against the arity of `init`.
    """
    with pytest.raises(LoxRuntimeError) as excinfo:
        run_source("class A { init(a, b) {} } A(1);")
    assert "Expected 2 arguments but got 1." in str(excinfo.value)
