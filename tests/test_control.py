"""Tests for the default control-flow methods: if, print, clone, doWhile."""

import pytest

import binop
import botest


class TestIf:
    def test_true_branch(self):
        """Non-nil receiver takes the first branch."""
        botest.assert_value(botest.run('(1 < 2).if("yes", "no")'), "yes")

    def test_false_branch(self):
        """Nil receiver takes the second branch."""
        botest.assert_value(botest.run('(2 < 1).if("yes", "no")'), "no")

    def test_no_else_is_nil(self):
        """Without an else branch a nil receiver gives nil."""
        assert botest.run('nil.if("yes")') is binop.NIL

    def test_any_non_nil_is_true(self):
        """Zero and empty text are not nil."""
        botest.assert_value(botest.run('0.if("yes", "no")'), "yes")
        botest.assert_value(botest.run('"".if("yes", "no")'), "yes")

    def test_untaken_branch_not_evaluated(self):
        """The other branch would fail if it were evaluated."""
        botest.assert_value(botest.run('true.if("ok", undefined_name)'), "ok")
        botest.assert_value(botest.run('nil.if(undefined_name, "fine")'), "fine")

    def test_untaken_branch_has_no_side_effects(self, capsys):
        """Only the chosen branch prints."""
        botest.run('true.if("a".print, "b".print)')
        assert capsys.readouterr().out == "a\n"

    @pytest.mark.parametrize("code", ["true.if()", "true.if(1, 2, 3)", "true.if"])
    def test_arity(self, code):
        """if takes one or two branches."""
        botest.assert_error(code, binop.ArityError)

    def test_requires_receiver(self):
        """Sending if with no receiver is a kind error."""
        botest.assert_error("if(1)", binop.KindError, "requires a receiver")


class TestPrint:
    def test_print_writes_and_returns(self, capsys):
        """print writes the rendering and returns the value."""
        value = botest.run('"hi".print')
        assert capsys.readouterr().out == "hi\n"
        botest.assert_value(value, "hi")

    def test_print_composes(self, capsys):
        """x.print.print prints twice and returns the original value."""
        value = botest.run("x = 5; x.print.print")
        assert capsys.readouterr().out == "5\n5\n"
        botest.assert_value(value, 5)

    def test_print_empty_args(self, capsys):
        """x.print() is the same as x.print."""
        botest.run("(1 + 1).print()")
        assert capsys.readouterr().out == "2\n"

    def test_print_renders_values(self, capsys):
        """Each kind of value prints its rendering."""
        botest.run('nil.print; true.print; fun(x, x).print; message("__", "a").print')
        assert capsys.readouterr().out == "nil\ntrue\nfun(x, x)\na\n"

    def test_print_arity(self):
        """print takes no arguments."""
        botest.assert_error("1.print(2)", binop.ArityError)

    def test_print_requires_receiver(self):
        """print needs a receiver."""
        botest.assert_error("print()", binop.KindError)


class TestClone:
    def test_clone_duplicates(self):
        """A clone renders like the original but is a separate object."""
        interp = binop.Interp()
        botest.run("p = Object.clone; p.x = 1", interp)
        botest.assert_value(botest.run("p.clone.render", interp), "{x=1}")
        botest.run("q = p.clone; q.x = 2", interp)
        botest.assert_value(botest.run("p.x", interp), 1)
        botest.assert_value(botest.run("q.x", interp), 2)
        assert botest.run("p == q", interp) is binop.NIL

    def test_clone_of_root_object(self):
        """Cloning Object leaves the root prototype untouched."""
        interp = binop.Interp()
        botest.run("p = Object.clone; p.name = \"p\"", interp)
        botest.assert_value(botest.run("Object", interp), "{}")

    def test_clone_values(self):
        """Immutable values clone to equal values."""
        botest.assert_value(botest.run("5.clone"), 5)
        botest.assert_value(botest.run('"s".clone'), "s")
        assert botest.run("nil.clone") is binop.NIL

    def test_clone_arity(self):
        """clone takes no arguments."""
        botest.assert_error("1.clone(2)", binop.ArityError)

    def test_clone_requires_receiver(self):
        """clone needs a receiver."""
        botest.assert_error("clone()", binop.KindError)


class TestDoWhile:
    def test_runs_body_until_nil(self):
        """Condition non-nil three times runs the body three times."""
        interp = binop.Interp()
        code = """
i = 0
runs = 0
fun(i < 3).doWhile({i = i + 1; runs = runs + 1; i * 10})
"""
        botest.assert_value(botest.run(code, interp), 30)
        botest.assert_value(botest.run("runs", interp), 3)

    def test_never_runs(self, capsys):
        """An immediately nil condition never evaluates the body."""
        value = botest.run('fun(nil).doWhile("body".print)')
        assert value is binop.NIL
        assert capsys.readouterr().out == ""

    def test_condition_fetched_once(self):
        """The receiver is evaluated once, the closure is reused."""
        interp = binop.Interp()
        code = """
fetches = 0
i = 0
makeCond = fun({fetches = fetches + 1; fun(i < 2)})
makeCond().doWhile(i = i + 1)
"""
        botest.run(code, interp)
        botest.assert_value(botest.run("fetches", interp), 1)
        botest.assert_value(botest.run("i", interp), 2)

    def test_stateful_condition(self):
        """A condition counting down in its own scope ends the loop."""
        interp = binop.Interp()
        code = """
countdown = fun(n, fun({n = n - 1; n >= 0}))
hits = 0
countdown(3).doWhile(hits = hits + 1)
"""
        botest.assert_value(botest.run(code, interp), 3)
        botest.assert_value(botest.run("hits", interp), 3)

    def test_body_runs_in_caller_scope(self):
        """The body sees and updates the caller's names."""
        code = """
loop = fun(limit, {
    total = 0
    k = 0
    fun(k < limit).doWhile({k = k + 1; total = total + k})
    total
})
loop(4)
"""
        botest.assert_value(botest.run(code), 10)

    def test_receiver_must_be_message(self):
        """An already evaluated receiver cannot be re-evaluated."""
        botest.assert_error("5.doWhile(1)", binop.KindError, "must be a message")

    def test_receiver_must_be_fun(self):
        """The receiver has to evaluate to a closure."""
        botest.assert_error("x = 1; x.doWhile(2)", binop.KindError, "must evaluate to fun")
        botest.assert_error("macro(nil).doWhile(2)", binop.KindError)

    @pytest.mark.parametrize("code", ["fun(nil).doWhile()", "fun(nil).doWhile", "fun(nil).doWhile(1, 2)"])
    def test_arity(self, code):
        """doWhile takes exactly one body."""
        botest.assert_error(code, binop.ArityError)

    def test_requires_receiver(self):
        """doWhile needs a receiver."""
        botest.assert_error("doWhile(1)", binop.KindError)


def test_binding_shadows_default_method(capsys):
    """A name bound in scope takes over the default selector."""
    value = botest.run("print = fun(self + 1); 5.print")
    botest.assert_value(value, 6)
    assert capsys.readouterr().out == ""


def test_default_methods_are_read_only():
    """The default table cannot be extended at runtime."""
    assert set(binop.DEFAULT_METHODS) == {"if", "print", "clone", "doWhile"}
    with pytest.raises(TypeError):
        binop.DEFAULT_METHODS["while"] = binop.eval_do_while


def test_slot_overrides_default_method(capsys):
    """An object's own slot answers before the default selector."""
    value = botest.run('o = Object.clone; o.print = fun("custom"); o.print()')
    botest.assert_value(value, "custom")
    assert capsys.readouterr().out == ""


def test_slot_overrides_default_unary(capsys):
    """A unary send reaches the slot method too, with self bound."""
    code = """
o = Object.clone
o.tag = "inner"
o.print = fun(self.tag + "!")
o.print
"""
    botest.assert_value(botest.run(code), "inner!")
    assert capsys.readouterr().out == ""


def test_default_method_without_slot(capsys):
    """Objects lacking the slot still get the default behaviour."""
    botest.run("o = Object.clone; o.x = 1; o.print")
    assert capsys.readouterr().out == "{x=1}\n"


def test_slot_receiver_evaluated_once():
    """The receiver is evaluated once before its slot answers."""
    code = """
o = Object.clone
o.if = fun(a, b, "slot")
calls = 0
get = fun({calls = calls + 1; o})
get().if(1, 2)
"""
    interp = binop.Interp()
    botest.assert_value(botest.run(code, interp), "slot")
    botest.assert_value(botest.run("calls", interp), 1)
