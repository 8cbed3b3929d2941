"""Default methods every value responds to.

The evaluator consults these only after the receiver's own slots fail to
claim the selector, and never when a binding in scope shadows the name.
Each handler gets the message node along with the receiver already
evaluated once, so arguments stay unevaluated until the handler decides
whether to run them.
"""

__all__ = ["DEFAULT_METHODS", "eval_if", "eval_print", "eval_clone", "eval_do_while"]

import logging
import types

import binop

logger = logging.getLogger(__name__)


def _require_receiver(receiver, name):
    if receiver is None:
        raise binop.KindError(f"{name} requires a receiver")


def _arg_count(mes):
    """Argument count where a unary send counts as zero."""
    return 0 if mes.args is None else len(mes.args)


def eval_if(mes, receiver, env):
    """Evaluate one branch depending on the receiver.

    `cond.if(then)` or `cond.if(then, else)`. The branch not taken is never
    evaluated. Without an else branch a nil condition gives NIL.
    """
    _require_receiver(receiver, "if")
    if mes.args is None or len(mes.args) not in (1, 2):
        raise binop.ArityError(f"if expects 1 or 2 arguments, got {_arg_count(mes)}")

    if receiver is not binop.NIL:
        return binop.eval_node(mes.args[0], env)
    if len(mes.args) == 2:
        return binop.eval_node(mes.args[1], env)
    return binop.NIL


def eval_print(mes, receiver, env):
    """Write the rendered receiver to stdout and pass the value through."""
    _require_receiver(receiver, "print")
    if _arg_count(mes) != 0:
        raise binop.ArityError(f"print expects no arguments, got {_arg_count(mes)}")

    print(receiver.render(), flush=True)
    return receiver


def eval_clone(mes, receiver, env):
    """Duplicate the receiver."""
    _require_receiver(receiver, "clone")
    if _arg_count(mes) != 0:
        raise binop.ArityError(f"clone expects no arguments, got {_arg_count(mes)}")

    return receiver.duplicate()


def eval_do_while(mes, receiver, env):
    """Loop while a condition closure returns non-nil.

    The receiver must be written as a message that evaluates to a Fun.
    That closure is fetched once and called in its own environment before
    each pass. The body argument runs in the caller's environment.

    Returns:
        (BoObject) Result of the last body evaluation, or NIL
    """
    _require_receiver(receiver, "doWhile")
    if not isinstance(mes.receiver, binop.Message):
        raise binop.KindError(
            f"doWhile receiver must be a message, got {mes.receiver.unparse()}"
        )
    if mes.args is None or len(mes.args) != 1:
        raise binop.ArityError(f"doWhile expects 1 argument, got {_arg_count(mes)}")
    if not isinstance(receiver, binop.Fun):
        raise binop.KindError(
            f"doWhile receiver must evaluate to fun, got {receiver.render()}"
        )

    condition = receiver
    body = mes.args[0]
    result = binop.NIL
    passes = 0
    while binop.eval_fun_call(None, condition, (), condition.env) is not binop.NIL:
        result = binop.eval_node(body, env)
        passes += 1
    logger.debug("doWhile finished after %d passes", passes)
    return result


DEFAULT_METHODS = types.MappingProxyType({
    "if": eval_if,
    "print": eval_print,
    "clone": eval_clone,
    "doWhile": eval_do_while,
})
