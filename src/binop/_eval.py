"""Generic evaluator for BinOp nodes.

Values evaluate to themselves, blocks run their statements in order, and
messages are dispatched. Dispatch for a message with a receiver goes:

1. assignment when the selector is `=`
2. slots of the receiver when it is an Obj
3. default methods (`if`, `print`, ...) unless a binding shadows them
4. native methods of the receiver's kind
5. a callable bound to the selector, called with the receiver as `self`
"""

__all__ = ["eval_node", "eval_fun_call", "eval_str"]

import logging

import binop

logger = logging.getLogger(__name__)


def eval_node(node, env):
    """Evaluate a node in an environment.

    Args:
        node: (BoObject) Node or value to evaluate
        env: (Memory) Scope for name lookups

    Returns:
        (BoObject) Resulting value
    """
    if isinstance(node, binop.Message):
        return _eval_message(node, env)
    if isinstance(node, binop.Block):
        result = binop.NIL
        for statement in node.nodes:
            result = eval_node(statement, env)
        return result
    return node


def eval_str(source, env):
    """Parse source text and evaluate it in env."""
    block = binop.parse(source)
    return eval_node(block, env)


def eval_fun_call(receiver, callee, args, env):
    """Invoke any callable value.

    Builtins and macros get argument nodes as-is, closures get their
    arguments evaluated in the caller's env.

    Args:
        receiver: (BoObject | None) Evaluated receiver, bound to `self`
        callee: (BoObject) Builtin, Fun, or Macro
        args: (Sequence[BoObject]) Argument nodes
        env: (Memory) Caller's environment

    Returns:
        (BoObject) Result of the call
    """
    args = tuple(args)
    if isinstance(callee, binop.BuiltinFunction):
        return callee.call(receiver, args, env)

    if isinstance(callee, binop.Fun):
        names = _param_names(callee)
        _check_arity(callee, names, args)
        values = [eval_node(arg, env) for arg in args]
        scope = callee.env.extend()
    elif isinstance(callee, binop.Macro):
        names = _param_names(callee)
        _check_arity(callee, names, args)
        values = args
        scope = env.extend()
    else:
        raise binop.KindError(f"{callee.unparse()} is not callable")

    if receiver is not None:
        scope.define("self", receiver)
    for name, value in zip(names, values):
        scope.define(name, value)
    return eval_node(callee.body, scope)


def _param_names(callee):
    names = []
    for param in callee.params:
        if not isinstance(param, binop.Message) or param.form != "__":
            raise binop.FormatError(
                f"parameter must be a name, got {param.unparse()} in {callee.render()}"
            )
        names.append(param.selector)
    return names


def _check_arity(callee, names, args):
    if len(names) != len(args):
        raise binop.ArityError(
            f"{callee.render()} expects {len(names)} arguments, got {len(args)}"
        )


def _is_callable(value):
    return isinstance(value, (binop.BuiltinFunction, binop.Fun, binop.Macro))


def _eval_message(mes, env):
    selector = mes.selector

    if mes.receiver is None:
        value = env.lookup(selector)
        if value is None:
            handler = binop.DEFAULT_METHODS.get(selector)
            if handler is not None:
                return handler(mes, None, env)
            raise binop.EvalError(f"Unbound name '{selector}'")
        if mes.args is None:
            return value
        return eval_fun_call(None, value, mes.args, env)

    if selector == "=":
        return _assign(mes, env)

    receiver = eval_node(mes.receiver, env)

    if isinstance(receiver, binop.Obj) and selector in receiver.slots:
        slot = receiver.slots[selector]
        if mes.args is None and not _is_callable(slot):
            return slot
        args = () if mes.args is None else mes.args
        return eval_fun_call(receiver, slot, args, env)

    handler = binop.DEFAULT_METHODS.get(selector)
    if handler is not None and selector not in env:
        logger.debug("default method %s", selector)
        return handler(mes, receiver, env)

    method = binop.native_method(receiver, selector)
    if method is not None:
        args = () if mes.args is None else mes.args
        return method(receiver, tuple(eval_node(arg, env) for arg in args))

    callee = env.lookup(selector)
    if callee is not None:
        args = () if mes.args is None else mes.args
        return eval_fun_call(receiver, callee, args, env)

    raise binop.EvalError(f"{receiver.unparse()} does not understand '{selector}'")


def _assign(mes, env):
    if mes.args is None or len(mes.args) != 1:
        raise binop.ArityError("assignment expects exactly 1 value")
    target = mes.receiver
    if not isinstance(target, binop.Message):
        raise binop.FormatError(f"cannot assign to {target.unparse()}")

    if target.form == "__":
        value = eval_node(mes.args[0], env)
        return env.set(target.selector, value)

    if target.form == "@_":
        owner = eval_node(target.receiver, env)
        if not isinstance(owner, binop.Obj):
            raise binop.KindError(f"cannot set slot '{target.selector}' on {owner.unparse()}")
        value = eval_node(mes.args[0], env)
        owner.slots[target.selector] = value
        return value

    raise binop.FormatError(f"cannot assign to {target.unparse()}")
