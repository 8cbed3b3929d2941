"""Native functions exposed as ordinary BinOp values.

A BuiltinFunction uses the same (receiver, args, env) calling convention as
user closures, so the evaluator never needs to know which kind of callable
it invoked. Builtins receive their argument nodes unevaluated.
"""

__all__ = [
    "BuiltinFunction",
    "FUN",
    "MACRO",
    "MESSAGE",
    "EVAL_NODE",
    "EVAL_STR",
    "BUILTINS",
    "root_memory",
]

import logging

import binop

logger = logging.getLogger(__name__)


class BuiltinFunction(binop.BoObject):
    """Native operation wrapped as a value.

    No arity checking happens here, each operation validates its own
    arguments.

    Args:
        name: (str) Name used for rendering and root binding
        operation: (Callable) operation(receiver, args, env) -> BoObject
    """

    __slots__ = ("name", "operation")

    def __init__(self, name, operation):
        self.name = name
        self.operation = operation

    def call(self, receiver, args, env):
        """Invoke the wrapped operation."""
        logger.debug("builtin %s with %d args", self.name, len(args))
        return self.operation(receiver, args, env)

    def render(self):
        return self.name


def _fun(receiver, args, env):
    if len(args) >= 1:
        return binop.Fun(args, env)
    raise binop.ArityError(f"fun expects at least 1 argument, got {len(args)}")


def _macro(receiver, args, env):
    if len(args) >= 1:
        return binop.Macro(args)
    raise binop.ArityError(f"macro expects at least 1 argument, got {len(args)}")


def _message(receiver, args, env):
    if not args or not isinstance(args[0], binop.Str):
        raise binop.FormatError(
            f"message expects a form tag first, got ({_describe(args)})"
        )

    form = args[0].value
    match form:
        case "__":
            if len(args) != 2:
                raise binop.ArityError(f"message '__' expects 2 arguments, got {len(args)}")
            return binop.Message(None, _selector(form, args, 1), None)
        case "_@":
            if len(args) < 2:
                raise binop.ArityError(f"message '_@' expects at least 2 arguments, got {len(args)}")
            return binop.Message(None, _selector(form, args, 1), args[2:])
        case "@_":
            if len(args) != 3:
                raise binop.ArityError(f"message '@_' expects 3 arguments, got {len(args)}")
            return binop.Message(args[1], _selector(form, args, 2), None)
        case "@@":
            if len(args) < 3:
                raise binop.ArityError(f"message '@@' expects at least 3 arguments, got {len(args)}")
            return binop.Message(args[1], _selector(form, args, 2), args[3:])
    raise binop.FormatError(f"message form tag must be __, _@, @_ or @@, got '{form}'")


def _selector(form, args, index):
    """Text of the selector argument for a message form."""
    selector = args[index]
    if not isinstance(selector, binop.Str):
        raise binop.FormatError(
            f"message '{form}' expects text selector, got {selector.unparse()}"
        )
    return selector.value


def _describe(args):
    return ", ".join(a.unparse() for a in args)


def _eval_node(receiver, args, env):
    if len(args) != 1:
        raise binop.ArityError(f"evalNode expects 1 argument, got {len(args)}")
    # First pass resolves the argument to a node, second pass runs that node
    node = binop.eval_node(args[0], env)
    return binop.eval_node(node, env)


def _eval_str(receiver, args, env):
    if len(args) != 1:
        raise binop.ArityError(f"evalStr expects 1 argument, got {len(args)}")
    if not isinstance(args[0], binop.Str):
        raise binop.FormatError(f"evalStr expects text, got {args[0].unparse()}")
    return binop.eval_str(args[0].value, env)


FUN = BuiltinFunction("fun", _fun)
MACRO = BuiltinFunction("macro", _macro)
MESSAGE = BuiltinFunction("message", _message)
EVAL_NODE = BuiltinFunction("evalNode", _eval_node)
EVAL_STR = BuiltinFunction("evalStr", _eval_str)

BUILTINS = (FUN, MACRO, MESSAGE, EVAL_NODE, EVAL_STR)


def root_memory():
    """Create a root environment holding the builtins and constants.

    Returns:
        (Memory) Fresh scope with no parent
    """
    memory = binop.Memory()
    for builtin in BUILTINS:
        memory.define(builtin.name, builtin)
    memory.define("nil", binop.NIL)
    memory.define("true", binop.TRUE)
    memory.define("Object", binop.Obj())
    return memory
