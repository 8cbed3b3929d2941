"""Native methods on runtime values.

These will raise EvalError subclasses on bad operands. Each native method
receives the evaluated receiver and a tuple of evaluated arguments.
Comparisons answer TRUE or NIL, since NIL is the only false value.
"""

__all__ = ["native_method", "NATIVE_METHODS"]

import decimal

import binop


def _truth(flag):
    return binop.TRUE if flag else binop.NIL


def _expect(selector, args, count):
    if len(args) != count:
        raise binop.ArityError(
            f"'{selector}' expects {count} argument{'s' if count != 1 else ''}, got {len(args)}"
        )


def _num_operand(selector, value):
    if not isinstance(value, binop.Num):
        raise binop.KindError(f"'{selector}' operand is not a number: {value.unparse()}")
    return value.value


def _equal(left, right):
    if isinstance(left, (binop.Num, binop.Str)):
        return left == right
    return left is right


def _math(op):
    def method(receiver, args):
        _expect(op, args, 1)
        lval = receiver.value
        rval = _num_operand(op, args[0])
        try:
            if op == "+":
                result = lval + rval
            elif op == "-":
                result = lval - rval
            elif op == "*":
                result = lval * rval
            elif op == "/":
                result = lval / rval
            elif op == "%":
                result = lval % rval
            else:
                raise ValueError(f"Unknown math operator: {op}")
        except (ZeroDivisionError, decimal.DivisionByZero, decimal.InvalidOperation) as e:
            raise binop.EvalError(f"Cannot compute {receiver.render()} {op} {args[0].render()}: {e}") from e
        return binop.Num(result)
    return method


def _compare(op, coerce):
    def method(receiver, args):
        _expect(op, args, 1)
        lval = receiver.value
        rval = coerce(op, args[0])
        if op == "<":
            return _truth(lval < rval)
        if op == ">":
            return _truth(lval > rval)
        if op == "<=":
            return _truth(lval <= rval)
        if op == ">=":
            return _truth(lval >= rval)
        raise ValueError(f"Unknown comparison operator: {op}")
    return method


def _str_operand(selector, value):
    if not isinstance(value, binop.Str):
        raise binop.KindError(f"'{selector}' operand is not text: {value.unparse()}")
    return value.value


def _eq(receiver, args):
    _expect("==", args, 1)
    return _truth(_equal(receiver, args[0]))


def _ne(receiver, args):
    _expect("!=", args, 1)
    return _truth(not _equal(receiver, args[0]))


def _render(receiver, args):
    _expect("render", args, 0)
    return binop.Str(receiver.render())


def _str_concat(receiver, args):
    _expect("+", args, 1)
    return binop.Str(receiver.value + args[0].render())


def _str_size(receiver, args):
    _expect("size", args, 0)
    return binop.Num(len(receiver.value))


def _message_selector(receiver, args):
    _expect("selector", args, 0)
    return binop.Str(receiver.selector)


def _message_receiver(receiver, args):
    _expect("receiver", args, 0)
    return binop.NIL if receiver.receiver is None else receiver.receiver


def _message_form(receiver, args):
    _expect("form", args, 0)
    return binop.Str(receiver.form)


NATIVE_METHODS = {
    binop.BoObject: {
        "==": _eq,
        "!=": _ne,
        "render": _render,
    },
    binop.Num: {
        "+": _math("+"),
        "-": _math("-"),
        "*": _math("*"),
        "/": _math("/"),
        "%": _math("%"),
        "<": _compare("<", _num_operand),
        ">": _compare(">", _num_operand),
        "<=": _compare("<=", _num_operand),
        ">=": _compare(">=", _num_operand),
    },
    binop.Str: {
        "+": _str_concat,
        "size": _str_size,
        "<": _compare("<", _str_operand),
        ">": _compare(">", _str_operand),
        "<=": _compare("<=", _str_operand),
        ">=": _compare(">=", _str_operand),
    },
    binop.Message: {
        "selector": _message_selector,
        "receiver": _message_receiver,
        "form": _message_form,
    },
}


def native_method(value, selector):
    """Find the native method for a selector on a value.

    Searches the value's class hierarchy, most specific first.

    Args:
        value: (BoObject) Evaluated receiver
        selector: (str) Method name

    Returns:
        (Callable | None) method(receiver, args) or None
    """
    for cls in type(value).__mro__:
        methods = NATIVE_METHODS.get(cls)
        if methods is not None and selector in methods:
            return methods[selector]
    return None
