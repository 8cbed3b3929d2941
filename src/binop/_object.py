"""Runtime objects for BinOp.

Everything the evaluator touches is a BoObject: literal values, message
nodes, blocks of statements, closures, and builtins. Nodes are values too,
which is what lets programs build and run their own code.
"""

__all__ = [
    "BoObject",
    "Nil",
    "NIL",
    "Sym",
    "TRUE",
    "Num",
    "Str",
    "Obj",
    "Message",
    "Block",
    "Fun",
    "Macro",
    "OPERATORS",
]

import decimal

import binop


OPERATORS = frozenset(
    ("+", "-", "*", "/", "%", "==", "!=", "<", ">", "<=", ">=", "=")
)


class BoObject:
    """Base class for every BinOp value.

    Subclasses provide `render` for human readable text and `duplicate` for
    an independent copy. `unparse` gives the literal form used when the
    value appears inside a message, it only differs from `render` for text.
    """

    __slots__ = ()

    def render(self):
        """(str) Human readable form of the value."""
        raise NotImplementedError(f"{type(self).__name__} must implement render")

    def duplicate(self):
        """Independent copy with equal observable state."""
        return self

    def unparse(self):
        """(str) Source-like form of the value."""
        return self.render()

    def __repr__(self):
        return f"{type(self).__name__}<{self.unparse()}>"


class Nil(BoObject):
    """The canonical empty value. Only `NIL` should exist."""

    __slots__ = ()

    def render(self):
        return "nil"


NIL = Nil()


class Sym(BoObject):
    """Named singleton value such as `true`."""

    __slots__ = ("name",)

    def __init__(self, name):
        self.name = name

    def render(self):
        return self.name


TRUE = Sym("true")


class Num(BoObject):
    """Number value backed by decimal.Decimal.

    Args:
        value: (Decimal | int | str) Numeric value
    """

    __slots__ = ("value",)

    def __init__(self, value):
        if not isinstance(value, decimal.Decimal):
            value = decimal.Decimal(value)
        self.value = value

    def render(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Num) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class Str(BoObject):
    """Text value.

    Args:
        value: (str) Text content
    """

    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def render(self):
        return self.value

    def unparse(self):
        text = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return '"' + text.replace("\n", "\\n").replace("\t", "\\t") + '"'

    def __eq__(self, other):
        return isinstance(other, Str) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class Obj(BoObject):
    """Mutable object holding named slots.

    Slots hold any value. A slot holding a callable acts as a method, it
    is invoked with the object as its receiver even on a unary send.

    Args:
        slots: (dict | None) Initial slot values

    Attributes:
        slots: (dict[str, BoObject]) Slot values by name
    """

    __slots__ = ("slots",)

    def __init__(self, slots=None):
        self.slots = dict(slots) if slots else {}

    def render(self):
        fields = [f"{k}={v.unparse()}" for k, v in self.slots.items()]
        return "{" + " ".join(fields) + "}"

    def duplicate(self):
        return Obj(self.slots)


class Message(BoObject):
    """Immutable send node.

    The `args` field is tri-state. `None` marks a unary send (`x.print`),
    an empty tuple is a call with no arguments (`x.print()`).

    Args:
        receiver: (BoObject | None) Node producing the receiver
        selector: (str) Name of the requested operation
        args: (Sequence[BoObject] | None) Argument nodes
        pos: (tuple | None) Optional (line, column) of the source

    Attributes:
        receiver: (BoObject | None) Node producing the receiver
        selector: (str) Name of the requested operation
        args: (tuple[BoObject] | None) Argument nodes
        pos: (tuple | None) Source position, ignored by equality
    """

    __slots__ = ("receiver", "selector", "args", "pos")

    def __init__(self, receiver, selector, args, pos=None):
        if args is not None:
            args = tuple(args)
        object.__setattr__(self, "receiver", receiver)
        object.__setattr__(self, "selector", selector)
        object.__setattr__(self, "args", args)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name, value):
        raise AttributeError(f"Message is immutable, cannot set '{name}'")

    @property
    def form(self):
        """(str) Two character tag: `_` for absent, `@` for present."""
        return ("_" if self.receiver is None else "@") + (
            "_" if self.args is None else "@"
        )

    def render(self):
        sel = self.selector
        if sel == "=" and self.receiver is not None and self.args and len(self.args) == 1:
            return f"{self.receiver.unparse()} = {self.args[0].unparse()}"
        if sel in OPERATORS and self.receiver is not None and self.args and len(self.args) == 1:
            return f"{_operand(self.receiver)} {sel} {_operand(self.args[0])}"
        text = sel if self.receiver is None else f"{_operand(self.receiver)}.{sel}"
        if self.args is not None:
            text += "(" + ", ".join(a.unparse() for a in self.args) + ")"
        return text

    def __eq__(self, other):
        if not isinstance(other, Message):
            return NotImplemented
        return (
            self.selector == other.selector
            and self.receiver == other.receiver
            and self.args == other.args
        )

    def __hash__(self):
        return hash((self.receiver, self.selector, self.args))


def _operand(node):
    """Unparse a node, wrapping operator sends in parentheses."""
    text = node.unparse()
    if isinstance(node, Message) and node.selector in OPERATORS and node.receiver is not None:
        return f"({text})"
    return text


class Block(BoObject):
    """Sequence of statements evaluated in order.

    Args:
        nodes: (Sequence[BoObject]) Statement nodes
    """

    __slots__ = ("nodes",)

    def __init__(self, nodes):
        self.nodes = tuple(nodes)

    def render(self):
        return "{" + "; ".join(n.unparse() for n in self.nodes) + "}"

    def __eq__(self, other):
        return isinstance(other, Block) and self.nodes == other.nodes

    def __hash__(self):
        return hash(self.nodes)


class Fun(BoObject):
    """Closure value.

    All but the last element of `params_and_body` are parameter patterns,
    the last is the body. The defining environment is shared, not copied,
    so assignments made by the closure are visible to its definer.

    Args:
        params_and_body: (Sequence[BoObject]) At least one node
        env: (Memory) Defining environment
    """

    __slots__ = ("params_and_body", "env")

    def __init__(self, params_and_body, env):
        self.params_and_body = tuple(params_and_body)
        if not self.params_and_body:
            raise binop.ArityError("fun expects at least 1 argument, got 0")
        self.env = env

    @property
    def params(self):
        """(tuple[BoObject]) Parameter pattern nodes."""
        return self.params_and_body[:-1]

    @property
    def body(self):
        """(BoObject) Body node."""
        return self.params_and_body[-1]

    def render(self):
        return "fun(" + ", ".join(n.unparse() for n in self.params_and_body) + ")"

    def duplicate(self):
        return Fun(self.params_and_body, self.env)


class Macro(BoObject):
    """Closure without a captured environment.

    A macro runs in a child of the caller's scope and receives its
    arguments as unevaluated nodes.

    Args:
        params_and_body: (Sequence[BoObject]) At least one node
    """

    __slots__ = ("params_and_body",)

    def __init__(self, params_and_body):
        self.params_and_body = tuple(params_and_body)
        if not self.params_and_body:
            raise binop.ArityError("macro expects at least 1 argument, got 0")

    @property
    def params(self):
        """(tuple[BoObject]) Parameter pattern nodes."""
        return self.params_and_body[:-1]

    @property
    def body(self):
        """(BoObject) Body node."""
        return self.params_and_body[-1]

    def render(self):
        return "macro(" + ", ".join(n.unparse() for n in self.params_and_body) + ")"

    def duplicate(self):
        return Macro(self.params_and_body)
