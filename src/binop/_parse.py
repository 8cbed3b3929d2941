"""Parse source text into BinOp nodes.

The parser produces the same node objects the runtime evaluates: literals
become Num and Str values, every send becomes a Message, and a program is
a Block of statements. Each Message remembers the (line, column) it came
from for diagnostics.
"""

__all__ = ["parse", "parse_tree", "pos_from_lark"]

import logging
import re

import lark

import binop

logger = logging.getLogger(__name__)

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}


def parse(source):
    """Parse source into a Block of statement nodes.

    Args:
        source: (str) Program text

    Returns:
        (Block) Parsed statements

    Raises:
        ParseError: Source is not valid BinOp
    """
    tree = parse_tree(source)
    return _convert_tree(tree)


def parse_tree(source):
    """Parse source into the intermediate lark tree.

    The lark tree is only exposed for tooling like `binop --lark`.
    """
    parser = _lark_parser("binop")
    logger.debug("parsing %d characters", len(source))
    try:
        return parser.parse(source)
    except lark.exceptions.UnexpectedInput as e:
        message = str(e).strip().splitlines()[0]
        raise binop.ParseError(message, (e.line, e.column)) from e


def pos_from_lark(treetoken):
    """Create the (line, column) tuple from a lark Tree or Token value."""
    if isinstance(treetoken, lark.Token):
        return (treetoken.line, treetoken.column)
    if isinstance(treetoken, lark.Tree):
        meta = treetoken.meta
        if not meta.empty:
            return (meta.line, meta.column)
    return None


def _convert_tree(tree):
    """Convert a lark tree into nodes.

    Args:
        tree: (lark.Tree | lark.Token) Lark Tree or Token to convert

    Returns:
        (BoObject) Node
    """
    kids = tree.children
    pos = pos_from_lark(tree)
    match tree.data:
        case "start" | "block":
            return binop.Block(_convert_tree(kid) for kid in kids)
        case "number":
            return binop.Num(kids[0].value)
        case "string":
            return binop.Str(_unescape(kids[0].value[1:-1], pos_from_lark(kids[0])))
        case "name":
            return binop.Message(None, kids[0].value, None, pos=pos)
        case "call":
            name, arglist = kids
            return binop.Message(None, name.value, _convert_args(arglist), pos=pos)
        case "unary_send":
            receiver, name = kids
            return binop.Message(_convert_tree(receiver), name.value, None, pos=pos)
        case "keyword_send":
            receiver, name, arglist = kids
            return binop.Message(
                _convert_tree(receiver), name.value, _convert_args(arglist), pos=pos
            )
        case "binary":
            left, op, right = kids
            return binop.Message(
                _convert_tree(left), op.value, (_convert_tree(right),), pos=pos
            )
        case "assignment":
            target, value = kids
            return binop.Message(
                _convert_tree(target), "=", (_convert_tree(value),), pos=pos
            )
        case _:
            raise ValueError(f"Unhandled grammar rule: {tree.data}")


def _convert_args(arglist):
    return tuple(_convert_tree(kid) for kid in arglist.children)


def _unescape(text, pos):
    def replace(match):
        char = match.group(1)
        if char not in _ESCAPES:
            raise binop.ParseError(f"Unknown escape '\\{char}' in string", pos)
        return _ESCAPES[char]

    return re.sub(r"\\(.)", replace, text, flags=re.S)


_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="lalr", propagate_positions=True
    )
    _parsers[name] = parser
    return parser
