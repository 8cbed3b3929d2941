#!/usr/bin/env python3
"""BinOp CLI - Command-line interface for the BinOp language.

Usage:
    binop                           # Start the REPL
    binop <file.bo>                 # Evaluate a file
    binop "1 + 2" --text            # Evaluate source given directly
    binop <file.bo> --lark          # Show Lark parse tree
    binop <file.bo> --ast           # Show parsed statements
"""

import argparse
import logging
import pathlib
import sys
from pathlib import Path

from lark import Token, Tree

import binop


def prettylark(node, indent=0, show_positions=False):
    """Pretty-print a Lark parse tree.

    Shows tree structure with clear indentation and token values.
    """
    prefix = "  " * indent

    if isinstance(node, Token):
        pos = f" @{node.line}:{node.column}" if show_positions else ""
        value = repr(node.value) if len(node.value) < 60 else repr(node.value[:57] + "...")
        print(f"{prefix}{node.type}: {value}{pos}")

    elif isinstance(node, Tree):
        pos = ""
        if show_positions and node.meta and not node.meta.empty:
            pos = f" @{node.meta.line}:{node.meta.column}"

        if len(node.children) == 0:
            print(f"{prefix}{node.data}(){pos}")
        elif len(node.children) == 1 and isinstance(node.children[0], Token):
            # Compact single-token nodes
            child = node.children[0]
            print(f"{prefix}{node.data}: {child.value!r}{pos}")
        else:
            print(f"{prefix}{node.data}:{pos}")
            for child in node.children:
                prettylark(child, indent + 1, show_positions)

    else:
        print(f"{prefix}??? {type(node).__name__}: {node!r}")


def prettyast(block, show_pos=False):
    """Print each parsed statement with its message form."""
    for node in block.nodes:
        form = node.form if isinstance(node, binop.Message) else type(node).__name__
        pos = ""
        if show_pos and isinstance(node, binop.Message) and node.pos:
            pos = f"  @{node.pos[0]}:{node.pos[1]}"
        print(f"{form:>5}  {node.unparse()}{pos}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="binop",
        description="BinOp language command-line interface")
    parser.add_argument("source", nargs="?",
        help="BinOp source file to run (starts the REPL when omitted)")
    parser.add_argument("--text", action="store_true",
        help="Treat source as direct code to be run")
    parser.add_argument("--lark", action="store_true",
        help="Show Lark parse tree")
    parser.add_argument("--ast", action="store_true",
        help="Show parsed statements without evaluating")
    parser.add_argument("--pos", action="store_true",
        help="Show line:column positions for nodes")
    parser.add_argument("--debug", action="store_true",
        help="Log evaluator activity to stderr")

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s")

    if args.source is None:
        if args.text or args.lark or args.ast:
            parser.error("source is required with --text, --lark or --ast")
        from binop.repl import repl
        repl()
        return 0

    if args.text:
        source = args.source
    else:
        filepath = pathlib.Path(args.source)
        if not filepath.is_absolute():
            filepath = Path.cwd() / filepath
        try:
            source = filepath.read_text(encoding="utf-8")
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    try:
        if args.lark:
            prettylark(binop.parse_tree(source), show_positions=args.pos)
            return 0
        if args.ast:
            prettyast(binop.parse(source), show_pos=args.pos)
            return 0
        binop.Interp().run(source)
    except (binop.ParseError, binop.EvalError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
