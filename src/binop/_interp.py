"""Interpreter entry point."""

__all__ = ["Interp"]

import logging
from pathlib import Path

import binop

logger = logging.getLogger(__name__)


class Interp:
    """Interpreter state for BinOp.

    Owns a root environment holding the builtins. Successive runs share
    that root, so definitions persist between them. Separate interpreters
    never share bindings.

    Attributes:
        memory: (Memory) Root environment
    """

    def __init__(self):
        self.memory = binop.root_memory()

    def __repr__(self):
        return f"Interp<{len(self.memory.bindings)} names>"

    def run(self, source):
        """Parse and evaluate source in the root environment.

        Args:
            source: (str) Program text

        Returns:
            (BoObject) Value of the last statement, or NIL

        Raises:
            ParseError: Source is not valid BinOp
            EvalError: Evaluation failed
        """
        block = binop.parse(source)
        return binop.eval_node(block, self.memory)

    def run_file(self, path):
        """Evaluate a source file read as UTF-8."""
        path = Path(path)
        logger.debug("running %s", path)
        return self.run(path.read_text(encoding="utf-8"))
