"""Interactive REPL for BinOp.

Provides a read-eval-print loop for interactive development and experimentation.
"""

import binop


class ReplContext:
    """Context for REPL session.

    Holds a single interpreter so names bound on one line stay visible
    on the next. The last result is bound as `_`.
    """

    def __init__(self):
        self.interp = binop.Interp()

    def eval_line(self, line):
        """Evaluate a single line of input and return the result value."""
        result = self.interp.run(line)
        self.interp.memory.define("_", result)
        return result


def format_value(value):
    """Format a result for display, nil shows nothing."""
    if value is binop.NIL:
        return ""
    return value.unparse()


def repl():
    """Run the interactive REPL."""
    print(f"BinOp REPL v{binop.__version__}")
    print("Type 'exit' or Ctrl-D to quit.\n")

    context = ReplContext()

    while True:
        try:
            try:
                line = input("binop> ")
            except EOFError:
                print("\nGoodbye!")
                break

            if line.strip().lower() in ("exit", "quit", ":q"):
                print("Goodbye!")
                break

            if not line.strip():
                continue

            output = format_value(context.eval_line(line))
            if output:
                print(output)

        except KeyboardInterrupt:
            print("\nKeyboardInterrupt")
            print("Type 'exit' to quit.")
            continue
        except (binop.ParseError, binop.EvalError) as e:
            print(f"error: {e}")
