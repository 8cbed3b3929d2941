"""Error classes and helpers"""

__all__ = [
    "EvalError",
    "ContractError",
    "ArityError",
    "FormatError",
    "KindError",
    "ParseError",
]


class EvalError(Exception):
    """Failure while evaluating BinOp nodes.

    Raised for unbound names and for selectors no value understands. All
    evaluation errors abort the evaluation in progress, nothing in the
    runtime catches them.
    """


class ContractError(EvalError):
    """A builtin or default method was given input it does not accept."""


class ArityError(ContractError):
    """Wrong number of arguments for a builtin, closure, or default method."""


class FormatError(ContractError):
    """Malformed node shape.

    Covers unknown message form tags, selectors that are not text, and
    parameter patterns or assignment targets that are not names.
    """


class KindError(ContractError):
    """A value of the wrong kind, or a missing receiver."""


class ParseError(Exception):
    """Exception raised for parsing errors.

    Args:
        message: (str) Error description
        position: (tuple | None) Optional (line, column) where error occurred

    Attributes:
        message: (str) Error description
        position: (tuple | None) (line, column) where error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (line {position[0]}, column {position[1]})"
        super().__init__(message)
