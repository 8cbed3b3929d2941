import pytest
import binop


def run(code: str, interp: binop.Interp | None = None) -> binop.BoObject:
    """Run code in a fresh (or given) interpreter and return the last value."""
    if interp is None:
        interp = binop.Interp()
    return interp.run(code)


def parse_one(code: str) -> binop.BoObject:
    """Parse code holding exactly one statement and return its node."""
    block = binop.parse(code)
    assert len(block.nodes) == 1, f"Expected one statement, got {len(block.nodes)}"
    return block.nodes[0]


def call(builtin: binop.BuiltinFunction, *args, receiver=None, env=None):
    """Invoke a builtin directly with already-built argument nodes."""
    if env is None:
        env = binop.root_memory()
    return builtin.call(receiver, tuple(args), env)


def assert_value(value: binop.BoObject, expected):
    """Assert value renders as the expected text."""
    assert isinstance(value, binop.BoObject), f"Not a BinOp value: {value!r}"
    rendered = value.render()
    assert rendered == str(expected), f"Expected {expected!r}, got {rendered!r}"
    return value


def assert_error(code: str, error=binop.EvalError, message=None):
    """Assert running code raises error, optionally containing message."""
    with pytest.raises(error) as info:
        run(code)
    if message:
        assert message in str(info.value), f"Error {str(info.value)!r} does not contain {message!r}"
    return info.value


def name(text: str) -> binop.Message:
    """Bare name reference node."""
    return binop.Message(None, text, None)
