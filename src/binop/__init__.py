"""
BinOp Programming Language Runtime

A minimal, homoiconic, message-passing language. Every computation is a
message send, and programs can build and run their own messages.
"""

__version__ = "0.2.0"


from ._error import *
from ._object import *
from ._memory import *
from ._builtin import *
from ._default import *
from ._ops import *
from ._eval import *
from ._parse import *
from ._interp import *
