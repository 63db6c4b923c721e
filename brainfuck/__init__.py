"""
Byte-tape interpreter for the eight-instruction bracket-loop language,
with sessions that carry the tape from one invocation to the next.
"""

__version__ = "0.1.0"

from .engine import Interpreter, run
from .errors import BrainfuckError, Fault, InvalidInput, OutOfRange, SessionClosed, StepLimitExceeded
from .session import Session
from .state import Outcome, RunResult, Step
from .streams import BufferSink, BytesSource, FileSink, FileSource, IterSource, TextSource, TextStreamSource
from .tape import DEFAULT_TAPE_SIZE, Tape

__all__ = [
    "Interpreter",
    "run",
    "BrainfuckError",
    "Fault",
    "InvalidInput",
    "OutOfRange",
    "SessionClosed",
    "StepLimitExceeded",
    "Session",
    "Outcome",
    "RunResult",
    "Step",
    "BufferSink",
    "BytesSource",
    "FileSink",
    "FileSource",
    "IterSource",
    "TextSource",
    "TextStreamSource",
    "DEFAULT_TAPE_SIZE",
    "Tape",
]
