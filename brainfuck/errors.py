"""
Faults raised by the interpreter.

A fault aborts the current invocation. The tape and cell offset at the point
of failure travel with the exception so a caller can inspect or discard them.
"""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every interpreter error."""


class Fault(BrainfuckError):
    """An abnormal condition that aborts one invocation."""

    def __init__(self, message: str, offset: Optional[int] = None, tape=None):
        super().__init__(message)
        self.offset = offset
        self.tape = tape


class OutOfRange(Fault):
    """The cell offset left the tape."""

    def __init__(self, offset: int, size: int, tape=None):
        super().__init__(f"Cell offset {offset} outside tape of {size} cells", offset, tape)
        self.size = size


class InvalidInput(Fault):
    """The input collaborator produced a value that is not a byte."""

    def __init__(self, value, offset: Optional[int] = None, tape=None):
        super().__init__(f"Input value {value!r} is not a byte (0-255)", offset, tape)
        self.value = value


class StepLimitExceeded(Fault):
    """The invocation dispatched more instructions than allowed."""

    def __init__(self, limit: int, offset: Optional[int] = None, tape=None):
        super().__init__(f"Execution stopped after {limit} steps (possible infinite loop)", offset, tape)
        self.limit = limit


class SessionClosed(BrainfuckError):
    """A line was fed to a session that already ended."""
