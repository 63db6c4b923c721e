"""
Execution engine

Runs one instruction string against a tape and returns how it ended along
with the tape and cell offset, so the next invocation can pick up where
this one stopped.

    >   Move the cell offset right
    <   Move the cell offset left
    +   Increment the current cell (255 wraps to 0)
    -   Decrement the current cell (0 wraps to 255)
    .   Write the current cell to the output
    ,   Read one byte of input into the current cell (end of input reads as 0)
    [   Jump past the matching ] if the current cell is 0
    ]   Jump back to the matching [ if the current cell is nonzero

All other characters are treated as comments and ignored.

Dispatch is an explicit state machine. Each instruction moves the machine
into its operation state, every operation ends in ADVANCE, and ADVANCE
either loops back to DISPATCH or lands in a terminal state when the cursor
reports the end of the stream. Bracket scans can land in a terminal state
directly.
"""

import logging
import numbers
from enum import Enum, auto
from typing import Callable, Optional, Tuple

from .cursor import InstructionCursor
from .errors import InvalidInput, OutOfRange, StepLimitExceeded
from .jumps import jump_if_non_zero, jump_if_zero
from .state import Outcome, RunResult, Step
from .streams import ByteSink, ByteSource, stdin_source, stdout_sink
from .tape import DEFAULT_TAPE_SIZE, Tape

logger = logging.getLogger(__name__)

# Called with the offending offset; returns a new initial offset to retry with, or None
OutOfRangeHook = Callable[[int], Optional[int]]
StepHook = Callable[[Step], None]


class State(Enum):
    DISPATCH = auto()
    MOVE_RIGHT = auto()
    MOVE_LEFT = auto()
    INC = auto()
    DEC = auto()
    OUTPUT = auto()
    INPUT = auto()
    JUMP_IF_ZERO = auto()
    JUMP_IF_NON_ZERO = auto()
    ADVANCE = auto()
    FINISHED = auto()
    SOURCE_ERROR = auto()


COMMANDS = {
    '>': State.MOVE_RIGHT,
    '<': State.MOVE_LEFT,
    '+': State.INC,
    '-': State.DEC,
    '.': State.OUTPUT,
    ',': State.INPUT,
    '[': State.JUMP_IF_ZERO,
    ']': State.JUMP_IF_NON_ZERO,
}

TERMINAL = {
    Outcome.FINISHED: State.FINISHED,
    Outcome.SOURCE_ERROR: State.SOURCE_ERROR,
}


def _after(signal: Optional[Outcome]) -> State:
    return TERMINAL[signal] if signal is not None else State.ADVANCE


class Interpreter:
    """Runs instruction strings with fixed I/O collaborators and hooks.

    One Interpreter may serve many invocations, but only one at a time:
    an invocation owns its tape until it returns.
    """

    def __init__(self,
                 input: Optional[ByteSource] = None,
                 output: Optional[ByteSink] = None,
                 on_out_of_range: Optional[OutOfRangeHook] = None,
                 on_step: Optional[StepHook] = None,
                 max_steps: Optional[int] = None):
        self._input = input
        self._output = output
        self.on_out_of_range = on_out_of_range
        self.on_step = on_step
        # Zero or negative means no limit
        self.max_steps = max_steps if max_steps is not None and max_steps > 0 else None

    @property
    def input(self) -> ByteSource:
        if self._input is None:
            self._input = stdin_source()
        return self._input

    @property
    def output(self) -> ByteSink:
        if self._output is None:
            self._output = stdout_sink()
        return self._output

    def run(self, instructions: str, initial_offset: int = 0,
            initial_tape: Optional[Tape] = None,
            tape_size: int = DEFAULT_TAPE_SIZE) -> RunResult:
        """Execute `instructions` and return (outcome, tape, offset).

        The tape passed in is mutated in place. If an OutOfRange fault is
        answered by the hook with a new offset, the tape is put back to
        its contents from before the call and the whole string runs again
        from its first instruction.
        """
        tape = initial_tape if initial_tape is not None else Tape(tape_size)
        original = tape.snapshot()
        offset = initial_offset

        while True:
            try:
                outcome, offset = self._execute(instructions, tape, offset)
            except OutOfRange as fault:
                replacement = None
                if self.on_out_of_range is not None:
                    replacement = self.on_out_of_range(fault.offset)
                if replacement is None:
                    logger.info("Offset %d out of range, no retry", fault.offset)
                    raise
                logger.warning("Offset %d out of range, restarting from offset %d",
                               fault.offset, replacement)
                tape.restore(original)
                offset = replacement
                continue
            logger.debug("Invocation ended %s at offset %d", outcome.value, offset)
            return RunResult(outcome, tape, offset)

    def _execute(self, instructions: str, tape: Tape, offset: int) -> Tuple[Outcome, int]:
        tape.check(offset)
        cursor = InstructionCursor(instructions)
        if cursor.exhausted:
            return Outcome.FINISHED, offset

        steps = 0
        state = State.DISPATCH
        while True:
            if state is State.DISPATCH:
                if self.max_steps is not None and steps >= self.max_steps:
                    raise StepLimitExceeded(self.max_steps, offset=offset, tape=tape)
                if self.on_step is not None:
                    self.on_step(Step(steps, cursor.position, cursor.current(),
                                      offset, tape, instructions))
                steps += 1
                state = COMMANDS.get(cursor.current(), State.ADVANCE)

            elif state is State.MOVE_RIGHT:
                offset = tape.check(offset + 1)
                state = State.ADVANCE

            elif state is State.MOVE_LEFT:
                offset = tape.check(offset - 1)
                state = State.ADVANCE

            elif state is State.INC:
                tape.increment(offset)
                state = State.ADVANCE

            elif state is State.DEC:
                tape.decrement(offset)
                state = State.ADVANCE

            elif state is State.OUTPUT:
                self.output.write(tape.read(offset))
                state = State.ADVANCE

            elif state is State.INPUT:
                tape.write(offset, self._read_byte(tape, offset))
                state = State.ADVANCE

            elif state is State.JUMP_IF_ZERO:
                state = _after(jump_if_zero(cursor, tape.read(offset)))

            elif state is State.JUMP_IF_NON_ZERO:
                state = _after(jump_if_non_zero(cursor, tape.read(offset)))

            elif state is State.ADVANCE:
                signal = cursor.advance()
                state = TERMINAL[signal] if signal is not None else State.DISPATCH

            elif state is State.FINISHED:
                return Outcome.FINISHED, offset

            elif state is State.SOURCE_ERROR:
                return Outcome.SOURCE_ERROR, offset

    def _read_byte(self, tape: Tape, offset: int) -> int:
        value = self.input.next()
        if value is None:
            return 0
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or not 0 <= value <= 255:
            raise InvalidInput(value, offset=offset, tape=tape)
        return int(value)


def run(instructions: str,
        initial_offset: int = 0,
        initial_tape: Optional[Tape] = None,
        input: Optional[ByteSource] = None,
        output: Optional[ByteSink] = None,
        on_out_of_range: Optional[OutOfRangeHook] = None,
        on_step: Optional[StepHook] = None,
        max_steps: Optional[int] = None,
        tape_size: int = DEFAULT_TAPE_SIZE) -> RunResult:
    """Run one instruction string. Input and output default to stdin and stdout."""
    interpreter = Interpreter(input, output, on_out_of_range, on_step, max_steps)
    return interpreter.run(instructions, initial_offset, initial_tape, tape_size)
