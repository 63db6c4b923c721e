"""
Sessions: many invocations over one tape.

A session feeds one line at a time to the engine. When a line finishes, the
tape and cell offset it returned become the starting point for the next line,
so a run of lines behaves like one continuous program. A SOURCE_ERROR or an
unrecovered fault ends the session.

Each line is a complete invocation, so a loop has to open and close on the
same line: "+[" followed by "-]" is an unmatched '[' (which just finishes)
and then an unmatched ']' (which ends the session with SOURCE_ERROR). Lifting
that restriction would mean threading the instruction position between
lines too, which sessions deliberately do not do.
"""

import logging
from typing import Callable, Iterable, Optional

from .debugger import render_memory
from .engine import Interpreter, OutOfRangeHook, StepHook
from .errors import Fault, SessionClosed
from .state import Outcome, RunResult
from .streams import ByteSink, ByteSource
from .tape import DEFAULT_TAPE_SIZE, Tape

logger = logging.getLogger(__name__)

QUIT_COMMANDS = (":quit", ":q")


class Session:
    """A tape and cell offset threaded through successive invocations."""

    def __init__(self,
                 tape_size: int = DEFAULT_TAPE_SIZE,
                 offset: int = 0,
                 input: Optional[ByteSource] = None,
                 output: Optional[ByteSink] = None,
                 on_out_of_range: Optional[OutOfRangeHook] = None,
                 on_step: Optional[StepHook] = None,
                 max_steps: Optional[int] = None):
        self.interpreter = Interpreter(input, output, on_out_of_range, on_step, max_steps)
        self.tape = Tape(tape_size)
        self.offset = offset
        self.active = True
        self.last_result: Optional[RunResult] = None
        self.lines_run = 0

    def feed(self, line: str) -> RunResult:
        """Run one line, carrying the tape and offset forward if it finished."""
        if not self.active:
            raise SessionClosed("Session has ended; reset it to start again")
        try:
            result = self.interpreter.run(line, self.offset, self.tape)
        except Fault as fault:
            self.active = False
            logger.warning("Session ended by %s: %s", type(fault).__name__, fault)
            raise
        except KeyboardInterrupt:
            self.active = False
            logger.warning("Session interrupted after %d lines", self.lines_run)
            raise
        self.lines_run += 1
        self.last_result = result
        if result.outcome is Outcome.FINISHED:
            self.tape = result.tape
            self.offset = result.offset
        else:
            self.active = False
            logger.warning("Session ended with %s after %d lines", result.outcome.value, self.lines_run)
        return result

    def reset(self) -> None:
        """Start over on a fresh tape of the same size."""
        self.tape = Tape(len(self.tape))
        self.offset = 0
        self.active = True
        self.last_result = None
        self.lines_run = 0


def run_lines(session: Session, lines: Iterable[str]) -> Optional[Outcome]:
    """Feed lines until they run out or one does not finish. Returns the last outcome.

    Faults propagate to the caller.
    """
    outcome = None
    for line in lines:
        outcome = session.feed(line.rstrip("\r\n")).outcome
        if outcome is not Outcome.FINISHED:
            break
    return outcome


def ask_for_offset(read_line: Optional[Callable[[str], str]] = None,
                   emit: Callable[[str], None] = print) -> OutOfRangeHook:
    """Build an out-of-range hook that asks the user for a new starting offset."""
    read_line = read_line or input

    def hook(offset: int) -> Optional[int]:
        emit(f"⚠️ Cell offset {offset} is off the tape.")
        while True:
            try:
                answer = read_line("New starting offset (blank to give up): ").strip()
            except EOFError:
                return None
            if not answer:
                return None
            try:
                return int(answer)
            except ValueError:
                emit(f"Not a number: {answer!r}")
    return hook


def interactive(session: Session,
                prompt: str = "bf> ",
                read_line: Optional[Callable[[str], str]] = None,
                emit: Callable[[str], None] = print,
                show_memory_range: int = 10) -> Optional[Outcome]:
    """Read-eval loop over a session.

    Meta-commands: ":tape [N]" shows N cells around the offset, ":reset"
    starts a fresh tape, ":quit" leaves. Returns the last outcome.
    """
    read_line = read_line or input
    outcome = None
    while True:
        try:
            line = read_line(prompt)
        except (EOFError, KeyboardInterrupt):
            emit("")
            return outcome

        command = line.strip()
        if command in QUIT_COMMANDS:
            return outcome
        parts = command.split()
        if parts and parts[0] == ":tape":
            width = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else show_memory_range
            for text in render_memory(session.tape, session.offset, width):
                emit(text)
            continue
        if command == ":reset":
            session.reset()
            emit("Tape reset.")
            continue

        try:
            result = session.feed(line)
        except Fault as fault:
            emit(f"❌ {fault}")
            return None
        except KeyboardInterrupt:
            emit("\n❌ Interrupted - session ended.")
            return None
        outcome = result.outcome
        if outcome is Outcome.SOURCE_ERROR:
            emit("❌ Unmatched ']' - session ended.")
            return outcome
