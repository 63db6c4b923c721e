"""Outcome of one invocation and the state handed back to the caller."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .tape import Tape


class Outcome(Enum):
    FINISHED = "finished"          # instruction stream exhausted
    SOURCE_ERROR = "source_error"  # unmatched ']' scanned past the start


class RunResult(NamedTuple):
    """What one invocation returns; unpacks as (outcome, tape, offset).

    The tape and offset are present whatever the outcome, so a session
    can resume from them.
    """
    outcome: Outcome
    tape: Tape
    offset: int

    @property
    def finished(self) -> bool:
        return self.outcome is Outcome.FINISHED


@dataclass(frozen=True)
class Step:
    """Snapshot handed to a step hook before each instruction is dispatched."""
    number: int
    position: int
    instruction: str
    offset: int
    tape: Tape
    program: str
