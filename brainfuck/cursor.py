"""
Instruction cursor: walks one instruction string left and right.

Running off either end is reported as an Outcome rather than raised.
Falling off the end means the program finished; backing up past the
first instruction means a ']' had no partner.
"""

from typing import Optional

from .state import Outcome


class InstructionCursor:
    def __init__(self, instructions: str):
        self.instructions = instructions
        self.position = 0

    def __len__(self) -> int:
        return len(self.instructions)

    @property
    def exhausted(self) -> bool:
        """True for an empty stream, which has nothing to dispatch."""
        return not self.instructions

    def current(self) -> str:
        return self.instructions[self.position]

    def advance(self) -> Optional[Outcome]:
        """Step forward; returns FINISHED instead of moving past the last instruction."""
        if self.position + 1 >= len(self.instructions):
            return Outcome.FINISHED
        self.position += 1
        return None

    def retreat(self) -> Optional[Outcome]:
        """Step back; returns SOURCE_ERROR instead of moving before the first instruction."""
        if self.position - 1 < 0:
            return Outcome.SOURCE_ERROR
        self.position -= 1
        return None
