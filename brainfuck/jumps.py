"""
Bracket matching for loops.

Partners are found by scanning the instruction string one character at a
time with a nesting depth counter; there is no precomputed jump table. A
scan that runs off an end of the string returns the cursor's signal
(FINISHED forward, SOURCE_ERROR backward) for the engine to act on.
"""

from typing import Optional

from .cursor import InstructionCursor
from .state import Outcome

OPEN = '['
CLOSE = ']'


def skip_forward(cursor: InstructionCursor) -> Optional[Outcome]:
    """Move the cursor from a '[' onto its matching ']'."""
    depth = 0
    while True:
        instruction = cursor.current()
        if instruction == OPEN:
            depth += 1
        elif instruction == CLOSE:
            depth -= 1
        # The starting '[' lifts depth to 1, so it never ends the scan
        if depth == 0:
            return None
        signal = cursor.advance()
        if signal is not None:
            return signal


def skip_backward(cursor: InstructionCursor) -> Optional[Outcome]:
    """Move the cursor from a ']' back onto its matching '['."""
    depth = 0
    while True:
        instruction = cursor.current()
        if instruction == CLOSE:
            depth += 1
        elif instruction == OPEN:
            depth -= 1
        if depth == 0:
            return None
        signal = cursor.retreat()
        if signal is not None:
            return signal


def jump_if_zero(cursor: InstructionCursor, cell: int) -> Optional[Outcome]:
    """'[': skip the loop body when the cell is zero, else enter it."""
    if cell == 0:
        return skip_forward(cursor)
    return None


def jump_if_non_zero(cursor: InstructionCursor, cell: int) -> Optional[Outcome]:
    """']': go back to the loop start while the cell is non-zero.

    A zero cell falls through, but only once the partner '[' is known to
    exist: an unmatched ']' is a SOURCE_ERROR whatever the cell holds.
    """
    origin = cursor.position
    signal = skip_backward(cursor)
    if signal is not None:
        return signal
    if cell == 0:
        cursor.position = origin
    return None


def find_partner(instructions: str, position: int) -> Optional[int]:
    """Position of the bracket matching the one at `position`, or None if unmatched."""
    cursor = InstructionCursor(instructions)
    cursor.position = position
    instruction = cursor.current()
    if instruction == OPEN:
        signal = skip_forward(cursor)
    elif instruction == CLOSE:
        signal = skip_backward(cursor)
    else:
        raise ValueError(f"No bracket at position {position}: {instruction!r}")
    return None if signal is not None else cursor.position
