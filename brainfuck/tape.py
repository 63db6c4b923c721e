"""
Tape memory for the interpreter.

The tape is a fixed number of unsigned 8-bit cells, all starting at zero.
Cell arithmetic wraps around: incrementing 255 gives 0 and decrementing 0
gives 255. Nothing about over- or underflow is ever reported. Offsets
outside the tape are the only thing the tape refuses.
"""

from typing import List, Optional

import numpy as np

from .errors import InvalidInput, OutOfRange

DEFAULT_TAPE_SIZE = 30000
CELL_MODULUS = 256


class Tape:
    """Fixed-size byte memory. The size is set once and never changes."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size <= 0:
            raise ValueError(f"Tape size must be positive, got {size}")
        self.cells = np.zeros(size, dtype=np.uint8)

    @classmethod
    def from_bytes(cls, data: bytes, size: Optional[int] = None) -> 'Tape':
        """Create a tape whose leading cells hold `data`."""
        tape = cls(size if size is not None else max(len(data), 1))
        if len(data) > len(tape):
            raise ValueError(f"{len(data)} bytes do not fit on a tape of {len(tape)} cells")
        tape.cells[:len(data)] = np.frombuffer(bytes(data), dtype=np.uint8)
        return tape

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, offset: int) -> int:
        return self.read(offset)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tape):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        used = np.flatnonzero(self.cells)
        return f"Tape(size={len(self)}, nonzero_cells={len(used)})"

    def check(self, offset: int) -> int:
        """Return `offset` unchanged if it addresses a cell, else raise OutOfRange."""
        if not 0 <= offset < len(self.cells):
            raise OutOfRange(offset, len(self.cells), tape=self)
        return offset

    def read(self, offset: int) -> int:
        return int(self.cells[self.check(offset)])

    def write(self, offset: int, value: int) -> None:
        self.check(offset)
        if not 0 <= value < CELL_MODULUS:
            raise InvalidInput(value, offset=offset, tape=self)
        self.cells[offset] = value

    def increment(self, offset: int) -> None:
        self.cells[offset] = (self.read(offset) + 1) % CELL_MODULUS

    def decrement(self, offset: int) -> None:
        self.cells[offset] = (self.read(offset) - 1) % CELL_MODULUS

    def window(self, start: int, stop: int) -> List[int]:
        """Cell values in [start, stop), clipped to the tape."""
        start = max(0, start)
        stop = min(len(self.cells), stop)
        return self.cells[start:stop].tolist()

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    def restore(self, snapshot: np.ndarray) -> None:
        # Sizes must agree; a tape is never resized
        if snapshot.shape != self.cells.shape:
            raise ValueError("Snapshot does not match tape size")
        np.copyto(self.cells, snapshot)

    def copy(self) -> 'Tape':
        clone = Tape(len(self.cells))
        clone.restore(self.cells)
        return clone
