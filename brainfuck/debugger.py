"""
Step-by-step tracer

Shows the program with the current instruction bracketed, a window of the
tape around the cell offset, and the offset itself, before every
instruction is dispatched. Plug a Tracer into the engine as its step hook.
"""

from typing import Callable, List, Optional

from .state import Step
from .tape import Tape


def render_program(program: str, position: int) -> str:
    """The program with the instruction at `position` wrapped in brackets."""
    shown = ""
    for i, instruction in enumerate(program):
        if i == position:
            shown += f"[{instruction}]"
        else:
            shown += instruction
    return shown


def render_memory(tape: Tape, offset: int, show_memory_range: int = 10) -> List[str]:
    """Three lines: cell values, a ^ under the current cell, and addresses."""
    start = max(0, offset - show_memory_range // 2)
    end = min(len(tape), start + show_memory_range)

    # Adjust start if we're near the end
    if end - start < show_memory_range:
        start = max(0, end - show_memory_range)

    memory_vals = []
    memory_ptrs = []
    memory_addrs = []
    for i, value in enumerate(tape.window(start, end), start):
        memory_vals.append(f"{value:3d}")
        memory_ptrs.append(" ^ " if i == offset else "   ")
        memory_addrs.append(f"{i:3d}")

    return [
        "Memory:   [" + "|".join(memory_vals) + "]",
        "Pointer:   " + " ".join(memory_ptrs),
        "Address:   " + " ".join(memory_addrs),
    ]


def render_step(step: Step, show_memory_range: int = 10) -> str:
    lines = [
        f"Step {step.number}: Execute '{step.instruction}' at position {step.position}",
        f"Program:  {render_program(step.program, step.position)}",
    ]
    lines.extend(render_memory(step.tape, step.offset, show_memory_range))
    return "\n".join(lines)


class Tracer:
    """Step hook that prints each step, going quiet after `max_shown` steps."""

    def __init__(self, show_memory_range: int = 10, max_shown: Optional[int] = 100,
                 emit: Callable[[str], None] = print):
        self.show_memory_range = show_memory_range
        self.max_shown = max_shown
        self.emit = emit
        self.step_count = 0

    def __call__(self, step: Step) -> None:
        self.step_count += 1
        if self.max_shown is not None and self.step_count > self.max_shown:
            if self.step_count == self.max_shown + 1:
                self.emit(f"... trace truncated after {self.max_shown} steps")
            return
        self.emit(render_step(step, self.show_memory_range))
