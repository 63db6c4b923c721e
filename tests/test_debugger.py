from brainfuck import BufferSink, BytesSource, Tape, run
from brainfuck.debugger import Tracer, render_memory, render_program


def test_render_program_marks_current():
    assert render_program("+>-", 1) == "+[>]-"


def test_render_memory_window_and_pointer():
    tape = Tape(20)
    tape.write(5, 42)
    values, pointer, addresses = render_memory(tape, 5, show_memory_range=4)
    assert values == "Memory:   [  0| 42|  0|  0]"
    assert pointer == "Pointer:   " + "     ^ " + " " * 8
    assert addresses == "Address:     3   4   5   6"


def test_render_memory_near_end_keeps_width():
    tape = Tape(6)
    values, _, addresses = render_memory(tape, 5, show_memory_range=4)
    assert values.count("|") == 3
    assert addresses.endswith("5")


def test_tracer_prints_each_step_then_truncates():
    lines = []
    tracer = Tracer(show_memory_range=4, max_shown=2, emit=lines.append)
    run("+++", input=BytesSource(b""), output=BufferSink(), on_step=tracer)
    assert tracer.step_count == 3
    assert len(lines) == 3
    assert lines[0].startswith("Step 0: Execute '+' at position 0")
    assert "Program:  [+]++" in lines[0]
    assert lines[2] == "... trace truncated after 2 steps"
