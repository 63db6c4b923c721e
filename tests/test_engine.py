import pytest

from brainfuck import (BufferSink, BytesSource, Interpreter, InvalidInput, IterSource, Outcome,
                       OutOfRange, StepLimitExceeded, Tape, TextSource, run)
from brainfuck.programs import DOUBLE, ECHO, HELLO_WORLD, INCREMENT


def quiet_run(code, **kwargs):
    kwargs.setdefault("input", BytesSource(b""))
    kwargs.setdefault("output", BufferSink())
    return run(code, **kwargs)


def test_empty_program_finishes_unchanged():
    tape = Tape(16)
    tape.write(2, 9)
    before = tape.copy()
    outcome, after, offset = quiet_run("", initial_offset=2, initial_tape=tape)
    assert outcome is Outcome.FINISHED
    assert offset == 2
    assert after == before


def test_increment_fresh_tape():
    result = quiet_run("+")
    assert result.outcome is Outcome.FINISHED
    assert result.tape.read(0) == 1
    assert len(result.tape) == 30000


def test_decrement_wraps():
    result = quiet_run("-")
    assert result.finished
    assert result.tape.read(0) == 255


def test_lone_close_bracket_is_source_error():
    result = quiet_run("]")
    assert result.outcome is Outcome.SOURCE_ERROR
    assert result.offset == 0


def test_unmatched_close_after_work_keeps_tape():
    result = quiet_run("++]")
    assert result.outcome is Outcome.SOURCE_ERROR
    assert result.tape.read(0) == 2


def test_unmatched_open_bracket_finishes():
    result = quiet_run("[+")
    assert result.outcome is Outcome.FINISHED
    assert result.tape.read(0) == 0


def test_clear_loop_runs_cell_times():
    tape = Tape(8)
    tape.write(0, 5)
    counts = []
    result = quiet_run("[-]", initial_tape=tape,
                       on_step=lambda step: counts.append(step.instruction))
    assert result.outcome is Outcome.FINISHED
    assert result.tape.read(0) == 0
    assert counts.count("-") == 5


def test_threading_tape_between_runs():
    first = quiet_run("+", initial_offset=0)
    second = quiet_run("+", initial_offset=first.offset, initial_tape=first.tape)
    assert second.tape.read(0) == 2


def test_offset_carries_through():
    result = quiet_run(">>+>")
    assert result.offset == 3
    assert result.tape.read(2) == 1


def test_comments_are_ignored():
    result = quiet_run("add two: ++ then move > done")
    assert result.tape.read(0) == 2
    assert result.offset == 1


def test_hello_world():
    sink = BufferSink()
    result = run(HELLO_WORLD, input=BytesSource(b""), output=sink)
    assert result.outcome is Outcome.FINISHED
    assert sink.getvalue() == b"Hello World!\n"


def test_nested_loops_multiply():
    # 3 * 4 into cell 1
    result = quiet_run("+++[>++++<-]")
    assert result.tape.read(1) == 12
    assert result.tape.read(0) == 0


@pytest.mark.parametrize("x", [0, 1, 5, 10, 127])
def test_double(x):
    sink = BufferSink()
    run(DOUBLE, input=BytesSource(bytes([x])), output=sink)
    assert sink.getvalue() == bytes([(2 * x) % 256])


def test_increment_program_wraps_input():
    sink = BufferSink()
    run(INCREMENT, input=BytesSource(b"\xff"), output=sink)
    assert sink.getvalue() == b"\x00"


def test_echo_until_eof():
    sink = BufferSink()
    result = run(ECHO, input=TextSource("hi!"), output=sink)
    assert result.finished
    assert sink.text() == "hi!"


def test_end_of_input_reads_zero():
    tape = Tape(4)
    tape.write(0, 42)
    result = quiet_run(",", initial_tape=tape)
    assert result.tape.read(0) == 0


def test_invalid_input_is_fatal():
    retries = []
    with pytest.raises(InvalidInput) as info:
        run(",", input=IterSource([300]), output=BufferSink(),
            on_out_of_range=lambda offset: retries.append(offset) or 0)
    assert info.value.value == 300
    assert retries == []


def test_move_left_from_zero_is_out_of_range():
    with pytest.raises(OutOfRange) as info:
        quiet_run("<")
    assert info.value.offset == -1


def test_move_right_off_the_end():
    with pytest.raises(OutOfRange) as info:
        quiet_run(">>>>", tape_size=3)
    assert info.value.offset == 3


def test_bad_initial_offset():
    with pytest.raises(OutOfRange):
        quiet_run("+", initial_offset=10, tape_size=10)


def test_retry_with_new_offset_restarts():
    seen = []

    def hook(offset):
        seen.append(offset)
        return 1

    result = quiet_run("<", initial_offset=0, on_out_of_range=hook)
    assert seen == [-1]
    assert result.outcome is Outcome.FINISHED
    assert result.offset == 0


def test_retry_restores_original_tape():
    tape = Tape(4)
    tape.write(0, 7)
    # First attempt bumps cell 0 twice before falling off the left edge
    offsets = iter([2])
    result = quiet_run("++<+", initial_tape=tape, on_out_of_range=lambda offset: next(offsets, None))
    assert result.finished
    assert result.offset == 1
    assert result.tape.read(0) == 7
    assert result.tape.read(2) == 2
    assert result.tape.read(1) == 1


def test_retry_declined_propagates():
    with pytest.raises(OutOfRange):
        quiet_run("<", on_out_of_range=lambda offset: None)


def test_retry_with_bad_offset_asks_again():
    answers = iter([50, 3])
    seen = []

    def hook(offset):
        seen.append(offset)
        return next(answers)

    result = quiet_run("<", tape_size=8, on_out_of_range=hook)
    assert seen == [-1, 50]
    assert result.offset == 2


def test_step_limit():
    with pytest.raises(StepLimitExceeded) as info:
        quiet_run("+[]", max_steps=100)
    assert info.value.limit == 100
    assert info.value.tape.read(0) == 1


def test_step_hook_sees_every_dispatch():
    steps = []
    quiet_run("+>-", on_step=steps.append)
    assert [s.instruction for s in steps] == ["+", ">", "-"]
    assert [s.offset for s in steps] == [0, 0, 1]
    assert [s.number for s in steps] == [0, 1, 2]


def test_interpreter_reused_across_runs():
    sink = BufferSink()
    interpreter = Interpreter(input=BytesSource(b""), output=sink)
    result = interpreter.run("+++.")
    interpreter.run("+.", result.offset, result.tape)
    assert sink.getvalue() == b"\x03\x04"


@pytest.mark.parametrize("limit", [0, -1, -50])
def test_non_positive_step_limit_means_unlimited(limit):
    result = quiet_run("+++", max_steps=limit)
    assert result.finished
    assert result.tape.read(0) == 3
