import pytest

from brainfuck import BufferSink, BytesSource, Tape


@pytest.fixture
def tape():
    return Tape(64)


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture
def no_input():
    return BytesSource(b"")
