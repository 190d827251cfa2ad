import os
import select

import pytest

from pinkit.serial import IOStream


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    os.close(r)
    os.close(w)


def test_read_empty_returns_none(pipe):
    r, w = pipe
    with IOStream(r, w) as stream:
        assert stream.read() is None
        assert stream.available() == 0


def test_write_then_read_round_trip(pipe):
    r, w = pipe
    with IOStream(r, w) as stream:
        assert stream.write(b"hi") == 2
        assert stream.available() == 2
        assert stream.read() == ord("h")
        assert stream.read() == ord("i")
        assert stream.read() is None


def test_peek_does_not_consume(pipe):
    r, w = pipe
    with IOStream(r, w) as stream:
        assert stream.peek() is None
        stream.write(b"z")
        assert stream.peek() == ord("z")
        assert stream.available() == 1
        assert stream.peek() == ord("z")
        assert stream.read() == ord("z")
        assert stream.available() == 0


def test_write_empty_returns_zero(pipe):
    r, w = pipe
    with IOStream(r, w) as stream:
        assert stream.write(b"") == 0


def test_available_for_write_and_full_output(pipe):
    r, w = pipe
    with IOStream(r, w) as stream:
        assert stream.available_for_write() == select.PIPE_BUF
        chunk = b"x" * 4096
        while stream.write(chunk) > 0:
            pass
        assert stream.write(b"y") == 0
        assert stream.available_for_write() == 0


def test_close_restores_blocking(pipe):
    r, w = pipe
    assert os.get_blocking(r)
    stream = IOStream(r, w)
    assert stream.read() is None
    assert not os.get_blocking(r)
    assert not os.get_blocking(w)
    stream.close()
    stream.close()
    assert os.get_blocking(r)
    assert os.get_blocking(w)