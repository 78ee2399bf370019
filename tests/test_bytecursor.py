import pytest

from hltracker.binary.codecs import bytecursor
from hltracker.binary.codecs.bytecursor import ByteCursor

def test_peek_is_retryable_on_short_buffer():
    cur = ByteCursor(b"\x01\x02")
    assert cur.peek(3) is None
    assert cur.peek_u16(1) is None
    assert cur.peek_u32() is None
    cur.append(b"\x03\x04")
    assert cur.peek(3) == b"\x01\x02\x03"
    assert cur.peek_u16(1) == 0x0203
    assert cur.peek_u32() == 0x01020304
    assert cur.remaining() == 4

def test_consume_keeps_unconsumed_tail():
    cur = ByteCursor(b"abcdef")
    cur.consume(4)
    assert len(cur) == 2
    assert cur.peek(2) == b"ef"
    cur.append(b"gh")
    assert cur.take(4) == b"efgh"
    assert cur.remaining() == 0

def test_consume_underrun_is_an_error():
    cur = ByteCursor(b"ab")
    with pytest.raises(ValueError):
        cur.consume(3)
    assert cur.peek(2) == b"ab"

def test_take_on_short_buffer_consumes_nothing():
    cur = ByteCursor(b"ab")
    assert cur.take(3) is None
    assert cur.has(2) and not cur.has(3)

def test_compaction_preserves_bytes(monkeypatch):
    monkeypatch.setattr(bytecursor, "COMPACT_THRESHOLD", 4)
    cur = ByteCursor(bytes(range(10)))
    cur.consume(5)
    assert cur._pos == 0
    assert cur.peek(5) == bytes(range(5, 10))
