from __future__ import annotations
import struct
from typing import Optional

# Consumed prefix size that triggers an automatic compact()
COMPACT_THRESHOLD = 4096


class ByteCursor:
    """
    Growable buffer of pending stream bytes.

    Unlike a fixed-buffer cursor, reads never fail fatally on a short buffer:
    every peek returns None when the requested span is not fully buffered yet,
    so callers can retry after the next append().
    """
    __slots__ = ("_buf", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview = b""):
        self._buf = bytearray(data)
        self._pos = 0

    def __len__(self) -> int: return self.remaining()
    def remaining(self) -> int: return len(self._buf) - self._pos
    def has(self, n: int) -> bool: return self.remaining() >= n

    def append(self, data: bytes | bytearray | memoryview) -> None:
        self._buf += data

    def peek(self, n: int, offset: int = 0) -> Optional[bytes]:
        if n < 0 or offset < 0: raise ValueError("negative peek")
        start = self._pos + offset
        end = start + n
        if end > len(self._buf):
            return None
        return bytes(self._buf[start:end])

    # big-endian peeks relative to the read position
    def _unpack(self, fmt: str, n: int, offset: int) -> Optional[int]:
        raw = self.peek(n, offset)
        return None if raw is None else struct.unpack(fmt, raw)[0]
    def peek_u8(self, offset: int = 0) -> Optional[int]:  return self._unpack(">B", 1, offset)
    def peek_u16(self, offset: int = 0) -> Optional[int]: return self._unpack(">H", 2, offset)
    def peek_u32(self, offset: int = 0) -> Optional[int]: return self._unpack(">I", 4, offset)

    def consume(self, n: int) -> None:
        if n < 0: raise ValueError("negative consume")
        if n > self.remaining(): raise ValueError(f"consume underrun: need {n}, have {self.remaining()}")
        self._pos += n
        if self._pos >= COMPACT_THRESHOLD or self._pos == len(self._buf):
            self.compact()

    def take(self, n: int) -> Optional[bytes]:
        out = self.peek(n)
        if out is not None:
            self.consume(n)
        return out

    def compact(self) -> None:
        if self._pos:
            del self._buf[:self._pos]
            self._pos = 0
