from __future__ import annotations
import struct
from typing import Optional
from .bytecursor import ByteCursor
from hltracker.errors import UnexpectedHandshake
from hltracker.models.common import MAGIC, PROTOCOL_VERSION

HANDSHAKE_SIZE = 6

def encode_handshake(version: int = PROTOCOL_VERSION) -> bytes:
    """6-byte handshake: magic "HTRK" + u16 protocol version."""
    return MAGIC + struct.pack(">H", version)

def decode_handshake_echo(cur: ByteCursor, version: int = PROTOCOL_VERSION) -> Optional[int]:
    """
    Match the tracker's echo of our handshake.
    Returns the echoed version once all 6 bytes are buffered (and consumed),
    None while waiting for more bytes.
    """
    raw = cur.peek(HANDSHAKE_SIZE)
    if raw is None:
        return None
    expected = encode_handshake(version)
    if raw != expected:
        raise UnexpectedHandshake(raw, expected)
    cur.consume(HANDSHAKE_SIZE)
    return version
