from __future__ import annotations
import struct
from ipaddress import IPv4Address
from typing import Optional, Tuple

from .bytecursor import ByteCursor
from hltracker.binary.text import TextDecoder, LEGACY_ENCODING, decode_field, decode_text
from hltracker.models.server import ServerRecord

# address(4) port(2) users(2) reserved(2) name_len(1)
FIXED_PREFIX = 11
NAME_LEN_OFFSET = 10

def decode_server(cur: ByteCursor, text_decoder: TextDecoder = decode_text) -> Optional[Tuple[ServerRecord, int]]:
    """
    Decode one server record from the head of the cursor.

    Returns (record, wire_size) and consumes exactly wire_size bytes, or None
    without consuming anything when the record is not fully buffered yet.
    """
    name_len = cur.peek_u8(NAME_LEN_OFFSET)
    if name_len is None:
        return None
    desc_off = FIXED_PREFIX + name_len
    desc_len = cur.peek_u8(desc_off)
    if desc_len is None:
        return None
    size = desc_off + 1 + desc_len
    raw = cur.peek(size)
    if raw is None:
        return None

    # Four sequential octets; reserved (8..10) is skipped unvalidated
    addr, port, users = struct.unpack_from(">4sHH", raw, 0)
    name = decode_field(text_decoder, raw[FIXED_PREFIX:desc_off])
    desc = decode_field(text_decoder, raw[desc_off + 1:size])

    rec = ServerRecord(
        address=IPv4Address(addr), port=port, user_count=users,
        name=name, description=desc,
    )
    cur.consume(size)
    return rec, size

def _encode_text(text: str, encoding: str) -> bytes:
    raw = text.encode(encoding, errors="replace")
    if len(raw) > 0xFF:
        raise ValueError(f"text field too long for 1-byte length: {len(raw)} bytes")
    return bytes([len(raw)]) + raw

def encode_server(rec: ServerRecord, *, encoding: str = LEGACY_ENCODING) -> bytes:
    out = bytearray()
    out += rec.address.packed
    out += struct.pack(">HH", rec.port, rec.user_count)
    out += b"\x00\x00"                                  # reserved
    out += _encode_text(rec.name, encoding)
    out += _encode_text(rec.description, encoding)
    return bytes(out)
