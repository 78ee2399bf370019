from __future__ import annotations
import struct
from typing import Optional
from .bytecursor import ByteCursor
from hltracker.errors import UnsupportedMessageType
from hltracker.models.common import MessageType
from hltracker.models.listing import ListingHeader

HEADER_SIZE = 8
# Bytes of the header that message_byte_size covers (both count fields)
COUNTS_SIZE = 4

def decode_listing_header(cur: ByteCursor) -> Optional[ListingHeader]:
    """
    8-byte listing header: type u16, size u16, count u16, count (dup) u16.
    Returns None (nothing consumed) until all 8 bytes are buffered.
    """
    raw = cur.peek(HEADER_SIZE)
    if raw is None:
        return None
    mtype, size, count, count_dup = struct.unpack(">HHHH", raw)
    if mtype != MessageType.SERVER_LIST:
        raise UnsupportedMessageType(mtype)
    cur.consume(HEADER_SIZE)
    return ListingHeader(
        message_type=mtype, message_byte_size=size,
        declared_count=count, declared_count_dup=count_dup,
    )

def encode_listing_header(hdr: ListingHeader) -> bytes:
    return struct.pack(">HHHH", hdr.message_type, hdr.message_byte_size,
                       hdr.declared_count, hdr.declared_count_dup)
