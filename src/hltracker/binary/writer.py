from __future__ import annotations
from typing import Iterable
from .codecs.handshake import encode_handshake
from .codecs.listing_header import encode_listing_header, COUNTS_SIZE
from .codecs.server_codec import encode_server
from .text import LEGACY_ENCODING
from ..models.common import MessageType, PROTOCOL_VERSION
from ..models.listing import ListingHeader
from ..models.server import ServerRecord

def encode_listing(
    servers: Iterable[ServerRecord],
    *,
    include_handshake: bool = True,
    version: int = PROTOCOL_VERSION,
    encoding: str = LEGACY_ENCODING,
) -> bytes:
    """Build the tracker side of a listing exchange (echo + header + records)."""
    body = [encode_server(s, encoding=encoding) for s in servers]
    count = len(body)
    hdr = ListingHeader(
        message_type=MessageType.SERVER_LIST,
        message_byte_size=(COUNTS_SIZE + sum(len(b) for b in body)) & 0xFFFF,
        declared_count=count,
        declared_count_dup=count,
    )
    out = bytearray()
    if include_handshake:
        out += encode_handshake(version)
    out += encode_listing_header(hdr)
    for b in body:
        out += b
    return bytes(out)
