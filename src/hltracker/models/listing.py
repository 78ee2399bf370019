from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List
from .common import MessageType
from .server import ServerRecord

class ListingHeader(BaseModel):
    message_type: int = Field(MessageType.SERVER_LIST, ge=0, le=0xFFFF)
    message_byte_size: int = Field(..., ge=0, le=0xFFFF)
    declared_count: int = Field(..., ge=0, le=0xFFFF)
    declared_count_dup: int = Field(..., ge=0, le=0xFFFF)


class ServerListing(BaseModel):
    header: ListingHeader
    servers: List[ServerRecord] = Field(default_factory=list)

    # Convenience constructors delegating to the binary/render layers
    @classmethod
    def from_bytes(cls, data: bytes) -> "ServerListing":
        from ..binary.decoder import decode_listing
        return decode_listing(data)

    def to_bytes(self, *, include_handshake: bool = True) -> bytes:
        from ..binary.writer import encode_listing
        return encode_listing(self.servers, include_handshake=include_handshake)

    def to_table(self) -> str:
        from ..render import format_table
        return format_table(self.servers)
