from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .codecs.bytecursor import ByteCursor
from .codecs.handshake import decode_handshake_echo
from .codecs.listing_header import decode_listing_header, COUNTS_SIZE
from .codecs.server_codec import decode_server
from .text import TextDecoder, decode_text

from hltracker.errors import MessageSizeMismatch, TruncatedStream
from hltracker.models.common import PROTOCOL_VERSION
from hltracker.models.listing import ListingHeader, ServerListing
from hltracker.models.server import ServerRecord

logger = logging.getLogger(__name__)


# -----------------------------
# Decoder states
# -----------------------------

@dataclass(frozen=True)
class AwaitingHandshakeEcho:
    pass


@dataclass(frozen=True)
class AwaitingHeader:
    pass


@dataclass(frozen=True)
class StreamingRecords:
    header: ListingHeader
    collected: Tuple[ServerRecord, ...] = ()

    @property
    def declared_count(self) -> int:
        return self.header.declared_count


@dataclass(frozen=True)
class Done:
    header: ListingHeader
    records: Tuple[ServerRecord, ...]


DecoderState = Union[AwaitingHandshakeEcho, AwaitingHeader, StreamingRecords, Done]


# -----------------------------
# Incremental decoder
# -----------------------------

class RecordDecoder:
    """
    Incremental decoder for a tracker listing response.

    Bytes may arrive in any fragmentation. Each decode() call advances the
    state machine as far as the buffered bytes allow and returns the records
    completed by that call; an empty result while not ``done`` means more
    bytes are needed. Malformed input raises a ProtocolError.
    """

    def __init__(
        self,
        text_decoder: TextDecoder = decode_text,
        *,
        version: int = PROTOCOL_VERSION,
        strict_size: bool = False,
    ):
        self.text_decoder = text_decoder
        self.version = version
        self.strict_size = strict_size
        self.cursor = ByteCursor()
        self._state: DecoderState = AwaitingHandshakeEcho()
        self._message_bytes = 0

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def done(self) -> bool:
        return isinstance(self._state, Done)

    @property
    def header(self) -> Optional[ListingHeader]:
        return getattr(self._state, "header", None)

    @property
    def records(self) -> List[ServerRecord]:
        st = self._state
        if isinstance(st, StreamingRecords):
            return list(st.collected)
        if isinstance(st, Done):
            return list(st.records)
        return []

    @property
    def buffered(self) -> int:
        return self.cursor.remaining()

    def feed(self, data: bytes) -> List[ServerRecord]:
        if self.done:
            # Trackers may keep talking; nothing after Done is ours
            if data:
                logger.debug(f"Ignoring {len(data)} bytes received after listing completed")
            return []
        self.cursor.append(data)
        return self.decode()

    def decode(self) -> List[ServerRecord]:
        out: List[ServerRecord] = []
        while True:
            st = self._state

            if isinstance(st, AwaitingHandshakeEcho):
                if decode_handshake_echo(self.cursor, self.version) is None:
                    return out
                logger.debug(f"Handshake echo accepted (version {self.version})")
                self._state = AwaitingHeader()

            elif isinstance(st, AwaitingHeader):
                hdr = decode_listing_header(self.cursor)
                if hdr is None:
                    return out
                logger.debug(
                    f"Listing header: {hdr.declared_count} servers, "
                    f"{hdr.message_byte_size} bytes declared"
                )
                if hdr.declared_count != hdr.declared_count_dup:
                    logger.warning(
                        f"Server count fields disagree ({hdr.declared_count} vs "
                        f"{hdr.declared_count_dup}); using {hdr.declared_count}"
                    )
                self._message_bytes = COUNTS_SIZE
                self._state = StreamingRecords(header=hdr)
                self._check_complete()

            elif isinstance(st, StreamingRecords):
                got = decode_server(self.cursor, self.text_decoder)
                if got is None:
                    return out
                rec, size = got
                self._message_bytes += size
                st = StreamingRecords(header=st.header, collected=st.collected + (rec,))
                self._state = st
                out.append(rec)
                logger.debug(f"Server {len(st.collected)}/{st.declared_count}: {rec.endpoint} {rec.name!r}")
                self._check_complete()

            else:
                return out

    def _check_complete(self) -> None:
        st = self._state
        assert isinstance(st, StreamingRecords)
        if len(st.collected) < st.declared_count:
            return
        self._state = Done(header=st.header, records=st.collected)
        declared = st.header.message_byte_size
        # 16-bit field; large listings wrap around
        actual = self._message_bytes & 0xFFFF
        if declared != actual:
            if self.strict_size:
                raise MessageSizeMismatch(declared, self._message_bytes)
            logger.warning(f"Message size field says {declared} bytes, decoded {self._message_bytes}")
        if self.cursor.remaining():
            logger.debug(f"{self.cursor.remaining()} trailing bytes after listing")


# -----------------------------
# One-shot decode of a captured response
# -----------------------------

def decode_listing(
    data: bytes,
    *,
    text_decoder: TextDecoder = decode_text,
    version: int = PROTOCOL_VERSION,
    strict_size: bool = False,
) -> ServerListing:
    """Decode a complete captured tracker response (handshake echo onwards)."""
    dec = RecordDecoder(text_decoder, version=version, strict_size=strict_size)
    dec.feed(bytes(data))
    if not isinstance(dec.state, Done):
        hdr = dec.header
        raise TruncatedStream(len(dec.records), hdr.declared_count if hdr else None)
    return ServerListing(header=dec.state.header, servers=list(dec.state.records))
