"""Tracker query session: handshake, read loop, deadline."""

from __future__ import annotations

import logging
import socket
import time
from typing import List, Optional

from .binary.codecs.handshake import encode_handshake
from .binary.decoder import Done, RecordDecoder
from .binary.text import make_text_decoder
from .config import TrackerConfig
from .errors import SessionTimeout, TrackerError, TruncatedStream
from .models.common import DEFAULT_PORT, PROTOCOL_VERSION
from .models.listing import ServerListing
from .models.server import ServerRecord

logger = logging.getLogger(__name__)


class TrackerSession:
    """One listing query against a tracker.

    The session owns the socket and the decoder. Reads are blocking and one
    at a time; every chunk is decoded fully before the next read is issued,
    and no read happens once the declared number of servers has arrived.
    """

    DEFAULT_CHUNK_SIZE = 1024

    def __init__(
        self,
        sock,
        *,
        decoder: Optional[RecordDecoder] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        version: int = PROTOCOL_VERSION,
    ):
        """
        Args:
            sock: Connected socket-like object (sendall/recv/settimeout/close)
            decoder: Decoder to feed; a fresh MacRoman one by default
            chunk_size: Maximum bytes per recv() call
            version: Protocol version sent in the handshake
        """
        self._socket = sock
        self.decoder = decoder or RecordDecoder(version=version)
        self.chunk_size = chunk_size
        self.version = version
        self._started = False

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        connect_timeout: Optional[float] = None,
        **kwargs,
    ) -> "TrackerSession":
        sock = socket.create_connection((host, port), timeout=connect_timeout)
        logger.info(f"Connected to tracker at {host}:{port}")
        return cls(sock, **kwargs)

    @classmethod
    def from_config(cls, cfg: TrackerConfig) -> "TrackerSession":
        decoder = RecordDecoder(make_text_decoder(cfg.encoding), strict_size=cfg.strict_size)
        return cls.connect(
            cfg.host, cfg.port,
            connect_timeout=cfg.connect_timeout,
            decoder=decoder,
            chunk_size=cfg.chunk_size,
        )

    def close(self):
        if self._socket is not None:
            try:
                self._socket.close()
            except OSError as e:
                logger.debug(f"Error closing tracker socket: {e}")
            self._socket = None
            logger.info("Disconnected from tracker")

    def __enter__(self) -> "TrackerSession":
        return self

    def __exit__(self, *exc):
        self.close()

    def run(self, timeout: Optional[float] = None) -> List[ServerRecord]:
        """Query the tracker and return its servers in wire order.

        Args:
            timeout: Overall deadline in seconds for the whole exchange

        Raises:
            ProtocolError: malformed handshake echo or header
            TruncatedStream: peer closed before all servers arrived
            SessionTimeout: deadline exceeded (the socket is closed)
        """
        return self.run_listing(timeout).servers

    def run_listing(self, timeout: Optional[float] = None) -> ServerListing:
        if self._socket is None:
            raise ValueError("session is closed")
        if self._started:
            raise ValueError("a session runs a single query")
        self._started = True

        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            self._socket.sendall(encode_handshake(self.version))
            logger.debug("Sent handshake")

            while not self.decoder.done:
                chunk = self._recv(deadline)
                if not chunk:
                    hdr = self.decoder.header
                    raise TruncatedStream(
                        len(self.decoder.records),
                        hdr.declared_count if hdr else None,
                    )
                logger.debug(f"Read {len(chunk)} bytes")
                self.decoder.feed(chunk)
        except socket.timeout:
            self.close()
            if timeout is None:
                raise SessionTimeout("tracker went silent (socket read timed out)") from None
            raise SessionTimeout(f"tracker did not finish within {timeout}s") from None
        except (TrackerError, OSError):
            self.close()
            raise

        st = self.decoder.state
        assert isinstance(st, Done)
        logger.info(f"Received {len(st.records)} servers")
        return ServerListing(header=st.header, servers=list(st.records))

    def _recv(self, deadline: Optional[float]) -> bytes:
        if deadline is not None:
            left = deadline - time.monotonic()
            if left <= 0:
                raise socket.timeout()
            self._socket.settimeout(left)
        return self._socket.recv(self.chunk_size)


def fetch_servers(host: str, port: int = DEFAULT_PORT, timeout: Optional[float] = 10.0) -> List[ServerRecord]:
    """Connect, query, close."""
    with TrackerSession.connect(host, port, connect_timeout=timeout) as session:
        return session.run(timeout)
