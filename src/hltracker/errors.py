from __future__ import annotations


class TrackerError(Exception):
    """Base class for everything a tracker query can fail with."""


class ProtocolError(TrackerError, ValueError):
    """The tracker sent bytes that do not follow the listing protocol."""


class UnexpectedHandshake(ProtocolError):
    def __init__(self, received: bytes, expected: bytes):
        super().__init__(f"unexpected handshake echo {received!r} (expected {expected!r})")
        self.received = received
        self.expected = expected


class UnsupportedMessageType(ProtocolError):
    def __init__(self, message_type: int):
        super().__init__(f"unsupported message type {message_type}")
        self.message_type = message_type


class MessageSizeMismatch(ProtocolError):
    def __init__(self, declared: int, actual: int):
        super().__init__(f"message size mismatch: header declared {declared}, decoded {actual}")
        self.declared = declared
        self.actual = actual


class SessionError(TrackerError):
    pass


class TruncatedStream(SessionError):
    def __init__(self, collected: int, expected: int | None):
        want = "header" if expected is None else f"{expected} records"
        super().__init__(f"stream ended after {collected} records, waiting for {want}")
        self.collected = collected
        self.expected = expected


class SessionTimeout(SessionError):
    pass


class TextDecodingError(TrackerError, ValueError):
    """Raised by text decoders; contained per record, never fatal."""
