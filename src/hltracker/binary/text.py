from __future__ import annotations
import logging
from typing import Callable

from ..errors import TextDecodingError

logger = logging.getLogger(__name__)

TextDecoder = Callable[[bytes], str]

LEGACY_ENCODING = "mac_roman"


def make_text_decoder(encoding: str = LEGACY_ENCODING) -> TextDecoder:
    """Build a strict bytes -> str decoder for the given codec name."""
    "".encode(encoding)  # LookupError on unknown or bytes-to-bytes codecs (rot13, hex)

    def _decode(raw: bytes) -> str:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise TextDecodingError(f"cannot decode {raw!r} as {encoding}: {e.reason}") from e

    _decode.encoding = encoding  # type: ignore[attr-defined]
    return _decode


decode_text: TextDecoder = make_text_decoder()


def decode_field(decoder: TextDecoder, raw: bytes) -> str:
    """
    Run a text decoder on one record field. Malformed bytes fall back to a
    lossy decode (U+FFFD replacements) so one bad name keeps the listing alive.
    """
    try:
        return decoder(raw)
    except (TextDecodingError, UnicodeDecodeError) as e:
        encoding = getattr(decoder, "encoding", LEGACY_ENCODING)
        logger.warning(f"Lossy text fallback ({encoding}): {e}")
        return raw.decode(encoding, errors="replace")
