from __future__ import annotations
from enum import IntEnum

MAGIC = b"HTRK"
PROTOCOL_VERSION = 1
DEFAULT_PORT = 5498


class MessageType(IntEnum):
    SERVER_LIST = 1
