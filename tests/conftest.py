import socket
from ipaddress import IPv4Address

import pytest

from hltracker.binary.writer import encode_listing
from hltracker.models.server import ServerRecord


class FakeSocket:
    """Replays scripted recv() chunks; hangs (times out) or hits EOF when exhausted."""

    def __init__(self, chunks, *, hang=False):
        self.chunks = [bytes(c) for c in chunks]
        self.hang = hang
        self.sent = b""
        self.timeouts = []
        self.recv_calls = 0
        self.closed = False

    def sendall(self, data):
        self.sent += data

    def settimeout(self, value):
        self.timeouts.append(value)

    def recv(self, n):
        self.recv_calls += 1
        if not self.chunks:
            if self.hang:
                raise socket.timeout("timed out")
            return b""
        head = self.chunks.pop(0)
        if len(head) > n:
            self.chunks.insert(0, head[n:])
            head = head[:n]
        return head

    def close(self):
        self.closed = True


@pytest.fixture
def fake_socket():
    return FakeSocket


@pytest.fixture
def servers():
    return [
        ServerRecord(address=IPv4Address("10.0.0.1"), port=5500, user_count=3,
                     name="Alice", description="Chat"),
        ServerRecord(address=IPv4Address("192.168.1.20"), port=5500, user_count=0,
                     name="", description=""),
        ServerRecord(address=IPv4Address("203.0.113.7"), port=65535, user_count=65535,
                     name="Café “Mac”", description="x" * 255),
    ]


@pytest.fixture
def listing_bytes(servers):
    return encode_listing(servers)
