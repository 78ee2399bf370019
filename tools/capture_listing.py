#!/usr/bin/env python3
"""Save the raw bytes of one tracker listing response for offline replay."""
import socket, sys
from pathlib import Path
from hltracker.binary.codecs.handshake import encode_handshake
from hltracker.binary.decoder import RecordDecoder
from hltracker.models.common import DEFAULT_PORT

if len(sys.argv) < 3:
    print("usage: capture_listing.py HOST OUT.bin [PORT]", file=sys.stderr)
    raise SystemExit(2)

host, out = sys.argv[1], Path(sys.argv[2])
port = int(sys.argv[3]) if len(sys.argv) > 3 else DEFAULT_PORT

raw = bytearray()
dec = RecordDecoder()  # only used to know when to stop reading
with socket.create_connection((host, port), timeout=10) as s:
    s.sendall(encode_handshake())
    while not dec.done:
        chunk = s.recv(4096)
        if not chunk:
            break
        raw += chunk
        dec.feed(chunk)

out.write_bytes(bytes(raw))
print(f"saved {len(raw)} bytes ({len(dec.records)} servers) to {out}")
