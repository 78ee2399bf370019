#!/usr/bin/env python3
"""Replay a captured listing through the decoder in fixed-size chunks."""
import sys
from pathlib import Path
from hltracker.binary.decoder import RecordDecoder, decode_listing

if len(sys.argv) < 2:
    print("usage: replay_capture.py CAPTURE.bin [CHUNK]", file=sys.stderr)
    raise SystemExit(2)

data = Path(sys.argv[1]).read_bytes()
chunk = int(sys.argv[2]) if len(sys.argv) > 2 else 1

whole = decode_listing(data).servers
dec = RecordDecoder()
for i in range(0, len(data), chunk):
    dec.feed(data[i:i + chunk])
    if dec.done:
        break

print(f"{len(whole)} servers in one feed, {len(dec.records)} in {chunk}-byte chunks")
print("identical" if dec.records == whole else "MISMATCH")
for s in dec.records[:10]:
    print(f"  {s.endpoint:<21} {s.user_count:>5}  {s.name}")
