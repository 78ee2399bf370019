from __future__ import annotations
from typing import Iterable
from .models.server import ServerRecord

ENDPOINT_WIDTH = 21   # 15 chars of dotted quad + ":" + 5 of port
NAME_WIDTH = 37
USERS_WIDTH = 7

def format_table(servers: Iterable[ServerRecord]) -> str:
    """Fixed-width listing table; names are cut to fit their column."""
    lines = [
        "IP".ljust(ENDPOINT_WIDTH) + "NAME".ljust(NAME_WIDTH)
        + "USERS".ljust(USERS_WIDTH) + "DESCRIPTION".ljust(40)
    ]
    for s in servers:
        lines.append(
            s.endpoint.ljust(ENDPOINT_WIDTH)
            + s.name[:NAME_WIDTH - 1].ljust(NAME_WIDTH)
            + str(s.user_count).ljust(USERS_WIDTH)
            + s.description
        )
    return "\n".join(lines) + "\n"
