from __future__ import annotations
from ipaddress import IPv4Address
from pydantic import BaseModel, Field

class ServerRecord(BaseModel):
    address: IPv4Address
    port: int = Field(..., ge=0, le=0xFFFF)
    user_count: int = Field(..., ge=0, le=0xFFFF)
    name: str = ""
    description: str = ""

    @property
    def endpoint(self) -> str:
        return f"{self.address}:{self.port}"
