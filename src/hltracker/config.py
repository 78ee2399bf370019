from __future__ import annotations
import os
from pydantic import BaseModel, Field, field_validator

from .binary.text import make_text_decoder
from .models.common import DEFAULT_PORT

ENV_PREFIX = "HLTRACKER_"


class TrackerConfig(BaseModel):
    """Settings for one tracker query."""

    host: str
    port: int = Field(DEFAULT_PORT, ge=1, le=65535)
    timeout: float | None = Field(10.0, gt=0)        # whole-session deadline (s)
    connect_timeout: float | None = Field(10.0, gt=0)
    chunk_size: int = Field(1024, ge=1, le=65536)
    encoding: str = "mac_roman"
    strict_size: bool = False

    @field_validator("host")
    @classmethod
    def _host_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("host must be a non-empty string")
        return v

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        try:
            make_text_decoder(v)
        except LookupError as e:
            raise ValueError(f"unusable text encoding {v!r}: {e}")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "TrackerConfig":
        """Read HLTRACKER_HOST/PORT/TIMEOUT/ENCODING; explicit overrides win."""
        values = {}
        for key in ("host", "port", "timeout", "encoding"):
            raw = os.environ.get(ENV_PREFIX + key.upper())
            if raw is not None:
                values[key] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
