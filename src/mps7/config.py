from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CountPolicy(str, Enum):
    ADVISORY = "advisory"   # decode to end of stream, warn on mismatch
    STRICT = "strict"       # mismatch is an error
    TRUNCATE = "truncate"   # stop after the declared count


class UnknownKindPolicy(str, Enum):
    RAISE = "raise"
    STOP = "stop"           # log and end decoding at the bad byte


class DecoderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MPS7_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    count_policy: CountPolicy = Field(default=CountPolicy.ADVISORY)
    on_unknown_kind: UnknownKindPolicy = Field(default=UnknownKindPolicy.RAISE)
    log_level: str = Field(default="INFO")


@lru_cache
def load_settings() -> DecoderSettings:
    return DecoderSettings()
