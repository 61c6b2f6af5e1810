from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator

MAGIC = b"MPS7"

class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    magic: bytes = MAGIC
    version: int = Field(..., ge=0, le=0xFF)
    declared_record_count: int = Field(..., ge=0, le=0xFFFFFFFF)   # advisory only

    @field_validator("magic")
    @classmethod
    def _magic_is_mps7(cls, v: bytes) -> bytes:
        if v != MAGIC:
            raise ValueError(f"magic must be {MAGIC!r}")
        return v
