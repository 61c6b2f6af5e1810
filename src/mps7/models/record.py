from __future__ import annotations
from datetime import datetime, timezone
from enum import IntEnum
from pydantic import BaseModel, ConfigDict, Field, model_validator

class RecordKind(IntEnum):
    DEBIT = 0
    CREDIT = 1
    START_AUTOPAY = 2
    END_AUTOPAY = 3

    @property
    def has_amount(self) -> bool:
        return self in (RecordKind.DEBIT, RecordKind.CREDIT)

# kind(1) + timestamp(4) + user_id(8), then amount(8) for debit/credit
RECORD_PREFIX_SIZE = 13
AMOUNT_SIZE = 8

class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RecordKind
    timestamp: int = Field(..., ge=0, le=0xFFFFFFFF)          # unix epoch seconds
    user_id: int = Field(..., ge=0, le=0xFFFFFFFFFFFFFFFF)
    amount: float | None = Field(None, allow_inf_nan=False)

    @model_validator(mode="after")
    def _amount_matches_kind(self) -> "Record":
        if self.kind.has_amount and self.amount is None:
            raise ValueError(f"{self.kind.name} record requires an amount")
        if not self.kind.has_amount and self.amount is not None:
            raise ValueError(f"{self.kind.name} record carries no amount")
        return self

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def size(self) -> int:
        return RECORD_PREFIX_SIZE + (AMOUNT_SIZE if self.kind.has_amount else 0)
