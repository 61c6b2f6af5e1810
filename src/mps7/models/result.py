from __future__ import annotations
from decimal import Decimal
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class AggregateResult(BaseModel):
    """Immutable view of an Aggregator at one point of the stream."""
    model_config = ConfigDict(frozen=True)

    total_debits: Decimal = Decimal(0)
    total_credits: Decimal = Decimal(0)
    autopay_starts: int = Field(0, ge=0)
    autopay_ends: int = Field(0, ge=0)
    balance_by_user: Dict[int, Decimal] = Field(default_factory=dict)
    records_processed: int = Field(0, ge=0)

    def balance_for(self, user_id: int) -> Optional[Decimal]:
        """Credits minus debits for ``user_id``; None if the user never appeared."""
        return self.balance_by_user.get(user_id)
