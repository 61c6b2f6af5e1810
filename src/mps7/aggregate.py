from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, Optional
from .models.record import Record, RecordKind
from .models.result import AggregateResult


def _to_decimal(amount: float) -> Decimal:
    # repr() gives the shortest string that round-trips the float, so
    # 10.01 sums as 10.01 rather than its binary expansion.
    return Decimal(repr(amount))


class Aggregator:
    """
    Running totals over a stream of records.

    Amounts are summed as Decimal in stream order, so a debit and a credit of
    the same amount cancel exactly. Decode errors are never caught here;
    whatever was accepted before a failure stays available via snapshot().
    """

    def __init__(self):
        self.total_debits = Decimal(0)
        self.total_credits = Decimal(0)
        self.autopay_starts = 0
        self.autopay_ends = 0
        self.records_processed = 0
        self._ledger: Dict[int, Decimal] = {}

    def accept(self, record: Record) -> None:
        kind = record.kind
        if kind is RecordKind.DEBIT:
            amount = _to_decimal(record.amount)
            self.total_debits += amount
            self._ledger[record.user_id] = self._ledger.get(record.user_id, Decimal(0)) - amount
        elif kind is RecordKind.CREDIT:
            amount = _to_decimal(record.amount)
            self.total_credits += amount
            self._ledger[record.user_id] = self._ledger.get(record.user_id, Decimal(0)) + amount
        elif kind is RecordKind.START_AUTOPAY:
            self.autopay_starts += 1
        elif kind is RecordKind.END_AUTOPAY:
            self.autopay_ends += 1
        self.records_processed += 1

    def accept_all(self, records: Iterable[Record]) -> "Aggregator":
        for rec in records:
            self.accept(rec)
        return self

    def balance_for(self, user_id: int) -> Optional[Decimal]:
        return self._ledger.get(user_id)

    def snapshot(self) -> AggregateResult:
        return AggregateResult(
            total_debits=self.total_debits,
            total_credits=self.total_credits,
            autopay_starts=self.autopay_starts,
            autopay_ends=self.autopay_ends,
            balance_by_user=dict(self._ledger),
            records_processed=self.records_processed,
        )
