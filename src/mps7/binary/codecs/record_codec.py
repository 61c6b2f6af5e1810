from __future__ import annotations
import math
import struct
from typing import Optional
from .bytecursor import ByteCursor
from ..errors import NonFiniteAmount, TruncatedRecord, TruncatedStream, UnknownRecordKind
from mps7.models.record import Record, RecordKind

_KINDS = {k.value: k for k in RecordKind}

def decode_next_record(cur: ByteCursor) -> Optional[Record]:
    """
    Decode one record, or return None when the stream ends exactly at a
    record boundary. Running out of bytes anywhere after the kind byte is
    corruption and raises TruncatedRecord; an infinite or NaN amount raises
    NonFiniteAmount.
    """
    if cur.at_end():
        return None
    start = cur.tell()
    kind_byte = cur.read_u8()
    kind = _KINDS.get(kind_byte)
    if kind is None:
        raise UnknownRecordKind(kind_byte, start)

    try:
        timestamp = cur.read_u32_be()
        user_id = cur.read_u64_be()
        amount = cur.read_f64_be() if kind.has_amount else None
    except TruncatedStream as e:
        raise TruncatedRecord(start, e) from e
    if amount is not None and not math.isfinite(amount):
        raise NonFiniteAmount(amount, start)

    return Record(kind=kind, timestamp=timestamp, user_id=user_id, amount=amount)

def encode_record(rec: Record) -> bytes:
    out = struct.pack(">BIQ", int(rec.kind), rec.timestamp, rec.user_id)
    if rec.kind.has_amount:
        out += struct.pack(">d", rec.amount)
    return out
