import struct

import pytest

from mps7.binary.codecs.bytecursor import ByteCursor
from mps7.binary.codecs.record_codec import decode_next_record, encode_record
from mps7.binary.errors import NonFiniteAmount, TruncatedRecord, TruncatedStream, UnknownRecordKind
from mps7.models.record import Record, RecordKind


def test_decode_debit():
    buf = bytearray()
    buf += bytes([0])
    buf += (1393108945).to_bytes(4, "big")
    buf += (4136353673894269217).to_bytes(8, "big")
    buf += struct.pack(">d", 604.274335557087)
    cur = ByteCursor(bytes(buf))
    rec = decode_next_record(cur)
    assert rec.kind is RecordKind.DEBIT
    assert rec.timestamp == 1393108945
    assert rec.user_id == 4136353673894269217
    assert rec.amount == 604.274335557087
    assert rec.size == 21
    assert rec.when.year == 2014
    assert decode_next_record(cur) is None


def test_decode_autopay_has_no_amount():
    data = bytes([2]) + (10).to_bytes(4, "big") + (99).to_bytes(8, "big")
    cur = ByteCursor(data)
    rec = decode_next_record(cur)
    assert rec.kind is RecordKind.START_AUTOPAY
    assert rec.amount is None
    assert cur.tell() == 13


def test_empty_stream_is_end_of_stream():
    assert decode_next_record(ByteCursor(b"")) is None


def test_lone_kind_byte_is_truncated_record():
    with pytest.raises(TruncatedRecord) as ei:
        decode_next_record(ByteCursor(b"\x01"))
    assert isinstance(ei.value, TruncatedStream)
    assert ei.value.record_offset == 0


def test_missing_amount_is_truncated_record():
    data = bytes([1]) + (10).to_bytes(4, "big") + (99).to_bytes(8, "big") + b"\x40\x59"
    with pytest.raises(TruncatedRecord) as ei:
        decode_next_record(ByteCursor(data))
    assert ei.value.offset == 13
    assert ei.value.available == 2


def test_unknown_kind_reports_offset():
    data = bytes([3]) + (1).to_bytes(4, "big") + (2).to_bytes(8, "big") + b"\xff" + b"\x00" * 12
    cur = ByteCursor(data)
    assert decode_next_record(cur).kind is RecordKind.END_AUTOPAY
    with pytest.raises(UnknownRecordKind) as ei:
        decode_next_record(cur)
    assert ei.value.kind_byte == 0xFF
    assert ei.value.offset == 13


def test_round_trip_sequence():
    recs = [
        Record(kind=RecordKind.DEBIT, timestamp=1, user_id=2**64 - 1, amount=0.01),
        Record(kind=RecordKind.CREDIT, timestamp=2**32 - 1, user_id=0, amount=-3.5),
        Record(kind=RecordKind.START_AUTOPAY, timestamp=3, user_id=7),
        Record(kind=RecordKind.END_AUTOPAY, timestamp=4, user_id=7),
    ]
    cur = ByteCursor(b"".join(encode_record(r) for r in recs))
    out = []
    while True:
        rec = decode_next_record(cur)
        if rec is None:
            break
        out.append(rec)
    assert out == recs


def test_amount_presence_follows_kind():
    with pytest.raises(ValueError):
        Record(kind=RecordKind.DEBIT, timestamp=1, user_id=1)
    with pytest.raises(ValueError):
        Record(kind=RecordKind.END_AUTOPAY, timestamp=1, user_id=1, amount=1.0)


@pytest.mark.parametrize("amount", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_amount_is_rejected(amount):
    autopay = bytes([2]) + (1).to_bytes(4, "big") + (2).to_bytes(8, "big")
    credit = bytes([1]) + (1).to_bytes(4, "big") + (2).to_bytes(8, "big") + struct.pack(">d", amount)
    cur = ByteCursor(autopay + credit)
    assert decode_next_record(cur).kind is RecordKind.START_AUTOPAY
    with pytest.raises(NonFiniteAmount) as ei:
        decode_next_record(cur)
    assert ei.value.offset == 13


def test_record_model_rejects_non_finite_amount():
    with pytest.raises(ValueError):
        Record(kind=RecordKind.DEBIT, timestamp=1, user_id=1, amount=float("inf"))
