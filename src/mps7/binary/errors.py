from __future__ import annotations


class ParseError(ValueError):
    """Base class for every MPS7 decode failure."""

    def __init__(self, message: str, *, offset: int | None = None):
        super().__init__(message)
        self.offset = offset


class BadMagic(ParseError):
    def __init__(self, found: bytes):
        super().__init__(f"bad magic {found!r}, expected b'MPS7'", offset=0)
        self.found = found


class TruncatedStream(ParseError):
    def __init__(self, offset: int, needed: int, available: int):
        super().__init__(
            f"underrun: need {needed} bytes at offset {offset}, only {available} available",
            offset=offset,
        )
        self.needed = needed
        self.available = available


class TruncatedRecord(TruncatedStream):
    """A record started but the stream ended before it was complete."""

    def __init__(self, record_offset: int, cause: TruncatedStream):
        super().__init__(cause.offset, cause.needed, cause.available)
        self.record_offset = record_offset
        self.args = (f"record at offset {record_offset} is truncated ({cause})",)


class UnknownRecordKind(ParseError):
    def __init__(self, kind_byte: int, offset: int):
        super().__init__(f"unknown record kind 0x{kind_byte:02x} at offset {offset}", offset=offset)
        self.kind_byte = kind_byte


class RecordCountMismatch(ParseError):
    def __init__(self, declared: int, actual: int, offset: int):
        super().__init__(
            f"header declares {declared} records but stream holds {actual}", offset=offset
        )
        self.declared = declared
        self.actual = actual


class NonFiniteAmount(ParseError):
    """A debit or credit whose amount is infinity or NaN."""

    def __init__(self, amount: float, record_offset: int):
        super().__init__(
            f"non-finite amount {amount!r} in record at offset {record_offset}", offset=record_offset
        )
        self.amount = amount
