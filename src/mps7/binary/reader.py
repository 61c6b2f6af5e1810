from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from .codecs.bytecursor import ByteCursor
from .codecs.header import decode_header
from .codecs.record_codec import decode_next_record
from .errors import RecordCountMismatch, UnknownRecordKind

from mps7.aggregate import Aggregator
from mps7.config import CountPolicy, DecoderSettings, UnknownKindPolicy, load_settings
from mps7.models.header import Header
from mps7.models.log import Mps7Log
from mps7.models.record import Record
from mps7.models.result import AggregateResult

SourceLike = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------

@contextmanager
def _open_source(src: SourceLike) -> Iterator[ByteCursor]:
    """Paths are opened and closed here; file objects belong to the caller."""
    if isinstance(src, (str, Path)):
        with open(src, "rb") as fh:
            yield ByteCursor(fh)
    else:
        yield ByteCursor(src)


def _records(cur: ByteCursor, header: Header, settings: DecoderSettings) -> Iterator[Record]:
    declared = header.declared_record_count
    policy = settings.count_policy
    n = 0

    while True:
        if policy is CountPolicy.TRUNCATE and n >= declared:
            if not cur.at_end():
                logger.warning(
                    "ignoring data after %d declared records at offset %d", declared, cur.tell()
                )
            return
        try:
            rec = decode_next_record(cur)
        except UnknownRecordKind as e:
            if settings.on_unknown_kind is UnknownKindPolicy.STOP:
                logger.warning("%s; stopping after %d records", e, n)
                return
            raise
        if rec is None:
            break
        n += 1
        yield rec

    if n != declared:
        if policy is CountPolicy.STRICT:
            raise RecordCountMismatch(declared, n, cur.tell())
        logger.warning("header declares %d records, decoded %d", declared, n)


# -----------------------------
# Streaming
# -----------------------------

def iter_records(source: SourceLike, *, settings: Optional[DecoderSettings] = None) -> Iterator[Record]:
    """Yield records one at a time after validating the header."""
    settings = settings or load_settings()
    with _open_source(source) as cur:
        header = decode_header(cur)
        yield from _records(cur, header, settings)


def aggregate_log(
    source: SourceLike,
    *,
    aggregator: Optional[Aggregator] = None,
    settings: Optional[DecoderSettings] = None,
) -> Tuple[Header, AggregateResult]:
    """
    Decode ``source`` straight into an Aggregator without keeping records.
    Pass your own ``aggregator`` to inspect partial totals if decoding fails.
    """
    settings = settings or load_settings()
    agg = aggregator if aggregator is not None else Aggregator()
    with _open_source(source) as cur:
        header = decode_header(cur)
        for rec in _records(cur, header, settings):
            agg.accept(rec)
    return header, agg.snapshot()


# -----------------------------
# Full parse
# -----------------------------

def parse_log(source: SourceLike, *, settings: Optional[DecoderSettings] = None) -> Mps7Log:
    settings = settings or load_settings()
    with _open_source(source) as cur:
        header = decode_header(cur)
        records = list(_records(cur, header, settings))
    return Mps7Log(header=header, records=records)
