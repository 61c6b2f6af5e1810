from __future__ import annotations
from typing import Optional
from .codecs.header import encode_header
from .codecs.record_codec import encode_record
from ..models.header import Header
from ..models.log import Mps7Log

def write_log(log: Mps7Log, *, declared_record_count: Optional[int] = None) -> bytes:
    """Serialize a log. The declared count defaults to the number of records."""
    count = len(log.records) if declared_record_count is None else declared_record_count
    hdr = Header(version=log.header.version, declared_record_count=count)
    out = bytearray(encode_header(hdr))
    for rec in log.records:
        out += encode_record(rec)
    return bytes(out)
