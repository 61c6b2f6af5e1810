from __future__ import annotations
import logging
import struct
from .bytecursor import ByteCursor
from ..errors import BadMagic, TruncatedStream
from mps7.models.header import Header, MAGIC

logger = logging.getLogger(__name__)

def decode_header(cur: ByteCursor) -> Header:
    """
    Parse the 9-byte log header: magic "MPS7", u8 version, u32 record count.
    The version is surfaced as data and never rejected.
    """
    try:
        magic = cur.read_exact(4)
    except TruncatedStream as e:
        # a short magic can never equal MPS7
        raise BadMagic(cur.read_exact(e.available)) from e
    if magic != MAGIC:
        raise BadMagic(magic)
    version = cur.read_u8()
    count = cur.read_u32_be()
    logger.debug("header: version=%d declared_record_count=%d", version, count)
    return Header(magic=magic, version=version, declared_record_count=count)

def encode_header(hdr: Header) -> bytes:
    return struct.pack(">4sBI", hdr.magic, hdr.version, hdr.declared_record_count)
