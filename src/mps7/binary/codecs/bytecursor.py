from __future__ import annotations
import io
import struct
from typing import BinaryIO

from ..errors import TruncatedStream


class ByteCursor:
    """Forward-only big-endian reader over a byte source.

    The source only needs ``read(n)``; it may return fewer than ``n`` bytes,
    and returns ``b""`` once exhausted. Raw ``bytes`` are wrapped in a
    ``BytesIO``.
    """

    __slots__ = ("_src", "_pos", "_ahead")

    def __init__(self, source: BinaryIO | bytes | bytearray | memoryview):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._src = source
        self._pos = 0
        self._ahead = b""  # lookahead filled by at_end()

    def tell(self) -> int: return self._pos

    def _fill(self, n: int) -> bytes:
        chunks = [self._ahead]
        have = len(self._ahead)
        self._ahead = b""
        while have < n:
            chunk = self._src.read(n - have)
            if not chunk:
                break
            chunks.append(chunk)
            have += len(chunk)
        data = b"".join(chunks)
        if len(data) > n:
            data, self._ahead = data[:n], data[n:]
        return data

    def read_exact(self, n: int) -> bytes:
        if n < 0: raise ValueError("negative read")
        out = self._fill(n)
        if len(out) < n:
            # keep what we got so at_end() stays truthful after a failed read
            self._ahead = out
            raise TruncatedStream(self._pos, n, len(out))
        self._pos += n
        return out

    def at_end(self) -> bool:
        if not self._ahead:
            self._ahead = self._fill(1)
        return not self._ahead

    # byte-aligned big-endian reads
    def _unpack(self, fmt: str, n: int):
        return struct.unpack(fmt, self.read_exact(n))[0]
    def read_u8(self) -> int:       return self._unpack(">B", 1)
    def read_u32_be(self) -> int:   return self._unpack(">I", 4)
    def read_u64_be(self) -> int:   return self._unpack(">Q", 8)
    def read_f64_be(self) -> float: return self._unpack(">d", 8)
