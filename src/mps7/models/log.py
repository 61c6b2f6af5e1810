from __future__ import annotations
from pathlib import Path
from typing import List, Union
from pydantic import BaseModel, Field
from .header import Header
from .record import Record

class Mps7Log(BaseModel):
    header: Header
    records: List[Record] = Field(default_factory=list)

    @classmethod
    def from_binary(cls, data: Union[bytes, str, Path]) -> "Mps7Log":
        from ..binary.reader import parse_log
        return parse_log(data)

    def to_binary(self) -> bytes:
        from ..binary.writer import write_log
        return write_log(self)
