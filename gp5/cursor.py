"""Forward-only reader over a GP5 byte buffer.

Every multi-byte integer in the format is a 32-bit signed little-endian
word.  Strings come in three shapes:

  byte string            : u8 length, then ``size`` bytes of which
                           ``length`` are kept
  int string             : i32 length, then ``length`` bytes
  byte-size-of-int string: i32 ``d``, then a byte string of size ``d - 1``
                           (``d + 4`` bytes in total)
"""

from __future__ import annotations

import struct

from .errors import TruncatedInput

DEFAULT_ENCODING = "cp1252"

_INT32 = struct.Struct("<i")


class Cursor:
    def __init__(self, data: bytes, *, encoding: str = DEFAULT_ENCODING) -> None:
        self.data = bytes(data)
        self.position = 0
        self.encoding = encoding

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    def _take(self, count: int) -> bytes:
        if count < 0 or self.position + count > len(self.data):
            raise TruncatedInput(self.position, count, len(self.data))
        chunk = self.data[self.position : self.position + count]
        self.position += count
        return chunk

    def skip(self, count: int) -> None:
        self._take(count)

    def read_unsigned_byte(self) -> int:
        return self._take(1)[0]

    def read_byte(self) -> int:
        value = self._take(1)[0]
        return value - 0x100 if value & 0x80 else value

    def read_bool(self) -> bool:
        return self._take(1)[0] != 0

    def read_int(self) -> int:
        return _INT32.unpack(self._take(4))[0]

    def read_string(self, size: int, length: int | None = None) -> str:
        """Consume ``size`` bytes (or ``length`` when ``size <= 0``) and keep
        the first ``length`` of them."""

        if length is None:
            length = size
        count = size if size > 0 else length
        raw = self._take(count)
        keep = length if 0 <= length <= count else count
        return raw[:keep].decode(self.encoding, errors="replace")

    def read_string_byte(self, size: int) -> str:
        return self.read_string(size, self.read_unsigned_byte())

    def read_string_int(self) -> str:
        return self.read_string(self.read_int())

    def read_string_byte_size_of_int(self) -> str:
        return self.read_string_byte(self.read_int() - 1)
