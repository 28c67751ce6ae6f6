"""
Binary Reader

Little-endian primitive decoder for catapult transaction payloads.
The wire format has no terminators, so a short read always means a corrupt
payload and fails with MalformedPayloadError.
"""

import builtins
import struct

from ..runtime.errors import MalformedPayloadError

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class BinaryReader:
    """Bounds-checked cursor over an immutable payload."""

    def __init__(self, buf: builtins.bytes):
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _advance(self, n: int, what: str) -> int:
        start = self._off
        if n < 0 or start + n > len(self._buf):
            raise MalformedPayloadError(
                f"Cannot read {what}: needs {n} bytes, {self.remaining} remaining",
                details={"offset": start, "size": n},
            )
        self._off = start + n
        return start

    def _unpack(self, fmt: struct.Struct, what: str) -> int:
        return fmt.unpack_from(self._buf, self._advance(fmt.size, what))[0]

    def u8(self) -> int:
        return self._buf[self._advance(1, "u8")]

    def u16le(self) -> int:
        return self._unpack(_U16, "u16")

    def i16le(self) -> int:
        """Signed 16-bit field (metadata value size delta)."""
        return self._unpack(_I16, "i16")

    def u32le(self) -> int:
        return self._unpack(_U32, "u32")

    def u64le(self) -> int:
        """Amount, height, duration or raw entity id."""
        return self._unpack(_U64, "u64")

    def peek_u32le(self) -> int:
        """Next u32 without advancing; used to read a size field ahead of its record."""
        value = self.u32le()
        self._off -= _U32.size
        return value

    def bytes(self, n: int) -> builtins.bytes:
        start = self._advance(n, f"{n} bytes")
        return self._buf[start:start + n]

    def sub_reader(self, n: int) -> "BinaryReader":
        """Consume n bytes and return a reader bounded to them."""
        start = self._advance(n, f"{n}-byte section")
        return BinaryReader(self._buf[start:start + n])

    def expect_eof(self, what: str = "payload") -> None:
        """
        Require that every byte has been consumed.

        Raises:
            MalformedPayloadError: If trailing bytes remain
        """
        if not self.eof:
            raise MalformedPayloadError(
                f"{self.remaining} trailing bytes after {what}",
                details={"offset": self._off},
            )
