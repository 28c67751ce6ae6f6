"""
Binary Writer

Little-endian primitive encoder for catapult transaction payloads.
Fields are packed back to back; the only alignment in the format is the
8-byte padding after each inner transaction of an aggregate (see `align`).
"""

import struct

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class BinaryWriter:
    """
    Append-only little-endian byte writer.

    Unsigned values are masked to their field width before packing, so a
    64-bit id given as a negative (two's complement) Python int is written
    bit-for-bit.
    """

    def __init__(self):
        self._buf = bytearray()

    def u8(self, v: int) -> None:
        self._buf.append(v & 0xFF)

    def u16le(self, v: int) -> None:
        self._buf += _U16.pack(v & 0xFFFF)

    def i16le(self, v: int) -> None:
        """
        Write a signed 16-bit value.

        Args:
            v: Integer value in [-32768, 32767]
        """
        self._buf += _I16.pack(v)

    def u32le(self, v: int) -> None:
        self._buf += _U32.pack(v & 0xFFFFFFFF)

    def u64le(self, v: int) -> None:
        """Write a 64-bit amount, duration or entity id."""
        self._buf += _U64.pack(v & 0xFFFFFFFFFFFFFFFF)

    def bytes(self, v: bytes) -> None:
        """Append raw bytes; any length prefix is the caller's field."""
        self._buf += v

    def fixed_bytes(self, v: bytes, size: int) -> None:
        """
        Append a fixed-size field such as a key, signature or address.

        Raises:
            ValueError: If v is not exactly `size` bytes long
        """
        if len(v) != size:
            raise ValueError(f"Expected {size} bytes, got {len(v)}")
        self._buf += v

    def zeros(self, n: int) -> None:
        self._buf += bytes(n)

    def align(self, alignment: int) -> int:
        """Zero-pad to the next multiple of `alignment`; returns the padding written."""
        padding = -len(self._buf) % alignment
        self.zeros(padding)
        return padding

    def __len__(self) -> int:
        return len(self._buf)

    def to_bytes(self) -> bytes:
        return bytes(self._buf)
