"""
Entity identifiers.

NamespaceId and MosaicId are opaque 64-bit bit patterns. The signed view is
only a presentation of the same bits; hashing, comparison and encoding always
use the unsigned pattern.
"""

from __future__ import annotations
from typing import Union
import struct

UINT64_MASK = 0xFFFFFFFFFFFFFFFF
NAMESPACE_FLAG = 0x8000000000000000


class EntityId:
    """
    Immutable 64-bit identifier.

    Two ids are equal iff their 64-bit patterns are equal.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[int, str]):
        """
        Initialize from an integer (signed or unsigned) or a hex string.

        Args:
            value: 64-bit value; negative ints are taken as two's complement
        """
        if isinstance(value, str):
            value = int(value, 16)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires an int or hex string, got {type(value).__name__}")
        if value < -(1 << 63) or value > UINT64_MASK:
            raise ValueError(f"{value} does not fit in 64 bits")
        object.__setattr__(self, "_value", value & UINT64_MASK)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._value,))

    @classmethod
    def from_bytes(cls, data: bytes):
        """Create from 8 little-endian bytes."""
        if len(data) != 8:
            raise ValueError(f"{cls.__name__} requires 8 bytes, got {len(data)}")
        return cls(struct.unpack("<Q", data)[0])

    @property
    def id(self) -> int:
        """Unsigned 64-bit value."""
        return self._value

    @property
    def signed_id(self) -> int:
        """Same bits read as a two's complement signed value."""
        return self._value - (1 << 64) if self._value & NAMESPACE_FLAG else self._value

    @property
    def hex(self) -> str:
        """16-digit upper-case hex."""
        return f"{self._value:016X}"

    def to_bytes(self) -> bytes:
        """8 little-endian bytes."""
        return struct.pack("<Q", self._value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, EntityId):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.hex}')"


class NamespaceId(EntityId):
    """Namespace identifier; also used as an alias for addresses and mosaics."""

    __slots__ = ()

    @classmethod
    def from_name(cls, full_name: str) -> NamespaceId:
        """
        Derive the id of a (possibly dotted) namespace name.

        `"foo.bar"` yields the id of `bar` under `foo`.
        """
        from .id_generator import derive_namespace_path
        return derive_namespace_path(full_name)[-1]

    def is_alias_flagged(self) -> bool:
        return bool(self._value & NAMESPACE_FLAG)


class MosaicId(EntityId):
    """Concrete mosaic identifier."""

    __slots__ = ()

    @classmethod
    def create_from_nonce(cls, nonce, owner_public_key: bytes) -> MosaicId:
        """Derive the id of a mosaic from its nonce and owner public key."""
        from .id_generator import derive_mosaic_id
        return derive_mosaic_id(nonce, owner_public_key)


# A mosaic reference in a transaction body is either concrete or a namespace alias.
UnresolvedMosaicId = Union[MosaicId, NamespaceId]


def unresolved_mosaic_id_from_value(value: int) -> UnresolvedMosaicId:
    """
    Classify a raw 64-bit mosaic reference.

    Namespace ids carry the top bit; mosaic ids never do.
    """
    value &= UINT64_MASK
    if value & NAMESPACE_FLAG:
        return NamespaceId(value)
    return MosaicId(value)
