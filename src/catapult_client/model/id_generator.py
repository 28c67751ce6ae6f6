"""
Identity derivation for namespaces and mosaics.

Ids are the low 8 bytes (little-endian) of a SHA3-256 digest:

- namespace: SHA3-256(parentId as 8 bytes LE ++ utf-8 name), top bit set
- mosaic:    SHA3-256(nonce as 4 bytes LE ++ owner public key), top bit cleared

The top bit is what lets an unresolved 8-byte mosaic reference be told apart
from a namespace alias. Derivation is stateless and safe to call from any thread.
"""

from __future__ import annotations
import re
import secrets
import struct
from typing import List, Optional, Union

from ..codec.hashes import sha3_256_bytes
from ..runtime.errors import InvalidNameError
from .ids import MosaicId, NamespaceId, NAMESPACE_FLAG, UINT64_MASK

MAX_NAME_LENGTH = 31
MAX_NAMESPACE_DEPTH = 3
NAME_PATTERN = re.compile(r"^[a-z0-9_-]+$")


def validate_namespace_name(name: str) -> bytes:
    """
    Validate a single namespace part and return its raw bytes.

    Raises:
        InvalidNameError: If empty, longer than 31 bytes, or outside [a-z0-9_-]
    """
    if not isinstance(name, str) or not name:
        raise InvalidNameError("Namespace name must not be empty", details={"name": name})
    raw = name.encode("utf-8")
    if len(raw) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            f"Namespace name exceeds {MAX_NAME_LENGTH} bytes",
            details={"name": name, "length": len(raw)},
        )
    if not NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(
            "Namespace name may only contain a-z, 0-9, '_' and '-'",
            details={"name": name},
        )
    return raw


def derive_namespace_id(name: str, parent_id: Optional[NamespaceId] = None) -> NamespaceId:
    """
    Derive the id of a namespace part.

    Args:
        name: Single namespace part (no dots)
        parent_id: Id of the immediate parent; None (or 0) for a root namespace

    Returns:
        Derived NamespaceId

    Raises:
        InvalidNameError: If the name is invalid
    """
    raw_name = validate_namespace_name(name)
    parent_value = 0 if parent_id is None else int(parent_id) & UINT64_MASK
    digest = sha3_256_bytes(struct.pack("<Q", parent_value), raw_name)
    value = struct.unpack("<Q", digest[:8])[0]
    return NamespaceId(value | NAMESPACE_FLAG)


def derive_namespace_path(full_name: str) -> List[NamespaceId]:
    """
    Derive the ids of every level of a dotted namespace name, root first.

    Args:
        full_name: Name such as "foo", "foo.bar" or "foo.bar.baz"

    Returns:
        List of NamespaceId, one per level

    Raises:
        InvalidNameError: If any part is invalid or the path is too deep
    """
    if not isinstance(full_name, str) or not full_name:
        raise InvalidNameError("Namespace name must not be empty", details={"name": full_name})
    parts = full_name.split(".")
    if len(parts) > MAX_NAMESPACE_DEPTH:
        raise InvalidNameError(
            f"Namespace path exceeds {MAX_NAMESPACE_DEPTH} levels",
            details={"name": full_name},
        )

    path: List[NamespaceId] = []
    parent: Optional[NamespaceId] = None
    for part in parts:
        parent = derive_namespace_id(part, parent)
        path.append(parent)
    return path


class MosaicNonce:
    """Immutable 4-byte nonce used to derive a mosaic id."""

    __slots__ = ("_nonce",)

    def __init__(self, nonce: bytes):
        if len(nonce) != 4:
            raise ValueError(f"Mosaic nonce must be 4 bytes, got {len(nonce)}")
        self._nonce = bytes(nonce)

    @classmethod
    def from_int(cls, value: int) -> MosaicNonce:
        """Create from an unsigned 32-bit integer (stored little-endian)."""
        return cls(struct.pack("<I", value & 0xFFFFFFFF))

    @classmethod
    def from_hex(cls, hex_string: str) -> MosaicNonce:
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def create_random(cls) -> MosaicNonce:
        return cls(secrets.token_bytes(4))

    def to_bytes(self) -> bytes:
        return self._nonce

    def to_int(self) -> int:
        return struct.unpack("<I", self._nonce)[0]

    def __eq__(self, other) -> bool:
        if not isinstance(other, MosaicNonce):
            return NotImplemented
        return self._nonce == other._nonce

    def __hash__(self) -> int:
        return hash(self._nonce)

    def __repr__(self) -> str:
        return f"MosaicNonce('{self._nonce.hex()}')"


def derive_mosaic_id(nonce: Union[MosaicNonce, bytes, int], owner_public_key: bytes) -> MosaicId:
    """
    Derive a mosaic id from its nonce and the owner's public key.

    Args:
        nonce: MosaicNonce, 4 raw bytes, or a u32
        owner_public_key: 32-byte public key of the mosaic owner

    Returns:
        Derived MosaicId
    """
    if isinstance(nonce, int):
        nonce = MosaicNonce.from_int(nonce)
    elif isinstance(nonce, (bytes, bytearray)):
        nonce = MosaicNonce(bytes(nonce))
    if len(owner_public_key) != 32:
        raise ValueError(f"Owner public key must be 32 bytes, got {len(owner_public_key)}")

    digest = sha3_256_bytes(nonce.to_bytes(), bytes(owner_public_key))
    value = struct.unpack("<Q", digest[:8])[0]
    return MosaicId(value & ~NAMESPACE_FLAG & UINT64_MASK)
