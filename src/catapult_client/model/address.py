"""
Account addresses and unresolved address references.

An address is 25 raw bytes whose first byte is the network type. On the wire a
recipient may instead be a namespace alias, encoded in the same 25 bytes as
`[network | 0x01][namespace id, 8 bytes LE][16 zero bytes]`.
"""

from __future__ import annotations
import base64
from typing import Optional, Union

from ..enums import NetworkType
from ..runtime.errors import MalformedPayloadError
from .ids import NamespaceId

ADDRESS_SIZE = 25
ALIAS_FLAG = 0x01


class Address:
    """Immutable 25-byte account address."""

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes):
        if len(raw) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
        if raw[0] & ALIAS_FLAG:
            raise ValueError("Address network byte has the alias flag set")
        self._raw = bytes(raw)

    @classmethod
    def create_from_raw_address(cls, raw_address: str) -> Address:
        """
        Create from a base32 address, plain ("SDGL...") or pretty ("SDGL-FW...").
        """
        plain = raw_address.strip().replace("-", "").upper()
        if len(plain) != 40:
            raise ValueError(f"Address {raw_address} has to be 40 characters long")
        return cls(base64.b32decode(plain))

    @classmethod
    def create_from_encoded(cls, encoded: str) -> Address:
        """Create from the 50-character hex form used by REST payloads."""
        return cls(bytes.fromhex(encoded))

    @property
    def network_type(self) -> NetworkType:
        return NetworkType(self._raw[0])

    def plain(self) -> str:
        """40-character base32 form."""
        return base64.b32encode(self._raw).decode("ascii")

    def pretty(self) -> str:
        """Base32 form split into dash-separated groups of six."""
        plain = self.plain()
        return "-".join(plain[i:i + 6] for i in range(0, len(plain), 6))

    def encoded(self) -> str:
        """Upper-case hex of the raw bytes."""
        return self._raw.hex().upper()

    def to_bytes(self) -> bytes:
        return self._raw

    def __eq__(self, other) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __setattr__(self, name, value):
        if name == "_raw" and not hasattr(self, "_raw"):
            object.__setattr__(self, name, value)
            return
        raise AttributeError("Address is immutable")

    def __reduce__(self):
        return (Address, (self._raw,))

    def __str__(self) -> str:
        return self.plain()

    def __repr__(self) -> str:
        return f"Address('{self.plain()}')"


# A recipient in a transaction body is either a concrete address or a namespace alias.
UnresolvedAddress = Union[Address, NamespaceId]


def unresolved_address_to_bytes(unresolved: UnresolvedAddress, network_type: NetworkType) -> bytes:
    """
    Encode an unresolved address as its 25-byte wire form.

    Args:
        unresolved: Address or NamespaceId alias
        network_type: Network of the enclosing transaction (used for aliases)
    """
    if isinstance(unresolved, Address):
        return unresolved.to_bytes()
    if isinstance(unresolved, NamespaceId):
        return bytes([int(network_type) | ALIAS_FLAG]) + unresolved.to_bytes() + b"\x00" * 16
    raise TypeError(f"Cannot encode {type(unresolved).__name__} as an unresolved address")


def unresolved_address_from_bytes(raw: bytes, network_type: Optional[NetworkType] = None) -> UnresolvedAddress:
    """
    Decode a 25-byte unresolved address.

    An alias keeps only its namespace id, so when `network_type` is given the
    alias network byte must match it.

    Raises:
        MalformedPayloadError: If the size is wrong, an alias has non-zero filler
            or an alias names another network
    """
    if len(raw) != ADDRESS_SIZE:
        raise MalformedPayloadError(f"Unresolved address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
    if raw[0] & ALIAS_FLAG:
        if any(raw[9:]):
            raise MalformedPayloadError("Address alias carries non-zero filler bytes")
        if network_type is not None and raw[0] != int(network_type) | ALIAS_FLAG:
            raise MalformedPayloadError(
                f"Address alias is for network 0x{raw[0] & ~ALIAS_FLAG:02X}, not {network_type.name}",
                details={"network": raw[0] & ~ALIAS_FLAG, "expected": int(network_type)},
            )
        return NamespaceId.from_bytes(raw[1:9])
    return Address(raw)
