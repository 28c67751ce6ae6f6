"""
Ed25519 keys for catapult accounts.

An account is a 32-byte private seed; its 32-byte public key is what headers,
cosignatures and receipts carry, and every signature is 64 bytes. The curve
arithmetic comes from `cryptography`; this module only adapts it to raw bytes
and to the hex forms used in REST payloads.
"""

from __future__ import annotations
import hashlib
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

KEY_SIZE = 32
SIGNATURE_SIZE = 64


class Ed25519Error(Exception):
    """Invalid key material."""
    pass


def _key_bytes(value: Union[str, bytes], what: str) -> bytes:
    if isinstance(value, str):
        try:
            value = bytes.fromhex(value)
        except ValueError as e:
            raise Ed25519Error(f"{what} is not valid hex: {e}")
    if len(value) != KEY_SIZE:
        raise Ed25519Error(f"{what} must be {KEY_SIZE} bytes, got {len(value)}")
    return bytes(value)


class Ed25519PublicKey:
    """Account public key; verifies signatures."""

    __slots__ = ("_raw", "_key")

    def __init__(self, public_key_bytes: bytes):
        """
        Raises:
            Ed25519Error: If the key has the wrong size or is not a curve point
        """
        self._raw = _key_bytes(public_key_bytes, "Ed25519 public key")
        try:
            self._key = CryptoEd25519PublicKey.from_public_bytes(self._raw)
        except ValueError as e:
            raise Ed25519Error(f"Invalid Ed25519 public key: {e}")

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PublicKey:
        return cls(_key_bytes(hex_string, "Ed25519 public key"))

    def to_bytes(self) -> bytes:
        return self._raw

    def to_hex(self) -> str:
        """Upper-case hex, as catapult REST payloads carry keys."""
        return self._raw.hex().upper()

    def verify(self, signature: bytes, message: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            return False
        try:
            self._key.verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey.from_hex('{self.to_hex()}')"


class Ed25519PrivateKey:
    """
    Account private key (the 32-byte seed).

    The public key is derived once at construction.
    """

    __slots__ = ("_raw", "_key", "_public_key")

    def __init__(self, private_key_bytes: bytes):
        """
        Raises:
            Ed25519Error: If the seed is not 32 bytes
        """
        self._raw = _key_bytes(private_key_bytes, "Ed25519 private key")
        self._key = CryptoEd25519PrivateKey.from_private_bytes(self._raw)
        self._public_key = Ed25519PublicKey(self._key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        ))

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """Fresh random account key."""
        return cls(CryptoEd25519PrivateKey.generate().private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        ))

    @classmethod
    def from_hex(cls, hex_string: str) -> Ed25519PrivateKey:
        return cls(_key_bytes(hex_string, "Ed25519 private key"))

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Ed25519PrivateKey:
        """
        Deterministic key from an arbitrary phrase: SHA-256 of its utf-8 bytes.

        Meant for test accounts, never for funds.
        """
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        return cls(hashlib.sha256(seed).digest())

    def to_bytes(self) -> bytes:
        return self._raw

    def to_hex(self) -> str:
        return self._raw.hex().upper()

    def public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """64-byte signature over `message`."""
        return self._key.sign(message)

    def __repr__(self) -> str:
        return f"Ed25519PrivateKey(public={self._public_key.to_hex()})"


class Ed25519KeyPair:
    """A private key together with its public key."""

    def __init__(self, private_key: Ed25519PrivateKey):
        self.private_key = private_key
        self.public_key = private_key.public_key()

    @classmethod
    def generate(cls) -> Ed25519KeyPair:
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_private_hex(cls, hex_string: str) -> Ed25519KeyPair:
        return cls(Ed25519PrivateKey.from_hex(hex_string))

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Ed25519KeyPair:
        return cls(Ed25519PrivateKey.from_seed(seed))

    def sign(self, message: bytes) -> bytes:
        return self.private_key.sign(message)

    def public_key_bytes(self) -> bytes:
        return self.public_key.to_bytes()

    def private_key_bytes(self) -> bytes:
        return self.private_key.to_bytes()

    def verify(self, message: bytes, signature: bytes) -> bool:
        return self.public_key.verify(signature, message)

    def __repr__(self) -> str:
        return f"Ed25519KeyPair(public={self.public_key.to_hex()})"


def verify_ed25519(public_key_bytes: bytes, signature: bytes, message: bytes) -> bool:
    """
    Check a signature made by the account `public_key_bytes`.

    False for a bad signature and for a key that is not a curve point.
    """
    try:
        public_key = Ed25519PublicKey(public_key_bytes)
    except Ed25519Error:
        return False
    return public_key.verify(signature, message)


__all__ = [
    "Ed25519Error",
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "Ed25519KeyPair",
    "verify_ed25519",
]
