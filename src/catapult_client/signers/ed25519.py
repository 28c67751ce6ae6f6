"""
In-process account signer.

Wraps an `Ed25519PrivateKey` so the signing pipeline can sign transaction
payloads and aggregate hashes for one catapult account.
"""

from typing import Union

from ..crypto.ed25519 import Ed25519KeyPair, Ed25519PrivateKey
from .signer import Signer


class Ed25519Signer(Signer):
    """Signs for the account owning `private_key`."""

    def __init__(self, key: Union[Ed25519KeyPair, Ed25519PrivateKey]):
        self.private_key = key.private_key if isinstance(key, Ed25519KeyPair) else key
        self._account = self.private_key.public_key()

    @classmethod
    def from_private_hex(cls, hex_string: str) -> "Ed25519Signer":
        return cls(Ed25519PrivateKey.from_hex(hex_string))

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> "Ed25519Signer":
        """Deterministic test account; see `Ed25519PrivateKey.from_seed`."""
        return cls(Ed25519PrivateKey.from_seed(seed))

    @property
    def public_key(self) -> bytes:
        return self._account.to_bytes()

    def sign(self, message: bytes) -> bytes:
        return self.private_key.sign(message)

    def verify(self, signature: bytes, message: bytes) -> bool:
        return self._account.verify(signature, message)

    def __repr__(self) -> str:
        return f"Ed25519Signer(public={self.public_key_hex()})"
