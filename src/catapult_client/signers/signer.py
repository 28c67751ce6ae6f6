"""
Base signer interface for catapult transactions.

A signer is the only place private key material lives. The signing pipeline
hands it byte strings (signing payloads or aggregate hashes) and gets raw
signatures back, so a hardware key store or remote signer can stand in for the
in-process Ed25519 implementation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod


class Signer(ABC):
    """
    Base signer interface.

    Matches the capability the signing pipeline needs: sign a message, expose
    the public key it signs for, verify a signature.
    """

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Bytes to sign

        Returns:
            64-byte signature
        """
        pass

    @abstractmethod
    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Returns:
            True if signature is valid
        """
        pass

    @property
    @abstractmethod
    def public_key(self) -> bytes:
        """32-byte public key of this signer."""
        pass

    def public_key_hex(self) -> str:
        return self.public_key.hex().upper()
