"""
Cryptographic primitives for catapult transactions.
"""

from .ed25519 import Ed25519Error, Ed25519KeyPair, Ed25519PrivateKey, Ed25519PublicKey, verify_ed25519

__all__ = [
    "Ed25519Error",
    "Ed25519KeyPair",
    "Ed25519PrivateKey",
    "Ed25519PublicKey",
    "verify_ed25519",
]
