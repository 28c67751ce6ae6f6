"""
Hash Functions

SHA3-256 helpers shared by identity derivation and transaction hashing.
"""

import hashlib


def sha3_256_bytes(*parts: bytes) -> bytes:
    """
    Compute SHA3-256 over the concatenation of the given byte strings.

    Args:
        *parts: Byte strings to hash in order

    Returns:
        SHA3-256 digest (32 bytes)
    """
    hasher = hashlib.sha3_256()
    for part in parts:
        hasher.update(part)
    return hasher.digest()


def sha3_256_hex(*parts: bytes) -> str:
    """Upper-case hex form of sha3_256_bytes."""
    return sha3_256_bytes(*parts).hex().upper()
