"""
Catapult Binary Codec Module

Little-endian primitives and digests used by the transaction codec.

Key components:
- writer.py: Binary writer with fixed-width little-endian primitives
- reader.py: Bounds-checked binary reader
- transaction_codec.py: Transaction header, body and aggregate framing
- hashes.py: SHA3-256 hashing helpers
"""

from .hashes import sha3_256_bytes, sha3_256_hex
from .reader import BinaryReader
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "sha3_256_bytes",
    "sha3_256_hex",
]
