"""
Signer infrastructure for catapult transactions.
"""

from .signer import Signer
from .ed25519 import Ed25519Signer

__all__ = [
    "Signer",
    "Ed25519Signer",
]
