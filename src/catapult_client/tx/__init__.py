"""
Transaction factory and signing pipeline for catapult networks.
"""

from .signing import (
    CosignatureSignedTransaction,
    SignedTransaction,
    compute_transaction_hash,
    cosign,
    sign_transaction,
    sign_with_cosignatories,
    verify_cosignature,
    verify_signed_payload,
)
from .factory import TransactionFactory

__all__ = [
    "CosignatureSignedTransaction",
    "SignedTransaction",
    "TransactionFactory",
    "compute_transaction_hash",
    "cosign",
    "sign_transaction",
    "sign_with_cosignatories",
    "verify_cosignature",
    "verify_signed_payload",
]
