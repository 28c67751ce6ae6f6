"""
Block receipts, resolution statements and alias resolution.
"""

from .model import (
    AddressResolutionStatement,
    ArtifactExpiryReceipt,
    BalanceChangeReceipt,
    BalanceTransferReceipt,
    InflationReceipt,
    MosaicResolutionStatement,
    Receipt,
    ReceiptSource,
    ResolutionEntry,
    ResolutionStatement,
    Statement,
    TransactionStatement,
)
from .mapping import ReceiptMapping
from .resolution import AliasResolutionIndex

__all__ = [
    "AddressResolutionStatement",
    "AliasResolutionIndex",
    "ArtifactExpiryReceipt",
    "BalanceChangeReceipt",
    "BalanceTransferReceipt",
    "InflationReceipt",
    "MosaicResolutionStatement",
    "Receipt",
    "ReceiptMapping",
    "ReceiptSource",
    "ResolutionEntry",
    "ResolutionStatement",
    "Statement",
    "TransactionStatement",
]
