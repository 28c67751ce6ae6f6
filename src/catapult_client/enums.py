# Enumerations for the catapult client core
# Wire values match the network's transaction and receipt schemas

from __future__ import annotations
from enum import IntEnum


class NetworkType(IntEnum):
    """Network identifier embedded in every transaction header and address."""

    MAIN_NET = 0x68
    TEST_NET = 0x98
    MIJIN = 0x60
    MIJIN_TEST = 0x90


class TransactionType(IntEnum):
    """Transaction type discriminant (2 bytes little-endian on the wire)."""

    # Namespace
    REGISTER_NAMESPACE = 0x414E
    ADDRESS_ALIAS = 0x424E
    MOSAIC_ALIAS = 0x434E

    # Mosaic
    MOSAIC_DEFINITION = 0x414D
    MOSAIC_SUPPLY_CHANGE = 0x424D

    # Transfer
    TRANSFER = 0x4154

    # Aggregate
    AGGREGATE_COMPLETE = 0x4141
    AGGREGATE_BONDED = 0x4241

    # Hash lock
    LOCK = 0x4148

    # Metadata
    MOSAIC_METADATA = 0x4244

    def is_aggregate(self) -> bool:
        return self in (TransactionType.AGGREGATE_COMPLETE, TransactionType.AGGREGATE_BONDED)


# Transaction format version per transaction type.
TRANSACTION_VERSIONS = {
    TransactionType.REGISTER_NAMESPACE: 1,
    TransactionType.ADDRESS_ALIAS: 1,
    TransactionType.MOSAIC_ALIAS: 1,
    TransactionType.MOSAIC_DEFINITION: 1,
    TransactionType.MOSAIC_SUPPLY_CHANGE: 1,
    TransactionType.TRANSFER: 1,
    TransactionType.AGGREGATE_COMPLETE: 1,
    TransactionType.AGGREGATE_BONDED: 1,
    TransactionType.LOCK: 1,
    TransactionType.MOSAIC_METADATA: 1,
}


class NamespaceType(IntEnum):
    """Selects whether a registration carries a duration (root) or a parent id (sub)."""

    ROOT_NAMESPACE = 0
    SUB_NAMESPACE = 1


class AliasAction(IntEnum):
    """Alias link direction."""

    LINK = 0
    UNLINK = 1


class MosaicSupplyType(IntEnum):
    """Mosaic supply change direction."""

    DECREASE = 0
    INCREASE = 1


class MessageType(IntEnum):
    """Transfer message encoding."""

    PLAIN = 0
    SECURE = 1


class MosaicFlags(IntEnum):
    """Bit flags of a mosaic definition."""

    NONE = 0
    SUPPLY_MUTABLE = 1
    TRANSFERABLE = 2
    LEVY_MUTABLE = 4


class ReceiptType(IntEnum):
    """Receipt type discriminant."""

    # Balance change
    HARVEST_FEE = 0x2143
    LOCK_HASH_CREATED = 0x3148
    LOCK_HASH_COMPLETED = 0x2248
    LOCK_HASH_EXPIRED = 0x2348
    LOCK_SECRET_CREATED = 0x3152
    LOCK_SECRET_COMPLETED = 0x2252
    LOCK_SECRET_EXPIRED = 0x2352

    # Balance transfer
    MOSAIC_RENTAL_FEE = 0x124D
    NAMESPACE_RENTAL_FEE = 0x134E

    # Artifact expiry
    MOSAIC_EXPIRED = 0x414D
    NAMESPACE_EXPIRED = 0x414E
    NAMESPACE_DELETED = 0x424E

    # Inflation
    INFLATION = 0x5143

    # Statement kinds, never carried by a receipt record
    TRANSACTION_GROUP = 0xE143
    ADDRESS_ALIAS_RESOLUTION = 0xF143
    MOSAIC_ALIAS_RESOLUTION = 0xF243


class ReceiptVersion:
    """Receipt format versions (several kinds share a value, so not an enum)."""

    BALANCE_CHANGE = 1
    BALANCE_TRANSFER = 1
    ARTIFACT_EXPIRY = 1
    INFLATION_RECEIPT = 1
    TRANSACTION_STATEMENT = 1
    RESOLUTION_STATEMENT = 1


class ResolutionType(IntEnum):
    """Kind of alias a resolution statement resolves."""

    ADDRESS = 0
    MOSAIC = 1


__all__ = [
    "NetworkType",
    "TransactionType",
    "TRANSACTION_VERSIONS",
    "NamespaceType",
    "AliasAction",
    "MosaicSupplyType",
    "MessageType",
    "MosaicFlags",
    "ReceiptType",
    "ReceiptVersion",
    "ResolutionType",
]
