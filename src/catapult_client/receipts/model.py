"""
Receipt and statement models.

Receipts record the side effects of a block that are not visible in its
transactions (fees, lock outcomes, expiries, inflation). Resolution statements
record which concrete address or mosaic an alias pointed to at each position
in the block, identified by a ReceiptSource.
"""

from __future__ import annotations
from functools import total_ordering
from typing import ClassVar, FrozenSet, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..enums import NetworkType, ReceiptType, ReceiptVersion, ResolutionType
from ..model.address import Address
from ..model.ids import MosaicId, NamespaceId

UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF

BALANCE_CHANGE_TYPES: FrozenSet[ReceiptType] = frozenset({
    ReceiptType.HARVEST_FEE,
    ReceiptType.LOCK_HASH_CREATED,
    ReceiptType.LOCK_HASH_COMPLETED,
    ReceiptType.LOCK_HASH_EXPIRED,
    ReceiptType.LOCK_SECRET_CREATED,
    ReceiptType.LOCK_SECRET_COMPLETED,
    ReceiptType.LOCK_SECRET_EXPIRED,
})
BALANCE_TRANSFER_TYPES: FrozenSet[ReceiptType] = frozenset({
    ReceiptType.MOSAIC_RENTAL_FEE,
    ReceiptType.NAMESPACE_RENTAL_FEE,
})
ARTIFACT_EXPIRY_TYPES: FrozenSet[ReceiptType] = frozenset({
    ReceiptType.MOSAIC_EXPIRED,
    ReceiptType.NAMESPACE_EXPIRED,
    ReceiptType.NAMESPACE_DELETED,
})
INFLATION_TYPES: FrozenSet[ReceiptType] = frozenset({ReceiptType.INFLATION})


def _public_key_hex(value: str) -> str:
    if len(bytes.fromhex(value)) != 32:
        raise ValueError("Public key must be 32 bytes")
    return value.upper()


@total_ordering
class ReceiptSource(BaseModel):
    """
    Position of a receipt within a block.

    `primary_id` is the 1-based index of the transaction in the block (0 for
    block-level receipts) and `secondary_id` the 1-based index inside an
    aggregate (0 outside one). Sources order lexicographically.
    """

    primary_id: int = Field(ge=0, le=UINT32_MAX)
    secondary_id: int = Field(default=0, ge=0, le=UINT32_MAX)

    model_config = ConfigDict(frozen=True)

    def key(self) -> Tuple[int, int]:
        return (self.primary_id, self.secondary_id)

    def __lt__(self, other) -> bool:
        if not isinstance(other, ReceiptSource):
            return NotImplemented
        return self.key() < other.key()


# =============================================================================
# Receipts
# =============================================================================

class Receipt(BaseModel):
    """Common receipt fields; `type` must belong to the concrete class's kind."""

    KINDS: ClassVar[FrozenSet[ReceiptType]] = frozenset()

    type: ReceiptType
    version: int = 1

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("type")
    @classmethod
    def check_kind(cls, v: ReceiptType) -> ReceiptType:
        if v not in cls.KINDS:
            raise ValueError(f"{v.name} is not a {cls.__name__} type")
        return v


class BalanceChangeReceipt(Receipt):
    """Credit or debit of one account (harvest fees, lock creation and release)."""

    KINDS: ClassVar[FrozenSet[ReceiptType]] = BALANCE_CHANGE_TYPES

    version: int = ReceiptVersion.BALANCE_CHANGE
    target_public_key: str
    network_type: NetworkType
    mosaic_id: MosaicId
    amount: int = Field(ge=0, le=UINT64_MAX)

    @field_validator("target_public_key")
    @classmethod
    def check_target(cls, v: str) -> str:
        return _public_key_hex(v)


class BalanceTransferReceipt(Receipt):
    """Movement between two accounts (rental fees)."""

    KINDS: ClassVar[FrozenSet[ReceiptType]] = BALANCE_TRANSFER_TYPES

    version: int = ReceiptVersion.BALANCE_TRANSFER
    sender_public_key: str
    network_type: NetworkType
    recipient: Address
    mosaic_id: MosaicId
    amount: int = Field(ge=0, le=UINT64_MAX)

    @field_validator("sender_public_key")
    @classmethod
    def check_sender(cls, v: str) -> str:
        return _public_key_hex(v)


class ArtifactExpiryReceipt(Receipt):
    """A mosaic or namespace reached the end of its duration."""

    KINDS: ClassVar[FrozenSet[ReceiptType]] = ARTIFACT_EXPIRY_TYPES

    version: int = ReceiptVersion.ARTIFACT_EXPIRY
    artifact_id: Union[MosaicId, NamespaceId]


class InflationReceipt(Receipt):
    KINDS: ClassVar[FrozenSet[ReceiptType]] = INFLATION_TYPES

    version: int = ReceiptVersion.INFLATION_RECEIPT
    mosaic_id: MosaicId
    amount: int = Field(ge=0, le=UINT64_MAX)


# =============================================================================
# Statements
# =============================================================================

class TransactionStatement(BaseModel):
    """Receipts produced by the transaction at `source`."""

    height: int = Field(ge=0, le=UINT64_MAX)
    source: ReceiptSource
    receipts: Tuple[Receipt, ...] = ()

    model_config = ConfigDict(frozen=True)


class ResolutionEntry(BaseModel):
    """The concrete value an alias resolved to, from `source` onward."""

    resolved: Union[Address, MosaicId]
    source: ReceiptSource

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def for_address(cls, address: Address, source: ReceiptSource) -> ResolutionEntry:
        return cls(resolved=address, source=source)

    @classmethod
    def for_mosaic_id(cls, mosaic_id: MosaicId, source: ReceiptSource) -> ResolutionEntry:
        return cls(resolved=mosaic_id, source=source)


class ResolutionStatement(BaseModel):
    """
    All resolutions of one alias within a block.

    The entries need not be ordered; the resolution index sorts them.
    """

    RESOLUTION_TYPE: ClassVar[ResolutionType]
    RESOLVED_TYPE: ClassVar[type]

    height: int = Field(ge=0, le=UINT64_MAX)
    unresolved: Union[NamespaceId, Address, MosaicId]
    resolution_entries: Tuple[ResolutionEntry, ...]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def resolution_type(self) -> ResolutionType:
        return self.RESOLUTION_TYPE

    @property
    def version(self) -> int:
        return ReceiptVersion.RESOLUTION_STATEMENT

    @model_validator(mode="after")
    def check_entries(self):
        for entry in self.resolution_entries:
            if not isinstance(entry.resolved, self.RESOLVED_TYPE):
                raise ValueError(
                    f"{type(self).__name__} entries must resolve to {self.RESOLVED_TYPE.__name__}, "
                    f"got {type(entry.resolved).__name__}"
                )
        return self


class AddressResolutionStatement(ResolutionStatement):
    RESOLUTION_TYPE: ClassVar[ResolutionType] = ResolutionType.ADDRESS
    RESOLVED_TYPE: ClassVar[type] = Address

    unresolved: Union[NamespaceId, Address]


class MosaicResolutionStatement(ResolutionStatement):
    RESOLUTION_TYPE: ClassVar[ResolutionType] = ResolutionType.MOSAIC
    RESOLVED_TYPE: ClassVar[type] = MosaicId

    unresolved: Union[NamespaceId, MosaicId]


class Statement(BaseModel):
    """Every transaction statement and resolution statement of one block."""

    transaction_statements: Tuple[TransactionStatement, ...] = ()
    address_resolution_statements: Tuple[AddressResolutionStatement, ...] = ()
    mosaic_resolution_statements: Tuple[MosaicResolutionStatement, ...] = ()

    model_config = ConfigDict(frozen=True)

    def resolution_index(self):
        """Build an AliasResolutionIndex over this block's resolution statements."""
        from .resolution import AliasResolutionIndex
        return AliasResolutionIndex.build(self.address_resolution_statements + self.mosaic_resolution_statements)


__all__ = [
    "BALANCE_CHANGE_TYPES",
    "BALANCE_TRANSFER_TYPES",
    "ARTIFACT_EXPIRY_TYPES",
    "INFLATION_TYPES",
    "ReceiptSource",
    "Receipt",
    "BalanceChangeReceipt",
    "BalanceTransferReceipt",
    "ArtifactExpiryReceipt",
    "InflationReceipt",
    "TransactionStatement",
    "ResolutionEntry",
    "ResolutionStatement",
    "AddressResolutionStatement",
    "MosaicResolutionStatement",
    "Statement",
]
