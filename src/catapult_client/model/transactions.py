# Transaction type definitions for the catapult client core
# Immutable pydantic models; wire layout lives in codec/transaction_codec.py

from __future__ import annotations
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..enums import (
    AliasAction,
    MosaicSupplyType,
    NamespaceType,
    NetworkType,
    TransactionType,
    TRANSACTION_VERSIONS,
)
from .address import Address, UnresolvedAddress
from .deadline import Deadline
from .id_generator import MosaicNonce, derive_namespace_id, derive_namespace_path, validate_namespace_name
from .ids import MosaicId, NamespaceId, UnresolvedMosaicId
from .mosaic import Message, Mosaic, MosaicProperties

UINT64_MAX = 0xFFFFFFFFFFFFFFFF
PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64
HASH_SIZE = 32


def _check_size(value: Optional[bytes], size: int, what: str) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, str):
        value = bytes.fromhex(value)
    if len(value) != size:
        raise ValueError(f"{what} must be {size} bytes, got {len(value)}")
    return bytes(value)


# =============================================================================
# Base Transaction
# =============================================================================

class Transaction(BaseModel):
    """
    Common header fields shared by every transaction kind.

    A transaction is unsigned: `signer` and `signature` stay None until the
    payload is produced by the signing pipeline, which returns a separate
    SignedTransaction instead of mutating this model. Inner transactions of an
    aggregate carry a signer but no signature, fee or deadline.
    """

    TRANSACTION_TYPE: ClassVar[TransactionType]

    network_type: NetworkType
    version: int = Field(ge=0, le=0xFF)
    max_fee: int = Field(default=0, ge=0, le=UINT64_MAX)
    deadline: Optional[Deadline] = None
    signer: Optional[bytes] = None
    signature: Optional[bytes] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def default_version(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("version") is None:
            data = dict(data)
            data["version"] = TRANSACTION_VERSIONS[cls.TRANSACTION_TYPE]
        return data

    @field_validator("signer", mode="before")
    @classmethod
    def check_signer(cls, v):
        return _check_size(v, PUBLIC_KEY_SIZE, "Signer public key")

    @field_validator("signature", mode="before")
    @classmethod
    def check_signature(cls, v):
        return _check_size(v, SIGNATURE_SIZE, "Signature")

    @property
    def type(self) -> TransactionType:
        return self.TRANSACTION_TYPE

    def to_aggregate(self, signer: bytes) -> Transaction:
        """
        Turn this transaction into an inner transaction of an aggregate.

        Args:
            signer: 32-byte public key of the inner transaction's signer

        Returns:
            Copy with the signer set and fee, deadline and signature cleared
        """
        if self.type.is_aggregate():
            raise ValueError("Aggregate transactions cannot be nested")
        return type(self).model_validate({
            **self._field_values(),
            "signer": signer,
            "max_fee": 0,
            "deadline": None,
            "signature": None,
        })

    def _field_values(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields}


# =============================================================================
# Namespace Transactions
# =============================================================================

class RegisterNamespaceTransaction(Transaction):
    """
    Registers a root namespace (with a duration) or a sub namespace (with a parent).
    """

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.REGISTER_NAMESPACE

    namespace_type: NamespaceType
    namespace_name: str
    namespace_id: NamespaceId
    duration: Optional[int] = Field(default=None, ge=0, le=UINT64_MAX)
    parent_id: Optional[NamespaceId] = None

    @field_validator("namespace_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        validate_namespace_name(v)
        return v

    @model_validator(mode="after")
    def check_namespace_shape(self) -> RegisterNamespaceTransaction:
        if self.namespace_type == NamespaceType.ROOT_NAMESPACE:
            if self.duration is None or self.parent_id is not None:
                raise ValueError("Root namespace registration needs a duration and no parent id")
        elif self.duration is not None or self.parent_id is None:
            raise ValueError("Sub namespace registration needs a parent id and no duration")
        return self

    @classmethod
    def create_root_namespace(cls, deadline: Deadline, max_fee: int, namespace_name: str,
                              duration: int, network_type: NetworkType) -> RegisterNamespaceTransaction:
        """Create a root namespace registration; the id is derived from the name."""
        return cls(
            network_type=network_type,
            max_fee=max_fee,
            deadline=deadline,
            namespace_type=NamespaceType.ROOT_NAMESPACE,
            namespace_name=namespace_name,
            namespace_id=derive_namespace_id(namespace_name),
            duration=duration,
        )

    @classmethod
    def create_sub_namespace(cls, deadline: Deadline, max_fee: int, namespace_name: str,
                             parent: Union[str, NamespaceId],
                             network_type: NetworkType) -> RegisterNamespaceTransaction:
        """
        Create a sub namespace registration.

        Args:
            parent: Parent id, or the parent's full dotted name
        """
        parent_id = derive_namespace_path(parent)[-1] if isinstance(parent, str) else parent
        return cls(
            network_type=network_type,
            max_fee=max_fee,
            deadline=deadline,
            namespace_type=NamespaceType.SUB_NAMESPACE,
            namespace_name=namespace_name,
            namespace_id=derive_namespace_id(namespace_name, parent_id),
            parent_id=parent_id,
        )


class AddressAliasTransaction(Transaction):
    """Links or unlinks a namespace to an account address."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.ADDRESS_ALIAS

    alias_action: AliasAction
    namespace_id: NamespaceId
    address: Address


class MosaicAliasTransaction(Transaction):
    """Links or unlinks a namespace to a mosaic."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.MOSAIC_ALIAS

    alias_action: AliasAction
    namespace_id: NamespaceId
    mosaic_id: MosaicId


# =============================================================================
# Mosaic Transactions
# =============================================================================

class MosaicDefinitionTransaction(Transaction):
    """Defines a mosaic whose id is derived from a nonce and the owner's public key."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.MOSAIC_DEFINITION

    nonce: MosaicNonce
    mosaic_id: MosaicId
    properties: MosaicProperties


class MosaicSupplyChangeTransaction(Transaction):
    """Increases or decreases the supply of a mosaic."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.MOSAIC_SUPPLY_CHANGE

    mosaic_id: UnresolvedMosaicId
    action: MosaicSupplyType
    delta: int = Field(ge=0, le=UINT64_MAX)


class MosaicMetadataTransaction(Transaction):
    """Attaches a metadata value to a mosaic under a scoped key."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.MOSAIC_METADATA

    target_public_key: bytes
    scoped_metadata_key: int = Field(ge=0, le=UINT64_MAX)
    target_mosaic_id: UnresolvedMosaicId
    value_size_delta: int = Field(ge=-0x8000, le=0x7FFF)
    value: bytes = Field(max_length=0xFFFF)

    @field_validator("target_public_key", mode="before")
    @classmethod
    def check_target(cls, v):
        return _check_size(v, PUBLIC_KEY_SIZE, "Target public key")

    @field_validator("value", mode="before")
    @classmethod
    def encode_text(cls, v):
        if isinstance(v, str):
            return v.encode("utf-8")
        return v


# =============================================================================
# Transfer and Lock Transactions
# =============================================================================

class TransferTransaction(Transaction):
    """Sends mosaics and an optional message to an address or address alias."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.TRANSFER

    recipient: UnresolvedAddress
    mosaics: Tuple[Mosaic, ...] = ()
    message: Message = Field(default_factory=Message.empty)

    @field_validator("mosaics")
    @classmethod
    def check_mosaics(cls, v):
        if len(v) > 0xFF:
            raise ValueError("A transfer carries at most 255 mosaics")
        return v

    @field_validator("message")
    @classmethod
    def check_message(cls, v: Message) -> Message:
        if v.size() > 0xFFFF:
            raise ValueError("Message does not fit in 65535 bytes")
        return v


class HashLockTransaction(Transaction):
    """Locks funds until the aggregate bonded transaction with the given hash is confirmed."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.LOCK

    mosaic: Mosaic
    duration: int = Field(ge=0, le=UINT64_MAX)
    hash: bytes

    @field_validator("hash", mode="before")
    @classmethod
    def check_hash(cls, v):
        return _check_size(v, HASH_SIZE, "Locked hash")

    @classmethod
    def create(cls, deadline: Deadline, max_fee: int, mosaic: Mosaic, duration: int,
               signed_transaction, network_type: NetworkType) -> HashLockTransaction:
        """
        Lock funds for an aggregate bonded transaction.

        Args:
            signed_transaction: SignedTransaction of an aggregate bonded transaction
        """
        if signed_transaction.type != TransactionType.AGGREGATE_BONDED:
            raise ValueError("Signed transaction must be an aggregate bonded transaction")
        return cls(
            network_type=network_type,
            max_fee=max_fee,
            deadline=deadline,
            mosaic=mosaic,
            duration=duration,
            hash=bytes.fromhex(signed_transaction.hash),
        )


# =============================================================================
# Aggregate Transactions
# =============================================================================

class AggregateTransactionCosignature(BaseModel):
    """A cosigner's public key and signature over the aggregate hash."""

    signer: bytes
    signature: bytes

    model_config = ConfigDict(frozen=True)

    @field_validator("signer", mode="before")
    @classmethod
    def check_signer(cls, v):
        return _check_size(v, PUBLIC_KEY_SIZE, "Cosigner public key")

    @field_validator("signature", mode="before")
    @classmethod
    def check_signature(cls, v):
        return _check_size(v, SIGNATURE_SIZE, "Cosignature")


class AggregateTransaction(Transaction):
    """
    Wraps inner transactions that share one fee, deadline and outer signature.

    Inner transactions must have been prepared with `to_aggregate()`.
    """

    inner_transactions: Tuple[Transaction, ...]
    cosignatures: Tuple[AggregateTransactionCosignature, ...] = ()

    @field_validator("inner_transactions")
    @classmethod
    def check_inner(cls, v: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
        for inner in v:
            if inner.type.is_aggregate():
                raise ValueError("Aggregate transactions cannot be nested")
            if inner.signer is None:
                raise ValueError(f"Inner {inner.type.name} transaction has no signer")
            if inner.signature is not None or inner.deadline is not None or inner.max_fee:
                raise ValueError(
                    f"Inner {inner.type.name} transaction carries a fee, deadline or signature; "
                    "prepare it with to_aggregate()"
                )
        return v

    @classmethod
    def create_complete(cls, deadline: Deadline, inner_transactions, network_type: NetworkType,
                        max_fee: int = 0) -> AggregateTransaction:
        return AggregateCompleteTransaction(
            network_type=network_type,
            max_fee=max_fee,
            deadline=deadline,
            inner_transactions=tuple(inner_transactions),
        )

    @classmethod
    def create_bonded(cls, deadline: Deadline, inner_transactions, network_type: NetworkType,
                      max_fee: int = 0) -> AggregateTransaction:
        return AggregateBondedTransaction(
            network_type=network_type,
            max_fee=max_fee,
            deadline=deadline,
            inner_transactions=tuple(inner_transactions),
        )

    def with_cosignatures(self, cosignatures) -> AggregateTransaction:
        return type(self).model_validate({**self._field_values(), "cosignatures": tuple(cosignatures)})


class AggregateCompleteTransaction(AggregateTransaction):
    """Aggregate whose cosignatures are all present at announcement."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.AGGREGATE_COMPLETE


class AggregateBondedTransaction(AggregateTransaction):
    """Aggregate that collects cosignatures on chain, backed by a hash lock."""

    TRANSACTION_TYPE: ClassVar[TransactionType] = TransactionType.AGGREGATE_BONDED


TRANSACTION_CLASSES: Dict[TransactionType, Type[Transaction]] = {
    cls.TRANSACTION_TYPE: cls
    for cls in (
        RegisterNamespaceTransaction,
        AddressAliasTransaction,
        MosaicAliasTransaction,
        MosaicDefinitionTransaction,
        MosaicSupplyChangeTransaction,
        MosaicMetadataTransaction,
        TransferTransaction,
        HashLockTransaction,
        AggregateCompleteTransaction,
        AggregateBondedTransaction,
    )
}


__all__ = [
    "Transaction",
    "RegisterNamespaceTransaction",
    "AddressAliasTransaction",
    "MosaicAliasTransaction",
    "MosaicDefinitionTransaction",
    "MosaicSupplyChangeTransaction",
    "MosaicMetadataTransaction",
    "TransferTransaction",
    "HashLockTransaction",
    "AggregateTransactionCosignature",
    "AggregateTransaction",
    "AggregateCompleteTransaction",
    "AggregateBondedTransaction",
    "TRANSACTION_CLASSES",
]
