"""
Domain model: entity ids, identity derivation, addresses, deadlines, mosaics and transactions.
"""

from .ids import EntityId, NamespaceId, MosaicId, UnresolvedMosaicId, unresolved_mosaic_id_from_value
from .id_generator import (
    MosaicNonce,
    derive_mosaic_id,
    derive_namespace_id,
    derive_namespace_path,
    validate_namespace_name,
)
from .address import (
    Address,
    UnresolvedAddress,
    unresolved_address_from_bytes,
    unresolved_address_to_bytes,
)
from .deadline import Deadline, DEFAULT_EPOCH_ADJUSTMENT
from .mosaic import Message, Mosaic, MosaicProperties
from .transactions import (
    AddressAliasTransaction,
    AggregateBondedTransaction,
    AggregateCompleteTransaction,
    AggregateTransaction,
    AggregateTransactionCosignature,
    HashLockTransaction,
    MosaicAliasTransaction,
    MosaicDefinitionTransaction,
    MosaicMetadataTransaction,
    MosaicSupplyChangeTransaction,
    RegisterNamespaceTransaction,
    Transaction,
    TransferTransaction,
)

__all__ = [
    "EntityId",
    "NamespaceId",
    "MosaicId",
    "UnresolvedMosaicId",
    "unresolved_mosaic_id_from_value",
    "MosaicNonce",
    "derive_mosaic_id",
    "derive_namespace_id",
    "derive_namespace_path",
    "validate_namespace_name",
    "Address",
    "UnresolvedAddress",
    "unresolved_address_from_bytes",
    "unresolved_address_to_bytes",
    "Deadline",
    "DEFAULT_EPOCH_ADJUSTMENT",
    "Message",
    "Mosaic",
    "MosaicProperties",
    "AddressAliasTransaction",
    "AggregateBondedTransaction",
    "AggregateCompleteTransaction",
    "AggregateTransaction",
    "AggregateTransactionCosignature",
    "HashLockTransaction",
    "MosaicAliasTransaction",
    "MosaicDefinitionTransaction",
    "MosaicMetadataTransaction",
    "MosaicSupplyChangeTransaction",
    "RegisterNamespaceTransaction",
    "Transaction",
    "TransferTransaction",
]
