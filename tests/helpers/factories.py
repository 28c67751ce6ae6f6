"""
Test factories for creating test data consistently.

Provides deterministic signers, addresses and one ready-made transaction of
every kind, so codec and signing tests can iterate over all of them.
"""

from __future__ import annotations
from typing import List, Union

from catapult_client.enums import AliasAction, MosaicSupplyType, NetworkType
from catapult_client.model.address import Address
from catapult_client.model.deadline import Deadline
from catapult_client.model.id_generator import MosaicNonce, derive_mosaic_id, derive_namespace_id
from catapult_client.model.ids import MosaicId, NamespaceId
from catapult_client.model.mosaic import Message, Mosaic, MosaicProperties
from catapult_client.model.transactions import (
    AddressAliasTransaction,
    AggregateTransaction,
    HashLockTransaction,
    MosaicAliasTransaction,
    MosaicDefinitionTransaction,
    MosaicMetadataTransaction,
    MosaicSupplyChangeTransaction,
    RegisterNamespaceTransaction,
    Transaction,
    TransferTransaction,
)
from catapult_client.signers.ed25519 import Ed25519Signer

NETWORK = NetworkType.MIJIN_TEST


def mk_signer(seed: Union[str, bytes] = "catapult-test") -> Ed25519Signer:
    """Create a deterministic Ed25519 signer from a seed."""
    return Ed25519Signer.from_seed(seed)


def mk_address(fill: int = 0x11, network_type: NetworkType = NETWORK) -> Address:
    """Create an address: the network byte followed by 24 copies of `fill`."""
    return Address(bytes([int(network_type)]) + bytes([fill]) * 24)


def mk_public_key(fill: int = 0x22) -> bytes:
    return bytes([fill]) * 32


def mk_standalone_transactions(deadline: Deadline = Deadline(1), max_fee: int = 0) -> List[Transaction]:
    """One standalone transaction of every non-aggregate kind."""
    root = derive_namespace_id("cat")
    owner = mk_public_key(0x33)
    nonce = MosaicNonce.from_int(7)
    mosaic_id = derive_mosaic_id(nonce, owner)
    common = {"network_type": NETWORK, "deadline": deadline, "max_fee": max_fee}

    return [
        RegisterNamespaceTransaction.create_root_namespace(deadline, max_fee, "cat", 1000, NETWORK),
        RegisterNamespaceTransaction.create_sub_namespace(deadline, max_fee, "currency", root, NETWORK),
        AddressAliasTransaction(**common, alias_action=AliasAction.LINK, namespace_id=root, address=mk_address()),
        MosaicAliasTransaction(**common, alias_action=AliasAction.UNLINK, namespace_id=root, mosaic_id=mosaic_id),
        MosaicDefinitionTransaction(
            **common,
            nonce=nonce,
            mosaic_id=mosaic_id,
            properties=MosaicProperties(supply_mutable=True, divisibility=3, duration=500),
        ),
        MosaicSupplyChangeTransaction(**common, mosaic_id=mosaic_id, action=MosaicSupplyType.INCREASE, delta=10**6),
        MosaicMetadataTransaction(
            **common,
            target_public_key=owner,
            scoped_metadata_key=0xCAFE,
            target_mosaic_id=root,
            value_size_delta=-2,
            value=b"meta",
        ),
        TransferTransaction(
            **common,
            recipient=mk_address(0x44),
            mosaics=(Mosaic(id=mosaic_id, amount=5), Mosaic(id=root, amount=7)),
            message=Message.plain("hello"),
        ),
        TransferTransaction(**common, recipient=NamespaceId.from_name("cat.alice")),
        HashLockTransaction(
            **common,
            mosaic=Mosaic(id=root, amount=10 * 10**6),
            duration=480,
            hash=bytes(range(32)),
        ),
    ]


def mk_aggregate(inner_signer: bytes, bonded: bool = False, deadline: Deadline = Deadline(1),
                 max_fee: int = 0) -> AggregateTransaction:
    """Aggregate of a transfer and a supply change, both signed by `inner_signer`."""
    inner = [
        TransferTransaction(
            network_type=NETWORK, deadline=deadline, recipient=mk_address(0x55), message=Message.plain("x" * 28),
        ).to_aggregate(inner_signer),
        MosaicSupplyChangeTransaction(
            network_type=NETWORK, deadline=deadline, mosaic_id=MosaicId(0x1234),
            action=MosaicSupplyType.DECREASE, delta=3,
        ).to_aggregate(inner_signer),
    ]
    if bonded:
        return AggregateTransaction.create_bonded(deadline, inner, NETWORK, max_fee)
    return AggregateTransaction.create_complete(deadline, inner, NETWORK, max_fee)
