"""
Transaction factory.

Builds transactions for one network profile, filling in the network type, the
profile's default max fee and a fresh deadline, so callers only state what the
transaction does.
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence, Union

from ..config import NetworkProfile
from ..enums import AliasAction, MosaicSupplyType
from ..model.address import Address, UnresolvedAddress
from ..model.deadline import Deadline
from ..model.id_generator import MosaicNonce, derive_mosaic_id
from ..model.ids import MosaicId, NamespaceId, UnresolvedMosaicId
from ..model.mosaic import Message, Mosaic, MosaicProperties
from ..model.transactions import (
    AddressAliasTransaction,
    AggregateBondedTransaction,
    AggregateCompleteTransaction,
    HashLockTransaction,
    MosaicAliasTransaction,
    MosaicDefinitionTransaction,
    MosaicMetadataTransaction,
    MosaicSupplyChangeTransaction,
    RegisterNamespaceTransaction,
    Transaction,
    TransferTransaction,
)
from .signing import SignedTransaction

logger = logging.getLogger(__name__)


class TransactionFactory:
    """
    Creates unsigned transactions bound to a network profile.

    Every method accepts `max_fee` and `deadline` to override the defaults.
    """

    def __init__(self, profile: NetworkProfile):
        self.profile = profile

    @property
    def network_type(self):
        return self.profile.network_type

    def _common(self, max_fee: Optional[int], deadline: Optional[Deadline]) -> dict:
        return {
            "network_type": self.profile.network_type,
            "max_fee": self.profile.default_max_fee if max_fee is None else max_fee,
            "deadline": deadline or self.profile.create_deadline(),
        }

    # =========================================================================
    # Namespaces and aliases
    # =========================================================================

    def register_root_namespace(self, name: str, duration: int, max_fee: Optional[int] = None,
                                deadline: Optional[Deadline] = None) -> RegisterNamespaceTransaction:
        """
        Register a root namespace.

        Args:
            name: Namespace name (lower-case letters, digits, '_' and '-')
            duration: Rental duration in blocks

        Raises:
            InvalidNameError: If the name is invalid
        """
        common = self._common(max_fee, deadline)
        return RegisterNamespaceTransaction.create_root_namespace(
            common["deadline"], common["max_fee"], name, duration, common["network_type"])

    def register_sub_namespace(self, name: str, parent: Union[str, NamespaceId],
                               max_fee: Optional[int] = None,
                               deadline: Optional[Deadline] = None) -> RegisterNamespaceTransaction:
        """
        Register a sub namespace under `parent` (an id or a dotted name).

        Raises:
            InvalidNameError: If the name or the parent name is invalid
        """
        common = self._common(max_fee, deadline)
        return RegisterNamespaceTransaction.create_sub_namespace(
            common["deadline"], common["max_fee"], name, parent, common["network_type"])

    def address_alias(self, namespace_id: NamespaceId, address: Address,
                      action: AliasAction = AliasAction.LINK, max_fee: Optional[int] = None,
                      deadline: Optional[Deadline] = None) -> AddressAliasTransaction:
        return AddressAliasTransaction(
            **self._common(max_fee, deadline),
            alias_action=action,
            namespace_id=namespace_id,
            address=address,
        )

    def mosaic_alias(self, namespace_id: NamespaceId, mosaic_id: MosaicId,
                     action: AliasAction = AliasAction.LINK, max_fee: Optional[int] = None,
                     deadline: Optional[Deadline] = None) -> MosaicAliasTransaction:
        return MosaicAliasTransaction(
            **self._common(max_fee, deadline),
            alias_action=action,
            namespace_id=namespace_id,
            mosaic_id=mosaic_id,
        )

    # =========================================================================
    # Mosaics
    # =========================================================================

    def mosaic_definition(self, owner_public_key: bytes, properties: MosaicProperties,
                          nonce: Optional[MosaicNonce] = None, max_fee: Optional[int] = None,
                          deadline: Optional[Deadline] = None) -> MosaicDefinitionTransaction:
        """
        Define a mosaic owned by `owner_public_key`.

        Args:
            owner_public_key: 32-byte public key of the account that will sign
            properties: Supply/transfer flags, divisibility and duration
            nonce: Nonce to derive the id from (random if omitted)
        """
        nonce = nonce or MosaicNonce.create_random()
        mosaic_id = derive_mosaic_id(nonce, owner_public_key)
        logger.debug(f"Defining mosaic {mosaic_id.hex} from nonce {nonce.to_int()}")
        return MosaicDefinitionTransaction(
            **self._common(max_fee, deadline),
            nonce=nonce,
            mosaic_id=mosaic_id,
            properties=properties,
        )

    def mosaic_supply_change(self, mosaic_id: UnresolvedMosaicId, action: MosaicSupplyType, delta: int,
                             max_fee: Optional[int] = None,
                             deadline: Optional[Deadline] = None) -> MosaicSupplyChangeTransaction:
        return MosaicSupplyChangeTransaction(
            **self._common(max_fee, deadline),
            mosaic_id=mosaic_id,
            action=action,
            delta=delta,
        )

    def mosaic_metadata(self, target_public_key: bytes, scoped_metadata_key: int,
                        target_mosaic_id: UnresolvedMosaicId, value: Union[bytes, str],
                        value_size_delta: Optional[int] = None, max_fee: Optional[int] = None,
                        deadline: Optional[Deadline] = None) -> MosaicMetadataTransaction:
        """
        Attach a metadata value to a mosaic.

        Args:
            value_size_delta: Change in value size against the stored value;
                defaults to the full size, as for a first assignment
        """
        if isinstance(value, str):
            value = value.encode("utf-8")
        return MosaicMetadataTransaction(
            **self._common(max_fee, deadline),
            target_public_key=target_public_key,
            scoped_metadata_key=scoped_metadata_key,
            target_mosaic_id=target_mosaic_id,
            value_size_delta=len(value) if value_size_delta is None else value_size_delta,
            value=value,
        )

    # =========================================================================
    # Transfers and locks
    # =========================================================================

    def transfer(self, recipient: UnresolvedAddress, mosaics: Iterable[Mosaic] = (),
                 message: Union[Message, str, None] = None, max_fee: Optional[int] = None,
                 deadline: Optional[Deadline] = None) -> TransferTransaction:
        """
        Send mosaics to an address or a namespace alias.

        Args:
            message: Message, plain text, or None for an empty message
        """
        if message is None:
            message = Message.empty()
        elif isinstance(message, str):
            message = Message.plain(message)
        return TransferTransaction(
            **self._common(max_fee, deadline),
            recipient=recipient,
            mosaics=tuple(mosaics),
            message=message,
        )

    def hash_lock(self, mosaic: Mosaic, duration: int, signed_transaction: SignedTransaction,
                  max_fee: Optional[int] = None, deadline: Optional[Deadline] = None) -> HashLockTransaction:
        """Lock `mosaic` for the signed aggregate bonded transaction."""
        common = self._common(max_fee, deadline)
        return HashLockTransaction.create(
            common["deadline"], common["max_fee"], mosaic, duration, signed_transaction,
            common["network_type"])

    # =========================================================================
    # Aggregates
    # =========================================================================

    def aggregate_complete(self, inner_transactions: Sequence[Transaction], max_fee: Optional[int] = None,
                           deadline: Optional[Deadline] = None) -> AggregateCompleteTransaction:
        """
        Wrap inner transactions, prepared with `to_aggregate(signer)`, in a complete aggregate.
        """
        common = self._common(max_fee, deadline)
        return AggregateCompleteTransaction.create_complete(
            common["deadline"], inner_transactions, common["network_type"], common["max_fee"])

    def aggregate_bonded(self, inner_transactions: Sequence[Transaction], max_fee: Optional[int] = None,
                         deadline: Optional[Deadline] = None) -> AggregateBondedTransaction:
        common = self._common(max_fee, deadline)
        return AggregateBondedTransaction.create_bonded(
            common["deadline"], inner_transactions, common["network_type"], common["max_fee"])
