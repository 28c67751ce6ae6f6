"""Tests for the profile-bound transaction factory"""

from datetime import datetime, timezone

import pytest

from catapult_client.codec.transaction_codec import TransactionCodec
from catapult_client.enums import AliasAction, MessageType, MosaicSupplyType, NamespaceType, TransactionType
from catapult_client.model.deadline import Deadline
from catapult_client.model.id_generator import MosaicNonce, derive_mosaic_id, derive_namespace_id
from catapult_client.model.ids import MosaicId, NamespaceId
from catapult_client.model.mosaic import Message, Mosaic, MosaicProperties
from catapult_client.runtime.errors import InvalidNameError
from catapult_client.tx.factory import TransactionFactory
from catapult_client.tx.signing import sign_transaction, verify_signed_payload

from helpers.factories import mk_address


@pytest.fixture
def factory(profile):
    return TransactionFactory(profile)


class TestDefaults:
    """Network type, fee and deadline come from the profile"""

    def test_network_and_fee(self, factory, profile):
        tx = factory.transfer(mk_address())
        assert tx.network_type == profile.network_type
        assert tx.max_fee == profile.default_max_fee

    def test_profile_fee(self, profile):
        factory = TransactionFactory(profile.model_copy(update={"default_max_fee": 150}))
        assert factory.transfer(mk_address()).max_fee == 150
        assert factory.transfer(mk_address(), max_fee=0).max_fee == 0

    def test_deadline_is_in_the_future(self, factory, profile):
        before = Deadline.create(hours=0, epoch_adjustment=profile.epoch_adjustment).value
        tx = factory.transfer(mk_address())
        assert tx.deadline.value > before
        assert tx.deadline.to_datetime(profile.epoch_adjustment) > datetime.now(timezone.utc)

    def test_explicit_deadline(self, factory, deadline):
        assert factory.transfer(mk_address(), deadline=deadline).deadline == deadline


class TestNamespaces:
    def test_root(self, factory, deadline):
        tx = factory.register_root_namespace("newnamespace", 10000, max_fee=0, deadline=deadline)
        assert tx.namespace_type == NamespaceType.ROOT_NAMESPACE
        assert tx.namespace_id.id == 0xC053DFAFB8B3E97E
        assert len(TransactionCodec.encode(tx)) == 150

    def test_sub_by_name_and_by_id(self, factory, deadline):
        by_name = factory.register_sub_namespace("subnamespace", "newnamespace", deadline=deadline)
        by_id = factory.register_sub_namespace("subnamespace", derive_namespace_id("newnamespace"),
                                               deadline=deadline)
        assert by_name == by_id
        assert by_name.parent_id == derive_namespace_id("newnamespace")

    def test_invalid_name(self, factory):
        with pytest.raises(InvalidNameError):
            factory.register_root_namespace("NotLowerCase", 10)

    def test_aliases(self, factory):
        namespace_id = NamespaceId.from_name("cat.alice")
        address_alias = factory.address_alias(namespace_id, mk_address())
        mosaic_alias = factory.mosaic_alias(namespace_id, MosaicId(5), action=AliasAction.UNLINK)
        assert address_alias.alias_action == AliasAction.LINK
        assert address_alias.type == TransactionType.ADDRESS_ALIAS
        assert mosaic_alias.alias_action == AliasAction.UNLINK
        assert mosaic_alias.mosaic_id == MosaicId(5)


class TestMosaics:
    OWNER = b"\x33" * 32

    def test_definition_derives_the_id(self, factory):
        nonce = MosaicNonce.from_int(12)
        tx = factory.mosaic_definition(self.OWNER, MosaicProperties(divisibility=2), nonce=nonce)
        assert tx.nonce == nonce
        assert tx.mosaic_id == derive_mosaic_id(nonce, self.OWNER)

    def test_definition_random_nonce(self, factory):
        tx = factory.mosaic_definition(self.OWNER, MosaicProperties())
        assert tx.mosaic_id == derive_mosaic_id(tx.nonce, self.OWNER)

    def test_supply_change(self, factory):
        tx = factory.mosaic_supply_change(MosaicId(9), MosaicSupplyType.INCREASE, 1000)
        assert (tx.mosaic_id, tx.action, tx.delta) == (MosaicId(9), MosaicSupplyType.INCREASE, 1000)

    def test_metadata_defaults_size_delta(self, factory):
        tx = factory.mosaic_metadata(self.OWNER, 1, MosaicId(9), "abc")
        assert tx.value == b"abc"
        assert tx.value_size_delta == 3
        assert factory.mosaic_metadata(self.OWNER, 1, MosaicId(9), b"ab", value_size_delta=-1).value_size_delta == -1


class TestTransfersAndAggregates:
    def test_message_forms(self, factory):
        assert factory.transfer(mk_address()).message == Message.empty()
        assert factory.transfer(mk_address(), message="hi").message == Message.plain("hi")
        secure = Message(type=MessageType.SECURE, payload=b"\x01\x02")
        assert factory.transfer(mk_address(), message=secure).message == secure

    def test_transfer_to_alias(self, factory):
        alias = NamespaceId.from_name("cat.alice")
        tx = factory.transfer(alias, mosaics=[Mosaic(id=MosaicId(1), amount=2)])
        assert tx.recipient == alias
        assert tx.mosaics == (Mosaic(id=MosaicId(1), amount=2),)

    def test_aggregate_and_hash_lock(self, factory, signer, generation_hash):
        inner = factory.transfer(mk_address(), message="inner").to_aggregate(signer.public_key)
        bonded = factory.aggregate_bonded([inner])
        complete = factory.aggregate_complete([inner])
        assert bonded.type == TransactionType.AGGREGATE_BONDED
        assert complete.type == TransactionType.AGGREGATE_COMPLETE

        signed_bonded = sign_transaction(bonded, signer, generation_hash)
        lock = factory.hash_lock(Mosaic(id=MosaicId(1), amount=10), 480, signed_bonded)
        assert lock.hash.hex().upper() == signed_bonded.hash

        with pytest.raises(ValueError):
            factory.hash_lock(Mosaic(id=MosaicId(1), amount=10), 480,
                              sign_transaction(complete, signer, generation_hash))

    def test_factory_output_signs_and_round_trips(self, factory, signer, generation_hash):
        transactions = [
            factory.register_root_namespace("cat", 100),
            factory.register_sub_namespace("currency", "cat"),
            factory.mosaic_definition(signer.public_key, MosaicProperties(supply_mutable=True)),
            factory.transfer(mk_address(), [Mosaic(id=MosaicId(3), amount=4)], "memo"),
        ]
        for tx in transactions:
            assert TransactionCodec.decode(TransactionCodec.encode(tx)) == tx
            assert verify_signed_payload(sign_transaction(tx, signer, generation_hash).payload, generation_hash)
