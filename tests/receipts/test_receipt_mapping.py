"""Tests for receipt DTO mapping and the receipt models"""

import pytest
from pydantic import ValidationError

from catapult_client.enums import NetworkType, ReceiptType, ResolutionType
from catapult_client.model.address import unresolved_address_to_bytes
from catapult_client.model.ids import MosaicId, NamespaceId
from catapult_client.receipts.mapping import (
    ReceiptMapping,
    parse_address,
    parse_id,
    parse_uint64,
    parse_unresolved_address,
)
from catapult_client.receipts.model import (
    ArtifactExpiryReceipt,
    BalanceChangeReceipt,
    BalanceTransferReceipt,
    InflationReceipt,
    ReceiptSource,
)
from catapult_client.runtime.errors import ErrorCode, UnknownReceiptTypeError

from helpers.factories import mk_address

PUBLIC_KEY = "B4F12E7C9F6946091E2CB8B6D3A12B50D17CCBBF646386EA27CE2946A7423DCF"
CURRENCY_ALIAS = NamespaceId.from_name("cat.currency")
CURRENCY_MOSAIC = "0DC67FBE1CAD29E3"


@pytest.fixture
def mapping():
    return ReceiptMapping()


def _source(primary, secondary=0):
    return {"primaryId": primary, "secondaryId": secondary}


def _statements_dto():
    alias_hex = unresolved_address_to_bytes(NamespaceId.from_name("cat.alice"), NetworkType.MIJIN_TEST).hex()
    return {
        "transactionStatements": [{
            "statement": {
                "height": "100",
                "source": _source(0),
                "receipts": [
                    {
                        "type": int(ReceiptType.HARVEST_FEE),
                        "version": 1,
                        "targetPublicKey": PUBLIC_KEY,
                        "mosaicId": CURRENCY_MOSAIC,
                        "amount": "1500",
                    },
                    {"type": int(ReceiptType.INFLATION), "mosaicId": CURRENCY_MOSAIC, "amount": 2000},
                ],
            },
        }],
        "addressResolutionStatements": [{
            "statement": {
                "height": "100",
                "unresolved": alias_hex,
                "resolutionEntries": [
                    {"source": _source(1), "resolved": mk_address(0x0A).encoded()},
                    {"source": _source(3), "resolved": mk_address(0x0B).plain()},
                ],
            },
        }],
        "mosaicResolutionStatements": [{
            "statement": {
                "height": "100",
                "unresolved": CURRENCY_ALIAS.hex,
                "resolutionEntries": [{"source": _source(1), "resolved": CURRENCY_MOSAIC}],
            },
        }],
    }


class TestParsers:
    """Numbers, ids and addresses in every REST form"""

    @pytest.mark.parametrize("value, expected", [
        (5, 5),
        ("18446744073709551615", 0xFFFFFFFFFFFFFFFF),
        ([1, 2], (2 << 32) | 1),
        ([-1, 0], 0xFFFFFFFF),
    ])
    def test_uint64(self, value, expected):
        assert parse_uint64(value) == expected

    @pytest.mark.parametrize("value", [True, 1.5, [1, 2, 3], "0x10"])
    def test_uint64_rejects(self, value):
        with pytest.raises(ValueError):
            parse_uint64(value)

    def test_id_forms(self):
        assert parse_id("C053DFAFB8B3E97E") == 0xC053DFAFB8B3E97E
        assert parse_id([0xB8B3E97E, 0xC053DFAF]) == 0xC053DFAFB8B3E97E
        assert parse_id(7) == 7

    def test_address_forms(self):
        address = mk_address(0x3C)
        assert parse_address(address.encoded()) == address
        assert parse_address(address.plain()) == address
        assert parse_address(address.pretty()) == address

    def test_unresolved_address_alias(self):
        alias = NamespaceId.from_name("cat.alice")
        raw = unresolved_address_to_bytes(alias, NetworkType.MIJIN_TEST)
        assert parse_unresolved_address(raw.hex().upper()) == alias
        assert parse_unresolved_address(mk_address().plain()) == mk_address()


class TestCreateReceipt:
    """Dispatch on the receipt type discriminant"""

    def test_balance_change(self, mapping):
        receipt = mapping.create_receipt_from_dto({
            "type": int(ReceiptType.LOCK_HASH_CREATED),
            "targetPublicKey": PUBLIC_KEY.lower(),
            "mosaicId": CURRENCY_MOSAIC,
            "amount": [10, 0],
        }, NetworkType.MIJIN_TEST)
        assert isinstance(receipt, BalanceChangeReceipt)
        assert receipt.type == ReceiptType.LOCK_HASH_CREATED
        assert receipt.target_public_key == PUBLIC_KEY
        assert receipt.mosaic_id == MosaicId(CURRENCY_MOSAIC)
        assert receipt.amount == 10
        assert receipt.network_type == NetworkType.MIJIN_TEST

    def test_balance_transfer(self, mapping):
        recipient = mk_address(0x21)
        receipt = mapping.create_receipt_from_dto({
            "type": int(ReceiptType.NAMESPACE_RENTAL_FEE),
            "senderPublicKey": PUBLIC_KEY,
            "recipientAddress": recipient.encoded(),
            "mosaicId": CURRENCY_MOSAIC,
            "amount": "1",
        }, NetworkType.MIJIN_TEST)
        assert isinstance(receipt, BalanceTransferReceipt)
        assert receipt.recipient == recipient
        assert receipt.sender_public_key == PUBLIC_KEY

    @pytest.mark.parametrize("receipt_type, id_type", [
        (ReceiptType.MOSAIC_EXPIRED, MosaicId),
        (ReceiptType.NAMESPACE_EXPIRED, NamespaceId),
        (ReceiptType.NAMESPACE_DELETED, NamespaceId),
    ])
    def test_artifact_expiry(self, mapping, receipt_type, id_type):
        receipt = mapping.create_receipt_from_dto(
            {"type": int(receipt_type), "artifactId": "85BBEA6CC462B244"}, NetworkType.MIJIN_TEST)
        assert isinstance(receipt, ArtifactExpiryReceipt)
        assert type(receipt.artifact_id) is id_type
        assert receipt.artifact_id.hex == "85BBEA6CC462B244"

    def test_inflation(self, mapping):
        receipt = mapping.create_receipt_from_dto(
            {"type": str(int(ReceiptType.INFLATION)), "mosaicId": CURRENCY_MOSAIC, "amount": 42},
            NetworkType.MIJIN_TEST)
        assert isinstance(receipt, InflationReceipt)
        assert receipt.amount == 42

    @pytest.mark.parametrize("dto", [{"type": 0x1234}, {"type": "nonsense"}, {}, {"type": None}])
    def test_unknown_type(self, mapping, dto):
        with pytest.raises(UnknownReceiptTypeError) as exc_info:
            mapping.create_receipt_from_dto(dto, NetworkType.MIJIN_TEST)
        assert exc_info.value.code == ErrorCode.UNKNOWN_RECEIPT_TYPE

    @pytest.mark.parametrize("statement_type", [
        ReceiptType.TRANSACTION_GROUP,
        ReceiptType.ADDRESS_ALIAS_RESOLUTION,
        ReceiptType.MOSAIC_ALIAS_RESOLUTION,
    ])
    def test_statement_kind_is_not_a_receipt(self, mapping, statement_type):
        with pytest.raises(UnknownReceiptTypeError, match="statement type"):
            mapping.create_receipt_from_dto({"type": int(statement_type)}, NetworkType.MIJIN_TEST)

    def test_missing_fields(self, mapping):
        with pytest.raises(ValidationError):
            mapping.create_receipt_from_dto({"type": int(ReceiptType.HARVEST_FEE)}, NetworkType.MIJIN_TEST)

    def test_bad_public_key(self, mapping):
        with pytest.raises(ValidationError):
            mapping.create_receipt_from_dto({
                "type": int(ReceiptType.HARVEST_FEE),
                "targetPublicKey": "ABCD",
                "mosaicId": CURRENCY_MOSAIC,
                "amount": 1,
            }, NetworkType.MIJIN_TEST)


class TestCreateStatement:
    def test_full_bundle(self, mapping):
        statement = mapping.create_statement_from_dto(_statements_dto(), NetworkType.MIJIN_TEST)

        assert len(statement.transaction_statements) == 1
        transaction_statement = statement.transaction_statements[0]
        assert transaction_statement.height == 100
        assert transaction_statement.source == ReceiptSource(primary_id=0)
        assert [type(r) for r in transaction_statement.receipts] == [BalanceChangeReceipt, InflationReceipt]

        address_statement = statement.address_resolution_statements[0]
        assert address_statement.resolution_type == ResolutionType.ADDRESS
        assert address_statement.unresolved == NamespaceId.from_name("cat.alice")
        assert [e.resolved for e in address_statement.resolution_entries] == [mk_address(0x0A), mk_address(0x0B)]

        mosaic_statement = statement.mosaic_resolution_statements[0]
        assert mosaic_statement.resolution_type == ResolutionType.MOSAIC
        assert isinstance(mosaic_statement.unresolved, NamespaceId)
        assert mosaic_statement.resolution_entries[0].resolved == MosaicId(CURRENCY_MOSAIC)

    def test_bundle_feeds_the_index(self, mapping):
        index = mapping.create_statement_from_dto(_statements_dto(), NetworkType.MIJIN_TEST).resolution_index()
        alias = NamespaceId.from_name("cat.alice")
        assert index.height == 100
        assert index.resolve_address(alias, ReceiptSource(primary_id=2)) == mk_address(0x0A)
        assert index.resolve_address(alias, ReceiptSource(primary_id=3)) == mk_address(0x0B)
        assert index.resolve(CURRENCY_ALIAS, ReceiptSource(primary_id=1)) == MosaicId(CURRENCY_MOSAIC)

    def test_legacy_pair_ids(self, mapping):
        statement = mapping.create_mosaic_resolution_statement_from_dto({
            "statement": {
                "height": [100, 0],
                "unresolved": [CURRENCY_ALIAS.id & 0xFFFFFFFF, CURRENCY_ALIAS.id >> 32],
                "resolutionEntries": [{"source": {"primaryId": 1}, "resolved": [5, 0]}],
            },
        })
        assert statement.height == 100
        assert statement.unresolved == CURRENCY_ALIAS
        assert statement.resolution_entries[0].resolved == MosaicId(5)
        assert statement.resolution_entries[0].source == ReceiptSource(primary_id=1, secondary_id=0)

    def test_unknown_receipt_fails_the_bundle(self, mapping):
        dto = _statements_dto()
        dto["transactionStatements"][0]["statement"]["receipts"].append({"type": 0x9999})
        with pytest.raises(UnknownReceiptTypeError):
            mapping.create_statement_from_dto(dto, NetworkType.MIJIN_TEST)

    def test_empty_bundle(self, mapping):
        statement = mapping.create_statement_from_dto({}, NetworkType.MIJIN_TEST)
        assert statement.transaction_statements == ()
        assert len(statement.resolution_index()) == 0

    @pytest.mark.parametrize("source", [{"primaryId": -1}, {"primaryId": 1 << 32}, {}])
    def test_invalid_source(self, mapping, source):
        with pytest.raises(ValidationError):
            mapping.create_mosaic_resolution_statement_from_dto({
                "statement": {
                    "height": "1",
                    "unresolved": CURRENCY_ALIAS.hex,
                    "resolutionEntries": [{"source": source, "resolved": CURRENCY_MOSAIC}],
                },
            })


class TestReceiptModels:
    def test_kind_must_match_class(self):
        with pytest.raises(ValidationError, match="not a InflationReceipt type"):
            InflationReceipt(type=ReceiptType.HARVEST_FEE, mosaic_id=MosaicId(1), amount=1)

    def test_source_ordering(self):
        sources = [ReceiptSource(primary_id=2, secondary_id=1), ReceiptSource(primary_id=1, secondary_id=5),
                   ReceiptSource(primary_id=2)]
        assert [s.key() for s in sorted(sources)] == [(1, 5), (2, 0), (2, 1)]
        assert ReceiptSource(primary_id=1) <= ReceiptSource(primary_id=1, secondary_id=0)
        assert ReceiptSource(primary_id=3) > ReceiptSource(primary_id=2, secondary_id=9)
