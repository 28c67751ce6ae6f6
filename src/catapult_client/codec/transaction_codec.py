"""
Transaction Codec

Encodes and decodes the catapult transaction wire layout.

Standalone header (120 bytes, little-endian):

    size u32 | signature 64 | signer 32 | version u16 | type u16 | maxFee u64 | deadline u64

Embedded (aggregate inner) header (40 bytes):

    size u32 | signer 32 | version u16 | type u16

The version field is `network_type << 8 | version`. The type-specific body
follows the header with no padding. An aggregate body is

    payloadSize u32 | inner transactions | cosignatures (signer 32 | signature 64)*

where every inner transaction is zero-padded to a multiple of 8 bytes. The
inner size field excludes that padding, so the decoder recomputes it from the
unpadded size; payloadSize spans the padded inner section.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from ..enums import (
    AliasAction,
    MessageType,
    MosaicFlags,
    MosaicSupplyType,
    NamespaceType,
    NetworkType,
    TransactionType,
)
from ..model.address import Address, unresolved_address_from_bytes, unresolved_address_to_bytes
from ..model.deadline import Deadline
from ..model.id_generator import MosaicNonce
from ..model.ids import MosaicId, NamespaceId, unresolved_mosaic_id_from_value
from ..model.mosaic import Message, Mosaic, MosaicProperties
from ..model.transactions import (
    AggregateTransaction,
    AggregateTransactionCosignature,
    AddressAliasTransaction,
    HashLockTransaction,
    MosaicAliasTransaction,
    MosaicDefinitionTransaction,
    MosaicMetadataTransaction,
    MosaicSupplyChangeTransaction,
    RegisterNamespaceTransaction,
    Transaction,
    TransferTransaction,
    TRANSACTION_CLASSES,
)
from ..runtime.errors import InvalidNameError, MalformedPayloadError
from .reader import BinaryReader
from .writer import BinaryWriter

SIZE_FIELD_SIZE = 4
SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
SIGNATURE_OFFSET = 4
SIGNER_OFFSET = SIGNATURE_OFFSET + SIGNATURE_SIZE
VERSION_OFFSET = SIGNER_OFFSET + PUBLIC_KEY_SIZE
TYPE_OFFSET = VERSION_OFFSET + 2
HEADER_SIZE = 120
EMBEDDED_HEADER_SIZE = 40
AGGREGATE_PAYLOAD_SIZE_OFFSET = HEADER_SIZE
COSIGNATURE_SIZE = PUBLIC_KEY_SIZE + SIGNATURE_SIZE
INNER_ALIGNMENT = 8

ZERO_SIGNATURE = b"\x00" * SIGNATURE_SIZE
ZERO_PUBLIC_KEY = b"\x00" * PUBLIC_KEY_SIZE
DEFINED_MOSAIC_FLAGS = MosaicFlags.SUPPLY_MUTABLE | MosaicFlags.TRANSFERABLE | MosaicFlags.LEVY_MUTABLE


def padded_size(size: int) -> int:
    """Round size up to the next multiple of 8."""
    return (size + INNER_ALIGNMENT - 1) // INNER_ALIGNMENT * INNER_ALIGNMENT


def version_field(network_type: NetworkType, version: int) -> int:
    return (int(network_type) << 8) | (version & 0xFF)


def _payload_bytes(payload: Union[bytes, str]) -> bytes:
    if isinstance(payload, str):
        try:
            return bytes.fromhex(payload)
        except ValueError as e:
            raise MalformedPayloadError("Payload is not valid hex", cause=e)
    return bytes(payload)


def _enum(enum_cls, value: int, what: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise MalformedPayloadError(f"Unknown {what} 0x{value:X}", details={what: value}, cause=e)


def _placeholder(value: bytes):
    return None if not any(value) else value


# =============================================================================
# Body writers
# =============================================================================

def _write_register_namespace(w: BinaryWriter, tx: RegisterNamespaceTransaction) -> None:
    w.u8(tx.namespace_type)
    if tx.namespace_type == NamespaceType.ROOT_NAMESPACE:
        w.u64le(tx.duration)
    else:
        w.u64le(tx.parent_id.id)
    w.u64le(tx.namespace_id.id)
    name = tx.namespace_name.encode("utf-8")
    w.u8(len(name))
    w.bytes(name)


def _write_address_alias(w: BinaryWriter, tx: AddressAliasTransaction) -> None:
    w.u8(tx.alias_action)
    w.u64le(tx.namespace_id.id)
    w.fixed_bytes(tx.address.to_bytes(), 25)


def _write_mosaic_alias(w: BinaryWriter, tx: MosaicAliasTransaction) -> None:
    w.u8(tx.alias_action)
    w.u64le(tx.namespace_id.id)
    w.u64le(tx.mosaic_id.id)


def _write_mosaic_definition(w: BinaryWriter, tx: MosaicDefinitionTransaction) -> None:
    w.fixed_bytes(tx.nonce.to_bytes(), 4)
    w.u64le(tx.mosaic_id.id)
    w.u8(tx.properties.flags)
    w.u8(tx.properties.divisibility)
    w.u64le(tx.properties.duration)


def _write_mosaic_supply_change(w: BinaryWriter, tx: MosaicSupplyChangeTransaction) -> None:
    w.u64le(tx.mosaic_id.id)
    w.u8(tx.action)
    w.u64le(tx.delta)


def _write_mosaic_metadata(w: BinaryWriter, tx: MosaicMetadataTransaction) -> None:
    w.fixed_bytes(tx.target_public_key, PUBLIC_KEY_SIZE)
    w.u64le(tx.scoped_metadata_key)
    w.u64le(tx.target_mosaic_id.id)
    w.i16le(tx.value_size_delta)
    w.u16le(len(tx.value))
    w.bytes(tx.value)


def _write_transfer(w: BinaryWriter, tx: TransferTransaction) -> None:
    w.fixed_bytes(unresolved_address_to_bytes(tx.recipient, tx.network_type), 25)
    w.u16le(tx.message.size())
    w.u8(len(tx.mosaics))
    w.u8(tx.message.type)
    w.bytes(tx.message.payload)
    for mosaic in tx.mosaics:
        w.u64le(mosaic.id.id)
        w.u64le(mosaic.amount)


def _write_hash_lock(w: BinaryWriter, tx: HashLockTransaction) -> None:
    w.u64le(tx.mosaic.id.id)
    w.u64le(tx.mosaic.amount)
    w.u64le(tx.duration)
    w.fixed_bytes(tx.hash, 32)


def _write_aggregate(w: BinaryWriter, tx: AggregateTransaction) -> None:
    inner = BinaryWriter()
    for transaction in tx.inner_transactions:
        embedded = TransactionCodec.encode_embedded(transaction)
        inner.bytes(embedded)
        inner.align(INNER_ALIGNMENT)
    w.u32le(len(inner))
    w.bytes(inner.to_bytes())
    for cosignature in tx.cosignatures:
        w.fixed_bytes(cosignature.signer, PUBLIC_KEY_SIZE)
        w.fixed_bytes(cosignature.signature, SIGNATURE_SIZE)


_BODY_WRITERS: Dict[TransactionType, Callable[[BinaryWriter, Any], None]] = {
    TransactionType.REGISTER_NAMESPACE: _write_register_namespace,
    TransactionType.ADDRESS_ALIAS: _write_address_alias,
    TransactionType.MOSAIC_ALIAS: _write_mosaic_alias,
    TransactionType.MOSAIC_DEFINITION: _write_mosaic_definition,
    TransactionType.MOSAIC_SUPPLY_CHANGE: _write_mosaic_supply_change,
    TransactionType.MOSAIC_METADATA: _write_mosaic_metadata,
    TransactionType.TRANSFER: _write_transfer,
    TransactionType.LOCK: _write_hash_lock,
    TransactionType.AGGREGATE_COMPLETE: _write_aggregate,
    TransactionType.AGGREGATE_BONDED: _write_aggregate,
}


# =============================================================================
# Body readers
# =============================================================================

def _read_register_namespace(r: BinaryReader) -> Dict[str, Any]:
    namespace_type = _enum(NamespaceType, r.u8(), "namespace type")
    value = r.u64le()
    namespace_id = NamespaceId(r.u64le())
    name_size = r.u8()
    raw_name = r.bytes(name_size)
    try:
        name = raw_name.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError("Namespace name is not valid utf-8", cause=e)

    fields = {
        "namespace_type": namespace_type,
        "namespace_name": name,
        "namespace_id": namespace_id,
    }
    if namespace_type == NamespaceType.ROOT_NAMESPACE:
        fields["duration"] = value
    else:
        fields["parent_id"] = NamespaceId(value)
    return fields


def _read_address_alias(r: BinaryReader) -> Dict[str, Any]:
    action = _enum(AliasAction, r.u8(), "alias action")
    namespace_id = NamespaceId(r.u64le())
    raw = r.bytes(25)
    try:
        address = Address(raw)
    except ValueError as e:
        raise MalformedPayloadError("Alias target is not a concrete address", cause=e)
    return {"alias_action": action, "namespace_id": namespace_id, "address": address}


def _read_mosaic_alias(r: BinaryReader) -> Dict[str, Any]:
    return {
        "alias_action": _enum(AliasAction, r.u8(), "alias action"),
        "namespace_id": NamespaceId(r.u64le()),
        "mosaic_id": MosaicId(r.u64le()),
    }


def _read_mosaic_definition(r: BinaryReader) -> Dict[str, Any]:
    nonce = MosaicNonce(r.bytes(4))
    mosaic_id = MosaicId(r.u64le())
    flags = r.u8()
    if flags & ~DEFINED_MOSAIC_FLAGS:
        raise MalformedPayloadError(f"Undefined mosaic flag bits 0x{flags:02X}", details={"flags": flags})
    divisibility = r.u8()
    duration = r.u64le()
    return {
        "nonce": nonce,
        "mosaic_id": mosaic_id,
        "properties": MosaicProperties.from_flags(flags, divisibility, duration),
    }


def _read_mosaic_supply_change(r: BinaryReader) -> Dict[str, Any]:
    return {
        "mosaic_id": unresolved_mosaic_id_from_value(r.u64le()),
        "action": _enum(MosaicSupplyType, r.u8(), "supply change direction"),
        "delta": r.u64le(),
    }


def _read_mosaic_metadata(r: BinaryReader) -> Dict[str, Any]:
    target_public_key = r.bytes(PUBLIC_KEY_SIZE)
    scoped_metadata_key = r.u64le()
    target_mosaic_id = unresolved_mosaic_id_from_value(r.u64le())
    value_size_delta = r.i16le()
    value_size = r.u16le()
    value = r.bytes(value_size)
    return {
        "target_public_key": target_public_key,
        "scoped_metadata_key": scoped_metadata_key,
        "target_mosaic_id": target_mosaic_id,
        "value_size_delta": value_size_delta,
        "value": value,
    }


def _read_mosaic(r: BinaryReader) -> Mosaic:
    mosaic_id = unresolved_mosaic_id_from_value(r.u64le())
    return Mosaic(id=mosaic_id, amount=r.u64le())


def _read_transfer(r: BinaryReader, network_type: Optional[NetworkType] = None) -> Dict[str, Any]:
    recipient = unresolved_address_from_bytes(r.bytes(25), network_type)
    message_size = r.u16le()
    mosaics_count = r.u8()
    raw_message = r.bytes(message_size)
    if raw_message:
        message = Message(type=_enum(MessageType, raw_message[0], "message type"), payload=raw_message[1:])
    else:
        message = Message.empty()
    mosaics = tuple(_read_mosaic(r) for _ in range(mosaics_count))
    return {"recipient": recipient, "message": message, "mosaics": mosaics}


def _read_hash_lock(r: BinaryReader) -> Dict[str, Any]:
    mosaic = _read_mosaic(r)
    duration = r.u64le()
    return {"mosaic": mosaic, "duration": duration, "hash": r.bytes(32)}


def _read_aggregate(r: BinaryReader) -> Dict[str, Any]:
    payload_size = r.u32le()
    section = r.sub_reader(payload_size)

    inner_transactions: List[Transaction] = []
    while not section.eof:
        size = section.peek_u32le()
        if size < EMBEDDED_HEADER_SIZE:
            raise MalformedPayloadError(
                f"Inner transaction size {size} is smaller than its header",
                details={"offset": section.offset},
            )
        embedded = section.bytes(size)
        padding = section.bytes(padded_size(size) - size)
        if any(padding):
            raise MalformedPayloadError("Inner transaction padding is not zero", details={"offset": section.offset})
        inner_transactions.append(TransactionCodec.decode_embedded(embedded))

    if r.remaining % COSIGNATURE_SIZE:
        raise MalformedPayloadError(
            f"Cosignature section of {r.remaining} bytes is not a multiple of {COSIGNATURE_SIZE}"
        )
    cosignatures = []
    while not r.eof:
        cosignatures.append(AggregateTransactionCosignature(
            signer=r.bytes(PUBLIC_KEY_SIZE),
            signature=r.bytes(SIGNATURE_SIZE),
        ))
    return {"inner_transactions": tuple(inner_transactions), "cosignatures": tuple(cosignatures)}


_BODY_READERS: Dict[TransactionType, Callable[[BinaryReader], Dict[str, Any]]] = {
    TransactionType.REGISTER_NAMESPACE: _read_register_namespace,
    TransactionType.ADDRESS_ALIAS: _read_address_alias,
    TransactionType.MOSAIC_ALIAS: _read_mosaic_alias,
    TransactionType.MOSAIC_DEFINITION: _read_mosaic_definition,
    TransactionType.MOSAIC_SUPPLY_CHANGE: _read_mosaic_supply_change,
    TransactionType.MOSAIC_METADATA: _read_mosaic_metadata,
    TransactionType.TRANSFER: _read_transfer,
    TransactionType.LOCK: _read_hash_lock,
    TransactionType.AGGREGATE_COMPLETE: _read_aggregate,
    TransactionType.AGGREGATE_BONDED: _read_aggregate,
}


def _read_body(transaction_type: TransactionType, r: BinaryReader, network_type: NetworkType) -> Dict[str, Any]:
    # an alias recipient must name the network of its own header
    if transaction_type == TransactionType.TRANSFER:
        return _read_transfer(r, network_type)
    return _BODY_READERS[transaction_type](r)

def _build(transaction_type: TransactionType, fields: Dict[str, Any]) -> Transaction:
    try:
        return TRANSACTION_CLASSES[transaction_type].model_validate(fields)
    except (ValidationError, InvalidNameError) as e:
        raise MalformedPayloadError(
            f"Decoded {transaction_type.name} fields are inconsistent",
            details={"type": transaction_type.name},
            cause=e,
        )


# =============================================================================
# Codec facade
# =============================================================================

class TransactionCodec:
    """
    Encoder/decoder for standalone and embedded transactions.

    `decode(encode(tx)) == tx` for every well-formed transaction; padding bytes
    carry no information and are not represented in the model.
    """

    @staticmethod
    def encode_body(tx: Transaction) -> bytes:
        writer = BinaryWriter()
        _BODY_WRITERS[tx.type](writer, tx)
        return writer.to_bytes()

    @staticmethod
    def encode(tx: Transaction) -> bytes:
        """
        Encode a standalone transaction.

        Args:
            tx: Transaction with a deadline

        Returns:
            Wire bytes; signature and signer are zero-filled if unset

        Raises:
            ValueError: If the transaction has no deadline
        """
        if tx.deadline is None:
            raise ValueError(f"{tx.type.name} transaction has no deadline; inner transactions are encoded by their aggregate")

        body = TransactionCodec.encode_body(tx)
        writer = BinaryWriter()
        writer.u32le(HEADER_SIZE + len(body))
        writer.fixed_bytes(tx.signature or ZERO_SIGNATURE, SIGNATURE_SIZE)
        writer.fixed_bytes(tx.signer or ZERO_PUBLIC_KEY, PUBLIC_KEY_SIZE)
        writer.u16le(version_field(tx.network_type, tx.version))
        writer.u16le(tx.type)
        writer.u64le(tx.max_fee)
        writer.u64le(tx.deadline.value)
        writer.bytes(body)
        return writer.to_bytes()

    @staticmethod
    def encode_embedded(tx: Transaction) -> bytes:
        """
        Encode an inner transaction without padding.

        Raises:
            ValueError: If the transaction has no signer
        """
        if tx.signer is None:
            raise ValueError(f"Inner {tx.type.name} transaction has no signer")

        body = TransactionCodec.encode_body(tx)
        writer = BinaryWriter()
        writer.u32le(EMBEDDED_HEADER_SIZE + len(body))
        writer.fixed_bytes(tx.signer, PUBLIC_KEY_SIZE)
        writer.u16le(version_field(tx.network_type, tx.version))
        writer.u16le(tx.type)
        writer.bytes(body)
        return writer.to_bytes()

    @staticmethod
    def decode(payload: Union[bytes, str]) -> Transaction:
        """
        Decode a standalone transaction from bytes or hex.

        Raises:
            MalformedPayloadError: On truncated, oversized or inconsistent payloads
        """
        data = _payload_bytes(payload)
        if len(data) < HEADER_SIZE:
            raise MalformedPayloadError(
                f"Payload of {len(data)} bytes is shorter than the {HEADER_SIZE}-byte header"
            )

        reader = BinaryReader(data)
        size = reader.u32le()
        if size != len(data):
            raise MalformedPayloadError(
                f"Declared size {size} does not match payload length {len(data)}",
                details={"declared": size, "actual": len(data)},
            )
        signature = _placeholder(reader.bytes(SIGNATURE_SIZE))
        signer = _placeholder(reader.bytes(PUBLIC_KEY_SIZE))
        version = reader.u16le()
        transaction_type = _enum(TransactionType, reader.u16le(), "transaction type")
        fields = {
            "network_type": _enum(NetworkType, version >> 8, "network type"),
            "version": version & 0xFF,
            "signature": signature,
            "signer": signer,
            "max_fee": reader.u64le(),
            "deadline": Deadline(reader.u64le()),
        }
        fields.update(_read_body(transaction_type, reader, fields["network_type"]))
        reader.expect_eof(f"{transaction_type.name} body")
        return _build(transaction_type, fields)

    @staticmethod
    def decode_embedded(payload: bytes) -> Transaction:
        """
        Decode one unpadded inner transaction.

        Raises:
            MalformedPayloadError: On truncated or inconsistent payloads
        """
        data = bytes(payload)
        reader = BinaryReader(data)
        size = reader.u32le()
        if size != len(data):
            raise MalformedPayloadError(
                f"Inner size {size} does not match its {len(data)} bytes",
                details={"declared": size, "actual": len(data)},
            )
        signer = reader.bytes(PUBLIC_KEY_SIZE)
        version = reader.u16le()
        transaction_type = _enum(TransactionType, reader.u16le(), "transaction type")
        if transaction_type.is_aggregate():
            raise MalformedPayloadError("Aggregate transactions cannot be nested")
        fields = {
            "network_type": _enum(NetworkType, version >> 8, "network type"),
            "version": version & 0xFF,
            "signer": _placeholder(signer),
        }
        fields.update(_read_body(transaction_type, reader, fields["network_type"]))
        reader.expect_eof(f"inner {transaction_type.name} body")
        return _build(transaction_type, fields)

    @staticmethod
    def peek_type(payload: bytes) -> TransactionType:
        """Read the transaction type of a standalone payload without decoding its body."""
        if len(payload) < HEADER_SIZE:
            raise MalformedPayloadError(f"Payload of {len(payload)} bytes has no complete header")
        return _enum(TransactionType, int.from_bytes(payload[TYPE_OFFSET:TYPE_OFFSET + 2], "little"),
                     "transaction type")
