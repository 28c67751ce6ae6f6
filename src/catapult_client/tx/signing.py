"""
Transaction signing and verification.

A catapult signature is bound to one network by its generation hash:

    signing payload = generation_hash ++ payload[100:]
    transaction hash = SHA3-256(generation_hash ++ signature ++ signer ++ payload[100:])

where `payload[100:]` drops the size field and the signature and signer
placeholders. For aggregates, both exclude the trailing cosignature section so
cosignatures can be collected after the initiator has signed. Cosigners sign
the 32-byte transaction hash only.
"""

from __future__ import annotations
import logging
import struct
from typing import Callable, Iterable, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..codec.hashes import sha3_256_bytes
from ..codec.transaction_codec import (
    AGGREGATE_PAYLOAD_SIZE_OFFSET,
    COSIGNATURE_SIZE,
    SIGNATURE_OFFSET,
    SIGNER_OFFSET,
    VERSION_OFFSET,
    TransactionCodec,
)
from ..crypto.ed25519 import verify_ed25519
from ..enums import NetworkType, TransactionType
from ..model.transactions import AggregateTransaction, AggregateTransactionCosignature, Transaction
from ..runtime.errors import MalformedPayloadError
from ..signers.signer import Signer

logger = logging.getLogger(__name__)

# (public key, signature, message) -> valid
Verifier = Callable[[bytes, bytes, bytes], bool]

GENERATION_HASH_SIZE = 32
TRANSACTION_HASH_SIZE = 32


def _hex_bytes(value: Union[str, bytes], size: int, what: str) -> bytes:
    if isinstance(value, str):
        try:
            value = bytes.fromhex(value)
        except ValueError as e:
            raise ValueError(f"{what} is not valid hex: {e}")
    if len(value) != size:
        raise ValueError(f"{what} must be {size} bytes, got {len(value)}")
    return bytes(value)


def generation_hash_bytes(generation_hash: Union[str, bytes]) -> bytes:
    """Normalize a 32-byte generation hash given as hex or bytes."""
    return _hex_bytes(generation_hash, GENERATION_HASH_SIZE, "Generation hash")


class SignedTransaction(BaseModel):
    """
    Wire-ready signed transaction.

    `payload` is the upper-case hex of the announced bytes and `hash` the
    upper-case hex transaction hash used to correlate confirmations.
    """

    payload: str
    hash: str
    type: TransactionType
    network_type: NetworkType
    signer: str

    model_config = ConfigDict(frozen=True)

    @field_validator("payload", "hash", "signer")
    @classmethod
    def normalize_hex(cls, v: str) -> str:
        bytes.fromhex(v)
        return v.upper()

    def payload_bytes(self) -> bytes:
        return bytes.fromhex(self.payload)

    def hash_bytes(self) -> bytes:
        return bytes.fromhex(self.hash)


class CosignatureSignedTransaction(BaseModel):
    """A cosigner's signature over the hash of an aggregate transaction."""

    parent_hash: str
    signature: str
    signer: str

    model_config = ConfigDict(frozen=True)

    @field_validator("parent_hash", "signature", "signer")
    @classmethod
    def normalize_hex(cls, v: str) -> str:
        bytes.fromhex(v)
        return v.upper()

    def to_cosignature(self) -> AggregateTransactionCosignature:
        """Cosignature record to embed in an aggregate."""
        return AggregateTransactionCosignature(signer=self.signer, signature=self.signature)


def _cosignature_bytes(cosignatures: Iterable) -> bytes:
    out = bytearray()
    for cosignature in cosignatures:
        if isinstance(cosignature, CosignatureSignedTransaction):
            cosignature = cosignature.to_cosignature()
        out += cosignature.signer + cosignature.signature
    return bytes(out)


def _with_cosignatures(payload: bytes, cosignatures: Iterable) -> bytes:
    """Append cosignatures and rewrite the size field."""
    extra = _cosignature_bytes(cosignatures)
    if not extra:
        return payload
    body = payload[SIGNATURE_OFFSET:] + extra
    return struct.pack("<I", SIGNATURE_OFFSET + len(body)) + body


def _signed_extent(data: bytes) -> int:
    """
    End offset of the part of a payload covered by the signature.

    Raises:
        MalformedPayloadError: If the header or aggregate framing is inconsistent
    """
    transaction_type = TransactionCodec.peek_type(data)
    size = struct.unpack_from("<I", data, 0)[0]
    if size != len(data):
        raise MalformedPayloadError(
            f"Declared size {size} does not match payload length {len(data)}",
            details={"declared": size, "actual": len(data)},
        )
    if not transaction_type.is_aggregate():
        return len(data)

    if len(data) < AGGREGATE_PAYLOAD_SIZE_OFFSET + 4:
        raise MalformedPayloadError("Aggregate payload has no payload size field")
    payload_size = struct.unpack_from("<I", data, AGGREGATE_PAYLOAD_SIZE_OFFSET)[0]
    end = AGGREGATE_PAYLOAD_SIZE_OFFSET + 4 + payload_size
    if end > len(data) or (len(data) - end) % COSIGNATURE_SIZE:
        raise MalformedPayloadError(
            f"Aggregate payload size {payload_size} leaves a ragged cosignature section",
            details={"payload_size": payload_size, "length": len(data)},
        )
    return end


def _hash(generation_hash: bytes, signed_part: bytes) -> str:
    """`signed_part` is signature ++ signer ++ payload[100:]."""
    return sha3_256_bytes(generation_hash, signed_part).hex().upper()


def compute_transaction_hash(payload: Union[str, bytes], generation_hash: Union[str, bytes]) -> str:
    """
    Compute the hash of a signed payload.

    Args:
        payload: Signed payload bytes or hex
        generation_hash: Generation hash of the network the payload was signed for

    Returns:
        Upper-case hex transaction hash

    Raises:
        MalformedPayloadError: If the payload framing is inconsistent
    """
    data = bytes.fromhex(payload) if isinstance(payload, str) else bytes(payload)
    end = _signed_extent(data)
    return _hash(generation_hash_bytes(generation_hash), data[SIGNATURE_OFFSET:end])


def sign_transaction(transaction: Transaction, signer: Signer,
                     generation_hash: Union[str, bytes]) -> SignedTransaction:
    """
    Sign a transaction for the network identified by `generation_hash`.

    Args:
        transaction: Standalone transaction with a deadline
        signer: Signer holding the initiator's key
        generation_hash: 32-byte generation hash, hex or bytes

    Returns:
        SignedTransaction; cosignatures already attached to an aggregate are
        appended after the signed part
    """
    gh = generation_hash_bytes(generation_hash)
    cosignatures: Tuple[AggregateTransactionCosignature, ...] = ()
    if isinstance(transaction, AggregateTransaction) and transaction.cosignatures:
        cosignatures = transaction.cosignatures
        transaction = transaction.with_cosignatures(())

    raw = TransactionCodec.encode(transaction)
    signed_body = raw[VERSION_OFFSET:]
    signature = signer.sign(gh + signed_body)
    public_key = signer.public_key

    payload = raw[:SIGNATURE_OFFSET] + signature + public_key + signed_body
    transaction_hash = _hash(gh, payload[SIGNATURE_OFFSET:])
    payload = _with_cosignatures(payload, cosignatures)

    logger.debug(f"Signed {transaction.type.name} transaction {transaction_hash} by {public_key.hex()[:16]}...")
    return SignedTransaction(
        payload=payload.hex(),
        hash=transaction_hash,
        type=transaction.type,
        network_type=transaction.network_type,
        signer=public_key.hex(),
    )


def cosign(aggregate_hash: Union[str, bytes, SignedTransaction], signer: Signer) -> CosignatureSignedTransaction:
    """
    Cosign an aggregate transaction by signing its hash.

    Args:
        aggregate_hash: Transaction hash (hex or bytes) or the SignedTransaction itself
    """
    if isinstance(aggregate_hash, SignedTransaction):
        aggregate_hash = aggregate_hash.hash
    hash_bytes = _hex_bytes(aggregate_hash, TRANSACTION_HASH_SIZE, "Aggregate hash")

    signature = signer.sign(hash_bytes)
    logger.debug(f"Cosigned {hash_bytes.hex().upper()} by {signer.public_key.hex()[:16]}...")
    return CosignatureSignedTransaction(
        parent_hash=hash_bytes.hex(),
        signature=signature.hex(),
        signer=signer.public_key.hex(),
    )


def sign_with_cosignatories(aggregate: AggregateTransaction, initiator: Signer,
                            cosigners: Sequence[Signer],
                            generation_hash: Union[str, bytes]) -> SignedTransaction:
    """
    Sign an aggregate and collect every cosigner's signature in one step.

    The hash is unaffected by the appended cosignatures.
    """
    if not isinstance(aggregate, AggregateTransaction):
        raise ValueError(f"{aggregate.type.name} transaction is not an aggregate")

    signed = sign_transaction(aggregate, initiator, generation_hash)
    cosignatures = [cosign(signed.hash, cosigner) for cosigner in cosigners]
    payload = _with_cosignatures(signed.payload_bytes(), cosignatures)
    return signed.model_copy(update={"payload": payload.hex().upper()})


def verify_signed_payload(payload: Union[str, bytes], generation_hash: Union[str, bytes],
                          verifier: Verifier = verify_ed25519) -> bool:
    """
    Check the initiator signature of a signed payload.

    Never raises for bad input: malformed payloads, invalid keys and signatures
    made for another generation hash all verify as False. Bodies are not
    decoded. `verifier` must match the primitive of the Signer that signed.
    """
    try:
        gh = generation_hash_bytes(generation_hash)
        data = bytes.fromhex(payload) if isinstance(payload, str) else bytes(payload)
        end = _signed_extent(data)
    except (MalformedPayloadError, ValueError, TypeError) as e:
        logger.debug(f"Rejected payload during verification: {e}")
        return False

    signature = data[SIGNATURE_OFFSET:SIGNER_OFFSET]
    public_key = data[SIGNER_OFFSET:VERSION_OFFSET]
    valid = verifier(public_key, signature, gh + data[VERSION_OFFSET:end])
    if not valid:
        logger.debug(f"Signature check failed for signer {public_key.hex()[:16]}...")
    return valid


def verify_cosignature(aggregate_hash: Union[str, bytes],
                       cosignature: Union[CosignatureSignedTransaction, AggregateTransactionCosignature],
                       verifier: Verifier = verify_ed25519) -> bool:
    """Check a cosignature against the aggregate hash. Never raises."""
    if isinstance(cosignature, CosignatureSignedTransaction):
        cosignature = cosignature.to_cosignature()
    try:
        hash_bytes = _hex_bytes(aggregate_hash, TRANSACTION_HASH_SIZE, "Aggregate hash")
    except (ValueError, TypeError) as e:
        logger.debug(f"Rejected cosignature check: {e}")
        return False
    return verifier(cosignature.signer, cosignature.signature, hash_bytes)


__all__ = [
    "SignedTransaction",
    "CosignatureSignedTransaction",
    "generation_hash_bytes",
    "sign_transaction",
    "sign_with_cosignatories",
    "cosign",
    "compute_transaction_hash",
    "verify_signed_payload",
    "verify_cosignature",
]
