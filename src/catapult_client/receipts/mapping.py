"""
Receipt DTO mapping.

Turns the JSON shapes served by the node's block receipts endpoint into
receipt and statement models. DTO shapes are validated with pydantic before
anything is built, so a bad record never yields a partially mapped statement.

Numeric fields accept ints, decimal strings, or the legacy `[lower, higher]`
pair of uint32 words; ids accept hex strings or the legacy pair; addresses
accept the 50-character hex form or base32.
"""

from __future__ import annotations
import logging
from typing import Annotated, Any, Dict, List, Mapping, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ..enums import NetworkType, ReceiptType
from ..model.address import Address, UnresolvedAddress, unresolved_address_from_bytes
from ..model.ids import MosaicId, NamespaceId, unresolved_mosaic_id_from_value
from ..runtime.errors import UnknownReceiptTypeError
from .model import (
    ARTIFACT_EXPIRY_TYPES,
    BALANCE_CHANGE_TYPES,
    BALANCE_TRANSFER_TYPES,
    INFLATION_TYPES,
    AddressResolutionStatement,
    ArtifactExpiryReceipt,
    BalanceChangeReceipt,
    BalanceTransferReceipt,
    InflationReceipt,
    MosaicResolutionStatement,
    Receipt,
    ReceiptSource,
    ResolutionEntry,
    Statement,
    TransactionStatement,
)

logger = logging.getLogger(__name__)

UINT32_MASK = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF


def _from_pair(value) -> int:
    if len(value) != 2:
        raise ValueError(f"Expected a [lower, higher] pair, got {value!r}")
    lower, higher = (int(part) & UINT32_MASK for part in value)
    return (higher << 32) | lower


def parse_uint64(value: Any) -> int:
    """Parse an int, decimal string or [lower, higher] pair."""
    if isinstance(value, bool):
        raise ValueError("Boolean is not a number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 10)
    if isinstance(value, (list, tuple)):
        return _from_pair(value)
    raise ValueError(f"Cannot read a uint64 from {value!r}")


def parse_id(value: Any) -> int:
    """Parse a hex id string, a raw int or a [lower, higher] pair."""
    if isinstance(value, bool):
        raise ValueError("Boolean is not an id")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16)
    if isinstance(value, (list, tuple)):
        return _from_pair(value)
    raise ValueError(f"Cannot read an id from {value!r}")


def parse_address(value: str) -> Address:
    """Parse the hex-encoded or base32 form of a concrete address."""
    plain = value.strip().replace("-", "")
    if len(plain) == 50:
        return Address.create_from_encoded(plain)
    return Address.create_from_raw_address(plain)


def parse_unresolved_address(value: str) -> UnresolvedAddress:
    """Like parse_address, but the hex form may also encode a namespace alias."""
    plain = value.strip().replace("-", "")
    if len(plain) == 50:
        return unresolved_address_from_bytes(bytes.fromhex(plain))
    return Address.create_from_raw_address(plain)


UInt32 = Annotated[int, BeforeValidator(parse_uint64), Field(ge=0, le=UINT32_MASK)]
UInt64 = Annotated[int, BeforeValidator(parse_uint64), Field(ge=0, le=UINT64_MAX)]
IdValue = Annotated[int, BeforeValidator(parse_id), Field(ge=0, le=UINT64_MAX)]


# =============================================================================
# DTO shapes
# =============================================================================

class _Dto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class SourceDTO(_Dto):
    primary_id: UInt32 = Field(alias="primaryId")
    secondary_id: UInt32 = Field(default=0, alias="secondaryId")

    def to_source(self) -> ReceiptSource:
        return ReceiptSource(primary_id=self.primary_id, secondary_id=self.secondary_id)


class ResolutionEntryDTO(_Dto):
    source: SourceDTO
    resolved: Union[str, int, List[int]]


class ResolutionStatementBodyDTO(_Dto):
    height: UInt64
    unresolved: Union[str, int, List[int]]
    resolution_entries: List[ResolutionEntryDTO] = Field(alias="resolutionEntries")


class ResolutionStatementDTO(_Dto):
    statement: ResolutionStatementBodyDTO


class TransactionStatementBodyDTO(_Dto):
    height: UInt64
    source: SourceDTO
    receipts: List[Dict[str, Any]] = Field(default_factory=list)


class TransactionStatementDTO(_Dto):
    statement: TransactionStatementBodyDTO


class StatementsDTO(_Dto):
    transaction_statements: List[TransactionStatementDTO] = Field(default_factory=list, alias="transactionStatements")
    address_resolution_statements: List[ResolutionStatementDTO] = Field(
        default_factory=list, alias="addressResolutionStatements")
    mosaic_resolution_statements: List[ResolutionStatementDTO] = Field(
        default_factory=list, alias="mosaicResolutionStatements")


class BalanceChangeReceiptDTO(_Dto):
    version: int = 1
    target_public_key: str = Field(alias="targetPublicKey")
    mosaic_id: IdValue = Field(alias="mosaicId")
    amount: UInt64


class BalanceTransferReceiptDTO(_Dto):
    version: int = 1
    sender_public_key: str = Field(alias="senderPublicKey")
    recipient_address: str = Field(alias="recipientAddress")
    mosaic_id: IdValue = Field(alias="mosaicId")
    amount: UInt64


class ArtifactExpiryReceiptDTO(_Dto):
    version: int = 1
    artifact_id: IdValue = Field(alias="artifactId")


class InflationReceiptDTO(_Dto):
    version: int = 1
    mosaic_id: IdValue = Field(alias="mosaicId")
    amount: UInt64


def _dto(model, value):
    if isinstance(value, model):
        return value
    return model.model_validate(value)


# =============================================================================
# Mapping
# =============================================================================

class ReceiptMapping:
    """Maps receipt and statement DTOs to receipt models."""

    def create_statement_from_dto(self, dto: Union[Mapping[str, Any], StatementsDTO],
                                  network_type: NetworkType) -> Statement:
        """
        Map the statements of one block.

        Raises:
            UnknownReceiptTypeError: If any receipt record has an unknown type
            pydantic.ValidationError: If the DTO shape is invalid
        """
        statements = _dto(StatementsDTO, dto)
        statement = Statement(
            transaction_statements=tuple(
                self.create_transaction_statement(item, network_type)
                for item in statements.transaction_statements
            ),
            address_resolution_statements=tuple(
                self.create_address_resolution_statement_from_dto(item)
                for item in statements.address_resolution_statements
            ),
            mosaic_resolution_statements=tuple(
                self.create_mosaic_resolution_statement_from_dto(item)
                for item in statements.mosaic_resolution_statements
            ),
        )
        logger.debug(
            f"Mapped {len(statement.transaction_statements)} transaction statements, "
            f"{len(statement.address_resolution_statements)} address and "
            f"{len(statement.mosaic_resolution_statements)} mosaic resolution statements"
        )
        return statement

    def create_transaction_statement(self, dto: Union[Mapping[str, Any], TransactionStatementDTO],
                                     network_type: NetworkType) -> TransactionStatement:
        body = _dto(TransactionStatementDTO, dto).statement
        return TransactionStatement(
            height=body.height,
            source=body.source.to_source(),
            receipts=tuple(self.create_receipt_from_dto(receipt, network_type) for receipt in body.receipts),
        )

    def create_address_resolution_statement_from_dto(
            self, dto: Union[Mapping[str, Any], ResolutionStatementDTO]) -> AddressResolutionStatement:
        body = _dto(ResolutionStatementDTO, dto).statement
        return AddressResolutionStatement(
            height=body.height,
            unresolved=parse_unresolved_address(str(body.unresolved)),
            resolution_entries=tuple(
                ResolutionEntry.for_address(parse_address(str(entry.resolved)), entry.source.to_source())
                for entry in body.resolution_entries
            ),
        )

    def create_mosaic_resolution_statement_from_dto(
            self, dto: Union[Mapping[str, Any], ResolutionStatementDTO]) -> MosaicResolutionStatement:
        body = _dto(ResolutionStatementDTO, dto).statement
        return MosaicResolutionStatement(
            height=body.height,
            unresolved=unresolved_mosaic_id_from_value(parse_id(body.unresolved)),
            resolution_entries=tuple(
                ResolutionEntry.for_mosaic_id(MosaicId(parse_id(entry.resolved)), entry.source.to_source())
                for entry in body.resolution_entries
            ),
        )

    def create_receipt_from_dto(self, dto: Mapping[str, Any], network_type: NetworkType) -> Receipt:
        """
        Map one receipt record, dispatching on its `type` discriminant.

        Raises:
            UnknownReceiptTypeError: If the type is missing, unknown, or names a
                statement kind rather than a receipt
        """
        receipt_type = self._receipt_type(dto)

        if receipt_type in BALANCE_CHANGE_TYPES:
            data = _dto(BalanceChangeReceiptDTO, dto)
            return BalanceChangeReceipt(
                type=receipt_type,
                version=data.version,
                target_public_key=data.target_public_key,
                network_type=network_type,
                mosaic_id=MosaicId(data.mosaic_id),
                amount=data.amount,
            )
        if receipt_type in BALANCE_TRANSFER_TYPES:
            data = _dto(BalanceTransferReceiptDTO, dto)
            return BalanceTransferReceipt(
                type=receipt_type,
                version=data.version,
                sender_public_key=data.sender_public_key,
                network_type=network_type,
                recipient=parse_address(data.recipient_address),
                mosaic_id=MosaicId(data.mosaic_id),
                amount=data.amount,
            )
        if receipt_type in ARTIFACT_EXPIRY_TYPES:
            data = _dto(ArtifactExpiryReceiptDTO, dto)
            id_type = MosaicId if receipt_type == ReceiptType.MOSAIC_EXPIRED else NamespaceId
            return ArtifactExpiryReceipt(
                type=receipt_type,
                version=data.version,
                artifact_id=id_type(data.artifact_id),
            )
        if receipt_type in INFLATION_TYPES:
            data = _dto(InflationReceiptDTO, dto)
            return InflationReceipt(
                type=receipt_type,
                version=data.version,
                mosaic_id=MosaicId(data.mosaic_id),
                amount=data.amount,
            )
        raise UnknownReceiptTypeError(
            f"Receipt type {receipt_type.name} is a statement type, not a receipt record",
            details={"type": int(receipt_type)},
        )

    @staticmethod
    def _receipt_type(dto: Mapping[str, Any]) -> ReceiptType:
        raw = dto.get("type") if isinstance(dto, Mapping) else None
        if raw is None:
            raise UnknownReceiptTypeError("Receipt record has no type")
        try:
            return ReceiptType(parse_uint64(raw))
        except ValueError as e:
            raise UnknownReceiptTypeError(
                f"Unknown receipt type {raw!r}",
                details={"type": raw},
                cause=e,
            )


__all__ = [
    "ReceiptMapping",
    "StatementsDTO",
    "TransactionStatementDTO",
    "ResolutionStatementDTO",
    "parse_uint64",
    "parse_id",
    "parse_address",
    "parse_unresolved_address",
]
