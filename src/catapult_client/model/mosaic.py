"""Mosaic amounts, mosaic definition properties and transfer messages."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..enums import MessageType, MosaicFlags
from .ids import UnresolvedMosaicId

UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class Mosaic(BaseModel):
    """An amount of a (possibly aliased) mosaic."""

    id: UnresolvedMosaicId
    amount: int = Field(ge=0, le=UINT64_MAX)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class MosaicProperties(BaseModel):
    """Mutable-supply / transferable / levy flags, divisibility and duration of a mosaic."""

    supply_mutable: bool = False
    transferable: bool = True
    levy_mutable: bool = False
    divisibility: int = Field(default=0, ge=0, le=6)
    duration: int = Field(default=0, ge=0, le=UINT64_MAX)

    model_config = ConfigDict(frozen=True)

    @property
    def flags(self) -> int:
        value = MosaicFlags.NONE
        if self.supply_mutable:
            value |= MosaicFlags.SUPPLY_MUTABLE
        if self.transferable:
            value |= MosaicFlags.TRANSFERABLE
        if self.levy_mutable:
            value |= MosaicFlags.LEVY_MUTABLE
        return int(value)

    @classmethod
    def from_flags(cls, flags: int, divisibility: int, duration: int) -> MosaicProperties:
        return cls(
            supply_mutable=bool(flags & MosaicFlags.SUPPLY_MUTABLE),
            transferable=bool(flags & MosaicFlags.TRANSFERABLE),
            levy_mutable=bool(flags & MosaicFlags.LEVY_MUTABLE),
            divisibility=divisibility,
            duration=duration,
        )


class Message(BaseModel):
    """Transfer message: a type byte followed by the payload."""

    type: MessageType = MessageType.PLAIN
    payload: bytes = b""

    model_config = ConfigDict(frozen=True)

    @field_validator("payload", mode="before")
    @classmethod
    def encode_text(cls, v):
        if isinstance(v, str):
            return v.encode("utf-8")
        return v

    @classmethod
    def plain(cls, text: str) -> Message:
        return cls(type=MessageType.PLAIN, payload=text.encode("utf-8"))

    @classmethod
    def empty(cls) -> Message:
        return cls()

    def text(self) -> str:
        return self.payload.decode("utf-8")

    def size(self) -> int:
        """Size on the wire, including the type byte."""
        return 1 + len(self.payload)


__all__ = [
    "Mosaic",
    "MosaicProperties",
    "Message",
]
