"""
Transaction deadline.

A deadline is milliseconds since the network epoch (nemesis block time), not
since the Unix epoch. Expired deadlines still encode and sign; rejecting them
is the network's job.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

# 2016-04-01T00:00:00Z in Unix milliseconds
DEFAULT_EPOCH_ADJUSTMENT = 1459468800000


class Deadline:
    """Immutable network-epoch-relative expiry instant."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > 0xFFFFFFFFFFFFFFFF:
            raise ValueError(f"Deadline must be an unsigned 64-bit integer, got {value!r}")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("Deadline is immutable")

    def __reduce__(self):
        return (Deadline, (self._value,))

    @classmethod
    def create(cls, hours: float = 2, epoch_adjustment: int = DEFAULT_EPOCH_ADJUSTMENT,
               now: Optional[datetime] = None) -> Deadline:
        """
        Create a deadline a given number of hours from now.

        Args:
            hours: Offset from now
            epoch_adjustment: Network epoch in Unix milliseconds
            now: Reference instant (defaults to the current UTC time)
        """
        now = now or datetime.now(timezone.utc)
        target = now + timedelta(hours=hours)
        return cls.from_datetime(target, epoch_adjustment)

    @classmethod
    def from_datetime(cls, instant: datetime, epoch_adjustment: int = DEFAULT_EPOCH_ADJUSTMENT) -> Deadline:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        unix_ms = int(instant.timestamp() * 1000)
        return cls(unix_ms - epoch_adjustment)

    @property
    def value(self) -> int:
        return self._value

    def to_datetime(self, epoch_adjustment: int = DEFAULT_EPOCH_ADJUSTMENT) -> datetime:
        return datetime.fromtimestamp((self._value + epoch_adjustment) / 1000, tz=timezone.utc)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Deadline):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Deadline({self._value})"
