"""
Network profiles.

A profile bundles what every transaction and signature on one network shares:
the network type byte, the generation hash signatures are bound to, the epoch
deadlines are counted from, and the factory defaults for fees and deadlines.
"""

from __future__ import annotations
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import NetworkType
from .model.deadline import DEFAULT_EPOCH_ADJUSTMENT, Deadline

ENV_PREFIX = "CATAPULT_"

# Well-known networks; only private test networks ship a generation hash.
NETWORK_PRESETS: Dict[str, Dict[str, Any]] = {
    "mijin_test": {
        "network_type": NetworkType.MIJIN_TEST,
        "generation_hash": "57F7DA205008026C776CB6AED843393F04CD458E0AA2D9F1D5F31A402072B2D6",
    },
    "mijin": {"network_type": NetworkType.MIJIN},
    "test_net": {"network_type": NetworkType.TEST_NET},
    "main_net": {"network_type": NetworkType.MAIN_NET},
}


class NetworkProfile(BaseModel):
    """Signing and deadline parameters of one network."""

    network_type: NetworkType
    generation_hash: str
    epoch_adjustment: int = Field(default=DEFAULT_EPOCH_ADJUSTMENT, ge=0)
    default_max_fee: int = Field(default=0, ge=0, le=0xFFFFFFFFFFFFFFFF)
    deadline_hours: float = Field(default=2, gt=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("network_type", mode="before")
    @classmethod
    def parse_network_type(cls, v):
        if isinstance(v, str):
            name = v.strip().upper()
            if name in NetworkType.__members__:
                return NetworkType[name]
            return int(v, 0)
        return v

    @field_validator("generation_hash")
    @classmethod
    def check_generation_hash(cls, v: str) -> str:
        raw = bytes.fromhex(v)
        if len(raw) != 32:
            raise ValueError(f"Generation hash must be 32 bytes, got {len(raw)}")
        return v.upper()

    @classmethod
    def for_network(cls, network: str, **overrides) -> NetworkProfile:
        """
        Create a profile for a well-known network.

        Args:
            network: Network name ('mijin_test', 'mijin', 'test_net', 'main_net')
            **overrides: Field values replacing the preset's

        Raises:
            ValueError: If the network is unknown, or a field the preset lacks
                (such as the generation hash of a public network) is missing
        """
        key = network.strip().lower()
        if key not in NETWORK_PRESETS:
            raise ValueError(f"Unknown network '{network}'; expected one of {sorted(NETWORK_PRESETS)}")
        values = {**NETWORK_PRESETS[key], **overrides}
        if "generation_hash" not in values:
            raise ValueError(f"Network '{network}' has no known generation hash; pass generation_hash=...")
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> NetworkProfile:
        """
        Build a profile from CATAPULT_* environment variables.

        CATAPULT_NETWORK selects the preset (default 'mijin_test');
        CATAPULT_GENERATION_HASH, CATAPULT_EPOCH_ADJUSTMENT,
        CATAPULT_DEFAULT_MAX_FEE and CATAPULT_DEADLINE_HOURS override it.
        """
        env = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for field in ("generation_hash", "epoch_adjustment", "default_max_fee", "deadline_hours"):
            value = env.get(ENV_PREFIX + field.upper())
            if value:
                overrides[field] = value
        return cls.for_network(env.get(ENV_PREFIX + "NETWORK", "mijin_test"), **overrides)

    def create_deadline(self, hours: Optional[float] = None) -> Deadline:
        """Deadline `hours` (default: the profile's deadline_hours) from now on this network's clock."""
        return Deadline.create(hours if hours is not None else self.deadline_hours, self.epoch_adjustment)
