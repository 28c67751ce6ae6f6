"""
Shared fixtures: deterministic keys, the private test network's generation
hash and profile, and a fixed deadline so encoded payloads are reproducible.
"""

import pytest

from catapult_client.config import NetworkProfile
from catapult_client.enums import NetworkType
from catapult_client.model.deadline import Deadline

from helpers.factories import mk_signer

GENERATION_HASH = "57F7DA205008026C776CB6AED843393F04CD458E0AA2D9F1D5F31A402072B2D6"
OTHER_GENERATION_HASH = "A" * 64


@pytest.fixture
def generation_hash():
    return GENERATION_HASH


@pytest.fixture
def other_generation_hash():
    return OTHER_GENERATION_HASH


@pytest.fixture
def network_type():
    return NetworkType.MIJIN_TEST


@pytest.fixture
def deadline():
    """Deadline of 1 ms past the network epoch."""
    return Deadline(1)


@pytest.fixture
def signer():
    """Provide a deterministic Ed25519 signer for testing."""
    return mk_signer("catapult-initiator")


@pytest.fixture
def cosigners():
    return [mk_signer("catapult-cosigner-1"), mk_signer("catapult-cosigner-2")]


@pytest.fixture
def profile():
    return NetworkProfile.for_network("mijin_test")
