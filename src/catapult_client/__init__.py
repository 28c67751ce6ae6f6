"""
Catapult Python Client Core

Builds, encodes and signs transactions for catapult networks, derives namespace
and mosaic identifiers, and resolves aliases from block receipts.
"""

from .enums import *
from .runtime.errors import *
from .model import *
from .codec.transaction_codec import TransactionCodec
from .config import NetworkProfile
from .crypto import Ed25519Error, Ed25519KeyPair, Ed25519PrivateKey, Ed25519PublicKey
from .signers import Signer, Ed25519Signer
from .tx import *
from .receipts import *

__version__ = "0.1.0"
