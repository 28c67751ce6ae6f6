"""
Tests for the Ed25519 key wrappers and the signer interface
"""

import pytest

from catapult_client.crypto.ed25519 import (
    Ed25519Error,
    Ed25519KeyPair,
    Ed25519PrivateKey,
    Ed25519PublicKey,
    verify_ed25519,
)
from catapult_client.signers.ed25519 import Ed25519Signer
from catapult_client.signers.signer import Signer

# RFC 8032 test 1
RFC_PRIVATE = "9D61B19DEFFD5A60BA844AF492EC2CC44449C5697B326919703BAC031CAE7F60"
RFC_PUBLIC = "D75A980182B10AB7D54BFED3C964073A0EE172F3DAA62325AF021A68F707511A"
RFC_SIGNATURE = (
    "E5564300C360AC729086E2CC806E828A84877F1EB8E5D974D873E06522490155"
    "5FB8821590A33BACC61E39701CF9B46BD25BF5F0595BBE24655141438E7A100B"
)


class TestEd25519Keys:
    def test_rfc8032_vector(self):
        private_key = Ed25519PrivateKey.from_hex(RFC_PRIVATE)
        assert private_key.public_key().to_hex() == RFC_PUBLIC
        assert private_key.sign(b"").hex().upper() == RFC_SIGNATURE

    def test_verify(self):
        public_key = Ed25519PublicKey.from_hex(RFC_PUBLIC)
        signature = bytes.fromhex(RFC_SIGNATURE)
        assert public_key.verify(signature, b"")
        assert not public_key.verify(signature, b"x")
        assert not public_key.verify(signature[:63], b"")

    def test_seeded_keys_are_deterministic(self):
        assert Ed25519PrivateKey.from_seed("a").to_bytes() == Ed25519PrivateKey.from_seed(b"a").to_bytes()
        assert Ed25519PrivateKey.from_seed("a").to_bytes() != Ed25519PrivateKey.from_seed("b").to_bytes()

    def test_generated_keys_differ(self):
        assert Ed25519PrivateKey.generate().to_bytes() != Ed25519PrivateKey.generate().to_bytes()

    def test_public_key_size(self):
        with pytest.raises(Ed25519Error):
            Ed25519PublicKey(b"\x01" * 31)

    def test_public_key_equality(self):
        public_key = Ed25519PublicKey.from_hex(RFC_PUBLIC)
        assert public_key == Ed25519PublicKey(bytes.fromhex(RFC_PUBLIC))
        assert len({public_key, Ed25519PublicKey.from_hex(RFC_PUBLIC)}) == 1

    def test_keypair(self):
        keypair = Ed25519KeyPair.from_private_hex(RFC_PRIVATE)
        signature = keypair.sign(b"msg")
        assert keypair.verify(b"msg", signature)
        assert keypair.public_key_bytes().hex().upper() == RFC_PUBLIC

    def test_verify_helper_never_raises(self):
        signature = bytes.fromhex(RFC_SIGNATURE)
        assert verify_ed25519(bytes.fromhex(RFC_PUBLIC), signature, b"")
        assert not verify_ed25519(b"\x01" * 31, signature, b"")
        assert not verify_ed25519(bytes.fromhex(RFC_PUBLIC), b"\x00" * 12, b"")


class TestEd25519Signer:
    def test_is_a_signer(self):
        assert isinstance(Ed25519Signer.from_private_hex(RFC_PRIVATE), Signer)

    def test_sign_and_verify(self):
        signer = Ed25519Signer.from_private_hex(RFC_PRIVATE)
        signature = signer.sign(b"payload")
        assert len(signature) == 64
        assert signer.verify(signature, b"payload")
        assert not signer.verify(signature, b"other")

    def test_public_key(self):
        signer = Ed25519Signer(Ed25519KeyPair.from_private_hex(RFC_PRIVATE))
        assert signer.public_key == bytes.fromhex(RFC_PUBLIC)
        assert signer.public_key_hex() == RFC_PUBLIC
        assert RFC_PUBLIC in repr(signer)

    def test_abstract_interface(self):
        with pytest.raises(TypeError):
            Signer()
