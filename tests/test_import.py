"""Test basic imports from the package."""


def test_main_import():
    """Test that the main package imports successfully."""
    import catapult_client
    assert catapult_client.__version__ == "0.1.0"
    assert hasattr(catapult_client, 'TransactionCodec')
    assert hasattr(catapult_client, 'TransactionFactory')
    assert hasattr(catapult_client, 'AliasResolutionIndex')


def test_crypto_import():
    """Test crypto module imports."""
    import catapult_client.crypto as crypto
    assert hasattr(crypto, 'Ed25519KeyPair')


def test_signers_import():
    """Test signers module imports."""
    import catapult_client.signers as signers
    assert hasattr(signers, 'Signer')
    assert hasattr(signers, 'Ed25519Signer')


def test_tx_import():
    """Test transaction module imports."""
    import catapult_client.tx as tx
    assert hasattr(tx, 'sign_transaction')
    assert hasattr(tx, 'cosign')


def test_receipts_import():
    import catapult_client.receipts as receipts
    assert hasattr(receipts, 'ReceiptMapping')
    assert hasattr(receipts, 'Statement')


def test_top_level_names():
    from catapult_client import (
        InvalidNameError,
        NamespaceId,
        NetworkProfile,
        NetworkType,
        derive_namespace_id,
    )
    assert derive_namespace_id("cat") == NamespaceId.from_name("cat")
    assert NetworkProfile.for_network("mijin_test").network_type == NetworkType.MIJIN_TEST
    assert issubclass(InvalidNameError, Exception)
