from .factories import mk_address, mk_aggregate, mk_public_key, mk_signer, mk_standalone_transactions

__all__ = [
    "mk_address",
    "mk_aggregate",
    "mk_public_key",
    "mk_signer",
    "mk_standalone_transactions",
]
