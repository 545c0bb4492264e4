"""
Blockchain Module
=================

Registry and verifier capabilities backing attestation verification.

Supports:
- Mock (development/testing)
- On-chain (Celo mainnet, or the staging network for mock passports)

Usage:
    from attest.blockchain import get_chain_clients

    registry, verifier = get_chain_clients(staging=False)

    root = await registry.get_identity_commitment_merkle_root()
    timestamp = await registry.root_timestamp(root)
    response = await verifier.verify_all(timestamp, hub_proof, types)
"""

from attest.blockchain.client import (
    DisclosureVerifier,
    IdentityRegistry,
    VerifyAllResponse,
    get_chain_clients,
)
from attest.blockchain.mock import MockDisclosureVerifier, MockIdentityRegistry

__all__ = [
    # Interfaces
    "IdentityRegistry",
    "DisclosureVerifier",
    "get_chain_clients",
    # Models
    "VerifyAllResponse",
    # Implementations
    "MockIdentityRegistry",
    "MockDisclosureVerifier",
]
