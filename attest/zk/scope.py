"""
Scope Hashing
=============

The application scope is bound into every proof as a field element derived
from the verifying endpoint and a caller-chosen scope string. The verifier
computes the same value once and compares it to the scope public signal.
"""

from typing import Protocol, runtime_checkable

from web3 import Web3

from attest.zk.constants import SNARK_SCALAR_FIELD


@runtime_checkable
class ScopeHasher(Protocol):
    """Turns (endpoint, scope) into the decimal field element the circuit exposes."""

    def hash(self, endpoint: str, scope: str) -> str: ...


class Keccak256ScopeHasher:
    """
    keccak256(abi.encodePacked(endpoint, scope)) reduced into the BN254
    scalar field.

    Frontends generating proofs must bind the same value; deployments whose
    circuits use a different hash inject their own `ScopeHasher`.
    """

    def hash(self, endpoint: str, scope: str) -> str:
        if not endpoint:
            raise ValueError("Endpoint must not be empty")
        if not scope:
            raise ValueError("Scope must not be empty")
        digest = Web3.solidity_keccak(["string", "string"], [endpoint, scope])
        return str(int.from_bytes(bytes(digest), "big") % SNARK_SCALAR_FIELD)


def hash_endpoint_with_scope(endpoint: str, scope: str) -> str:
    """Hash with the default hasher."""
    return Keccak256ScopeHasher().hash(endpoint, scope)
