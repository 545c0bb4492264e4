"""
ZK Circuit Support Module
=========================

Models and encoders for the VC-and-disclose circuit.

Usage:
    from attest.zk import ProofPoints, PublicSignals, pack_forbidden_countries_list

    proof = ProofPoints.model_validate(raw_proof)
    signals = PublicSignals.from_list(raw_signals)
    packed = pack_forbidden_countries_list(["IRN", "PRK"])

Version: 0.1.0
"""

from attest.zk.constants import CircuitConstants, RevealedDataType
from attest.zk.countries import (
    CountryPackingError,
    pack_forbidden_countries_list,
    unpack_forbidden_countries_list,
)
from attest.zk.models import ProofPoints, PublicSignals
from attest.zk.scope import Keccak256ScopeHasher, ScopeHasher, hash_endpoint_with_scope
from attest.zk.user_id import UserIdType, cast_to_user_identifier


__all__ = [
    # Constants
    "CircuitConstants",
    "RevealedDataType",
    # Models
    "ProofPoints",
    "PublicSignals",
    # Encoders
    "CountryPackingError",
    "pack_forbidden_countries_list",
    "unpack_forbidden_countries_list",
    "ScopeHasher",
    "Keccak256ScopeHasher",
    "hash_endpoint_with_scope",
    "UserIdType",
    "cast_to_user_identifier",
]
