"""
On-chain Capabilities
=====================

web3.py implementations of the registry and VerifyAll capabilities.
Only the view functions the verifier needs are described in the ABIs.

Version: 0.1.0
"""

from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3

from attest.blockchain.client import DisclosureVerifier, IdentityRegistry, VerifyAllResponse
from attest.logging import get_logger

logger = get_logger(__name__)


REGISTRY_ABI = [
    {
        "inputs": [],
        "name": "getIdentityCommitmentMerkleRoot",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "root", "type": "uint256"}],
        "name": "rootTimestamps",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

_VC_AND_DISCLOSE_PROOF = {
    "name": "vcAndDiscloseProof",
    "type": "tuple",
    "components": [
        {"name": "a", "type": "uint256[2]"},
        {"name": "b", "type": "uint256[2][2]"},
        {"name": "c", "type": "uint256[2]"},
        {"name": "pubSignals", "type": "uint256[21]"},
    ],
}

_HUB_PROOF = {
    "name": "proof",
    "type": "tuple",
    "components": [
        {"name": "olderThanEnabled", "type": "bool"},
        {"name": "olderThan", "type": "uint256"},
        {"name": "forbiddenCountriesEnabled", "type": "bool"},
        {"name": "forbiddenCountriesListPacked", "type": "uint256[4]"},
        {"name": "ofacEnabled", "type": "bool[3]"},
        _VC_AND_DISCLOSE_PROOF,
    ],
}

_READABLE_REVEALED_DATA = {
    "name": "",
    "type": "tuple",
    "components": [
        {"name": "issuingState", "type": "string"},
        {"name": "name", "type": "string[]"},
        {"name": "passportNumber", "type": "string"},
        {"name": "nationality", "type": "string"},
        {"name": "dateOfBirth", "type": "string"},
        {"name": "gender", "type": "string"},
        {"name": "expiryDate", "type": "string"},
        {"name": "olderThan", "type": "uint256"},
        {"name": "passportNoOfac", "type": "uint256"},
        {"name": "nameAndDobOfac", "type": "uint256"},
        {"name": "nameAndYobOfac", "type": "uint256"},
    ],
}

VERIFY_ALL_ABI = [
    {
        "inputs": [
            {"name": "targetRootTimestamp", "type": "uint256"},
            _HUB_PROOF,
            {"name": "types", "type": "uint8[]"},
        ],
        "name": "verifyAll",
        "outputs": [
            _READABLE_REVEALED_DATA,
            {"name": "", "type": "bool"},
            {"name": "", "type": "string"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
]


def create_web3(rpc_url: str) -> AsyncWeb3:
    """Create an async web3 client for the given RPC endpoint."""
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def _checksum(address: str, what: str) -> str:
    if not address:
        raise ValueError(f"{what} contract address is not configured")
    return AsyncWeb3.to_checksum_address(address)


def _to_uint(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 0) if value.startswith(("0x", "0X")) else int(value)
    return int(value)


def encode_hub_proof(hub_proof: dict[str, Any]) -> tuple[Any, ...]:
    """Convert the hub proof mapping into the positional tuple the ABI expects."""
    proof = hub_proof["vcAndDiscloseProof"]
    return (
        bool(hub_proof["olderThanEnabled"]),
        _to_uint(hub_proof["olderThan"]),
        bool(hub_proof["forbiddenCountriesEnabled"]),
        [_to_uint(v) for v in hub_proof["forbiddenCountriesListPacked"]],
        [bool(v) for v in hub_proof["ofacEnabled"]],
        (
            [_to_uint(v) for v in proof["a"]],
            [[_to_uint(v) for v in row] for row in proof["b"]],
            [_to_uint(v) for v in proof["c"]],
            [_to_uint(v) for v in proof["pubSignals"]],
        ),
    )


class Web3IdentityRegistry(IdentityRegistry):
    """Identity registry read through a JSON-RPC node."""

    def __init__(self, w3: AsyncWeb3, address: str) -> None:
        self._contract = w3.eth.contract(
            address=_checksum(address, "Registry"),
            abi=REGISTRY_ABI,
        )

    async def get_identity_commitment_merkle_root(self) -> int:
        root = await self._contract.functions.getIdentityCommitmentMerkleRoot().call()
        logger.debug("registry_root_fetched", root=str(root))
        return int(root)

    async def root_timestamp(self, root: int) -> int:
        timestamp = await self._contract.functions.rootTimestamps(root).call()
        return int(timestamp)


class Web3DisclosureVerifier(DisclosureVerifier):
    """VerifyAll hub called through a JSON-RPC node."""

    def __init__(self, w3: AsyncWeb3, address: str) -> None:
        self._contract = w3.eth.contract(
            address=_checksum(address, "VerifyAll"),
            abi=VERIFY_ALL_ABI,
        )

    async def verify_all(
        self,
        timestamp: int,
        hub_proof: dict[str, Any],
        types: list[int],
    ) -> VerifyAllResponse:
        revealed, valid, error = await self._contract.functions.verifyAll(
            timestamp,
            encode_hub_proof(hub_proof),
            [int(t) for t in types],
        ).call()

        return VerifyAllResponse(
            revealed_data=list(revealed),
            valid=bool(valid),
            error=error,
        )
