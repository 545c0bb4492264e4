"""
Chain Capability Interfaces
===========================

Abstract registry and verifier capabilities consumed by the attestation
verifier, plus the factory that selects mock or on-chain implementations.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field, field_validator

from attest.config import ChainMode, settings
from attest.logging import get_logger
from attest.zk.constants import RevealedDataType

logger = get_logger(__name__)


def empty_revealed_data() -> list[Any]:
    """Zero values for every revealed-data slot, as the contract returns them."""
    return ["", [], "", "", "", "", "", 0, 0, 0, 0]


class VerifyAllResponse(BaseModel):
    """
    Decoded return value of `verifyAll`.

    `revealed_data` has one slot per `RevealedDataType` id; slots for
    fields that were not requested hold the contract's zero values. A
    shorter list is padded with zero values, a longer one truncated.
    """

    revealed_data: list[Any] = Field(default_factory=empty_revealed_data)
    valid: bool = False
    error: str = ""

    @field_validator("revealed_data", mode="after")
    @classmethod
    def pad_revealed_data(cls, v: list[Any]) -> list[Any]:
        slots = len(RevealedDataType)
        if len(v) != slots:
            logger.warning("revealed_data_length_mismatch", expected=slots, got=len(v))
        return v[:slots] + empty_revealed_data()[len(v):slots]

    def field(self, index: int) -> Any:
        """Read a decoded field by revealed-data type id."""
        return self.revealed_data[index]


class IdentityRegistry(ABC):
    """Read access to the identity commitment registry."""

    @abstractmethod
    async def get_identity_commitment_merkle_root(self) -> int:
        """
        Get the current identity commitment merkle root.

        Returns:
            Root as an integer field element
        """
        ...

    @abstractmethod
    async def root_timestamp(self, root: int) -> int:
        """
        Get the timestamp at which a root was registered.

        Args:
            root: Merkle root returned by `get_identity_commitment_merkle_root`

        Returns:
            Unix timestamp (seconds)
        """
        ...


class DisclosureVerifier(ABC):
    """The VerifyAll hub: checks a disclosure proof and decodes revealed data."""

    @abstractmethod
    async def verify_all(
        self,
        timestamp: int,
        hub_proof: dict[str, Any],
        types: list[int],
    ) -> VerifyAllResponse:
        """
        Verify a VC-and-disclose proof against the registry state at `timestamp`.

        Args:
            timestamp: Root timestamp the proof is checked against
            hub_proof: Disclosure flags and the encoded proof
            types: Requested revealed-data type ids

        Returns:
            VerifyAllResponse with decoded fields, validity and error code

        Raises:
            Exception: Any transport failure or contract revert
        """
        ...


def get_chain_clients(staging: bool = False) -> tuple[IdentityRegistry, DisclosureVerifier]:
    """
    Build registry and verifier capabilities from settings.

    Args:
        staging: Use the staging network (mock passports) instead of mainnet

    Returns:
        (registry, verifier) pair
    """
    mode = settings.chain.mode

    if mode == ChainMode.MOCK:
        from attest.blockchain.mock import MockDisclosureVerifier, MockIdentityRegistry

        registry: IdentityRegistry = MockIdentityRegistry()
        verifier: DisclosureVerifier = MockDisclosureVerifier()
    elif mode == ChainMode.ONCHAIN:
        from attest.blockchain.web3_client import (
            Web3DisclosureVerifier,
            Web3IdentityRegistry,
            create_web3,
        )

        w3 = create_web3(settings.chain.rpc_url_for(staging))
        registry = Web3IdentityRegistry(w3, settings.chain.registry_address_for(staging))
        verifier = Web3DisclosureVerifier(w3, settings.chain.verify_all_address_for(staging))
    else:
        raise ValueError(f"Unknown chain mode: {mode}")

    logger.info(
        "chain_clients_initialized",
        mode=mode.value,
        staging=staging,
    )

    return registry, verifier
