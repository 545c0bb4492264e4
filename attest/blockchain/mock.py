"""
Mock Chain Capabilities
=======================

In-memory registry and VerifyAll implementations for development and
testing.

Version: 0.1.0
"""

import time
from typing import Any

from attest.blockchain.client import (
    DisclosureVerifier,
    IdentityRegistry,
    VerifyAllResponse,
    empty_revealed_data,
)
from attest.logging import get_logger
from attest.zk.constants import RevealedDataType

logger = get_logger(__name__)


class MockIdentityRegistry(IdentityRegistry):
    """
    Registry with a settable current root.

    Every root passed to `set_root` keeps the timestamp it was set at.
    Unknown roots map to 0, matching an unset contract mapping slot.
    """

    def __init__(self, root: int = 1, timestamp: int | None = None) -> None:
        self._root = root
        self._timestamps: dict[int, int] = {}
        self.calls: list[str] = []
        self.set_root(root, timestamp)
        logger.debug("mock_registry_initialized", root=str(root))

    def set_root(self, root: int, timestamp: int | None = None) -> None:
        """Publish a new current root."""
        self._root = root
        self._timestamps[root] = timestamp if timestamp is not None else int(time.time())

    async def get_identity_commitment_merkle_root(self) -> int:
        self.calls.append("get_identity_commitment_merkle_root")
        return self._root

    async def root_timestamp(self, root: int) -> int:
        self.calls.append("root_timestamp")
        return self._timestamps.get(root, 0)


class MockDisclosureVerifier(DisclosureVerifier):
    """
    Scriptable VerifyAll hub.

    Returns the configured revealed data for the requested types only and
    zero values elsewhere. Set `fail_with` to make the call raise.
    """

    def __init__(
        self,
        revealed: dict[RevealedDataType, Any] | None = None,
        valid: bool = True,
        error: str = "",
        fail_with: Exception | None = None,
    ) -> None:
        self.revealed = dict(revealed or {})
        self.valid = valid
        self.error = error
        self.fail_with = fail_with
        self.calls: list[dict[str, Any]] = []

    async def verify_all(
        self,
        timestamp: int,
        hub_proof: dict[str, Any],
        types: list[int],
    ) -> VerifyAllResponse:
        self.calls.append({"timestamp": timestamp, "hub_proof": hub_proof, "types": list(types)})

        if self.fail_with is not None:
            logger.debug("mock_verify_all_failing", error=str(self.fail_with))
            raise self.fail_with

        data = empty_revealed_data()
        for field_type in types:
            key = RevealedDataType(field_type)
            if key in self.revealed:
                data[key] = self.revealed[key]

        return VerifyAllResponse(revealed_data=data, valid=self.valid, error=self.error)
