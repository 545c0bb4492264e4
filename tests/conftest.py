"""
Test Configuration
==================

Pytest fixtures for Attest tests.
"""

import os
from typing import Any

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["CHAIN_MODE"] = "mock"

from attest.blockchain.mock import MockDisclosureVerifier, MockIdentityRegistry  # noqa: E402
from attest.verification import AttestationVerifier  # noqa: E402
from tests.factories import (  # noqa: E402
    FixedScopeHasher,
    make_proof,
    make_public_signals,
    make_revealed,
)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def registry() -> MockIdentityRegistry:
    """Registry with a known root and timestamp."""
    return MockIdentityRegistry(root=777, timestamp=1_700_000_000)


@pytest.fixture
def disclosure_verifier() -> MockDisclosureVerifier:
    """VerifyAll hub that accepts the proof and reveals a French passport."""
    return MockDisclosureVerifier(revealed=make_revealed(), valid=True)


@pytest.fixture
def attestation_verifier(
    registry: MockIdentityRegistry,
    disclosure_verifier: MockDisclosureVerifier,
) -> AttestationVerifier:
    """Verifier wired to the mock capabilities with a fixed scope."""
    return AttestationVerifier(
        "test-scope",
        "https://example.com/api/verify",
        registry=registry,
        verifier=disclosure_verifier,
        scope_hasher=FixedScopeHasher(),
    )


@pytest.fixture
def proof() -> dict[str, Any]:
    """Sample proof."""
    return make_proof()


@pytest.fixture
def public_signals() -> list[str]:
    """Public signals matching the fixed scope and passport attestation id."""
    return make_public_signals()
