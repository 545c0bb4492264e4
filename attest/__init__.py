"""
Attest
======

Client-side verification of identity attestations produced by the
VC-and-disclose circuit and checked by the on-chain VerifyAll contract.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - zk: Circuit constants, proof models, country packing, scope hashing
    - blockchain: Registry and verifier capabilities (mock/on-chain)
    - verification: Policy, request building and result validation
    - models: Shared Pydantic response models

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Attest Team"

from attest.config import settings
from attest.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
