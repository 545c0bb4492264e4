"""
Verification Service
====================

HTTP front end for identity-attestation verification.

This service provides:
- Verification of VC-and-disclose proofs against the VerifyAll hub
- Disclosure policy taken from VERIFIER_* settings
- Registry reachability health check

Version: 0.1.0
"""

__version__ = "0.1.0"
