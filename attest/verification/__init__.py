"""
Verification Module
===================

Disclosure policy, request assembly and result validation for
VC-and-disclose attestations.

Usage:
    from attest.verification import AttestationVerifier

    verifier = AttestationVerifier("my-app", "https://example.com/api/verify")
    verifier.set_minimum_age(18).enable_passport_no_ofac_check()

    outcome = await verifier.verify(proof, public_signals)

Version: 0.1.0
"""

from attest.verification.errors import AttestationError, InvalidConfiguration, UpstreamFailure
from attest.verification.policy import PolicyConfig
from attest.verification.request import (
    DISCLOSURE_FIELDS,
    FieldRequirement,
    RequestBuilder,
    VerificationRequest,
    requested_fields,
)
from attest.verification.result import (
    ResultValidator,
    ValidityDetails,
    VerificationOutcome,
    VerifierCallFailure,
    VerifierCallSuccess,
)
from attest.verification.verifier import AttestationVerifier, build_verifier_from_settings


__all__ = [
    # Orchestrator
    "AttestationVerifier",
    "build_verifier_from_settings",
    # Policy
    "PolicyConfig",
    # Request
    "DISCLOSURE_FIELDS",
    "FieldRequirement",
    "RequestBuilder",
    "VerificationRequest",
    "requested_fields",
    # Result
    "ResultValidator",
    "ValidityDetails",
    "VerificationOutcome",
    "VerifierCallSuccess",
    "VerifierCallFailure",
    # Errors
    "AttestationError",
    "InvalidConfiguration",
    "UpstreamFailure",
]
