"""
Attestation Verification Routes
===============================

API endpoint for verifying VC-and-disclose proofs submitted by users.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from attest.config import settings
from attest.logging import get_logger
from attest.verification import AttestationVerifier, UpstreamFailure, build_verifier_from_settings
from attest.zk.constants import CircuitConstants
from attest.zk.models import ProofPoints, PublicSignals


logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Verifier instance
# ============================================================================

_verifier: AttestationVerifier | None = None


def get_attestation_verifier() -> AttestationVerifier:
    """Get the process-wide verifier, building it from settings on first use."""
    global _verifier

    if _verifier is None:
        _verifier = build_verifier_from_settings(settings.verifier)
        logger.info(
            "attestation_verifier_initialized",
            mock_passport=settings.verifier.mock_passport,
            user_identifier_type=settings.verifier.user_identifier_type,
        )

    return _verifier


def set_attestation_verifier(verifier: AttestationVerifier | None) -> None:
    """Replace (or with None, reset) the process-wide verifier."""
    global _verifier
    _verifier = verifier


# ============================================================================
# Request Models
# ============================================================================


class VerifyAttestationRequest(BaseModel):
    """Proof and public signals as produced by the prover."""

    model_config = ConfigDict(populate_by_name=True)

    proof: dict[str, Any] = Field(..., description="Groth16 proof ({a, b, c} or {pi_a, pi_b, pi_c})")
    public_signals: list[str | int] = Field(
        ...,
        alias="publicSignals",
        min_length=CircuitConstants.VC_AND_DISCLOSE_SIGNAL_COUNT,
        description="Public signals of the proof",
    )

    @field_validator("proof")
    @classmethod
    def check_proof(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Reject malformed proofs; the submitted mapping itself is kept."""
        try:
            ProofPoints.model_validate(v)
        except ValidationError as e:
            raise ValueError(f"Invalid proof: {e.error_count()} error(s)") from e
        return v


# ============================================================================
# Verification Endpoints
# ============================================================================


@router.post("")
async def verify_attestation(
    request: VerifyAttestationRequest,
    verifier: AttestationVerifier = Depends(get_attestation_verifier),
) -> dict[str, Any]:
    """
    Verify an attestation proof.

    Soft failures (scope, attestation id, proof, nationality) are reported
    in the body with `isValid: false`. A request that could not be
    assembled turns into a 502.

    Args:
        request: Proof and public signals

    Returns:
        The verification outcome, echoing the proof as submitted
    """
    signals = PublicSignals.from_list(request.public_signals)

    logger.info("verifying_attestation", nullifier=signals.nullifier)

    try:
        outcome = await verifier.verify(request.proof, request.public_signals)
    except UpstreamFailure as e:
        logger.error("attestation_verification_upstream_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return outcome.model_dump(mode="json", by_alias=True)
