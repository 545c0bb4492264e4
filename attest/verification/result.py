"""
Verification Result Assembly
============================

Cross-checks the verifier's answer against what the verifier instance
expects locally and decodes the disclosed fields into a credential subject.

Version: 0.1.0
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from attest.blockchain.client import VerifyAllResponse
from attest.logging import get_logger
from attest.verification.policy import PolicyConfig
from attest.zk.constants import RevealedDataType
from attest.zk.models import ProofPoints, PublicSignals
from attest.zk.user_id import cast_to_user_identifier

logger = get_logger(__name__)


# =============================================================================
# Verifier call result
# =============================================================================


@dataclass(frozen=True)
class VerifierCallSuccess:
    """`verifyAll` returned."""

    response: VerifyAllResponse


@dataclass(frozen=True)
class VerifierCallFailure:
    """`verifyAll` raised (transport error or revert)."""

    cause: BaseException


VerifierCallResult = VerifierCallSuccess | VerifierCallFailure


# =============================================================================
# Outcome models
# =============================================================================


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class ValidityDetails(_WireModel):
    """Individual checks behind `is_valid`."""

    is_valid_scope: bool = False
    is_valid_attestation_id: bool = False
    is_valid_proof: bool = False
    is_valid_nationality: bool = False

    @property
    def all_valid(self) -> bool:
        return (
            self.is_valid_scope
            and self.is_valid_attestation_id
            and self.is_valid_proof
            and self.is_valid_nationality
        )


class ProofValue(_WireModel):
    """The proof and public signals exactly as the caller submitted them."""

    proof: Any
    public_signals: list[str | int]


class ProofEnvelope(_WireModel):
    value: ProofValue


class VerificationOutcome(_WireModel):
    """
    Result of one verification.

    `error` holds the exception raised by the verifier call when it failed,
    otherwise the error code returned by the contract.
    """

    is_valid: bool
    is_valid_details: ValidityDetails
    user_id: str
    application: str
    nullifier: str
    credential_subject: dict[str, Any] = Field(default_factory=dict)
    proof: ProofEnvelope
    error: Any = None

    @field_serializer("error")
    def serialize_error(self, error: Any) -> Any:
        if isinstance(error, BaseException):
            return f"{type(error).__name__}: {error}"
        return error


# =============================================================================
# Validation
# =============================================================================


def _current_date() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def decode_credential_subject(
    response: VerifyAllResponse,
    public_signals: PublicSignals,
    attestation_id: int,
) -> dict[str, Any]:
    """Map the decoded revealed data onto credential-subject fields."""
    subject: dict[str, Any] = {
        "merkle_root": public_signals.merkle_root,
        "attestation_id": str(attestation_id),
        "current_date": _current_date(),
    }

    for field_type in (
        RevealedDataType.ISSUING_STATE,
        RevealedDataType.NAME,
        RevealedDataType.PASSPORT_NUMBER,
        RevealedDataType.NATIONALITY,
        RevealedDataType.DATE_OF_BIRTH,
        RevealedDataType.GENDER,
        RevealedDataType.EXPIRY_DATE,
    ):
        subject[field_type.field_name] = response.field(field_type)

    subject["older_than"] = str(response.field(RevealedDataType.OLDER_THAN))

    for field_type in (
        RevealedDataType.PASSPORT_NO_OFAC,
        RevealedDataType.NAME_AND_DOB_OFAC,
        RevealedDataType.NAME_AND_YOB_OFAC,
    ):
        subject[field_type.field_name] = str(response.field(field_type)) == "1"

    return subject


class ResultValidator:
    """Builds a `VerificationOutcome` from a verifier call result."""

    def validate(
        self,
        policy: PolicyConfig,
        proof: ProofPoints,
        public_signals: PublicSignals,
        call_result: VerifierCallResult,
        *,
        submitted_proof: Any = None,
        submitted_signals: Sequence[str | int] | None = None,
    ) -> VerificationOutcome:
        """
        Validate a verifier answer.

        Args:
            policy: Policy snapshot the request was built from
            proof: Validated proof
            public_signals: Validated public signals
            call_result: Outcome of the `verifyAll` call
            submitted_proof: Proof in the caller's own shape, echoed in the
                outcome (defaults to the field-named dump of `proof`)
            submitted_signals: Signals as the caller sent them, echoed in
                the outcome (defaults to `public_signals.signals`)

        Returns:
            VerificationOutcome; soft failures are reported in
            `is_valid_details`, never raised
        """
        is_valid_scope = policy.scope == public_signals.scope
        is_valid_attestation_id = str(policy.attestation_id) == public_signals.attestation_id

        user_id = cast_to_user_identifier(
            public_signals.user_identifier,
            policy.user_identifier_type,
        )
        if submitted_proof is None:
            submitted_proof = proof.model_dump()
        if submitted_signals is None:
            submitted_signals = public_signals.signals
        envelope = ProofEnvelope(
            value=ProofValue(proof=submitted_proof, public_signals=list(submitted_signals))
        )

        if isinstance(call_result, VerifierCallFailure):
            return VerificationOutcome(
                is_valid=False,
                is_valid_details=ValidityDetails(),
                user_id=user_id,
                application=policy.scope,
                nullifier=public_signals.nullifier,
                credential_subject={},
                proof=envelope,
                error=call_result.cause,
            )

        response = call_result.response

        is_valid_nationality = True
        if policy.nationality.enabled:
            nationality = response.field(RevealedDataType.NATIONALITY)
            is_valid_nationality = nationality == policy.nationality.value

        details = ValidityDetails(
            is_valid_scope=is_valid_scope,
            is_valid_attestation_id=is_valid_attestation_id,
            is_valid_proof=response.valid,
            is_valid_nationality=is_valid_nationality,
        )

        return VerificationOutcome(
            is_valid=details.all_valid,
            is_valid_details=details,
            user_id=user_id,
            application=policy.scope,
            nullifier=public_signals.nullifier,
            credential_subject=decode_credential_subject(
                response, public_signals, policy.attestation_id
            ),
            proof=envelope,
            error=response.error,
        )
