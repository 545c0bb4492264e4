"""
Attestation Verifier
====================

Backend entry point: configure a disclosure policy once, then verify
proofs submitted by users against the on-chain VerifyAll hub.

Version: 0.1.0
"""

from collections.abc import Sequence
from typing import Any

from attest.blockchain.client import DisclosureVerifier, IdentityRegistry, get_chain_clients
from attest.config import VerifierSettings
from attest.logging import get_logger
from attest.verification.errors import InvalidConfiguration
from attest.verification.policy import PolicyConfig
from attest.verification.request import RequestBuilder
from attest.verification.result import (
    ResultValidator,
    VerificationOutcome,
    VerifierCallFailure,
    VerifierCallResult,
    VerifierCallSuccess,
)
from attest.zk.models import ProofPoints, PublicSignals
from attest.zk.scope import Keccak256ScopeHasher, ScopeHasher
from attest.zk.user_id import UserIdType

logger = get_logger(__name__)


class AttestationVerifier:
    """
    Verifies VC-and-disclose proofs.

    The policy setters must all be called before the first `verify`; the
    policy is sealed when verification starts and later setter calls raise
    `InvalidConfiguration`. Concurrent `verify` calls are safe.

    Usage:
        verifier = (
            AttestationVerifier("my-app", "https://example.com/api/verify")
            .set_minimum_age(18)
            .exclude_countries("IRN", "PRK")
            .enable_passport_no_ofac_check()
        )

        outcome = await verifier.verify(proof, public_signals)
        if outcome.is_valid:
            ...
    """

    def __init__(
        self,
        scope: str,
        endpoint: str,
        user_identifier_type: UserIdType | str = UserIdType.UUID,
        mock_passport: bool = False,
        *,
        registry: IdentityRegistry | None = None,
        verifier: DisclosureVerifier | None = None,
        scope_hasher: ScopeHasher | None = None,
    ) -> None:
        """
        Args:
            scope: Application scope string bound into proofs
            endpoint: Endpoint the proofs are submitted to
            user_identifier_type: Encoding of the user identifier signal
            mock_passport: Use the staging network, which accepts mock passports
            registry: Registry capability (defaults to one built from settings)
            verifier: VerifyAll capability (defaults to one built from settings)
            scope_hasher: Scope hash function (defaults to keccak256)
        """
        hasher = scope_hasher or Keccak256ScopeHasher()

        if registry is None or verifier is None:
            default_registry, default_verifier = get_chain_clients(staging=mock_passport)
            registry = registry or default_registry
            verifier = verifier or default_verifier

        self.registry = registry
        self.verifier = verifier
        self.mock_passport = mock_passport

        self._policy = PolicyConfig(
            scope=hasher.hash(endpoint, scope),
            user_identifier_type=UserIdType(user_identifier_type),
        )
        self._sealed = False
        self._builder = RequestBuilder(registry)
        self._validator = ResultValidator()

    @property
    def policy(self) -> PolicyConfig:
        """Current policy (immutable value)."""
        return self._policy

    @property
    def scope(self) -> str:
        return self._policy.scope

    # =========================================================================
    # Policy configuration
    # =========================================================================

    def _update(self, policy: PolicyConfig) -> "AttestationVerifier":
        if self._sealed:
            raise InvalidConfiguration("Policy cannot be changed after verification has started")
        self._policy = policy
        return self

    def set_minimum_age(self, age: int) -> "AttestationVerifier":
        self._update(self._policy.with_minimum_age(age))
        logger.debug("policy_minimum_age_set", minimum_age=age)
        return self

    def set_nationality(self, country: str) -> "AttestationVerifier":
        self._update(self._policy.with_nationality(country))
        logger.debug("policy_nationality_set", nationality=country)
        return self

    def exclude_countries(self, *countries: str) -> "AttestationVerifier":
        self._update(self._policy.with_excluded_countries(countries))
        logger.debug("policy_excluded_countries_set", count=len(countries))
        return self

    def enable_passport_no_ofac_check(self) -> "AttestationVerifier":
        return self._update(self._policy.with_passport_no_ofac())

    def enable_name_and_dob_ofac_check(self) -> "AttestationVerifier":
        return self._update(self._policy.with_name_and_dob_ofac())

    def enable_name_and_yob_ofac_check(self) -> "AttestationVerifier":
        return self._update(self._policy.with_name_and_yob_ofac())

    # =========================================================================
    # Verification
    # =========================================================================

    async def verify(
        self,
        proof: ProofPoints | dict[str, Any],
        public_signals: PublicSignals | Sequence[str | int],
    ) -> VerificationOutcome:
        """
        Verify a proof and its public signals.

        Args:
            proof: Groth16 proof ({a, b, c} or snarkjs {pi_a, pi_b, pi_c})
            public_signals: Public signals of the proof

        Returns:
            VerificationOutcome; check `is_valid` and `is_valid_details`

        Raises:
            UpstreamFailure: If the request could not be assembled
        """
        self._sealed = True
        policy = self._policy

        proof_points = proof if isinstance(proof, ProofPoints) else ProofPoints.model_validate(proof)
        signals = PublicSignals.from_list(public_signals)

        request = await self._builder.build(policy, proof_points, signals)

        call_result: VerifierCallResult
        try:
            response = await self.verifier.verify_all(
                request.timestamp,
                request.to_hub_proof(),
                request.type_ids,
            )
            call_result = VerifierCallSuccess(response)
        except Exception as e:
            logger.warning(
                "verify_all_call_failed",
                error=str(e),
                error_type=type(e).__name__,
                nullifier=signals.nullifier,
            )
            call_result = VerifierCallFailure(e)

        outcome = self._validator.validate(
            policy,
            proof_points,
            signals,
            call_result,
            submitted_proof=proof.model_dump() if isinstance(proof, ProofPoints) else proof,
            submitted_signals=(
                public_signals.signals
                if isinstance(public_signals, PublicSignals)
                else public_signals
            ),
        )

        logger.info(
            "verification_completed",
            is_valid=outcome.is_valid,
            is_valid_scope=outcome.is_valid_details.is_valid_scope,
            is_valid_attestation_id=outcome.is_valid_details.is_valid_attestation_id,
            is_valid_proof=outcome.is_valid_details.is_valid_proof,
            is_valid_nationality=outcome.is_valid_details.is_valid_nationality,
            nullifier=outcome.nullifier,
        )

        return outcome


def build_verifier_from_settings(
    config: VerifierSettings,
    *,
    registry: IdentityRegistry | None = None,
    verifier: DisclosureVerifier | None = None,
) -> AttestationVerifier:
    """
    Create a verifier and apply the policy described by settings.

    Raises:
        InvalidConfiguration: If the configured policy is rejected
    """
    attestation_verifier = AttestationVerifier(
        config.scope,
        config.endpoint,
        config.user_identifier_type,
        config.mock_passport,
        registry=registry,
        verifier=verifier,
    )

    if config.minimum_age is not None:
        attestation_verifier.set_minimum_age(config.minimum_age)
    if config.nationality:
        attestation_verifier.set_nationality(config.nationality)
    if config.excluded_countries_list:
        attestation_verifier.exclude_countries(*config.excluded_countries_list)
    if config.passport_no_ofac:
        attestation_verifier.enable_passport_no_ofac_check()
    if config.name_and_dob_ofac:
        attestation_verifier.enable_name_and_dob_ofac_check()
    if config.name_and_yob_ofac:
        attestation_verifier.enable_name_and_yob_ofac_check()

    return attestation_verifier
