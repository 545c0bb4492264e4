"""
Verification Request Assembly
=============================

Turns a policy, a proof and its public signals into the arguments of
`verifyAll`: the disclosure flags, the encoded proof, the requested field
list and the registry root timestamp the proof is checked against.

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from attest.blockchain.client import IdentityRegistry
from attest.logging import get_logger
from attest.verification.errors import UpstreamFailure
from attest.verification.policy import PolicyConfig
from attest.zk.constants import RevealedDataType
from attest.zk.countries import pack_forbidden_countries_list
from attest.zk.models import ProofPoints, PublicSignals

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldRequirement:
    """A disclosure field, requested always or only when the policy asks for it."""

    field: RevealedDataType
    predicate: Callable[[PolicyConfig], bool] | None = None

    @property
    def mandatory(self) -> bool:
        return self.predicate is None

    def applies(self, policy: PolicyConfig) -> bool:
        return self.predicate is None or self.predicate(policy)


# Order matters: the verifier receives fields in this order.
DISCLOSURE_FIELDS: tuple[FieldRequirement, ...] = (
    FieldRequirement(RevealedDataType.ISSUING_STATE),
    FieldRequirement(RevealedDataType.NAME),
    FieldRequirement(RevealedDataType.PASSPORT_NUMBER),
    FieldRequirement(RevealedDataType.NATIONALITY),
    FieldRequirement(RevealedDataType.DATE_OF_BIRTH),
    FieldRequirement(RevealedDataType.GENDER),
    FieldRequirement(RevealedDataType.EXPIRY_DATE),
    FieldRequirement(RevealedDataType.OLDER_THAN, lambda p: p.minimum_age.enabled),
    FieldRequirement(RevealedDataType.PASSPORT_NO_OFAC, lambda p: p.passport_no_ofac),
    FieldRequirement(RevealedDataType.NAME_AND_DOB_OFAC, lambda p: p.name_and_dob_ofac),
    FieldRequirement(RevealedDataType.NAME_AND_YOB_OFAC, lambda p: p.name_and_yob_ofac),
)


def requested_fields(policy: PolicyConfig) -> list[RevealedDataType]:
    """Fields to request from the verifier for this policy."""
    return [req.field for req in DISCLOSURE_FIELDS if req.applies(policy)]


class VerificationRequest(BaseModel):
    """Everything sent to `verifyAll` for one verification."""

    older_than_enabled: bool
    older_than: str
    forbidden_countries_enabled: bool
    forbidden_countries_list_packed: list[str]
    ofac_enabled: list[bool] = Field(..., min_length=3, max_length=3)

    proof: dict[str, list[Any]] = Field(..., description="Proof encoded for the verifier")
    public_signals: list[str]

    types: list[RevealedDataType]

    root: int
    timestamp: int

    @property
    def disclosure_flags(self) -> tuple[bool, str, bool, list[str], list[bool]]:
        """Flags in contract order."""
        return (
            self.older_than_enabled,
            self.older_than,
            self.forbidden_countries_enabled,
            self.forbidden_countries_list_packed,
            self.ofac_enabled,
        )

    def to_hub_proof(self) -> dict[str, Any]:
        """The `VcAndDiscloseHubProof` argument of `verifyAll`."""
        return {
            "olderThanEnabled": self.older_than_enabled,
            "olderThan": self.older_than,
            "forbiddenCountriesEnabled": self.forbidden_countries_enabled,
            "forbiddenCountriesListPacked": list(self.forbidden_countries_list_packed),
            "ofacEnabled": list(self.ofac_enabled),
            "vcAndDiscloseProof": {
                "a": self.proof["a"],
                "b": self.proof["b"],
                "c": self.proof["c"],
                "pubSignals": list(self.public_signals),
            },
        }

    @property
    def type_ids(self) -> list[int]:
        return [int(t) for t in self.types]


class RequestBuilder:
    """
    Builds `VerificationRequest`s against a registry.

    Usage:
        builder = RequestBuilder(registry)
        request = await builder.build(policy, proof, public_signals)
    """

    def __init__(self, registry: IdentityRegistry) -> None:
        self.registry = registry

    async def build(
        self,
        policy: PolicyConfig,
        proof: ProofPoints,
        public_signals: PublicSignals,
    ) -> VerificationRequest:
        """
        Assemble a request.

        Args:
            policy: Policy snapshot for this verification
            proof: Proof as produced by the prover
            public_signals: Public signals of the proof

        Returns:
            VerificationRequest ready for `verifyAll`

        Raises:
            UpstreamFailure: If the exclusion list cannot be packed or the
                registry cannot be read
        """
        try:
            packed = pack_forbidden_countries_list(list(policy.excluded_countries.value))
        except ValueError as e:
            logger.warning("forbidden_countries_packing_failed", error=str(e))
            raise UpstreamFailure(f"Could not pack excluded countries: {e}") from e

        types = requested_fields(policy)

        try:
            root = await self.registry.get_identity_commitment_merkle_root()
            timestamp = await self.registry.root_timestamp(root)
        except Exception as e:
            logger.error("registry_read_failed", error=str(e), error_type=type(e).__name__)
            raise UpstreamFailure(f"Could not read identity registry: {e}") from e

        request = VerificationRequest(
            older_than_enabled=policy.minimum_age.enabled,
            older_than=policy.minimum_age.value,
            forbidden_countries_enabled=policy.excluded_countries.enabled,
            forbidden_countries_list_packed=packed,
            ofac_enabled=policy.ofac_enabled,
            proof=proof.to_verifier_points(),
            public_signals=public_signals.signals,
            types=types,
            root=root,
            timestamp=timestamp,
        )

        logger.debug(
            "verification_request_built",
            types=request.type_ids,
            root_timestamp=timestamp,
        )

        return request
