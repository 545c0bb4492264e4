"""
Unit tests for verification request assembly.
"""

import itertools

import pytest
from unittest.mock import AsyncMock

from attest.blockchain.mock import MockIdentityRegistry
from attest.verification import (
    DISCLOSURE_FIELDS,
    PolicyConfig,
    RequestBuilder,
    UpstreamFailure,
    requested_fields,
)
from attest.zk.constants import RevealedDataType
from attest.zk.countries import unpack_forbidden_countries_list
from attest.zk.models import ProofPoints, PublicSignals
from tests.factories import make_proof, make_public_signals


MANDATORY_FIELDS = [
    RevealedDataType.ISSUING_STATE,
    RevealedDataType.NAME,
    RevealedDataType.PASSPORT_NUMBER,
    RevealedDataType.NATIONALITY,
    RevealedDataType.DATE_OF_BIRTH,
    RevealedDataType.GENDER,
    RevealedDataType.EXPIRY_DATE,
]


def _policy(age: bool, ofac1: bool, ofac2: bool, ofac3: bool) -> PolicyConfig:
    policy = PolicyConfig(scope="1")
    if age:
        policy = policy.with_minimum_age(18)
    if ofac1:
        policy = policy.with_passport_no_ofac()
    if ofac2:
        policy = policy.with_name_and_dob_ofac()
    if ofac3:
        policy = policy.with_name_and_yob_ofac()
    return policy


class TestRequestedFields:
    """Tests for the requested field list."""

    def test_table_shape(self) -> None:
        """Test that seven fields are mandatory and four conditional."""
        assert [req.field for req in DISCLOSURE_FIELDS if req.mandatory] == MANDATORY_FIELDS
        assert sum(1 for req in DISCLOSURE_FIELDS if not req.mandatory) == 4

    @pytest.mark.parametrize(
        "age,ofac1,ofac2,ofac3",
        list(itertools.product([False, True], repeat=4)),
    )
    def test_all_flag_combinations(
        self,
        age: bool,
        ofac1: bool,
        ofac2: bool,
        ofac3: bool,
    ) -> None:
        """Test mandatory fields first, then each enabled conditional in fixed order."""
        expected = list(MANDATORY_FIELDS)
        if age:
            expected.append(RevealedDataType.OLDER_THAN)
        if ofac1:
            expected.append(RevealedDataType.PASSPORT_NO_OFAC)
        if ofac2:
            expected.append(RevealedDataType.NAME_AND_DOB_OFAC)
        if ofac3:
            expected.append(RevealedDataType.NAME_AND_YOB_OFAC)

        assert requested_fields(_policy(age, ofac1, ofac2, ofac3)) == expected

    def test_nationality_and_exclusions_do_not_add_fields(self) -> None:
        policy = PolicyConfig(scope="1").with_nationality("FRA").with_excluded_countries(["IRN"])

        assert requested_fields(policy) == MANDATORY_FIELDS

    def test_age_and_passport_ofac(self) -> None:
        """Test the age-18 plus passport OFAC combination."""
        policy = PolicyConfig(scope="1").with_minimum_age(18).with_passport_no_ofac()

        fields = requested_fields(policy)

        assert len(fields) == 9
        assert [f.field_name for f in fields] == [
            "issuing_state",
            "name",
            "passport_number",
            "nationality",
            "date_of_birth",
            "gender",
            "expiry_date",
            "older_than",
            "passport_no_ofac",
        ]


class TestRequestBuilder:
    """Tests for RequestBuilder.build."""

    @pytest.fixture
    def builder(self, registry: MockIdentityRegistry) -> RequestBuilder:
        return RequestBuilder(registry)

    @pytest.fixture
    def proof_points(self) -> ProofPoints:
        return ProofPoints.model_validate(make_proof())

    @pytest.fixture
    def signals(self) -> PublicSignals:
        return PublicSignals.from_list(make_public_signals())

    @pytest.mark.asyncio
    async def test_default_policy(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        request = await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        assert request.older_than_enabled is False
        assert request.older_than == "18"
        assert request.forbidden_countries_enabled is False
        assert unpack_forbidden_countries_list(request.forbidden_countries_list_packed) == []
        assert request.ofac_enabled == [False, False, False]
        assert request.types == MANDATORY_FIELDS

    @pytest.mark.asyncio
    async def test_minimum_age_flags(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        policy = PolicyConfig(scope="1").with_minimum_age(21)

        request = await builder.build(policy, proof_points, signals)

        assert request.older_than_enabled is True
        assert request.older_than == "21"

    @pytest.mark.asyncio
    async def test_excluded_countries_packed(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        countries = ["PRK", "IRN", "SYR"]
        policy = PolicyConfig(scope="1").with_excluded_countries(countries)

        request = await builder.build(policy, proof_points, signals)

        assert request.forbidden_countries_enabled is True
        assert len(request.forbidden_countries_list_packed) == 4
        assert unpack_forbidden_countries_list(request.forbidden_countries_list_packed) == countries

    @pytest.mark.asyncio
    async def test_disclosure_flag_order(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        policy = (
            PolicyConfig(scope="1")
            .with_minimum_age(30)
            .with_excluded_countries(["CUB"])
            .with_name_and_yob_ofac()
        )

        request = await builder.build(policy, proof_points, signals)
        older_enabled, older_than, forbidden_enabled, packed, ofac = request.disclosure_flags

        assert (older_enabled, older_than, forbidden_enabled) == (True, "30", True)
        assert packed == request.forbidden_countries_list_packed
        assert ofac == [False, False, True]

    @pytest.mark.asyncio
    async def test_proof_b_reordered(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        request = await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        assert request.proof["b"] == [["22", "21"], ["24", "23"]]
        assert request.proof["a"] == ["11", "12"]
        assert request.proof["c"] == ["31", "32"]

    @pytest.mark.asyncio
    async def test_hub_proof_shape(
        self,
        builder: RequestBuilder,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        request = await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        hub_proof = request.to_hub_proof()

        assert list(hub_proof) == [
            "olderThanEnabled",
            "olderThan",
            "forbiddenCountriesEnabled",
            "forbiddenCountriesListPacked",
            "ofacEnabled",
            "vcAndDiscloseProof",
        ]
        assert hub_proof["vcAndDiscloseProof"]["pubSignals"] == signals.signals
        assert hub_proof["vcAndDiscloseProof"]["b"] == [["22", "21"], ["24", "23"]]

    @pytest.mark.asyncio
    async def test_registry_read_sequence(
        self,
        builder: RequestBuilder,
        registry: MockIdentityRegistry,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        """Test that the root is read first and its timestamp second."""
        request = await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        assert registry.calls == ["get_identity_commitment_merkle_root", "root_timestamp"]
        assert request.root == 777
        assert request.timestamp == 1_700_000_000

    @pytest.mark.asyncio
    async def test_fresh_registry_state_per_build(
        self,
        builder: RequestBuilder,
        registry: MockIdentityRegistry,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        """Test that a new root is picked up without caching."""
        await builder.build(PolicyConfig(scope="1"), proof_points, signals)
        registry.set_root(888, timestamp=1_800_000_000)

        request = await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        assert request.root == 888
        assert request.timestamp == 1_800_000_000

    @pytest.mark.asyncio
    async def test_registry_failure(
        self,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        registry = AsyncMock()
        registry.get_identity_commitment_merkle_root.side_effect = ConnectionError("rpc down")
        builder = RequestBuilder(registry)

        with pytest.raises(UpstreamFailure, match="rpc down") as exc_info:
            await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        registry.root_timestamp.assert_not_called()

    @pytest.mark.asyncio
    async def test_timestamp_failure(
        self,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        registry = AsyncMock()
        registry.get_identity_commitment_merkle_root.return_value = 5
        registry.root_timestamp.side_effect = RuntimeError("reverted")
        builder = RequestBuilder(registry)

        with pytest.raises(UpstreamFailure):
            await builder.build(PolicyConfig(scope="1"), proof_points, signals)

        registry.root_timestamp.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_invalid_country_code(
        self,
        builder: RequestBuilder,
        registry: MockIdentityRegistry,
        proof_points: ProofPoints,
        signals: PublicSignals,
    ) -> None:
        """Test that packing failures surface before the registry is read."""
        policy = PolicyConfig(scope="1").with_excluded_countries(["FRA", "DE"])

        with pytest.raises(UpstreamFailure, match="excluded countries"):
            await builder.build(policy, proof_points, signals)

        assert registry.calls == []
