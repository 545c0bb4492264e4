"""
Disclosure Policy
=================

Immutable description of what a verification requires. Each `with_*`
method validates its input and returns an updated copy, so a policy
captured at the start of a verification cannot change underneath it.

Version: 0.1.0
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from attest.verification.errors import InvalidConfiguration
from attest.zk.constants import MAX_FORBIDDEN_COUNTRIES, MAX_MINIMUM_AGE, PASSPORT_ATTESTATION_ID
from attest.zk.user_id import UserIdType


@dataclass(frozen=True)
class MinimumAgeRequirement:
    enabled: bool = False
    # Canonical decimal string, as sent to the verifier
    value: str = "18"


@dataclass(frozen=True)
class NationalityRequirement:
    enabled: bool = False
    value: str = ""


@dataclass(frozen=True)
class ExcludedCountries:
    enabled: bool = False
    value: tuple[str, ...] = ()


@dataclass(frozen=True)
class PolicyConfig:
    """Disclosure policy for one verifier instance."""

    scope: str
    attestation_id: int = PASSPORT_ATTESTATION_ID
    user_identifier_type: UserIdType = UserIdType.UUID
    minimum_age: MinimumAgeRequirement = field(default_factory=MinimumAgeRequirement)
    nationality: NationalityRequirement = field(default_factory=NationalityRequirement)
    excluded_countries: ExcludedCountries = field(default_factory=ExcludedCountries)
    passport_no_ofac: bool = False
    name_and_dob_ofac: bool = False
    name_and_yob_ofac: bool = False

    def with_minimum_age(self, age: int) -> "PolicyConfig":
        if age <= 0:
            raise InvalidConfiguration("Minimum age must be positive")
        if age > MAX_MINIMUM_AGE:
            raise InvalidConfiguration(f"Minimum age must be at most {MAX_MINIMUM_AGE} years old")
        return replace(self, minimum_age=MinimumAgeRequirement(enabled=True, value=str(age)))

    def with_nationality(self, country: str) -> "PolicyConfig":
        return replace(self, nationality=NationalityRequirement(enabled=True, value=country))

    def with_excluded_countries(self, countries: Sequence[str]) -> "PolicyConfig":
        if len(countries) > MAX_FORBIDDEN_COUNTRIES:
            raise InvalidConfiguration(
                f"Number of excluded countries cannot exceed {MAX_FORBIDDEN_COUNTRIES}"
            )
        return replace(self, excluded_countries=ExcludedCountries(enabled=True, value=tuple(countries)))

    def with_passport_no_ofac(self) -> "PolicyConfig":
        return replace(self, passport_no_ofac=True)

    def with_name_and_dob_ofac(self) -> "PolicyConfig":
        return replace(self, name_and_dob_ofac=True)

    def with_name_and_yob_ofac(self) -> "PolicyConfig":
        return replace(self, name_and_yob_ofac=True)

    @property
    def ofac_enabled(self) -> list[bool]:
        """OFAC flags in contract order: passport number, name + DOB, name + YOB."""
        return [self.passport_no_ofac, self.name_and_dob_ofac, self.name_and_yob_ofac]
