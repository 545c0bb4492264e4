"""
Circuit Constants
=================

Public-signal layout of the VC-and-disclose circuit and the revealed-data
type ids understood by the VerifyAll contract.

Version: 0.1.0
"""

from enum import IntEnum


class CircuitConstants:
    """Indices into the VC-and-disclose public signals."""

    VC_AND_DISCLOSE_REVEALED_DATA_PACKED_INDEX = 0
    VC_AND_DISCLOSE_FORBIDDEN_COUNTRIES_LIST_PACKED_INDEX = 3
    VC_AND_DISCLOSE_NULLIFIER_INDEX = 7
    VC_AND_DISCLOSE_ATTESTATION_ID_INDEX = 8
    VC_AND_DISCLOSE_MERKLE_ROOT_INDEX = 9
    VC_AND_DISCLOSE_CURRENT_DATE_INDEX = 10
    VC_AND_DISCLOSE_PASSPORT_NO_SMT_ROOT_INDEX = 16
    VC_AND_DISCLOSE_NAME_DOB_SMT_ROOT_INDEX = 17
    VC_AND_DISCLOSE_NAME_YOB_SMT_ROOT_INDEX = 18
    VC_AND_DISCLOSE_SCOPE_INDEX = 19
    VC_AND_DISCLOSE_USER_IDENTIFIER_INDEX = 20

    VC_AND_DISCLOSE_SIGNAL_COUNT = 21


class RevealedDataType(IntEnum):
    """
    Disclosure field ids.

    The VerifyAll response carries one slot per id, so these values are
    also the positions used to read decoded fields back.
    """

    ISSUING_STATE = 0
    NAME = 1
    PASSPORT_NUMBER = 2
    NATIONALITY = 3
    DATE_OF_BIRTH = 4
    GENDER = 5
    EXPIRY_DATE = 6
    OLDER_THAN = 7
    PASSPORT_NO_OFAC = 8
    NAME_AND_DOB_OFAC = 9
    NAME_AND_YOB_OFAC = 10

    @property
    def field_name(self) -> str:
        """Credential-subject key for this field."""
        return self.name.lower()


# Default attestation type (passport)
PASSPORT_ATTESTATION_ID = 1

MAX_MINIMUM_AGE = 100
MAX_FORBIDDEN_COUNTRIES = 40

# BN254 scalar field order
SNARK_SCALAR_FIELD = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
