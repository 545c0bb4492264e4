"""
Verification Errors
===================

Only misconfiguration and failures to assemble a request are raised.
Everything that goes wrong once the verifier has been asked is reported
inside the returned outcome.
"""


class AttestationError(Exception):
    """Base class for attestation verification errors."""


class InvalidConfiguration(AttestationError, ValueError):
    """Disclosure policy rejected by a setter, or changed after verification started."""


class UpstreamFailure(AttestationError):
    """The verification request could not be assembled (registry read or country packing)."""
