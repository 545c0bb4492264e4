"""
Attest Services
===============

HTTP services built on the attest library.

Services:
- verification: Attestation proof verification
"""

__all__ = [
    "verification",
]
