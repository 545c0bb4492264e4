"""
Shared Models
=============

Pydantic response models shared by the HTTP services.
"""

from attest.models.common import ErrorResponse, HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
