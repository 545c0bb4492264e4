"""
ZK-SNARK Data Models
====================

Pydantic models for VC-and-disclose proofs and public signals.

Version: 0.1.0
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from attest.zk.constants import CircuitConstants


def _to_decimal_string(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError("Field elements must be integers or decimal strings")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise ValueError(f"Unsupported field element: {value!r}")


class ProofPoints(BaseModel):
    """
    A Groth16 proof.

    Points are kept in snarkjs order; `b` is a G2 point whose coordinate
    pairs are swapped only when the proof is encoded for the verifier.
    """

    model_config = ConfigDict(populate_by_name=True)

    a: list[str] = Field(..., alias="pi_a", description="Proof point A (G1)")
    b: list[list[str]] = Field(..., alias="pi_b", description="Proof point B (G2)")
    c: list[str] = Field(..., alias="pi_c", description="Proof point C (G1)")

    @field_validator("a", "c", mode="before")
    @classmethod
    def coerce_g1(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)) or len(v) < 2:
            raise ValueError("G1 points need at least two coordinates")
        return [_to_decimal_string(x) for x in v]

    @field_validator("b", mode="before")
    @classmethod
    def coerce_g2(cls, v: Any) -> list[list[str]]:
        if not isinstance(v, (list, tuple)) or len(v) < 2:
            raise ValueError("G2 point needs two coordinate pairs")
        rows = []
        for row in v:
            if not isinstance(row, (list, tuple)) or len(row) != 2:
                raise ValueError("G2 coordinate pairs must have exactly two elements")
            rows.append([_to_decimal_string(x) for x in row])
        return rows

    def to_verifier_points(self) -> dict[str, list[Any]]:
        """
        Encode for the verifier contract.

        Only the first two coordinates of each point are sent and each
        `b` pair is swapped ([x1, x0]).
        """
        return {
            "a": list(self.a[:2]),
            "b": [
                [self.b[0][1], self.b[0][0]],
                [self.b[1][1], self.b[1][0]],
            ],
            "c": list(self.c[:2]),
        }


class PublicSignals(BaseModel):
    """Public outputs of the VC-and-disclose circuit, as decimal strings."""

    signals: list[str] = Field(
        ...,
        min_length=CircuitConstants.VC_AND_DISCLOSE_SIGNAL_COUNT,
        description="Public signals as decimal strings",
    )

    @field_validator("signals", mode="before")
    @classmethod
    def coerce_signals(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            raise ValueError("Public signals must be a list")
        return [_to_decimal_string(x) for x in v]

    @classmethod
    def from_list(cls, signals: "list[str | int] | PublicSignals") -> "PublicSignals":
        """Wrap a raw signal list (or pass an instance through)."""
        if isinstance(signals, cls):
            return signals
        return cls(signals=signals)

    @property
    def scope(self) -> str:
        return self.signals[CircuitConstants.VC_AND_DISCLOSE_SCOPE_INDEX]

    @property
    def attestation_id(self) -> str:
        return self.signals[CircuitConstants.VC_AND_DISCLOSE_ATTESTATION_ID_INDEX]

    @property
    def merkle_root(self) -> str:
        return self.signals[CircuitConstants.VC_AND_DISCLOSE_MERKLE_ROOT_INDEX]

    @property
    def nullifier(self) -> str:
        return self.signals[CircuitConstants.VC_AND_DISCLOSE_NULLIFIER_INDEX]

    @property
    def user_identifier(self) -> int:
        return int(self.signals[CircuitConstants.VC_AND_DISCLOSE_USER_IDENTIFIER_INDEX])

    def to_int_list(self) -> list[int]:
        """Convert to list of integers."""
        return [int(s) for s in self.signals]
