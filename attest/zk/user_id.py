"""
User Identifier Decoding
========================

The circuit exposes the caller-bound user identifier as a single field
element. Applications bind either a UUID or an address-like hex value.
"""

from enum import Enum


class UserIdType(str, Enum):
    """Encoding of the user identifier public signal."""

    UUID = "uuid"
    HEX = "hex"


def cast_to_uuid(value: int) -> str:
    """Render a field element as a canonical 8-4-4-4-12 UUID string."""
    padded = format(value, "x").rjust(32, "0")
    return "-".join(
        [padded[0:8], padded[8:12], padded[12:16], padded[16:20], padded[20:32]]
    )


def cast_to_address(value: int) -> str:
    """Render a field element as a 20-byte 0x-prefixed hex address."""
    return "0x" + format(value, "x").rjust(40, "0")


def cast_to_user_identifier(value: int, user_identifier_type: UserIdType | str) -> str:
    """Decode the user identifier according to the configured encoding."""
    id_type = UserIdType(user_identifier_type)
    if id_type == UserIdType.HEX:
        return cast_to_address(value)
    return cast_to_uuid(value)
