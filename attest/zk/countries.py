"""
Forbidden Country Packing
=========================

Encodes a list of ISO 3166-1 alpha-3 codes into the four field elements the
VC-and-disclose circuit and the VerifyAll contract expect.

Codes are laid out as consecutive ASCII bytes and split into 31-byte chunks;
each chunk becomes one little-endian integer, rendered as a 0x-prefixed
32-byte hex word. Unused chunks are zero.

Version: 0.1.0
"""

from collections.abc import Sequence

from attest.zk.constants import MAX_FORBIDDEN_COUNTRIES

MAX_BYTES_IN_FIELD = 31
REQUIRED_CHUNKS = 4
COUNTRY_CODE_LENGTH = 3


class CountryPackingError(ValueError):
    """Raised when a country list cannot be packed."""


def _zero_word() -> str:
    return "0x" + "0" * 64


def pack_forbidden_countries_list(countries: Sequence[str]) -> list[str]:
    """
    Pack country codes into field elements.

    Args:
        countries: Ordered 3-letter country codes (at most 40)

    Returns:
        Four 0x-prefixed 32-byte hex words

    Raises:
        CountryPackingError: If a code is not exactly 3 ASCII characters
            or the list is too long
    """
    if len(countries) > MAX_FORBIDDEN_COUNTRIES:
        raise CountryPackingError(
            f"Cannot pack more than {MAX_FORBIDDEN_COUNTRIES} countries, got {len(countries)}"
        )

    data = bytearray()
    for country in countries:
        if not isinstance(country, str) or len(country) != COUNTRY_CODE_LENGTH or not country.isascii():
            raise CountryPackingError(
                f'Invalid country code: "{country}". Country codes must be exactly 3 characters long.'
            )
        data.extend(country.encode("ascii"))

    output = [_zero_word() for _ in range(REQUIRED_CHUNKS)]
    for i in range(0, len(data), MAX_BYTES_IN_FIELD):
        chunk = bytes(data[i : i + MAX_BYTES_IN_FIELD])
        value = int.from_bytes(chunk, "little")
        output[i // MAX_BYTES_IN_FIELD] = "0x" + format(value, "064x")

    return output


def unpack_forbidden_countries_list(packed: Sequence[str | int]) -> list[str]:
    """
    Reverse `pack_forbidden_countries_list`.

    Trailing zero bytes are padding, so the original order is recovered.
    """
    data = bytearray()
    for word in packed:
        value = int(word, 16) if isinstance(word, str) else int(word)
        data.extend(value.to_bytes(MAX_BYTES_IN_FIELD, "little"))

    data = data.rstrip(b"\x00")
    if len(data) % COUNTRY_CODE_LENGTH:
        raise CountryPackingError("Packed data is not a whole number of country codes")

    return [
        data[i : i + COUNTRY_CODE_LENGTH].decode("ascii")
        for i in range(0, len(data), COUNTRY_CODE_LENGTH)
    ]
