"""
c32check address codec.

Stacks addresses are ``S`` + version character + c32(hash160 || checksum),
where the checksum is the first 4 bytes of double SHA-256 over
``version || hash160``.
"""

from __future__ import annotations

from ..errors import AddressError
from ..utils import double_sha256

C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

_C32_NORMALIZE = str.maketrans({"O": "0", "L": "1", "I": "1"})


class AddressVersion:
    MAINNET_SINGLE_SIG = 22
    MAINNET_MULTI_SIG = 20
    TESTNET_SINGLE_SIG = 26
    TESTNET_MULTI_SIG = 21


def c32_encode(data: bytes) -> str:
    """Encode bytes as c32, keeping one ``0`` per leading zero byte."""
    number = int.from_bytes(data, "big")
    digits = []
    while number > 0:
        number, rem = divmod(number, 32)
        digits.append(C32_ALPHABET[rem])

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return C32_ALPHABET[0] * leading_zeros + "".join(reversed(digits))


def c32_decode(text: str) -> bytes:
    """Decode a c32 string back into bytes."""
    normalized = text.upper().translate(_C32_NORMALIZE)

    number = 0
    for char in normalized:
        index = C32_ALPHABET.find(char)
        if index < 0:
            raise AddressError(f"Invalid c32 character {char!r} in {text!r}")
        number = number * 32 + index

    leading_zeros = len(normalized) - len(normalized.lstrip("0"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading_zeros + body


def _checksum(version: int, hash_bytes: bytes) -> bytes:
    return double_sha256(bytes([version]) + hash_bytes)[:4]


def c32_address(version: int, hash160: bytes) -> str:
    """
    Build a c32check address.

    Args:
        version: Address version (0..31), see AddressVersion
        hash160: 20-byte public key (or script) hash

    Returns:
        Address string such as ``ST000000000000000000002AMW42H``
    """
    if not 0 <= version < 32:
        raise AddressError(f"Invalid address version: {version}")
    if len(hash160) != 20:
        raise AddressError(f"Address hash must be 20 bytes, got {len(hash160)}")
    return "S" + C32_ALPHABET[version] + c32_encode(hash160 + _checksum(version, hash160))


def parse_address(address: str) -> tuple[int, bytes]:
    """
    Parse a c32check address.

    Returns:
        Tuple of (version, hash160)

    Raises:
        AddressError: If the address is malformed or its checksum is wrong
    """
    if not isinstance(address, str) or len(address) < 5 or address[0] != "S":
        raise AddressError(f"Invalid address: {address!r}")

    version_char = address[1].upper().translate(_C32_NORMALIZE)
    version = C32_ALPHABET.find(version_char)
    if version < 0:
        raise AddressError(f"Invalid address version character in {address!r}")

    data = c32_decode(address[2:])
    if len(data) != 24:
        raise AddressError(f"Invalid address length: {address!r}")

    hash_bytes, checksum = data[:20], data[20:]
    if _checksum(version, hash_bytes) != checksum:
        raise AddressError(f"Address checksum mismatch: {address!r}")

    return version, hash_bytes
