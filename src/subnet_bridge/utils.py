from __future__ import annotations

import hashlib
import struct

from Crypto.Hash import RIPEMD160, SHA512


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    return sha256(sha256(data))


def sha512_256(data: bytes) -> bytes:
    # SHA-512/256 (FIPS 180-4), not a truncated SHA-512 digest.
    return SHA512.new(data, truncate="256").digest()


def hash160(data: bytes) -> bytes:
    return RIPEMD160.new(sha256(data)).digest()


def strip_hex_prefix(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def u8(value: int) -> bytes:
    return struct.pack(">B", value)


def u32(value: int) -> bytes:
    return struct.pack(">I", value)


def u64(value: int) -> bytes:
    return struct.pack(">Q", value)
