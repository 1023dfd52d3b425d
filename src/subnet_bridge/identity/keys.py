"""
secp256k1 Key Management for subnet-bridge.

Each command names the environment variable its credential comes from
(e.g. USER_KEY, ALT_USER_KEY, AUTH_SUBNET_MINER_KEY). Values may also be
kept in ~/.subnet-bridge/.env; variables already set in the process
environment take precedence over the file.

Key format: 64 hex chars (uncompressed public key) or 66 hex chars
ending in ``01`` (compressed public key), optionally 0x-prefixed.

Dependencies: eth-keys for secp256k1 (recoverable signatures, public
key derivation).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from eth_keys import keys

from ..clarity.address import c32_address
from ..errors import InvalidKeyError
from ..utils import hash160, strip_hex_prefix


# secp256k1 group order
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Default config directory
BRIDGE_DIR = Path.home() / ".subnet-bridge"
BRIDGE_ENV = BRIDGE_DIR / ".env"


@dataclass(frozen=True)
class StacksPrivateKey:
    secret: bytes
    compressed: bool

    @property
    def public_key(self) -> bytes:
        """Serialized public key in the encoding the key asks for."""
        pub = keys.PrivateKey(self.secret).public_key
        if self.compressed:
            return pub.to_compressed_bytes()
        return b"\x04" + pub.to_bytes()

    @property
    def public_key_hash(self) -> bytes:
        return hash160(self.public_key)

    def address(self, version: int) -> str:
        return c32_address(version, self.public_key_hash)


def parse_private_key(value: str) -> StacksPrivateKey:
    """
    Parse a hex private key.

    Raises:
        InvalidKeyError: If the value is not a valid secp256k1 key
    """
    if not isinstance(value, str):
        raise InvalidKeyError("Private key must be a hex string")

    hexed = strip_hex_prefix(value.strip())
    if len(hexed) == 66:
        if not hexed.endswith("01"):
            raise InvalidKeyError("66-char private key must end with '01' (compressed flag)")
        compressed = True
        hexed = hexed[:64]
    elif len(hexed) == 64:
        compressed = False
    else:
        raise InvalidKeyError(f"Private key must be 64 or 66 hex chars, got {len(hexed)}")

    try:
        secret = bytes.fromhex(hexed)
    except ValueError as exc:
        raise InvalidKeyError(f"Invalid private key: {exc}") from exc

    if not 0 < int.from_bytes(secret, "big") < SECP256K1_N:
        raise InvalidKeyError("Private key out of secp256k1 range")

    return StacksPrivateKey(secret=secret, compressed=compressed)


def load_private_key(env_var: str, env_path: Optional[Path] = None) -> str:
    """
    Load a private key from the environment or the .env file.

    Args:
        env_var: Variable holding the key (e.g. "USER_KEY")
        env_path: Path to .env file (default: ~/.subnet-bridge/.env)

    Returns:
        Hex private key as stored

    Raises:
        InvalidKeyError: If the variable is not set
    """
    env_path = env_path or BRIDGE_ENV

    if env_path.exists():
        load_dotenv(env_path, override=False)

    private_key = os.environ.get(env_var)
    if not private_key:
        raise InvalidKeyError(f"{env_var} not set. Export it or add it to {env_path}")

    return private_key


def get_address(private_key: Union[str, StacksPrivateKey], version: int) -> str:
    """
    Get the c32 address for a private key.

    Args:
        private_key: Hex private key or parsed key
        version: Address version (see AddressVersion)
    """
    if isinstance(private_key, str):
        private_key = parse_private_key(private_key)
    return private_key.address(version)


def sign_hash(private_key: StacksPrivateKey, digest: bytes) -> bytes:
    """
    Sign a 32-byte digest.

    Returns:
        65-byte recoverable signature laid out as v || r || s
    """
    if len(digest) != 32:
        raise InvalidKeyError(f"Digest must be 32 bytes, got {len(digest)}")
    signature = keys.PrivateKey(private_key.secret).sign_msg_hash(digest)
    return (
        bytes([signature.v])
        + signature.r.to_bytes(32, "big")
        + signature.s.to_bytes(32, "big")
    )
