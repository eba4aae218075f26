# src/contractsim_core/runtime/addresses.py
"""
Deterministic identity and address helpers for tests.

Identities and contract addresses are lowercase hex strings. Human-readable
labels ("OWNER", "ALICE") are turned into fixed-width identities by hex encoding
their ASCII bytes and left-padding with zeros, so the same label always yields
the same identity.
"""
import secrets
from typing import Tuple

# Prefix prepended to the 32-byte body of an encoded contract address.
PREFIX_ADDRESS = "0200"

# Width, in hex characters, of identities and address bodies (32 bytes).
KEY_HEX_LENGTH = 64

DEFAULT_COIN_PUBLIC_KEY = "0" * KEY_HEX_LENGTH


def to_hex_padded(text: str, length: int = KEY_HEX_LENGTH) -> str:
    """
    Converts an ASCII string to its hex representation, left-padded with zeros
    to `length` characters.

    Raises:
        ValueError: If the encoded string does not fit in `length` characters.
    """
    encoded = text.encode("ascii").hex()
    if len(encoded) > length:
        raise ValueError(
            f"'{text}' encodes to {len(encoded)} hex characters, more than the requested {length}."
        )
    return encoded.rjust(length, "0")


def encode_to_pk(text: str) -> str:
    """Generates a caller identity (coin public key) from `text`."""
    return to_hex_padded(text)


def encode_to_address(text: str) -> str:
    """Generates a contract address from `text`, prefixed with PREFIX_ADDRESS."""
    return PREFIX_ADDRESS + to_hex_padded(text)


def generate_pub_key_pair(text: str) -> Tuple[str, str]:
    """
    Returns `(raw_hex, identity)` for `text`. The two are equal in this runtime;
    the pair form keeps call sites symmetric with engines that encode identities.
    """
    pk = to_hex_padded(text)
    return pk, encode_to_pk(text)


def dummy_contract_address() -> str:
    """The all-zero contract address."""
    return PREFIX_ADDRESS + "0" * KEY_HEX_LENGTH


def sample_contract_address() -> str:
    """A random contract address, fresh on every call."""
    return PREFIX_ADDRESS + secrets.token_hex(KEY_HEX_LENGTH // 2)


def is_hex_string(value: str) -> bool:
    """True for non-empty, even-length strings made only of hex digits."""
    if not value or len(value) % 2:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return True
