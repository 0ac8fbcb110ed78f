"""Symbol-wise toy RSA transform over byte strings.

Every byte is raised to the key exponent modulo the modulus on its own. There is no blocking and no padding, so the
ciphertext always has the same length as the plaintext. The same transform encrypts, decrypts, signs and verifies;
only the exponent differs.

Typical usage example:

    c = encode_text("CLOUD", 5, 91)
    r = decode_text(c, 29, 91)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from toyrsa.arith import mod_pow
from toyrsa.errors import EncodingError
from toyrsa.errors import SymbolOverflowError

SYMBOL_MAX = 0xFF


def transform_symbol(c: int, key: int, modulus: int) -> int:
    """Transforms a single byte.

    Args:
        c: The byte value.
        key: The exponent to apply.
        modulus: The modulus of the key.

    Returns:
        c**key mod modulus

    Raises:
        ValueError: If c is not a byte value.
        SymbolOverflowError: If the result does not fit into a byte.
    """
    if not 0 <= c <= SYMBOL_MAX:
        raise ValueError(f"Symbol {c} is not a byte value")
    res = mod_pow(c, key, modulus)
    if res > SYMBOL_MAX:
        raise SymbolOverflowError(f"Symbol {c} transformed to {res}, which does not fit a byte (modulus {modulus})")
    return res


def transform_bytes(data: bytes, key: int, modulus: int) -> bytes:
    """Transforms every byte of `data`, preserving order and length.

    Args:
        data: The symbols to transform.
        key: The exponent to apply.
        modulus: The modulus of the key.

    Returns:
        The transformed symbols.
    """
    if any(c >= modulus for c in data):
        warnings.warn(f"Symbols at or above the modulus {modulus} cannot round-trip losslessly.", RuntimeWarning)
    return bytes(transform_symbol(c, key, modulus) for c in data)


def encode_text(text: str, key: int, modulus: int, encoding: str = "utf-8") -> bytes:
    """Encodes `text` and transforms the resulting bytes."""
    return transform_bytes(text.encode(encoding), key, modulus)


def decode_text(data: bytes, key: int, modulus: int, encoding: str = "utf-8") -> str:
    """Transforms `data` and decodes the resulting bytes into text.

    Args:
        data: The transformed symbols.
        key: The exponent to apply.
        modulus: The modulus of the key.
        encoding: The text encoding of the recovered bytes.

    Returns:
        The recovered text.

    Raises:
        EncodingError: If the recovered bytes are not valid in `encoding`.
    """
    raw = transform_bytes(data, key, modulus)
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Transformed bytes are not valid {encoding}") from exc
