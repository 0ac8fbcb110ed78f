"""Modular arithmetic primitives for the toy RSA engine.

Every multiplication is reduced by the modulus straight away, so no intermediate value ever grows past modulus**2.

Typical usage example:

    mod_pow(4, 13, 91)
    mod_mul(90, 90, 91)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from toyrsa.errors import InvertibilityError


def _check_operands(exponent: int, modulus: int) -> None:
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    if exponent < 0:
        raise InvertibilityError("Exponent must be normalized into [0, totient) before use")


def mod_mul(a: int, b: int, modulus: int) -> int:
    """Multiplies two residues modulo `modulus`.

    Both operands are reduced before the product is taken.

    Args:
        a: First factor.
        b: Second factor.
        modulus: The modulus. Must be positive.

    Returns:
        (a * b) mod modulus

    Raises:
        ValueError: If modulus is not positive.
    """
    if modulus <= 0:
        raise ValueError("Modulus must be positive")
    return (a % modulus) * (b % modulus) % modulus


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes base**exponent mod modulus via square-and-multiply.

    Args:
        base: The base.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        base**exponent mod modulus

    Raises:
        ValueError: If modulus is not positive.
        InvertibilityError: If exponent is negative.
    """
    _check_operands(exponent, modulus)
    result = 1 % modulus
    base %= modulus
    while exponent:
        if exponent & 1:
            result = mod_mul(result, base, modulus)
        base = mod_mul(base, base, modulus)
        exponent >>= 1
    return result


def mod_pow_linear(base: int, exponent: int, modulus: int) -> int:
    """Computes base**exponent mod modulus by repeated multiplication.

    Takes `exponent` multiply-reduce steps. Returns the same values as `mod_pow`, only slower.

    Args:
        base: The base.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        base**exponent mod modulus

    Raises:
        ValueError: If modulus is not positive.
        InvertibilityError: If exponent is negative.
    """
    _check_operands(exponent, modulus)
    total = 1 % modulus
    for _ in range(exponent):
        total = mod_mul(total, base, modulus)
    return total
